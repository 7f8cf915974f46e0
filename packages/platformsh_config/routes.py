"""Routes decoded from ``<PREFIX>ROUTES``: an object keyed by URL."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from .decoding import bool_member, string_member
from .errors import DecodeError


@dataclass(frozen=True)
class Route:
    url: str
    type: str = ""
    upstream: str = ""
    to: str = ""
    original_url: str = ""
    id: Optional[str] = None
    primary: bool = False

    @classmethod
    def from_dict(cls, url: str, data: Dict[str, Any]) -> "Route":
        return cls(
            url=url,
            type=string_member(data, "type"),
            upstream=string_member(data, "upstream"),
            to=string_member(data, "to"),
            original_url=string_member(data, "original_url"),
            id=string_member(data, "id", default=None),
            primary=bool_member(data, "primary"),
        )


Routes = Mapping[str, Route]


def parse_routes(variable: str, document: Any) -> Routes:
    if not isinstance(document, dict):
        raise DecodeError(variable, f"expected a JSON object, got {type(document).__name__}")

    routes = {}
    for url, descriptor in document.items():
        if not isinstance(descriptor, dict):
            raise DecodeError(variable, f"route '{url}' must be an object")
        try:
            routes[url] = Route.from_dict(url, descriptor)
        except TypeError as e:
            raise DecodeError(variable, f"route '{url}': {e}") from e
    return MappingProxyType(routes)
