"""
Relationship credentials.

``<PREFIX>RELATIONSHIPS`` decodes to an object mapping each relationship name
to an array of endpoint objects. Every endpoint becomes a ``Credential``; the
order of names and of endpoints within a relationship is kept as delivered, so
the first credential is the primary endpoint by convention.
"""

from dataclasses import asdict, dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple

from .decoding import bool_member, string_member
from .errors import DecodeError


@dataclass(frozen=True)
class Credential:
    host: str = ""
    username: str = ""
    password: str = ""
    ip: str = ""
    path: str = ""
    scheme: str = ""
    port: int = 0
    is_master: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Credential":
        query = data.get("query") or {}
        if not isinstance(query, dict):
            raise TypeError(f"'query' must be an object, got {type(query).__name__}")

        port = data.get("port")
        if port is None:
            port = 0
        elif isinstance(port, bool) or not isinstance(port, int):
            raise TypeError(f"'port' must be an integer, got {type(port).__name__}")

        return cls(
            host=string_member(data, "host"),
            username=string_member(data, "username"),
            password=string_member(data, "password"),
            ip=string_member(data, "ip"),
            path=string_member(data, "path"),
            scheme=string_member(data, "scheme"),
            port=port,
            is_master=bool_member(query, "is_master"),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["query"] = {"is_master": data.pop("is_master")}
        return data

    def __repr__(self):
        # Keep passwords out of logs and tracebacks
        return (
            f"Credential(scheme={self.scheme!r}, host={self.host!r}, port={self.port!r}, "
            f"path={self.path!r}, username={self.username!r}, is_master={self.is_master!r})"
        )


Relationships = Mapping[str, Tuple[Credential, ...]]


def parse_relationships(variable: str, document: Any) -> Relationships:
    if not isinstance(document, dict):
        raise DecodeError(variable, f"expected a JSON object, got {type(document).__name__}")

    relationships = {}
    for name, endpoints in document.items():
        if endpoints is None:
            endpoints = []
        if not isinstance(endpoints, list):
            raise DecodeError(variable, f"relationship '{name}' must be an array of endpoints")

        credentials = []
        for index, endpoint in enumerate(endpoints):
            if not isinstance(endpoint, dict):
                raise DecodeError(variable, f"endpoint {name}[{index}] must be an object")
            try:
                credentials.append(Credential.from_dict(endpoint))
            except TypeError as e:
                raise DecodeError(variable, f"endpoint {name}[{index}]: {e}") from e

        relationships[name] = tuple(credentials)

    return MappingProxyType(relationships)

