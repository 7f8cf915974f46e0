"""
Decoding of the base64-encoded JSON variables (relationships, variables,
routes, application).

A variable goes through four stages: empty check, base64, UTF-8, JSON. An empty
value means the variable is absent and decodes to an empty document. Malformed
base64 is handled by policy:

- silent (default): the payload degrades to empty bytes and therefore to an
  empty document; ``on_degraded`` is told about it.
- strict: ``Base64DecodeError`` is raised.

Everything after base64 (UTF-8, JSON, shape) raises ``DecodeError``.
"""

import base64
import binascii
import json
from types import MappingProxyType
from typing import Any, Callable, Dict, Optional

from .errors import Base64DecodeError, DecodeError

DegradedCallback = Callable[[str, Exception], None]


def decode_base64(
    variable: str, raw: str, strict: bool = False, on_degraded: Optional[DegradedCallback] = None
) -> bytes:
    # Line-wrapped payloads (base64 CLI, encodebytes) are valid; anything else is not
    unwrapped = raw.replace("\r", "").replace("\n", "")
    try:
        return base64.b64decode(unwrapped, validate=True)
    except (binascii.Error, ValueError) as e:
        if strict:
            raise Base64DecodeError(variable, f"invalid base64 ({e})") from e
        if on_degraded is not None:
            on_degraded(variable, e)
        return b""


def decode_json_variable(
    variable: str, raw: str, strict: bool = False, on_degraded: Optional[DegradedCallback] = None
) -> Any:
    """Decode one environment value. Returns ``{}`` for absent or empty payloads."""
    if not raw:
        return {}

    payload = decode_base64(variable, raw, strict=strict, on_degraded=on_degraded)
    if not payload:
        return {}

    try:
        text = payload.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(variable, f"payload is not UTF-8 ({e})") from e

    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(variable, f"invalid JSON ({e})") from e

    return {} if document is None else document


def require_object(variable: str, document: Any, what: str = "a JSON object") -> dict:
    if not isinstance(document, dict):
        raise DecodeError(variable, f"expected {what}, got {type(document).__name__}")
    return document


def decode_string_map(
    variable: str, raw: str, strict: bool = False, on_degraded: Optional[DegradedCallback] = None
) -> dict:
    """Decode a flat ``{name: string}`` object."""
    document = require_object(
        variable, decode_json_variable(variable, raw, strict=strict, on_degraded=on_degraded)
    )
    for key, value in document.items():
        if not isinstance(value, str):
            raise DecodeError(
                variable, f"value of '{key}' must be a string, got {type(value).__name__}"
            )
    return dict(document)


def encode_json_variable(document: Any) -> str:
    """Inverse of decode_json_variable, handy for building environments by hand."""
    return base64.b64encode(json.dumps(document).encode("utf-8")).decode("ascii")


def freeze(document: Any) -> Any:
    """Read-only copy of a decoded JSON document: objects become mapping proxies, arrays tuples."""
    if isinstance(document, dict):
        return MappingProxyType({key: freeze(value) for key, value in document.items()})
    if isinstance(document, list):
        return tuple(freeze(value) for value in document)
    return document


def string_member(data: Dict[str, Any], key: str, default: Optional[str] = "") -> Optional[str]:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise TypeError(f"'{key}' must be a string, got {type(value).__name__}")
    return value


def bool_member(data: Dict[str, Any], key: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise TypeError(f"'{key}' must be a boolean, got {type(value).__name__}")
    return value
