from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from json import JSONDecodeError
from typing import Protocol

JSONValue = dict[str, "JSONValue"] | list["JSONValue"] | str | int | float | bool | None
JSONObject = dict[str, JSONValue]

# Anything dump_json_str may serialize: TypedDict records arrive as Mappings.
_JSONInputValue = str | int | float | bool | None | Mapping[str, object] | Sequence[object]


class InvalidJsonError(ValueError):
    """Raised when a payload is not valid JSON."""


class JSONTypeError(TypeError):
    """Raised when a JSON value does not have the expected shape."""


class _JsonLoads(Protocol):
    def __call__(self, s: str) -> JSONValue: ...


class _JsonDumps(Protocol):
    def __call__(
        self,
        obj: _JSONInputValue,
        *,
        separators: tuple[str, str] | None = ...,
        indent: int | None = ...,
        sort_keys: bool = ...,
        allow_nan: bool = ...,
    ) -> str: ...


def dump_json_str(
    value: _JSONInputValue,
    *,
    compact: bool = True,
    indent: int | None = None,
    sort_keys: bool = False,
) -> str:
    """Serialize a JSON-compatible value.

    Args:
        value: JSON-serializable value (TypedDicts included).
        compact: Drop insignificant whitespace. Ignored when ``indent`` is set.
        indent: Pretty-print with this many spaces.
        sort_keys: Emit object keys in sorted order (canonical form).
    """
    module = __import__("json")
    dumps: _JsonDumps = module.dumps
    if indent is not None:
        return dumps(value, separators=None, indent=indent, sort_keys=sort_keys, allow_nan=False)
    separators = (",", ":") if compact else None
    return dumps(value, separators=separators, indent=None, sort_keys=sort_keys, allow_nan=False)


def load_json_str(raw: str) -> JSONValue:
    module = __import__("json")
    loads: _JsonLoads = module.loads
    try:
        value = loads(raw)
    except JSONDecodeError as exc:
        raise InvalidJsonError("Invalid JSON payload") from exc
    if isinstance(value, (dict, list, str, int, float, bool)) or value is None:
        return value
    raise InvalidJsonError("Invalid JSON payload")


def load_json_bytes(raw: bytes) -> JSONValue:
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidJsonError("Payload is not UTF-8") from exc
    return load_json_str(text)


def _kind(value: JSONValue) -> str:
    return type(value).__name__


def narrow_json_to_dict(value: JSONValue) -> JSONObject:
    """Narrow a JSON value to an object or raise JSONTypeError."""
    if not isinstance(value, dict):
        raise JSONTypeError(f"Expected JSON object, got {_kind(value)}")
    return value


def narrow_json_to_list(value: JSONValue) -> list[JSONValue]:
    """Narrow a JSON value to an array or raise JSONTypeError."""
    if not isinstance(value, list):
        raise JSONTypeError(f"Expected JSON array, got {_kind(value)}")
    return value


def narrow_json_to_float(value: JSONValue) -> float:
    """Narrow a JSON number (int or float, never bool) to a finite float."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise JSONTypeError(f"Expected JSON number, got {_kind(value)}")
    result = float(value)
    if not math.isfinite(result):
        raise JSONTypeError("Expected finite JSON number")
    return result


# -----------------------------------------------------------------------------
# Field extraction helpers
# -----------------------------------------------------------------------------


def _require(obj: JSONObject, key: str) -> JSONValue:
    value = obj.get(key)
    if value is None:
        raise JSONTypeError(f"Missing required field '{key}'")
    return value


def require_str(obj: JSONObject, key: str) -> str:
    """Extract a required string field."""
    value = _require(obj, key)
    if not isinstance(value, str):
        raise JSONTypeError(f"Field '{key}' must be a string, got {_kind(value)}")
    return value


def require_int(obj: JSONObject, key: str) -> int:
    """Extract a required integer field (bools are rejected)."""
    value = _require(obj, key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise JSONTypeError(f"Field '{key}' must be an integer, got {_kind(value)}")
    return value


def require_float(obj: JSONObject, key: str) -> float:
    """Extract a required finite number field, accepting integers."""
    value = _require(obj, key)
    try:
        return narrow_json_to_float(value)
    except JSONTypeError as exc:
        raise JSONTypeError(f"Field '{key}' must be a finite number, got {_kind(value)}") from exc


def require_list(obj: JSONObject, key: str) -> list[JSONValue]:
    """Extract a required array field."""
    value = _require(obj, key)
    if not isinstance(value, list):
        raise JSONTypeError(f"Field '{key}' must be an array, got {_kind(value)}")
    return value


def require_dict(obj: JSONObject, key: str) -> JSONObject:
    """Extract a required object field."""
    value = _require(obj, key)
    if not isinstance(value, dict):
        raise JSONTypeError(f"Field '{key}' must be an object, got {_kind(value)}")
    return value


def optional_str(obj: JSONObject, key: str) -> str | None:
    """Extract an optional string field. Missing and null both yield None."""
    value = obj.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise JSONTypeError(f"Field '{key}' must be a string, got {_kind(value)}")
    return value


__all__ = [
    "InvalidJsonError",
    "JSONObject",
    "JSONTypeError",
    "JSONValue",
    "dump_json_str",
    "load_json_bytes",
    "load_json_str",
    "narrow_json_to_dict",
    "narrow_json_to_float",
    "narrow_json_to_list",
    "optional_str",
    "require_dict",
    "require_float",
    "require_int",
    "require_list",
    "require_str",
]
