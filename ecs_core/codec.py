"""
Conversion between live component/resource objects and snapshot data.

Types are named "module:qualname". Dataclass instances are stored as their
field dicts and JSON-native values as themselves; anything else cannot be
saved. Nested dataclass and tuple fields are rebuilt from the field type
hints on decode.
"""

import dataclasses
import json
import types
import typing
from collections.abc import Iterable
from typing import Any

from ecs_common.errors import ComponentCodecError

JSON_NATIVE_TYPES = (bool, int, float, str, list, dict, type(None))


def type_name(value_type: type) -> str:
    return f"{value_type.__module__}:{value_type.__qualname__}"


def type_registry(value_types: Iterable[type]) -> dict[str, type]:
    """Map type names back to the classes the caller can decode."""
    return {type_name(t): t for t in value_types}


def encode(value: Any) -> Any:
    """
    Convert a component or resource to JSON-compatible data.

    Raises:
        ComponentCodecError: If the value is neither a dataclass instance nor
            JSON-native, or holds something JSON cannot represent
    """
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        data = dataclasses.asdict(value)
    elif type(value) in JSON_NATIVE_TYPES:
        data = value
    else:
        raise ComponentCodecError(
            f"Cannot encode {type_name(type(value))}: "
            "only dataclasses and JSON-native values can be saved"
        )

    try:
        json.dumps(data)
    except (TypeError, ValueError) as e:
        raise ComponentCodecError(
            f"Cannot encode {type_name(type(value))}: {e}"
        ) from e
    return data


def decode(data: Any, value_type: type) -> Any:
    """Rebuild a component or resource of value_type from encoded data."""
    if dataclasses.is_dataclass(value_type):
        if not isinstance(data, dict):
            raise ComponentCodecError(
                f"Expected an object for {type_name(value_type)}, got {type(data).__name__}"
            )
        try:
            hints = typing.get_type_hints(value_type)
        except NameError as e:
            raise ComponentCodecError(
                f"Cannot resolve field types of {type_name(value_type)}: {e}"
            ) from e
        init_fields = [f for f in dataclasses.fields(value_type) if f.init]
        known = {f.name for f in dataclasses.fields(value_type)}
        unknown = set(data) - known
        if unknown:
            raise ComponentCodecError(
                f"Cannot decode {type_name(value_type)}: unknown fields {sorted(unknown)}"
            )
        kwargs = {
            f.name: _decode_field(data[f.name], hints.get(f.name, Any))
            for f in init_fields
            if f.name in data
        }
        try:
            return value_type(**kwargs)
        except TypeError as e:
            raise ComponentCodecError(
                f"Cannot decode {type_name(value_type)}: {e}"
            ) from e
    if value_type is float and type(data) is int:
        return float(data)
    if value_type in JSON_NATIVE_TYPES and type(data) is value_type:
        return data
    raise ComponentCodecError(
        f"Cannot decode {type(data).__name__} as {type_name(value_type)}"
    )


def _decode_field(data: Any, hint: Any) -> Any:
    """Undo asdict() for one field: nested dataclasses and tuples come back as dicts and lists."""
    if data is None:
        return None
    if isinstance(hint, type) and dataclasses.is_dataclass(hint):
        return decode(data, hint)
    if hint is float and type(data) is int:
        return float(data)

    origin = typing.get_origin(hint)
    args = typing.get_args(hint)
    if origin in (typing.Union, types.UnionType):
        candidates = [arg for arg in args if arg is not type(None)]
        if len(candidates) == 1:
            return _decode_field(data, candidates[0])
        return data
    if (hint is tuple or origin is tuple) and isinstance(data, list):
        if len(args) == 2 and args[1] is Ellipsis:
            return tuple(_decode_field(item, args[0]) for item in data)
        if args and len(args) == len(data):
            return tuple(_decode_field(item, arg) for item, arg in zip(data, args))
        return tuple(data)
    if origin is list and args and isinstance(data, list):
        return [_decode_field(item, args[0]) for item in data]
    if origin is dict and len(args) == 2 and isinstance(data, dict):
        return {key: _decode_field(item, args[1]) for key, item in data.items()}
    return data


def resolve(name: str, registry: dict[str, type]) -> type:
    try:
        return registry[name]
    except KeyError:
        raise ComponentCodecError(f"Unknown type in snapshot: {name}") from None
