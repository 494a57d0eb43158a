# pyright: standard

from typing import Any

import msgspec

_encoder = msgspec.json.Encoder()


def to_json(obj: object) -> bytes:
    """Encode messages, operations or snapshots to compact JSON bytes."""
    return _encoder.encode(obj)


def to_pretty_json(obj: object) -> str:
    """Indented JSON text for humans (``convops log --json``)."""
    return msgspec.json.format(_encoder.encode(obj), indent=2).decode("utf-8")


def from_json[T](type_spec: type[T], data: bytes | str) -> T:
    """Decode and validate JSON into ``type_spec``."""
    return msgspec.json.decode(data, type=type_spec)


def to_dict(obj: object) -> dict[str, Any]:
    """Plain-data view of a struct using its wire (camelCase) field names."""
    match res := msgspec.to_builtins(obj):
        case dict():
            return res
        case _:
            raise TypeError(f"Expected dict from to_builtins, got {type(res)!r}")


def convert[T](obj: object, type_spec: type[T]) -> T:
    """Validate plain data (e.g. a seed message mapping) into ``type_spec``."""
    return msgspec.convert(obj, type_spec)
