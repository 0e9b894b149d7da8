"""Field-by-field reconstruction of composite target types.

A class takes full control of its own decoding by implementing the
``Decodable`` protocol. Dataclasses, pydantic models, enums and the standard
collection types get a synthesized implementation built on the keyed and
unkeyed containers.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import types
from enum import Enum
from typing import (
    TYPE_CHECKING,
    Any,
    Protocol,
    TypeVar,
    Union,
    get_args,
    get_origin,
    get_type_hints,
    runtime_checkable,
)

from pydantic import BaseModel, ValidationError

from typedbencode.exceptions import DataCorruptedError, UnsupportedTargetError

if TYPE_CHECKING:
    from typedbencode.core.decoder import Decoder

T = TypeVar("T")

BENCODE_KEY = "bencode_key"

_SEQUENCE_ORIGINS = (
    list,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
)
_MAPPING_ORIGINS = (
    dict,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
)


@runtime_checkable
class Decodable(Protocol):
    """Types that rebuild themselves from a ``Decoder``."""

    @classmethod
    def from_bencode(cls: type[T], decoder: Decoder) -> T:
        """Return an instance read from ``decoder``."""
        ...


def bencode_field(key: str, **kwargs: Any) -> Any:
    """Dataclass field stored under a dictionary key other than its name.

    Example:
        piece_length: int = bencode_field("piece length")

    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[BENCODE_KEY] = key
    return dataclasses.field(metadata=metadata, **kwargs)


def is_class(target: Any) -> bool:
    """Whether ``target`` is a plain class rather than a parameterized alias."""
    return isinstance(target, type) and get_origin(target) is None


def is_optional(target: Any) -> bool:
    """Whether ``target`` is a union that admits None."""
    return _is_union(target) and type(None) in get_args(target)


def _is_union(target: Any) -> bool:
    origin = get_origin(target)
    return origin is Union or origin is types.UnionType


def reconstruct(decoder: Decoder, target: Any) -> Any:
    """Decode the value behind ``decoder`` as composite ``target``."""
    if target is Any:
        return decoder.value.to_python()
    if is_class(target) and issubclass(target, Decodable):
        return target.from_bencode(decoder)
    if _is_union(target):
        return _decode_optional(decoder, target)

    origin = get_origin(target) or target
    if origin in _SEQUENCE_ORIGINS:
        return _decode_list(decoder, target)
    if origin is tuple:
        return _decode_tuple(decoder, target)
    if origin in _MAPPING_ORIGINS:
        return _decode_mapping(decoder, target)

    if is_class(target):
        if issubclass(target, Enum):
            return _decode_enum(decoder, target)
        if issubclass(target, BaseModel):
            return _decode_model(decoder, target)
        if dataclasses.is_dataclass(target):
            return _decode_dataclass(decoder, target)

    raise UnsupportedTargetError(target)


def _decode_optional(decoder: Decoder, target: Any) -> Any:
    members = [arg for arg in get_args(target) if arg is not type(None)]
    if len(members) != 1 or not is_optional(target):
        raise UnsupportedTargetError(target)
    # Bencode has no null, so a present value is never None.
    return decoder.decode(members[0])


def _decode_list(decoder: Decoder, target: Any) -> list[Any]:
    (element,) = get_args(target) or (Any,)
    container = decoder.unkeyed_container()
    items = []
    while not container.is_at_end:
        items.append(container.decode(element))
    return items


def _decode_tuple(decoder: Decoder, target: Any) -> tuple[Any, ...]:
    args = get_args(target)
    container = decoder.unkeyed_container()
    if not args or (len(args) == 2 and args[1] is Ellipsis):
        element = args[0] if args else Any
        items = []
        while not container.is_at_end:
            items.append(container.decode(element))
        return tuple(items)

    items = [container.decode(element) for element in args]
    if not container.is_at_end:
        msg = f"Expected {len(args)} elements, found {container.count}"
        raise DataCorruptedError(msg, decoder.coding_path)
    return tuple(items)


def _decode_mapping(decoder: Decoder, target: Any) -> dict[str, Any]:
    key_type, value_type = get_args(target) or (str, Any)
    if key_type is not str:
        raise UnsupportedTargetError(target)
    container = decoder.keyed_container()
    return {key: container.decode(value_type, key) for key in container.all_keys}


def _decode_enum(decoder: Decoder, target: type[Enum]) -> Enum:
    if issubclass(target, str):
        raw_type: type = str
    elif issubclass(target, int):
        raw_type = int
    else:
        members = list(target)
        if not members:
            raise UnsupportedTargetError(target)
        raw_type = type(members[0].value)
    raw = decoder.decode(raw_type)
    try:
        return target(raw)
    except ValueError as e:
        msg = f"Cannot initialize {target.__name__} from invalid raw value {raw!r}"
        raise DataCorruptedError(msg, decoder.coding_path) from e


def _decode_dataclass(decoder: Decoder, target: type[T]) -> T:
    container = decoder.keyed_container()
    hints = get_type_hints(target)
    kwargs: dict[str, Any] = {}
    for field in dataclasses.fields(target):  # type: ignore[arg-type]
        if not field.init:
            continue
        key = field.metadata.get(BENCODE_KEY, field.name)
        field_type = hints[field.name]
        if not container.contains(key):
            has_default = (
                field.default is not dataclasses.MISSING
                or field.default_factory is not dataclasses.MISSING
            )
            if has_default:
                continue
            if is_optional(field_type):
                kwargs[field.name] = None
                continue
        kwargs[field.name] = container.decode(field_type, key)
    return target(**kwargs)


def _decode_model(decoder: Decoder, target: type[BaseModel]) -> BaseModel:
    container = decoder.keyed_container()
    values: dict[str, Any] = {}
    for name, info in target.model_fields.items():
        key = info.alias or name
        if not container.contains(key):
            if not info.is_required():
                continue
            if is_optional(info.annotation):
                values[key] = None
                continue
        values[key] = container.decode(info.annotation, key)
    try:
        return target.model_validate(values)
    except ValidationError as e:
        msg = f"Invalid {target.__name__}: {e.error_count()} validation error(s)"
        raise DataCorruptedError(msg, decoder.coding_path) from e
