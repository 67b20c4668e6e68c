"""Query-parameter serialization for request records.

A request record (a pydantic model or a dataclass) is turned into a flat
``{name: value}`` mapping of strings. Each field is encoded according to its
``ParamKind``, which is either declared explicitly with
``Annotated[..., ParamKind.X]`` or resolved once per class from the field's
declared type:

1. the exact declared type (``bool``, ``bool | None``, ``datetime``,
   ``list[int]``);
2. for an optional wrapper, the underlying type;
3. ``ParamKind.DEFAULT`` otherwise.

Fields whose value is ``None`` are skipped before any encoder runs, and fields
whose encoder returns ``None`` (a false ``bool``) are left out as well. The
BoardGameGeek API treats a present flag as "on" regardless of its value, so a
plain ``False`` must never reach the wire, while an explicitly optional flag
set to ``False`` is sent as ``"0"`` to ask for the negated filter.
"""

import dataclasses
import functools
import operator
import types
from collections.abc import Callable, Mapping
from datetime import date, datetime
from enum import Enum
from functools import lru_cache
from typing import (
    Annotated,
    Any,
    Final,
    NamedTuple,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from pydantic import BaseModel

from bggapi.core.constants import DATETIME_PARAM_FORMAT, FLAG_FALSE, FLAG_TRUE
from bggapi.core.types import Parameters


class ParamKind(Enum):
    """Closed set of parameter encodings."""

    FLAG = "flag"
    """Plain boolean: ``"1"`` when true, omitted when false."""

    OPTIONAL_FLAG = "optional_flag"
    """Tri-state boolean: ``"1"``, ``"0"``, or omitted when unset."""

    DATETIME = "datetime"
    """Date-time rendered as ``YY-MM-DD HH:MM:SS``."""

    INT_LIST = "int_list"
    """Integers joined with commas, no spaces."""

    DEFAULT = "default"
    """Natural string form of the value."""


type Encoder = Callable[[Any], str | None]


def _encode_flag(value: bool) -> str | None:
    return FLAG_TRUE if value else None


def _encode_optional_flag(value: bool) -> str:
    return FLAG_TRUE if value else FLAG_FALSE


def _encode_datetime(value: date) -> str:
    return value.strftime(DATETIME_PARAM_FORMAT)


def _encode_int_list(value: list[int]) -> str:
    return ",".join(str(item) for item in value)


def _encode_default(value: object) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


ENCODERS: Final[Mapping[ParamKind, Encoder]] = types.MappingProxyType(
    {
        ParamKind.FLAG: _encode_flag,
        ParamKind.OPTIONAL_FLAG: _encode_optional_flag,
        ParamKind.DATETIME: _encode_datetime,
        ParamKind.INT_LIST: _encode_int_list,
        ParamKind.DEFAULT: _encode_default,
    }
)

_KINDS_BY_TYPE: Final[Mapping[object, ParamKind]] = types.MappingProxyType(
    {
        bool: ParamKind.FLAG,
        bool | None: ParamKind.OPTIONAL_FLAG,
        datetime: ParamKind.DATETIME,
        date: ParamKind.DATETIME,
        list[int]: ParamKind.INT_LIST,
    }
)


class FieldSpec(NamedTuple):
    """How one request field is read and encoded."""

    attribute: str
    param_name: str
    kind: ParamKind


def _is_union(annotation: object) -> bool:
    return get_origin(annotation) in (Union, types.UnionType)


def _normalize(annotation: object) -> object:
    """Rebuild ``Optional[X]``/``Union[X, None]`` as ``X | None``."""
    if _is_union(annotation):
        return functools.reduce(operator.or_, get_args(annotation))
    return annotation


def _lookup_kind(annotation: object) -> ParamKind | None:
    try:
        return _KINDS_BY_TYPE.get(_normalize(annotation))
    except TypeError:
        # Unhashable annotation
        return None


def _underlying_type(annotation: object) -> object | None:
    """Return ``X`` for ``X | None``, otherwise None."""
    if not _is_union(annotation):
        return None
    args = get_args(annotation)
    if len(args) != 2 or type(None) not in args:  # noqa: PLR2004
        return None
    return next(arg for arg in args if arg is not type(None))


def resolve_kind(annotation: object) -> ParamKind:
    """Resolve the encoding for a declared field type.

    Args:
        annotation: The field's declared type.

    Returns:
        ParamKind: The exact-type kind, else the optional's underlying kind,
            else ``ParamKind.DEFAULT``.
    """
    if (kind := _lookup_kind(annotation)) is not None:
        return kind

    underlying = _underlying_type(annotation)
    if underlying is not None and (kind := _lookup_kind(underlying)) is not None:
        return kind

    return ParamKind.DEFAULT


def _declared_kind(metadata: list[object] | tuple[object, ...]) -> ParamKind | None:
    for item in metadata:
        if isinstance(item, ParamKind):
            return item
    return None


@lru_cache(maxsize=128)
def field_plan(request_type: type) -> tuple[FieldSpec, ...]:
    """Compute the ordered field specs for a request class.

    The plan is computed once per class and cached, so the hot path of
    ``serialize`` is a plain loop over precomputed specs.

    Args:
        request_type: A pydantic model class or a dataclass type.

    Returns:
        tuple[FieldSpec, ...]: One spec per field, in declaration order.

    Raises:
        TypeError: If ``request_type`` is neither a pydantic model nor a
            dataclass.
    """
    specs: list[FieldSpec] = []

    if issubclass(request_type, BaseModel):
        for name, info in request_type.model_fields.items():
            kind = _declared_kind(info.metadata) or resolve_kind(info.annotation)
            specs.append(FieldSpec(name, name.lower(), kind))
        return tuple(specs)

    if dataclasses.is_dataclass(request_type):
        hints = get_type_hints(request_type, include_extras=True)
        for field in dataclasses.fields(request_type):
            annotation = hints.get(field.name, field.type)
            kind = None
            if get_origin(annotation) is Annotated:
                kind = _declared_kind(annotation.__metadata__)
                annotation = get_args(annotation)[0]
            kind = kind or resolve_kind(annotation)
            specs.append(FieldSpec(field.name, field.name.lower(), kind))
        return tuple(specs)

    msg = f"Cannot serialize {request_type.__name__}: not a model or dataclass"
    raise TypeError(msg)


def serialize(request: object) -> Parameters:
    """Serialize a request record into query parameters.

    Args:
        request: A pydantic model or dataclass instance.

    Returns:
        Parameters: Lower-cased field names mapped to encoded values, in field
            declaration order. Unset fields and false plain flags are absent.

    Examples:
        >>> serialize(ThingRequest(id=[1, 2, 3], stats=True, videos=False))
        {'id': '1,2,3', 'stats': '1'}
    """
    parameters: Parameters = {}

    for spec in field_plan(type(request)):
        value = getattr(request, spec.attribute)
        if value is None:
            continue

        encoded = ENCODERS[spec.kind](value)
        if encoded is not None:
            parameters[spec.param_name] = encoded

    return parameters
