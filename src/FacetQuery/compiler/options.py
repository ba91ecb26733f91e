"""Option schemas and option normalization.

A collection schema declares every option key it recognizes together with the
option's shape. The schema owns a read-only table of inert defaults built once
when the schema is constructed; `OptionSchema.normalize` merges caller options
over that table and coerces every value into its canonical form:

- REFS      -> tuple of identifiers (``()`` when absent)
- REF_GROUP -> mapping of member name -> tuple of identifiers
- VALUES    -> tuple of non-empty strings
- KEYWORD   -> stripped string or ``None``
- FLAG      -> bool, ``False`` is inert
- TRISTATE  -> ``None`` (inert), ``True`` or ``False``
- NUMBER    -> int/float or ``None``
- TIME      -> canonical UTC timestamp string or ``None``
- TEXT      -> raw string or ``None`` when blank
- COUNT     -> non-negative int or ``None``
- NATIVE    -> value passed through untouched, ``None`` when absent

Unknown option keys are always rejected.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from dateutil import parser as dt_parser

from FacetQuery.core.errors import (
    InvalidOptionError,
    MalformedTemporalError,
    OptionShapeError,
    UnknownOptionError,
)
from FacetQuery.core.references import Identifier, to_reference

OptionSet = Mapping[str, Any]


class OptionKind(str, Enum):
    REFS = "refs"
    REF_GROUP = "ref_group"
    VALUES = "values"
    KEYWORD = "keyword"
    FLAG = "flag"
    TRISTATE = "tristate"
    NUMBER = "number"
    TIME = "time"
    TEXT = "text"
    COUNT = "count"
    NATIVE = "native"


_FAMILIES: dict[OptionKind, str] = {
    OptionKind.REFS: "identity",
    OptionKind.REF_GROUP: "identity",
    OptionKind.VALUES: "identity",
    OptionKind.KEYWORD: "identity",
    OptionKind.FLAG: "flag",
    OptionKind.TRISTATE: "flag",
    OptionKind.NUMBER: "range",
    OptionKind.TIME: "range",
    OptionKind.TEXT: "fulltext",
    OptionKind.COUNT: "native",
    OptionKind.NATIVE: "native",
}


@dataclass(frozen=True, slots=True)
class OptionSpec:
    """Declared shape of one option.

    Attributes:
        name: Option key.
        kind: Value shape.
        members: Allowed member keys for REF_GROUP options.
        choices: Allowed values for KEYWORD options; empty allows any.
        family: Clause family used in error reports; derived from the kind
            unless given.
    """

    name: str
    kind: OptionKind
    members: tuple[str, ...] = ()
    choices: tuple[str, ...] = ()
    family: str = ""

    def __post_init__(self) -> None:
        if not self.family:
            object.__setattr__(self, "family", _FAMILIES[self.kind])

    @property
    def default(self) -> Any:
        if self.kind is OptionKind.REFS or self.kind is OptionKind.VALUES:
            return ()
        if self.kind is OptionKind.REF_GROUP:
            return MappingProxyType({member: () for member in self.members})
        if self.kind is OptionKind.FLAG:
            return False
        return None


def refs(name: str, *, family: str = "") -> OptionSpec:
    return OptionSpec(name, OptionKind.REFS, family=family)


def ref_group(name: str, members: Iterable[str]) -> OptionSpec:
    return OptionSpec(name, OptionKind.REF_GROUP, members=tuple(members))


def values(name: str) -> OptionSpec:
    return OptionSpec(name, OptionKind.VALUES)


def keyword(name: str, choices: Iterable[str] = ()) -> OptionSpec:
    return OptionSpec(name, OptionKind.KEYWORD, choices=tuple(choices))


def flag(name: str) -> OptionSpec:
    return OptionSpec(name, OptionKind.FLAG)


def tristate(name: str) -> OptionSpec:
    return OptionSpec(name, OptionKind.TRISTATE)


def number(name: str) -> OptionSpec:
    return OptionSpec(name, OptionKind.NUMBER)


def time(name: str) -> OptionSpec:
    return OptionSpec(name, OptionKind.TIME)


def text(name: str) -> OptionSpec:
    return OptionSpec(name, OptionKind.TEXT)


# Execution controls every collection accepts.
NATIVE_OPTIONS: tuple[OptionSpec, ...] = (
    OptionSpec("offset", OptionKind.COUNT),
    OptionSpec("limit", OptionKind.COUNT),
    OptionSpec("sort", OptionKind.NATIVE),
    OptionSpec("source", OptionKind.NATIVE),
    OptionSpec("aggs", OptionKind.NATIVE),
    OptionSpec("track_total_hits", OptionKind.NATIVE),
)


@dataclass(frozen=True, slots=True)
class OptionSchema:
    """Recognized options of one record collection."""

    name: str
    specs: tuple[OptionSpec, ...]
    defaults: Mapping[str, Any] = field(init=False, repr=False, compare=False)
    _by_name: Mapping[str, OptionSpec] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        by_name: dict[str, OptionSpec] = {}
        for spec in self.specs:
            if spec.name in by_name:
                raise ValueError(f"Duplicate option in {self.name} schema: {spec.name}")
            by_name[spec.name] = spec
        object.__setattr__(self, "_by_name", MappingProxyType(by_name))
        object.__setattr__(
            self,
            "defaults",
            MappingProxyType({spec.name: spec.default for spec in self.specs}),
        )

    def names(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.specs)

    def spec(self, name: str) -> OptionSpec:
        """Return the declared spec of ``name``, rejecting unknown keys."""
        try:
            return self._by_name[name]
        except KeyError:
            raise UnknownOptionError(self.name, [name]) from None

    def normalize(self, options: Mapping[str, Any] | None = None) -> OptionSet:
        """Merge ``options`` over the defaults and normalize every value.

        Args:
            options: Partial option mapping supplied by the caller.

        Returns:
            Read-only mapping holding every recognized key.

        Raises:
            UnknownOptionError: If a key is not declared by this schema.
            MalformedTemporalError: If a date/time value cannot be parsed.
            OptionShapeError: If a value has a shape that cannot be coerced.
            InvalidOptionError: If a value is out of range.
        """
        supplied = dict(options or {})
        unknown = [str(name) for name in supplied if name not in self._by_name]
        if unknown:
            raise UnknownOptionError(self.name, unknown)

        normalized = dict(self.defaults)
        for name, value in supplied.items():
            normalized[name] = normalize_value(self.spec(name), value)
        return MappingProxyType(normalized)


def normalize_value(spec: OptionSpec, value: Any) -> Any:
    """Normalize one option value according to its spec."""
    if value is None:
        return spec.default

    kind = spec.kind
    if kind is OptionKind.REFS:
        return _normalize_refs(spec, value, spec.name)
    if kind is OptionKind.REF_GROUP:
        return _normalize_ref_group(spec, value)
    if kind is OptionKind.VALUES:
        return _normalize_values(spec, value)
    if kind is OptionKind.KEYWORD:
        if not isinstance(value, str):
            raise _shape_error(spec, "must be a string")
        normalized = value.strip() or None
        if normalized is not None and spec.choices and normalized not in spec.choices:
            raise InvalidOptionError(
                f"{spec.name} must be one of {list(spec.choices)}, got {normalized!r}",
                option=spec.name,
                family=spec.family,
            )
        return normalized
    if kind is OptionKind.FLAG or kind is OptionKind.TRISTATE:
        if not isinstance(value, bool):
            raise _shape_error(spec, "must be a boolean")
        return value
    if kind is OptionKind.NUMBER:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise _shape_error(spec, "must be a number")
        if isinstance(value, float) and not math.isfinite(value):
            raise InvalidOptionError(f"{spec.name} must be a finite number", option=spec.name, family=spec.family)
        return value
    if kind is OptionKind.TIME:
        return normalize_timestamp(value, option=spec.name, family=spec.family)
    if kind is OptionKind.TEXT:
        if not isinstance(value, str):
            raise _shape_error(spec, "must be a string")
        return value if value.strip() else None
    if kind is OptionKind.COUNT:
        if isinstance(value, bool) or not isinstance(value, int):
            raise _shape_error(spec, "must be an integer")
        if value < 0:
            raise InvalidOptionError(f"{spec.name} must not be negative", option=spec.name, family=spec.family)
        return value
    return value


def normalize_timestamp(value: Any, *, option: str, family: str = "range") -> str:
    """Return ``value`` as a canonical UTC timestamp string.

    Naive datetimes are taken as UTC, dates as midnight UTC. Strings must be
    ISO-8601.

    Raises:
        MalformedTemporalError: If a string cannot be parsed or the moment
            falls outside the representable UTC range.
        OptionShapeError: If the value is not a date, datetime or string.
    """
    if isinstance(value, str):
        try:
            value = dt_parser.isoparse(value.strip())
        except (ValueError, OverflowError) as error:
            raise MalformedTemporalError(
                f"{option} is not a valid ISO-8601 date/time: {value!r}",
                option=option,
                family=family,
            ) from error

    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        moment = datetime(value.year, value.month, value.day)
    else:
        raise OptionShapeError(
            f"{option} must be a date, datetime or ISO-8601 string",
            option=option,
            family=family,
        )

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    try:
        moment = moment.astimezone(timezone.utc)
    except (OverflowError, ValueError) as error:
        raise MalformedTemporalError(
            f"{option} is out of the representable UTC range: {value!r}",
            option=option,
            family=family,
        ) from error
    # strftime("%Y") does not zero-pad years below 1000 on every platform.
    return (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}Z"
    )


def _normalize_refs(spec: OptionSpec, value: Any, config_key: str) -> tuple[Identifier, ...]:
    items = list(value) if isinstance(value, (list, tuple, set, frozenset)) else [value]
    ids: list[Identifier] = []
    for idx, item in enumerate(items):
        try:
            ident = to_reference(item).ident()
        except TypeError as error:
            raise _shape_error(spec, f"item {idx} {error}", config_key=config_key) from error
        if isinstance(ident, bool) or not isinstance(ident, (int, str)):
            raise _shape_error(spec, f"item {idx} has no usable id", config_key=config_key)
        if ident not in ids:
            ids.append(ident)
    if isinstance(value, (set, frozenset)):
        ids.sort(key=lambda ident: (isinstance(ident, str), ident))
    return tuple(ids)


def _normalize_ref_group(spec: OptionSpec, value: Any) -> Mapping[str, tuple[Identifier, ...]]:
    if not isinstance(value, Mapping):
        raise _shape_error(spec, f"must be an object with keys {list(spec.members)}")
    unknown = sorted(str(key) for key in value if key not in spec.members)
    if unknown:
        raise InvalidOptionError(
            f"{spec.name} has unknown members: {unknown}",
            option=spec.name,
            family=spec.family,
        )
    group = {}
    for member in spec.members:
        member_value = value.get(member)
        group[member] = (
            () if member_value is None else _normalize_refs(spec, member_value, f"{spec.name}.{member}")
        )
    return MappingProxyType(group)


def _normalize_values(spec: OptionSpec, value: Any) -> tuple[str, ...]:
    items = [value] if isinstance(value, str) else value
    if not isinstance(items, (list, tuple, set, frozenset)):
        raise _shape_error(spec, "must be a string or a list of strings")
    out: list[str] = []
    for idx, item in enumerate(items):
        if not isinstance(item, str):
            raise _shape_error(spec, f"item {idx} must be a string")
        normalized = item.strip()
        if normalized and normalized not in out:
            out.append(normalized)
    if isinstance(items, (set, frozenset)):
        out.sort()
    return tuple(out)


def _shape_error(spec: OptionSpec, detail: str, *, config_key: str | None = None) -> OptionShapeError:
    key = config_key or spec.name
    return OptionShapeError(f"{key} {detail}", option=spec.name, family=spec.family)
