"""Query-string filter builder.

``build_filters`` turns request query parameters into a ``Filters`` value
that says nothing about SQL; ``filter_criteria`` renders it against an ORM
model for the paginator.

Parameter conventions:

* ``search`` - case-insensitive substring, OR-ed across ``search_fields``.
* ``<field>`` - equality on each configured exact field.
* ``<field>_min`` / ``<field>_max`` - inclusive bounds on range fields.

Unknown parameters are ignored and values that fail to coerce drop their
predicate instead of raising.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, time, timezone
from typing import Any, Mapping, Optional, Sequence

from sqlalchemy import or_
from sqlalchemy.sql.elements import ColumnElement

SEARCH_PARAM = "search"
RANGE_MIN_SUFFIX = "_min"
RANGE_MAX_SUFFIX = "_max"

_TRUE_VALUES = {"1", "true", "yes", "y", "on"}
_FALSE_VALUES = {"0", "false", "no", "n", "off"}
_STORED_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class FilterConfig:
    search_fields: Sequence[str] = ()
    exact_fields: Mapping[str, type] = field(default_factory=dict)
    range_fields: Sequence[str] = ()


@dataclass(frozen=True)
class RangeBounds:
    lower: Optional[str] = None
    upper: Optional[str] = None


@dataclass(frozen=True)
class Filters:
    search: Optional[str] = None
    search_fields: tuple[str, ...] = ()
    exact: Mapping[str, Any] = field(default_factory=dict)
    ranges: Mapping[str, RangeBounds] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not (self.search and self.search_fields) and not self.exact and not self.ranges


def build_filters(params: Mapping[str, str], config: FilterConfig) -> Filters:
    search = _clean(params.get(SEARCH_PARAM))

    exact: dict[str, Any] = {}
    for name, value_type in config.exact_fields.items():
        coerced = _coerce(_clean(params.get(name)), value_type)
        if coerced is not None:
            exact[name] = coerced

    ranges: dict[str, RangeBounds] = {}
    for name in config.range_fields:
        lower = _parse_timestamp(_clean(params.get(name + RANGE_MIN_SUFFIX)), upper=False)
        upper = _parse_timestamp(_clean(params.get(name + RANGE_MAX_SUFFIX)), upper=True)
        if lower is not None or upper is not None:
            ranges[name] = RangeBounds(lower=lower, upper=upper)

    return Filters(
        search=search if config.search_fields else None,
        search_fields=tuple(config.search_fields) if search else (),
        exact=exact,
        ranges=ranges,
    )


def filter_criteria(model: type, filters: Optional[Filters]) -> list[ColumnElement]:
    if filters is None:
        return []
    criteria: list[ColumnElement] = []
    if filters.search and filters.search_fields:
        pattern = f"%{_escape_like(filters.search)}%"
        criteria.append(
            or_(
                *(
                    getattr(model, name).ilike(pattern, escape="\\")
                    for name in filters.search_fields
                )
            )
        )
    for name, value in filters.exact.items():
        column = getattr(model, name)
        if isinstance(value, bool):
            value = 1 if value else 0
        criteria.append(column == value)
    for name, bounds in filters.ranges.items():
        column = getattr(model, name)
        if bounds.lower is not None:
            criteria.append(column >= bounds.lower)
        if bounds.upper is not None:
            criteria.append(column <= bounds.upper)
    return criteria


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def _coerce(value: Optional[str], value_type: type) -> Any:
    if value is None:
        return None
    if value_type is bool:
        lowered = value.lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        return None
    if value_type is int:
        try:
            return int(value)
        except ValueError:
            return None
    if value_type is float:
        try:
            return float(value)
        except ValueError:
            return None
    return value


def _parse_timestamp(value: Optional[str], *, upper: bool) -> Optional[str]:
    if value is None:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    if upper and len(value) == 10:
        parsed = datetime.combine(parsed.date(), time(23, 59, 59))
    return parsed.strftime(_STORED_TIMESTAMP_FORMAT)


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
