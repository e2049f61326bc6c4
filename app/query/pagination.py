from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Generic, Mapping, Optional, Sequence, TypeVar

from sqlalchemy import func, select
from sqlalchemy.orm import Load, Session, selectinload

from app.environment import DEFAULT_PAGE_SIZE

from .filters import Filters, filter_criteria

T = TypeVar("T")

# Largest value SQLite accepts for a bound LIMIT or OFFSET.
SQLITE_MAX_INTEGER = 2**63 - 1


@dataclass(frozen=True)
class PageRequest:
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        # Out-of-range values are clamped rather than rejected.
        object.__setattr__(self, "page", max(int(self.page), 1))
        object.__setattr__(
            self, "limit", min(max(int(self.limit), 1), SQLITE_MAX_INTEGER)
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def from_params(
        cls, params: Mapping[str, str], default_limit: int = DEFAULT_PAGE_SIZE
    ) -> "PageRequest":
        return cls(
            page=_parse_int(params.get("page"), 1),
            limit=_parse_int(params.get("limit"), default_limit),
        )


@dataclass
class Page(Generic[T]):
    data: list[T]
    count: int
    pages: int
    current_page: int

    def to_payload(self, render: Callable[[T], Any]) -> dict[str, Any]:
        return {
            "data": [render(item) for item in self.data],
            "count": self.count,
            "pages": self.pages,
            "currentPage": self.current_page,
        }


def paginate(
    session: Session,
    model: type,
    page_request: PageRequest,
    filters: Optional[Filters] = None,
    include: Sequence[str] = (),
    mapper: Optional[Callable[[Any], T]] = None,
) -> Page[T]:
    """Return one page of ``model`` rows matching ``filters``.

    Rows come back in primary-key order. ``include`` names relationships to
    eager-load, using dotted paths for nested ones (``"ratings.category"``).
    ``mapper`` converts each ORM row before the session is released.
    """
    criteria = filter_criteria(model, filters)

    count = int(
        session.scalar(select(func.count()).select_from(model).where(*criteria)) or 0
    )
    pages = math.ceil(count / page_request.limit)
    if page_request.offset >= count:
        return Page(data=[], count=count, pages=pages, current_page=page_request.page)

    statement = (
        select(model)
        .where(*criteria)
        .order_by(*model.__mapper__.primary_key)
        .limit(page_request.limit)
        .offset(page_request.offset)
    )
    if include:
        statement = statement.options(*load_options(model, include))

    rows = session.scalars(statement).all()
    data = [mapper(row) for row in rows] if mapper is not None else list(rows)
    return Page(data=data, count=count, pages=pages, current_page=page_request.page)


def load_options(model: type, include: Sequence[str]) -> list[Load]:
    return [_load_option(model, path) for path in include]


def _load_option(model: type, path: str) -> Load:
    option = None
    current = model
    for name in path.split("."):
        attribute = getattr(current, name)
        option = selectinload(attribute) if option is None else option.selectinload(attribute)
        current = attribute.property.mapper.class_
    if option is None:
        raise ValueError(f"Empty include path for {model.__name__}.")
    return option


def _parse_int(value: Optional[str], default: int) -> int:
    if value is None:
        return default
    try:
        return int(str(value).strip())
    except ValueError:
        return default
