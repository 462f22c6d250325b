from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Generic, Optional, Sequence, TypeVar

from ..core.constants import DEFAULT_LIST_LIMIT, MAX_LIST_LIMIT

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a cursor-paginated listing."""

    items: list[T] = field(default_factory=list)
    next_cursor: Optional[str] = None
    has_more: bool = False
    total: int = 0


def clamp_limit(limit: Optional[int]) -> int:
    if limit is None:
        return DEFAULT_LIST_LIMIT
    return max(1, min(int(limit), MAX_LIST_LIMIT))


def parse_cursor(cursor: Optional[str]) -> Optional[int]:
    """Cursor tokens are the id of the last row seen; anything else is ignored."""
    if cursor is None:
        return None
    try:
        value = int(str(cursor).strip())
    except ValueError:
        return None
    return value if value > 0 else None


def build_page(rows: Sequence[T], *, limit: int, total: int, key: Callable[[T], int]) -> Page[T]:
    """Trim an overfetched (limit + 1) result into a page."""
    items = list(rows)
    has_more = len(items) > limit
    if has_more:
        items = items[:limit]
    next_cursor = str(key(items[-1])) if has_more and items else None
    return Page(items=items, next_cursor=next_cursor, has_more=has_more, total=int(total))
