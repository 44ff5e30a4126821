"""Generic container for paginated query results."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    items: Sequence[T]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        if self.limit <= 0:
            return 0
        return math.ceil(self.total / self.limit)

    @property
    def skip(self) -> int:
        return page_offset(self.page, self.limit)


def page_offset(page: int, limit: int) -> int:
    """Return the number of rows preceding ``page``."""

    return max(page - 1, 0) * limit


__all__ = ["Page", "page_offset"]
