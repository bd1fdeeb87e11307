from __future__ import annotations

import math
from typing import Any, Callable, Iterable, Iterator
from urllib.parse import urlencode

from unified_response.resources.base import PayloadKind, to_plain


class Paginator:
    """Length-aware page of items.

    The caller has already sliced ``items`` for ``current_page``; the
    paginator only knows how to describe the page.
    """

    payload_kind = PayloadKind.PAGINATED

    def __init__(
        self,
        items: Iterable[Any],
        total: int,
        per_page: int,
        current_page: int = 1,
        path: str = "/",
        page_name: str = "page",
    ) -> None:
        if per_page <= 0:
            raise ValueError("per_page must be greater than zero")
        if current_page <= 0:
            raise ValueError("current_page must be greater than zero")
        if total < 0:
            raise ValueError("total cannot be negative")
        self.items: list[Any] = list(items)
        self.total = total
        self.per_page = per_page
        self.current_page = current_page
        self.path = path.rstrip("/") if path != "/" else path
        self.page_name = page_name

    def __iter__(self) -> Iterator[Any]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    @property
    def last_page(self) -> int:
        return max(math.ceil(self.total / self.per_page), 1)

    @property
    def first_item(self) -> int | None:
        if not self.items:
            return None
        return (self.current_page - 1) * self.per_page + 1

    @property
    def last_item(self) -> int | None:
        first = self.first_item
        if first is None:
            return None
        return first + len(self.items) - 1

    def has_more_pages(self) -> bool:
        return self.current_page < self.last_page

    def url(self, page: int) -> str:
        page = max(page, 1)
        return f"{self.path}?{urlencode({self.page_name: page})}"

    def previous_page_url(self) -> str | None:
        if self.current_page > 1:
            return self.url(self.current_page - 1)
        return None

    def next_page_url(self) -> str | None:
        if self.has_more_pages():
            return self.url(self.current_page + 1)
        return None

    def map(self, callback: Callable[[Any], Any]) -> list[Any]:
        return [callback(item) for item in self.items]

    def to_dict(self) -> dict[str, Any]:
        return {
            "current_page": self.current_page,
            "data": [to_plain(item) for item in self.items],
            "first_page_url": self.url(1),
            "from": self.first_item,
            "last_page": self.last_page,
            "last_page_url": self.url(self.last_page),
            "next_page_url": self.next_page_url(),
            "path": self.path,
            "per_page": self.per_page,
            "prev_page_url": self.previous_page_url(),
            "to": self.last_item,
            "total": self.total,
        }
