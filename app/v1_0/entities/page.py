from dataclasses import dataclass, field
from math import ceil
from typing import Callable, Generic, List, Optional, Sequence, TypeVar

from .base import CamelDTO

T = TypeVar("T")
R = TypeVar("R")


@dataclass(slots=True, frozen=True)
class PageRequest:
    """Zero-based page index plus page size."""
    page: int = 0
    size: int = 10

    def __post_init__(self) -> None:
        if self.page < 0:
            raise ValueError("Page index must not be less than zero")
        if self.size < 1:
            raise ValueError("Page size must not be less than one")

    @classmethod
    def of(cls, page: int, size: int) -> "PageRequest":
        return cls(page=page, size=size)

    @property
    def offset(self) -> int:
        return self.page * self.size

    def next(self) -> "PageRequest":
        return PageRequest(page=self.page + 1, size=self.size)

    def previous_or_first(self) -> "PageRequest":
        return PageRequest(page=max(self.page - 1, 0), size=self.size)


@dataclass(slots=True, frozen=True)
class Page(Generic[T]):
    """
    A slice of a larger result set plus the metadata describing it.

    ``size == 0`` marks an unpaged result: everything fits in one page.
    """
    content: List[T] = field(default_factory=list)
    number: int = 0
    size: int = 0
    total_elements: int = 0

    @classmethod
    def of(cls, content: Sequence[T], request: PageRequest, total: int) -> "Page[T]":
        """
        Build the page answering ``request``.

        When the request reaches past the reported total, the total is
        recomputed from the rows that actually came back.
        """
        items = list(content)
        total = max(int(total or 0), 0)
        offset = request.offset
        if items and offset + request.size > total:
            total = offset + len(items)
        return cls(content=items, number=request.page, size=request.size, total_elements=total)

    @classmethod
    def empty(cls, request: Optional[PageRequest] = None) -> "Page[T]":
        if request is None:
            return cls()
        return cls(content=[], number=request.page, size=request.size, total_elements=0)

    @classmethod
    def unpaged(cls, content: Sequence[T]) -> "Page[T]":
        items = list(content)
        return cls(content=items, number=0, size=len(items), total_elements=len(items))

    @property
    def total_pages(self) -> int:
        if self.size > 0:
            return ceil(self.total_elements / self.size)
        return 1 if self.total_elements else 0

    @property
    def number_of_elements(self) -> int:
        return len(self.content)

    @property
    def has_content(self) -> bool:
        return bool(self.content)

    @property
    def is_first(self) -> bool:
        return not self.has_previous

    @property
    def is_last(self) -> bool:
        return not self.has_next

    @property
    def has_next(self) -> bool:
        return self.number + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.number > 0

    def map(self, fn: Callable[[T], R]) -> "Page[R]":
        return Page(
            content=[fn(item) for item in self.content],
            number=self.number,
            size=self.size,
            total_elements=self.total_elements,
        )


class PageResponse(CamelDTO, Generic[T]):
    """Flat, serializable view of a ``Page``; keys go out in camelCase."""

    content: List[T]
    number: int
    size: int
    total_elements: int
    total_pages: int

    @classmethod
    def from_page(cls, page: Page[T]) -> "PageResponse[T]":
        return cls(
            content=page.content,
            number=page.number,
            size=page.size,
            total_elements=page.total_elements,
            total_pages=page.total_pages,
        )
