from dataclasses import dataclass
from typing import Generic, List, Optional, TypeVar

from core.config import DEFAULT_PAGE_NUMBER, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

T = TypeVar("T")


@dataclass(frozen=True)
class Pageable:
    number: int = DEFAULT_PAGE_NUMBER
    size: int = DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return self.number * self.size

    @property
    def limit(self) -> int:
        return self.size


@dataclass(frozen=True)
class Slice(Generic[T]):
    """One page of results plus the number of all matching records."""
    content: List[T]
    total_elements: int


def _to_int(value) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def create_pageable(number: Optional[str] = None, size: Optional[str] = None) -> Pageable:
    """
    Converts raw page/size values (query strings) into a Pageable.

    Missing, non-numeric or negative page numbers fall back to the first
    page; a size outside 1..MAX_PAGE_SIZE falls back to DEFAULT_PAGE_SIZE.
    """
    number_int = _to_int(number)
    if number_int is None or number_int < 0:
        number_int = DEFAULT_PAGE_NUMBER

    size_int = _to_int(size)
    if size_int is None or size_int < 1 or size_int > MAX_PAGE_SIZE:
        size_int = DEFAULT_PAGE_SIZE

    return Pageable(number=number_int, size=size_int)
