from math import ceil
from typing import Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from services.pageable import Pageable

T = TypeVar("T")


class PageMeta(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    size: int
    number: int
    total_elements: int
    total_pages: int


class Page(BaseModel, Generic[T]):
    content: List[T]
    page: PageMeta


def create_page(content: List[T], total_elements: int, pageable: Pageable) -> Page[T]:
    """Wraps one page of results together with its position in the whole result."""
    return Page(
        content=content,
        page=PageMeta(
            size=pageable.size,
            number=pageable.number,
            total_elements=total_elements,
            total_pages=ceil(total_elements / pageable.size),
        ),
    )
