"""
Page windows for list endpoints.

Pages are 1-based. A window turns a page number into limit/offset; Page wraps
one window of items together with the total count of the full result set.
"""

import os
from dataclasses import dataclass
from typing import Callable, Generic, List, TypeVar

from dotenv import load_dotenv

load_dotenv()

T = TypeVar("T")
U = TypeVar("U")

SCHEDULE_PAGE_SIZE = int(os.getenv("SCHEDULE_PAGE_SIZE", "9"))
SCHEDULE_MODAL_PAGE_SIZE = int(os.getenv("SCHEDULE_MODAL_PAGE_SIZE", "5"))
DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "5"))


@dataclass(frozen=True)
class PageWindow:
    page: int
    size: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.size


@dataclass
class Page(Generic[T]):
    items: List[T]
    window: PageWindow
    total_elements: int

    @property
    def total_pages(self) -> int:
        if self.total_elements == 0:
            return 0
        return (self.total_elements + self.window.size - 1) // self.window.size

    def map(self, fn: Callable[[T], U]) -> "Page[U]":
        return Page(items=[fn(item) for item in self.items], window=self.window, total_elements=self.total_elements)


def _window(page: int, size: int) -> PageWindow:
    return PageWindow(page=max(page, 1), size=size)


def schedule_window(page: int) -> PageWindow:
    """Schedule list tabs (all / shared)."""
    return _window(page, SCHEDULE_PAGE_SIZE)


def schedule_modal_window(page: int) -> PageWindow:
    """Add-to-existing-schedule picker."""
    return _window(page, SCHEDULE_MODAL_PAGE_SIZE)


def default_window(page: int) -> PageWindow:
    return _window(page, DEFAULT_PAGE_SIZE)
