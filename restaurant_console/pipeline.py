"""Client-side filter and sort over the menu catalog."""

from __future__ import annotations

import locale
import logging
from dataclasses import dataclass, replace
from typing import Callable, Iterable

from restaurant_console.models import MenuItem

logger = logging.getLogger(__name__)

ALL = "all"
STATUS_FILTERS = (ALL, "available", "unavailable")
SORT_KEYS = ("name", "price", "category", "created")
DIRECTIONS = ("asc", "desc")


@dataclass(frozen=True)
class FilterCriteria:
    """What the menu list is currently showing."""

    search_term: str = ""
    category: str = ALL
    status: str = ALL
    sort_key: str = "name"
    direction: str = "asc"

    def __post_init__(self) -> None:
        if self.status not in STATUS_FILTERS:
            raise ValueError(f"status must be one of {STATUS_FILTERS}")
        if self.sort_key not in SORT_KEYS:
            raise ValueError(f"sort_key must be one of {SORT_KEYS}")
        if self.direction not in DIRECTIONS:
            raise ValueError(f"direction must be one of {DIRECTIONS}")


@dataclass(frozen=True)
class CatalogSummary:
    total: int
    available: int
    unavailable: int


def matches_search(item: MenuItem, query: str) -> bool:
    """Case-insensitive substring match on name, description or any ingredient."""
    needle = query.lower()
    if needle in item.name.lower() or needle in item.description.lower():
        return True
    return any(needle in ingredient.lower() for ingredient in item.ingredients)


def use_system_collation() -> str | None:
    """
    Adopt the environment's collation rules for name and category sorts.

    Returns the collation locale now in effect, or ``None`` when the
    environment names a locale the system does not have.
    """
    try:
        return locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as exc:
        logger.warning("keeping default collation: %s", exc)
        return None


def _text_key(value: str) -> str:
    return locale.strxfrm(value.casefold())


_SORT_KEY_FUNCS: dict[str, Callable[[MenuItem], object]] = {
    "name": lambda item: _text_key(item.name),
    "price": lambda item: item.price,
    "category": lambda item: _text_key(item.category.name),
    "created": lambda item: item.created_at,
}


def apply(items: Iterable[MenuItem], criteria: FilterCriteria) -> list[MenuItem]:
    """
    Return the visible subset of ``items`` in display order.

    Steps run in a fixed order: search, category, status, sort. Empty search
    and ``"all"`` filters are skipped. Equal sort keys keep their incoming
    order in both directions. ``items`` itself is never modified.
    """
    visible = list(items)

    if criteria.search_term:
        visible = [item for item in visible if matches_search(item, criteria.search_term)]

    if criteria.category != ALL:
        visible = [item for item in visible if item.category.id == criteria.category]

    if criteria.status != ALL:
        wanted = criteria.status == "available"
        visible = [item for item in visible if item.is_available == wanted]

    return sorted(visible, key=_SORT_KEY_FUNCS[criteria.sort_key], reverse=criteria.direction == "desc")


def next_sort(criteria: FilterCriteria, sort_key: str) -> FilterCriteria:
    """Same key flips the direction; a new key starts ascending."""
    if criteria.sort_key == sort_key:
        return replace(criteria, direction="desc" if criteria.direction == "asc" else "asc")
    return replace(criteria, sort_key=sort_key, direction="asc")


def summarize(items: Iterable[MenuItem]) -> CatalogSummary:
    items = list(items)
    available = sum(1 for item in items if item.is_available)
    return CatalogSummary(total=len(items), available=available, unavailable=len(items) - available)
