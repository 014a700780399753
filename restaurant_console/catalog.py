"""Catalog store: menu items and categories behind simulated backend latency."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from typing import Any, Callable, Iterable, Mapping, TypeVar

from restaurant_console import config
from restaurant_console.data import seed_categories, seed_menu_items
from restaurant_console.errors import NotFound, ValidationFailure
from restaurant_console.ids import SequentialIds
from restaurant_console.models import CategoryDraft, MenuCategory, MenuItem, MenuItemDraft, NutritionInfo
from restaurant_console.observable import Observable, ReadOnlyObservable
from restaurant_console.pipeline import matches_search
from restaurant_console.scheduler import Scheduler, rejected
from restaurant_console.session import Clock, utc_now

logger = logging.getLogger(__name__)

T = TypeVar("T")

Items = tuple[MenuItem, ...]
Categories = tuple[MenuCategory, ...]

MIN_PRICE = 0.01
MIN_PREPARATION_MINUTES = 1

ITEM_UPDATE_FIELDS = frozenset(
    {
        "name",
        "description",
        "price",
        "category_id",
        "is_available",
        "preparation_time",
        "ingredients",
        "allergens",
        "nutrition",
        "image",
    }
)
CATEGORY_UPDATE_FIELDS = frozenset({"name", "description", "display_order", "is_active"})


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _text_values(value: Any, label: str) -> list[str]:
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple, set, frozenset)):
        raise ValidationFailure(f"{label} must be a collection of names")
    if not all(isinstance(entry, str) for entry in value):
        raise ValidationFailure(f"{label} must only contain text")
    return list(value)


def _check_item(item: MenuItem) -> MenuItem:
    if not isinstance(item.name, str) or not item.name.strip():
        raise ValidationFailure("Menu item name is required")
    if not _is_number(item.price) or item.price < MIN_PRICE:
        raise ValidationFailure(f"Price must be at least {MIN_PRICE}")
    if not _is_number(item.preparation_time) or item.preparation_time < MIN_PREPARATION_MINUTES:
        raise ValidationFailure(f"Preparation time must be at least {MIN_PREPARATION_MINUTES} minute")
    if not item.ingredients:
        raise ValidationFailure("At least one ingredient is required")
    if item.nutrition is not None and not isinstance(item.nutrition, NutritionInfo):
        raise ValidationFailure("Nutrition must be a NutritionInfo record")
    return item


class CatalogStore:
    """
    Owns the menu item and category collections.

    Collections are published as tuples of frozen records, so consumers can
    only derive copies. Every operation is scheduled at call time on the
    injected scheduler and validated against the latest state when it
    completes; a rejected operation leaves both collections untouched.
    Completion order follows the scheduled delays, not call order.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        clock: Clock = utc_now,
        categories: Iterable[MenuCategory] | None = None,
        items: Iterable[MenuItem] | None = None,
    ) -> None:
        self._scheduler = scheduler
        self._clock = clock
        initial_categories = list(categories) if categories is not None else seed_categories()
        initial_items = list(items) if items is not None else seed_menu_items(initial_categories, clock())
        self._categories: Observable[Categories] = Observable(tuple(initial_categories))
        self._items: Observable[Items] = Observable(tuple(initial_items))
        self._item_ids = SequentialIds.following(item.id for item in initial_items)
        self._category_ids = SequentialIds.following(category.id for category in initial_categories)
        self._loading = Observable(False)
        self._pending = 0

    @property
    def items(self) -> ReadOnlyObservable[Items]:
        return self._items.read_only()

    @property
    def categories(self) -> ReadOnlyObservable[Categories]:
        return self._categories.read_only()

    @property
    def is_loading(self) -> ReadOnlyObservable[bool]:
        return self._loading.read_only()

    def by_category(self, category_id: str) -> ReadOnlyObservable[Items]:
        return self._items.map(lambda items: tuple(item for item in items if item.category.id == category_id))

    def search(self, query: str) -> ReadOnlyObservable[Items]:
        return self._items.map(lambda items: tuple(item for item in items if matches_search(item, query)))

    def list_items(self) -> asyncio.Future[Items]:
        return self._tracked(config.LIST_ITEMS_DELAY, self._items.get_snapshot)

    def list_categories(self) -> asyncio.Future[Categories]:
        return self._scheduler.after(config.LIST_CATEGORIES_DELAY, self._categories.get_snapshot)

    def get_item_by_id(self, item_id: str) -> asyncio.Future[MenuItem]:
        return self._scheduler.after(config.GET_ITEM_DELAY, lambda: self._items.get_snapshot()[self._index_of(item_id)])

    def create_item(self, draft: MenuItemDraft) -> asyncio.Future[MenuItem]:
        def complete() -> MenuItem:
            now = self._clock()
            item = _check_item(
                MenuItem(
                    id=self._item_ids.peek(),
                    name=draft.name,
                    description=draft.description,
                    price=draft.price,
                    category=self._category_snapshot(draft.category_id),
                    is_available=draft.is_available,
                    preparation_time=draft.preparation_time,
                    ingredients=tuple(_text_values(draft.ingredients, "Ingredients")),
                    allergens=frozenset(_text_values(draft.allergens, "Allergens")),
                    created_at=now,
                    updated_at=now,
                    nutrition=draft.nutrition,
                    image=draft.image,
                )
            )
            self._item_ids.next_id()
            self._items.set((item,) + self._items.get_snapshot())
            logger.info("created menu item id=%s name=%r", item.id, item.name)
            return item

        return self._tracked(config.CREATE_ITEM_DELAY, complete)

    def update_item(self, item_id: str, changes: Mapping[str, Any]) -> asyncio.Future[MenuItem]:
        """Merge ``changes`` over the stored item. ``category_id`` re-snapshots the category."""

        def complete() -> MenuItem:
            index = self._index_of(item_id)
            unknown = set(changes) - ITEM_UPDATE_FIELDS
            if unknown:
                raise ValidationFailure(f"Unknown menu item fields: {', '.join(sorted(unknown))}")

            fields = dict(changes)
            if "category_id" in fields:
                fields["category"] = self._category_snapshot(str(fields.pop("category_id")))
            if "ingredients" in fields:
                fields["ingredients"] = tuple(_text_values(fields["ingredients"], "Ingredients"))
            if "allergens" in fields:
                fields["allergens"] = frozenset(_text_values(fields["allergens"], "Allergens"))

            items = list(self._items.get_snapshot())
            updated = _check_item(replace(items[index], **fields, updated_at=self._clock()))
            items[index] = updated
            self._items.set(tuple(items))
            logger.info("updated menu item id=%s fields=%s", item_id, sorted(changes))
            return updated

        return self._tracked(config.UPDATE_ITEM_DELAY, complete)

    def delete_item(self, item_id: str) -> asyncio.Future[bool]:
        def complete() -> bool:
            index = self._index_of(item_id)
            items = list(self._items.get_snapshot())
            removed = items.pop(index)
            self._items.set(tuple(items))
            logger.info("deleted menu item id=%s name=%r", removed.id, removed.name)
            return True

        return self._tracked(config.DELETE_ITEM_DELAY, complete)

    def toggle_availability(self, item_id: str) -> asyncio.Future[MenuItem]:
        """Flip availability based on the value visible right now."""
        current = self._find(item_id)
        if current is None:
            logger.warning("toggle rejected: no menu item id=%s", item_id)
            return rejected(NotFound(f"Menu item {item_id} not found"))
        return self.update_item(item_id, {"is_available": not current.is_available})

    def create_category(self, draft: CategoryDraft) -> asyncio.Future[MenuCategory]:
        def complete() -> MenuCategory:
            if not draft.name.strip():
                raise ValidationFailure("Category name is required")
            categories = self._categories.get_snapshot()
            display_order = draft.display_order
            if display_order is None:
                display_order = max((category.display_order for category in categories), default=0) + 1
            category = MenuCategory(
                id=self._category_ids.next_id(),
                name=draft.name,
                description=draft.description,
                display_order=display_order,
                is_active=draft.is_active,
            )
            self._categories.set(categories + (category,))
            logger.info("created category id=%s name=%r", category.id, category.name)
            return category

        return self._tracked(config.CREATE_CATEGORY_DELAY, complete)

    def update_category(self, category_id: str, changes: Mapping[str, Any]) -> asyncio.Future[MenuCategory]:
        """Edit a category. Items keep the snapshot they were saved with."""

        def complete() -> MenuCategory:
            unknown = set(changes) - CATEGORY_UPDATE_FIELDS
            if unknown:
                raise ValidationFailure(f"Unknown category fields: {', '.join(sorted(unknown))}")
            categories = list(self._categories.get_snapshot())
            for index, category in enumerate(categories):
                if category.id == category_id:
                    break
            else:
                raise NotFound(f"Category {category_id} not found")
            updated = replace(categories[index], **changes)
            if not updated.name.strip():
                raise ValidationFailure("Category name is required")
            categories[index] = updated
            self._categories.set(tuple(categories))
            logger.info("updated category id=%s fields=%s", category_id, sorted(changes))
            return updated

        return self._tracked(config.UPDATE_CATEGORY_DELAY, complete)

    def _find(self, item_id: str) -> MenuItem | None:
        for item in self._items.get_snapshot():
            if item.id == item_id:
                return item
        return None

    def _index_of(self, item_id: str) -> int:
        for index, item in enumerate(self._items.get_snapshot()):
            if item.id == item_id:
                return index
        raise NotFound(f"Menu item {item_id} not found")

    def _category_snapshot(self, category_id: str) -> MenuCategory:
        for category in self._categories.get_snapshot():
            if category.id == category_id:
                return category
        raise ValidationFailure(f"Category {category_id} does not exist")

    def _tracked(self, delay: float, fn: Callable[[], T]) -> asyncio.Future[T]:
        self._pending += 1
        if self._pending == 1:
            self._loading.set(True)

        def complete() -> T:
            try:
                return fn()
            except Exception as exc:
                logger.warning("catalog operation rejected: %s", exc)
                raise
            finally:
                self._pending -= 1
                if self._pending == 0:
                    self._loading.set(False)

        return self._scheduler.after(delay, complete)
