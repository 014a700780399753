"""Typed seed records and navigation tables built from constant.py."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from restaurant_console.constant import (
    MENU_DELETE_ROLES,
    MENU_EDIT_ROLES,
    QUICK_ACTIONS,
    ROUTE_TABLE,
    SEED_CATEGORIES,
    SEED_IDENTITIES,
    SEED_MENU_ITEMS,
    SIDEBAR_ENTRIES,
)
from restaurant_console.models import Identity, MenuCategory, MenuItem, NutritionInfo, Role


@dataclass(frozen=True)
class Route:
    """A guarded destination. Empty ``required_roles`` means open access."""

    path: str
    required_roles: frozenset[Role] = frozenset()

    def matches(self, path: str) -> bool:
        if self.path.endswith("/"):
            return path.startswith(self.path) and len(path) > len(self.path)
        return path == self.path


@dataclass(frozen=True)
class NavEntry:
    """A sidebar link or dashboard shortcut."""

    label: str
    route: str
    required_roles: frozenset[Role]


def _roles(raw: object) -> frozenset[Role]:
    return frozenset(Role(value) for value in raw)  # type: ignore[union-attr]


def seed_identities(now: datetime) -> list[Identity]:
    return [
        Identity(
            id=str(raw["id"]),
            first_name=str(raw["first_name"]),
            last_name=str(raw["last_name"]),
            email=str(raw["email"]),
            phone=str(raw["phone"]),
            role=Role(raw["role"]),
            is_active=bool(raw["is_active"]),
            created_at=now,
            updated_at=now,
        )
        for raw in SEED_IDENTITIES
    ]


def seed_categories() -> list[MenuCategory]:
    return [
        MenuCategory(
            id=str(raw["id"]),
            name=str(raw["name"]),
            description=str(raw["description"]),
            display_order=int(raw["display_order"]),
            is_active=bool(raw["is_active"]),
        )
        for raw in SEED_CATEGORIES
    ]


def seed_menu_items(categories: list[MenuCategory], now: datetime) -> list[MenuItem]:
    """Build seed items, embedding the matching category from ``categories``."""
    by_id = {category.id: category for category in categories}
    items: list[MenuItem] = []
    for raw in SEED_MENU_ITEMS:
        nutrition = raw.get("nutrition")
        items.append(
            MenuItem(
                id=str(raw["id"]),
                name=str(raw["name"]),
                description=str(raw["description"]),
                price=float(raw["price"]),  # type: ignore[arg-type]
                category=by_id[str(raw["category_id"])],
                is_available=bool(raw["is_available"]),
                preparation_time=int(raw["preparation_time"]),  # type: ignore[call-overload]
                ingredients=tuple(raw["ingredients"]),  # type: ignore[arg-type]
                allergens=frozenset(raw["allergens"]),  # type: ignore[arg-type]
                created_at=now,
                updated_at=now,
                nutrition=NutritionInfo(**nutrition) if nutrition else None,  # type: ignore[arg-type]
            )
        )
    return items


ROUTES: list[Route] = [Route(path=str(raw["path"]), required_roles=_roles(raw["roles"])) for raw in ROUTE_TABLE]

SIDEBAR: list[NavEntry] = [
    NavEntry(label=str(raw["label"]), route=str(raw["route"]), required_roles=_roles(raw["roles"]))
    for raw in SIDEBAR_ENTRIES
]

DASHBOARD_ACTIONS: list[NavEntry] = [
    NavEntry(label=str(raw["label"]), route=str(raw["route"]), required_roles=_roles(raw["roles"]))
    for raw in QUICK_ACTIONS
]

EDIT_ROLES: frozenset[Role] = _roles(MENU_EDIT_ROLES)
DELETE_ROLES: frozenset[Role] = _roles(MENU_DELETE_ROLES)
