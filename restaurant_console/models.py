"""Domain models for the restaurant console."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class Role(str, Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    WAITER = "waiter"
    CHEF = "chef"
    CASHIER = "cashier"


@dataclass(frozen=True)
class Identity:
    """An authenticated staff member."""

    id: str
    first_name: str
    last_name: str
    email: str
    phone: str
    role: Role
    is_active: bool
    created_at: datetime
    updated_at: datetime
    avatar: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class Registration:
    """Sign-up form payload."""

    first_name: str
    last_name: str
    email: str
    phone: str
    password: str
    role: Role


@dataclass(frozen=True)
class AuthResult:
    identity: Identity
    token: str


@dataclass(frozen=True)
class MenuCategory:
    """A menu section. Items embed a copy of it, not a reference."""

    id: str
    name: str
    description: str = ""
    display_order: int = 0
    is_active: bool = True


@dataclass(frozen=True)
class CategoryDraft:
    name: str
    description: str = ""
    display_order: int | None = None
    is_active: bool = True


@dataclass(frozen=True)
class NutritionInfo:
    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float


@dataclass(frozen=True)
class MenuItem:
    """A catalog entry with its category snapshot captured at save time."""

    id: str
    name: str
    description: str
    price: float
    category: MenuCategory
    is_available: bool
    preparation_time: int
    ingredients: tuple[str, ...]
    allergens: frozenset[str]
    created_at: datetime
    updated_at: datetime
    nutrition: NutritionInfo | None = None
    image: str | None = None


@dataclass(frozen=True)
class MenuItemDraft:
    """Fields a caller supplies to create a menu item."""

    name: str
    description: str
    price: float
    category_id: str
    preparation_time: int
    ingredients: tuple[str, ...]
    allergens: frozenset[str] = field(default_factory=frozenset)
    is_available: bool = True
    nutrition: NutritionInfo | None = None
    image: str | None = None


def identity_to_dict(identity: Identity) -> dict[str, object]:
    return {
        "id": identity.id,
        "first_name": identity.first_name,
        "last_name": identity.last_name,
        "email": identity.email,
        "phone": identity.phone,
        "role": identity.role.value,
        "is_active": identity.is_active,
        "created_at": identity.created_at.isoformat(),
        "updated_at": identity.updated_at.isoformat(),
        "avatar": identity.avatar,
    }


def identity_from_dict(raw: dict[str, object]) -> Identity:
    """Rebuild an identity; raises ValueError, KeyError or TypeError on bad input."""
    avatar = raw.get("avatar")
    return Identity(
        id=str(raw["id"]),
        first_name=str(raw["first_name"]),
        last_name=str(raw["last_name"]),
        email=str(raw["email"]),
        phone=str(raw["phone"]),
        role=Role(raw["role"]),
        is_active=bool(raw["is_active"]),
        created_at=datetime.fromisoformat(str(raw["created_at"])),
        updated_at=datetime.fromisoformat(str(raw["updated_at"])),
        avatar=str(avatar) if avatar is not None else None,
    )


def identity_to_json(identity: Identity) -> str:
    return json.dumps(identity_to_dict(identity))


def identity_from_json(payload: str) -> Identity:
    raw = json.loads(payload)
    if not isinstance(raw, dict):
        raise ValueError("identity payload must be a JSON object")
    return identity_from_dict(raw)
