"""Role-based access decisions for navigation and UI visibility."""

from __future__ import annotations

from typing import Iterable

from restaurant_console.data import NavEntry
from restaurant_console.models import Identity, Role


def can_access(identity: Identity | None, required_roles: Iterable[Role] | None) -> bool:
    """
    Decide whether ``identity`` may see or enter something guarded by ``required_roles``.

    No roles required means open access, even without an identity. Otherwise
    the identity must exist and hold one of the roles. Never redirects;
    callers decide what a denial means.
    """
    roles = frozenset(required_roles or ())
    if not roles:
        return True
    return identity is not None and identity.role in roles


def visible_entries(identity: Identity | None, entries: Iterable[NavEntry]) -> list[NavEntry]:
    """Filter sidebar links or shortcuts down to what ``identity`` may use."""
    if identity is None:
        return []
    return [entry for entry in entries if can_access(identity, entry.required_roles)]
