"""Rendering helpers for the console panes."""

from __future__ import annotations

from rich.text import Text

from restaurant_console.models import Identity, MenuItem, Role
from restaurant_console.pipeline import ALL, CatalogSummary, FilterCriteria


def role_badge_style(role: Role) -> str:
    """Return a consistent badge style per staff role."""
    if role == Role.ADMIN:
        return "bold #ffffff on #b23a48"
    if role == Role.MANAGER:
        return "bold #ffffff on #2f6db5"
    if role == Role.CHEF:
        return "bold #1f1300 on #e0a030"
    return "bold #0b1f0f on #5fbf72"


def availability_style(is_available: bool) -> str:
    return "bold #0b1f0f on #5fbf72" if is_available else "bold #ffffff on #7a7a7a"


def format_identity(identity: Identity | None) -> Text:
    text = Text()
    if identity is None:
        text.append("Signed out", style="dim")
        return text
    text.append(f" {identity.role.value.upper()} ", style=role_badge_style(identity.role))
    text.append(f" {identity.full_name} <{identity.email}>")
    return text


def format_item_row(item: MenuItem) -> Text:
    """Render one list row: status tag, name, category and price."""
    text = Text()
    text.append(" ON " if item.is_available else " OFF", style=availability_style(item.is_available))
    text.append(f" {item.name}")
    text.append(f"  {item.category.name}", style="dim")
    text.append(f"  ${item.price:.2f}")
    return text


def format_item_detail(item: MenuItem) -> Text:
    text = Text()
    text.append(item.name, style="bold")
    text.append(f"  ${item.price:.2f}\n")
    text.append(f"{item.description}\n\n")
    text.append(f"Category: {item.category.name}\n")
    text.append(f"Preparation: {item.preparation_time} min\n")
    text.append(f"Ingredients: {', '.join(item.ingredients)}\n")
    allergens = ", ".join(sorted(item.allergens)) or "none"
    text.append(f"Allergens: {allergens}\n")
    if item.nutrition is not None:
        n = item.nutrition
        text.append(f"Nutrition: {n.calories:g} kcal, P {n.protein:g}g, C {n.carbs:g}g, F {n.fat:g}g, Fiber {n.fiber:g}g\n")
    text.append("Status: ")
    text.append("available" if item.is_available else "unavailable", style=availability_style(item.is_available))
    return text


def format_criteria(criteria: FilterCriteria, category_name: str | None) -> str:
    category = "all" if criteria.category == ALL else (category_name or criteria.category)
    search = criteria.search_term or "-"
    return (
        f"search: {search} | category: {category} | status: {criteria.status} | "
        f"sort: {criteria.sort_key} {criteria.direction}"
    )


def format_summary(summary: CatalogSummary) -> str:
    return f"{summary.total} items, {summary.available} available, {summary.unavailable} unavailable"
