"""Editable static seed data, route table and navigation entries."""

from __future__ import annotations

MANAGEMENT_ROLES = ["admin", "manager"]
KITCHEN_ROLES = ["admin", "manager", "chef"]
FLOOR_ROLES = ["admin", "manager", "waiter"]
ALL_ROLES = ["admin", "manager", "waiter", "chef", "cashier"]

SEED_IDENTITIES: list[dict[str, str | bool]] = [
    {
        "id": "1",
        "first_name": "Admin",
        "last_name": "User",
        "email": "admin@restaurant.com",
        "phone": "+1234567890",
        "role": "admin",
        "is_active": True,
    },
    {
        "id": "2",
        "first_name": "Manager",
        "last_name": "Smith",
        "email": "manager@restaurant.com",
        "phone": "+1234567891",
        "role": "manager",
        "is_active": True,
    },
    {
        "id": "3",
        "first_name": "John",
        "last_name": "Waiter",
        "email": "waiter@restaurant.com",
        "phone": "+1234567892",
        "role": "waiter",
        "is_active": True,
    },
]

SEED_CATEGORIES: list[dict[str, str | int | bool]] = [
    {"id": "1", "name": "Appetizers", "description": "Start your meal right", "display_order": 1, "is_active": True},
    {"id": "2", "name": "Main Courses", "description": "Hearty and satisfying dishes", "display_order": 2, "is_active": True},
    {"id": "3", "name": "Desserts", "description": "Sweet endings", "display_order": 3, "is_active": True},
    {"id": "4", "name": "Beverages", "description": "Refreshing drinks", "display_order": 4, "is_active": True},
    {"id": "5", "name": "Salads", "description": "Fresh and healthy options", "display_order": 5, "is_active": True},
]

# Item rows reference categories by id; data.py embeds the category snapshot.
SEED_MENU_ITEMS: list[dict[str, object]] = [
    {
        "id": "1",
        "name": "Caesar Salad",
        "description": "Fresh romaine lettuce with parmesan cheese, croutons, and our signature caesar dressing",
        "price": 12.99,
        "category_id": "1",
        "is_available": True,
        "preparation_time": 10,
        "ingredients": ["Romaine lettuce", "Parmesan cheese", "Croutons", "Caesar dressing"],
        "allergens": ["Dairy", "Gluten"],
        "nutrition": {"calories": 250, "protein": 8, "carbs": 15, "fat": 18, "fiber": 4},
    },
    {
        "id": "2",
        "name": "Grilled Salmon",
        "description": "Atlantic salmon grilled to perfection, served with seasonal vegetables and rice",
        "price": 24.99,
        "category_id": "2",
        "is_available": True,
        "preparation_time": 20,
        "ingredients": ["Atlantic salmon", "Seasonal vegetables", "Jasmine rice", "Lemon"],
        "allergens": ["Fish"],
        "nutrition": {"calories": 420, "protein": 35, "carbs": 25, "fat": 22, "fiber": 3},
    },
    {
        "id": "3",
        "name": "Chocolate Lava Cake",
        "description": "Warm chocolate cake with molten center, served with vanilla ice cream",
        "price": 8.99,
        "category_id": "3",
        "is_available": True,
        "preparation_time": 15,
        "ingredients": ["Dark chocolate", "Flour", "Butter", "Eggs", "Vanilla ice cream"],
        "allergens": ["Dairy", "Gluten", "Eggs"],
        "nutrition": {"calories": 380, "protein": 6, "carbs": 45, "fat": 18, "fiber": 2},
    },
    {
        "id": "4",
        "name": "Fresh Orange Juice",
        "description": "Freshly squeezed orange juice, no pulp",
        "price": 4.99,
        "category_id": "4",
        "is_available": True,
        "preparation_time": 3,
        "ingredients": ["Fresh oranges"],
        "allergens": [],
        "nutrition": {"calories": 110, "protein": 2, "carbs": 26, "fat": 0, "fiber": 0},
    },
    {
        "id": "5",
        "name": "Greek Salad",
        "description": "Tomatoes, cucumber, olives, red onion, and feta cheese with olive oil dressing",
        "price": 14.99,
        "category_id": "5",
        "is_available": True,
        "preparation_time": 8,
        "ingredients": ["Tomatoes", "Cucumber", "Olives", "Red onion", "Feta cheese", "Olive oil"],
        "allergens": ["Dairy"],
        "nutrition": {"calories": 180, "protein": 6, "carbs": 12, "fat": 14, "fiber": 5},
    },
]

# Routes behind the auth guard. An empty role list means any signed-in identity.
ROUTE_TABLE: list[dict[str, str | list[str]]] = [
    {"path": "/dashboard", "roles": []},
    {"path": "/menu", "roles": KITCHEN_ROLES},
    {"path": "/menu/add", "roles": KITCHEN_ROLES},
    {"path": "/menu/edit/", "roles": KITCHEN_ROLES},
]

SIDEBAR_ENTRIES: list[dict[str, str | list[str]]] = [
    {"label": "Dashboard", "route": "/dashboard", "roles": ALL_ROLES},
    {"label": "Orders", "route": "/orders", "roles": ALL_ROLES},
    {"label": "Menu Management", "route": "/menu", "roles": KITCHEN_ROLES},
    {"label": "Tables", "route": "/tables", "roles": FLOOR_ROLES},
    {"label": "Reservations", "route": "/reservations", "roles": FLOOR_ROLES},
    {"label": "Staff", "route": "/staff", "roles": MANAGEMENT_ROLES},
    {"label": "Inventory", "route": "/inventory", "roles": KITCHEN_ROLES},
    {"label": "Reports", "route": "/reports", "roles": MANAGEMENT_ROLES},
]

QUICK_ACTIONS: list[dict[str, str | list[str]]] = [
    {"label": "New Order", "route": "/orders/create", "roles": ["admin", "manager", "waiter", "cashier"]},
    {"label": "Add Menu Item", "route": "/menu/add", "roles": KITCHEN_ROLES},
    {"label": "Manage Tables", "route": "/tables", "roles": FLOOR_ROLES},
    {"label": "Add Staff", "route": "/staff/add", "roles": MANAGEMENT_ROLES},
    {"label": "View Reports", "route": "/reports", "roles": MANAGEMENT_ROLES},
    {"label": "Inventory", "route": "/inventory", "roles": KITCHEN_ROLES},
]

# Who sees the edit and delete controls in the menu list.
MENU_EDIT_ROLES = KITCHEN_ROLES
MENU_DELETE_ROLES = MANAGEMENT_ROLES
