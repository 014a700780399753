"""Runtime configuration defaults for storage, latency and logging."""

from __future__ import annotations

import os

SESSION_DB_PATH = os.environ.get("RESTAURANT_SESSION_DB", ":memory:")

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
LOG_PATH = os.environ.get("RESTAURANT_LOG_PATH") or None

# Multiplies every simulated network delay. 0 completes operations on the next loop turn.
LATENCY_SCALE = float(os.environ.get("RESTAURANT_LATENCY_SCALE", "1.0"))

# Simulated backend latencies, in seconds.
LOGIN_DELAY = 1.5
REGISTER_DELAY = 1.5
LIST_ITEMS_DELAY = 0.8
GET_ITEM_DELAY = 0.3
CREATE_ITEM_DELAY = 1.0
UPDATE_ITEM_DELAY = 1.0
DELETE_ITEM_DELAY = 0.8
LIST_CATEGORIES_DELAY = 0.3
CREATE_CATEGORY_DELAY = 0.5
UPDATE_CATEGORY_DELAY = 0.5

# Every seeded and registered account shares this password until a real backend exists.
DEMO_PASSWORD = "password123"

LOGIN_ROUTE = "/auth/login"
DEFAULT_ROUTE = "/dashboard"

# Persisted key-value names.
TOKEN_KEY = "auth_token"
CURRENT_USER_KEY = "current_user"
THEME_KEY = "theme"
RETURN_URL_KEY = "returnUrl"
