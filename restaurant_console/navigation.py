"""Route guards and the router that applies them."""

from __future__ import annotations

import logging
from typing import Iterable

from restaurant_console import config
from restaurant_console.access import can_access
from restaurant_console.data import ROUTES, Route
from restaurant_console.observable import Observable, ReadOnlyObservable
from restaurant_console.persistence import KeyValueStore
from restaurant_console.session import SessionStore

logger = logging.getLogger(__name__)

PUBLIC_PATHS = frozenset({config.LOGIN_ROUTE, "/auth/register"})


class AuthGuard:
    """Sends unauthenticated visitors to the login route, remembering where they were headed."""

    def __init__(self, session: SessionStore, storage: KeyValueStore, router: Router) -> None:
        self._session = session
        self._storage = storage
        self._router = router

    def can_activate(self, path: str) -> bool:
        if self._session.is_authenticated():
            return True
        self._storage.set(config.RETURN_URL_KEY, path)
        logger.info("auth guard redirect path=%s", path)
        self._router.redirect(config.LOGIN_ROUTE)
        return False


class RoleGuard:
    """Denies routes whose required roles the current identity lacks."""

    def __init__(self, session: SessionStore, router: Router, fallback: str = config.DEFAULT_ROUTE) -> None:
        self._session = session
        self._router = router
        self.fallback = fallback

    def can_activate(self, route: Route) -> bool:
        if can_access(self._session.current_identity(), route.required_roles):
            return True
        logger.info("role guard redirect path=%s fallback=%s", route.path, self.fallback)
        self._router.redirect(self.fallback)
        return False


class Router:
    """Tracks the current path and runs both guards on every navigation."""

    def __init__(self, session: SessionStore, storage: KeyValueStore, routes: Iterable[Route] = ROUTES) -> None:
        self._session = session
        self._storage = storage
        self._routes = list(routes)
        self._path = Observable(config.LOGIN_ROUTE)
        self.auth_guard = AuthGuard(session, storage, self)
        self.role_guard = RoleGuard(session, self)

    @property
    def current_path(self) -> ReadOnlyObservable[str]:
        return self._path.read_only()

    def resolve(self, path: str) -> Route | None:
        for route in self._routes:
            if route.matches(path):
                return route
        return None

    def navigate(self, path: str) -> bool:
        """Try to move to ``path``. Returns False when a guard redirected instead."""
        if path in PUBLIC_PATHS:
            self._path.set(path)
            return True

        route = self.resolve(path)
        if route is None:
            logger.debug("unknown path=%s, using %s", path, config.DEFAULT_ROUTE)
            path = config.DEFAULT_ROUTE
            route = self.resolve(path)

        if not self.auth_guard.can_activate(path):
            return False
        if route is not None and not self.role_guard.can_activate(route):
            return False
        self._path.set(path)
        return True

    def redirect(self, path: str) -> None:
        """Move without running guards."""
        self._path.set(path)

    def complete_login(self) -> str:
        """Continue to the remembered return url, or the default route."""
        target = self._storage.get(config.RETURN_URL_KEY) or config.DEFAULT_ROUTE
        self._storage.remove(config.RETURN_URL_KEY)
        self.navigate(target)
        return self._path.get_snapshot()
