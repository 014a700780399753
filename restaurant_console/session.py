"""Session store: the current identity and its login/register/logout transitions."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, Iterable
from uuid import uuid4

from restaurant_console import config
from restaurant_console.data import seed_identities
from restaurant_console.errors import AlreadyExists, InvalidCredentials, NotFound
from restaurant_console.ids import SequentialIds
from restaurant_console.models import (
    AuthResult,
    Identity,
    Registration,
    Role,
    identity_from_json,
    identity_to_json,
)
from restaurant_console.observable import Observable, ReadOnlyObservable
from restaurant_console.persistence import KeyValueStore
from restaurant_console.scheduler import Scheduler

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_token() -> str:
    return f"session_{uuid4().hex}"


class SessionStore:
    """
    Holds the authenticated identity and persists it to a key-value store.

    ``login`` and ``register`` schedule their completion on the injected
    scheduler and return a future; the in-flight flag stays raised until
    every pending operation has settled, successfully or not.
    """

    def __init__(
        self,
        storage: KeyValueStore,
        scheduler: Scheduler,
        clock: Clock = utc_now,
        identities: Iterable[Identity] | None = None,
        token_factory: Callable[[], str] = new_token,
        password: str = config.DEMO_PASSWORD,
    ) -> None:
        self._storage = storage
        self._scheduler = scheduler
        self._clock = clock
        self._token_factory = token_factory
        self._password = password
        self._registry: list[Identity] = list(identities) if identities is not None else seed_identities(clock())
        self._ids = SequentialIds.following(identity.id for identity in self._registry)
        self._current: Observable[Identity | None] = Observable(None)
        self._loading = Observable(False)
        self._pending = 0
        self._restore()

    @property
    def current_identity_stream(self) -> ReadOnlyObservable[Identity | None]:
        return self._current.read_only()

    @property
    def is_loading(self) -> ReadOnlyObservable[bool]:
        return self._loading.read_only()

    def current_identity(self) -> Identity | None:
        return self._current.get_snapshot()

    def is_authenticated(self) -> bool:
        # Decided by the persisted token alone, not by the identity observable.
        return bool(self._storage.get(config.TOKEN_KEY))

    def has_role(self, role: Role) -> bool:
        identity = self.current_identity()
        return identity is not None and identity.role == role

    def has_any_role(self, roles: Iterable[Role]) -> bool:
        identity = self.current_identity()
        return identity is not None and identity.role in set(roles)

    def login(self, email: str, password: str) -> asyncio.Future[AuthResult]:
        def complete() -> AuthResult:
            identity = self._find(email)
            if identity is None:
                logger.warning("login rejected: no identity for %s", email)
                raise NotFound(f"No user registered with email {email}")
            if password != self._password:
                logger.warning("login rejected: bad password for %s", email)
                raise InvalidCredentials("Invalid password")
            return self._start_session(identity)

        return self._schedule(config.LOGIN_DELAY, complete)

    def register(self, registration: Registration) -> asyncio.Future[AuthResult]:
        """Create an identity with a caller-chosen role and sign it in."""

        def complete() -> AuthResult:
            if self._find(registration.email) is not None:
                logger.warning("registration rejected: %s already exists", registration.email)
                raise AlreadyExists(f"User with email {registration.email} already exists")
            now = self._clock()
            identity = Identity(
                id=self._ids.next_id(),
                first_name=registration.first_name,
                last_name=registration.last_name,
                email=registration.email,
                phone=registration.phone,
                role=registration.role,
                is_active=True,
                created_at=now,
                updated_at=now,
            )
            self._registry.append(identity)
            logger.info("registered identity id=%s role=%s", identity.id, identity.role.value)
            return self._start_session(identity)

        return self._schedule(config.REGISTER_DELAY, complete)

    def logout(self) -> None:
        self._storage.remove(config.TOKEN_KEY)
        self._storage.remove(config.CURRENT_USER_KEY)
        if self._current.get_snapshot() is not None:
            logger.info("logged out")
        self._current.set(None)

    def _find(self, email: str) -> Identity | None:
        for identity in self._registry:
            if identity.email == email:
                return identity
        return None

    def _start_session(self, identity: Identity) -> AuthResult:
        token = self._token_factory()
        self._storage.set(config.TOKEN_KEY, token)
        self._storage.set(config.CURRENT_USER_KEY, identity_to_json(identity))
        self._current.set(identity)
        logger.info("session started for id=%s role=%s", identity.id, identity.role.value)
        return AuthResult(identity=identity, token=token)

    def _schedule(self, delay: float, fn: Callable[[], AuthResult]) -> asyncio.Future[AuthResult]:
        self._pending += 1
        if self._pending == 1:
            self._loading.set(True)

        def tracked() -> AuthResult:
            try:
                return fn()
            finally:
                self._pending -= 1
                if self._pending == 0:
                    self._loading.set(False)

        return self._scheduler.after(delay, tracked)

    def _restore(self) -> None:
        token = self._storage.get(config.TOKEN_KEY)
        payload = self._storage.get(config.CURRENT_USER_KEY)
        if not token or not payload:
            return
        try:
            identity = identity_from_json(payload)
        except (ValueError, KeyError, TypeError):
            logger.warning("stored identity is unreadable; clearing session")
            self.logout()
            return
        self._current.set(identity)
        logger.info("restored session for id=%s", identity.id)
