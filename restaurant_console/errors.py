"""Errors raised by the console core."""

from __future__ import annotations


class ConsoleError(Exception):
    """Base class for rejected store operations."""


class NotFound(ConsoleError):
    """A lookup by id or email matched nothing."""


class InvalidCredentials(ConsoleError):
    """The password check failed."""


class AlreadyExists(ConsoleError):
    """An identity with the same email is already registered."""


class ValidationFailure(ConsoleError):
    """Caller-supplied data breaks a store-level invariant."""
