"""Push-based value holders shared between stores and their consumers."""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")

Unsubscribe = Callable[[], None]


class ReadOnlyObservable(Generic[T]):
    """The consumer-facing half of an observable: read and subscribe, never set."""

    def get_snapshot(self) -> T:
        raise NotImplementedError

    def subscribe(self, callback: Callable[[T], None]) -> Unsubscribe:
        raise NotImplementedError

    def map(self, fn: Callable[[T], U]) -> ReadOnlyObservable[U]:
        """Return a live projection of this observable through ``fn``."""
        return _Projection(self, fn)


class Observable(ReadOnlyObservable[T]):
    """
    A value holder that pushes every new value to its subscribers.

    ``subscribe`` delivers the current value immediately, then each ``set``
    notifies current subscribers synchronously in subscription order. Values
    are never batched or debounced here; that belongs to the UI layer.
    """

    def __init__(self, value: T) -> None:
        self._value = value
        self._subscribers: list[Callable[[T], None]] = []

    def get_snapshot(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        self._value = value
        # A callback may unsubscribe itself or others mid-notification.
        for callback in list(self._subscribers):
            if callback in self._subscribers:
                callback(value)

    def subscribe(self, callback: Callable[[T], None]) -> Unsubscribe:
        self._subscribers.append(callback)
        callback(self._value)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def read_only(self) -> ReadOnlyObservable[T]:
        return self.map(lambda value: value)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)


class _Projection(ReadOnlyObservable[U]):
    def __init__(self, source: ReadOnlyObservable[T], fn: Callable[[T], U]) -> None:
        self._source = source
        self._fn = fn

    def get_snapshot(self) -> U:
        return self._fn(self._source.get_snapshot())

    def subscribe(self, callback: Callable[[U], None]) -> Unsubscribe:
        return self._source.subscribe(lambda value: callback(self._fn(value)))
