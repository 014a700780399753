"""Sequential id allocation standing in for server-assigned keys."""

from __future__ import annotations

from typing import Iterable


class SequentialIds:
    """Hands out ``"1"``, ``"2"``, ... continuing after the highest id seen."""

    def __init__(self, last: int = 0) -> None:
        self._last = last

    @classmethod
    def following(cls, existing: Iterable[str]) -> SequentialIds:
        numeric = [int(value) for value in existing if value.isdigit()]
        return cls(max(numeric, default=0))

    def next_id(self) -> str:
        self._last += 1
        return str(self._last)

    def peek(self) -> str:
        return str(self._last + 1)
