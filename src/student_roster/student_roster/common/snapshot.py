from __future__ import annotations

import itertools
from typing import Generic, Sequence, Tuple, TypeVar

T = TypeVar("T")


class Snapshot(Generic[T]):
    """Holds the last complete result of a fetch.

    Every fetch takes a generation number from :meth:`begin`; its result is
    applied only if no newer fetch has started since. The held tuple is
    replaced as a whole, so readers see either the old or the new snapshot.
    """

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._generation = 0
        self._items: Tuple[T, ...] = ()

    @property
    def items(self) -> Tuple[T, ...]:
        return self._items

    @property
    def generation(self) -> int:
        return self._generation

    def begin(self) -> int:
        self._generation = next(self._counter)
        return self._generation

    def apply(self, generation: int, items: Sequence[T]) -> bool:
        if generation != self._generation:
            return False
        self._items = tuple(items)
        return True
