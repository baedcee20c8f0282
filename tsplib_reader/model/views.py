"""Restartable lazy sequences over an immutable problem."""

from __future__ import annotations

from typing import Callable, Generic, Iterator, TypeVar

T = TypeVar("T")


class LazySequence(Generic[T]):
    """Finite iterable that rebuilds its generator on every traversal.

    Nothing is materialised up front; independent iterations never share
    state, so one problem can be traversed from several threads.
    """

    def __init__(self, factory: Callable[[], Iterator[T]], length: int):
        self._factory = factory
        self._length = length

    def __iter__(self) -> Iterator[T]:
        return self._factory()

    def __len__(self) -> int:
        return self._length

    def __repr__(self):
        return f"LazySequence(len={self._length})"


__all__ = ["LazySequence"]
