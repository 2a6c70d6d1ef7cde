"""Helpers for picking list items with an injected random source."""

from __future__ import annotations

from typing import MutableSequence, Optional, Sequence, TypeVar

from .random_source import PythonRandomSource, RandomSource

T = TypeVar("T")


def _source(random_source: Optional[RandomSource]) -> RandomSource:
    return random_source or PythonRandomSource()


def pick_index(items: Sequence[object], *, random_source: Optional[RandomSource] = None) -> int:
    """Return a uniformly chosen index of ``items``."""

    if not items:
        raise ValueError("items must be non-empty")
    return _source(random_source).next_int(len(items) - 1)


def pick(items: Sequence[T], *, random_source: Optional[RandomSource] = None) -> T:
    """Return a uniformly chosen element of ``items``."""

    return items[pick_index(items, random_source=random_source)]


def pop_random(items: MutableSequence[T], *, random_source: Optional[RandomSource] = None) -> T:
    """Remove and return a uniformly chosen element of ``items``."""

    return items.pop(pick_index(items, random_source=random_source))


def random_selection(
    items: Sequence[T],
    length: int,
    *,
    random_source: Optional[RandomSource] = None,
) -> list[T]:
    """Pick ``length`` elements independently, repeats allowed."""

    if length < 0:
        raise ValueError("length must be non-negative")
    source = _source(random_source)
    return [pick(items, random_source=source) for _ in range(length)]


def random_unique_selection(
    items: Sequence[T],
    length: int,
    *,
    random_source: Optional[RandomSource] = None,
) -> list[T]:
    """Deal ``length`` elements from a shuffled deck of ``items``.

    Every element is dealt once before any element repeats; the deck is
    refilled from ``items`` whenever it runs out.
    """

    if not items:
        raise ValueError("items must be non-empty")
    if length < 0:
        raise ValueError("length must be non-negative")
    source = _source(random_source)
    deck: list[T] = []
    result: list[T] = []
    for _ in range(length):
        if not deck:
            deck = list(items)
        result.append(pop_random(deck, random_source=source))
    return result


__all__ = [
    "pick",
    "pick_index",
    "pop_random",
    "random_selection",
    "random_unique_selection",
]
