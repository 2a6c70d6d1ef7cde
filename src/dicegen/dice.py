"""Single-shot dice and summed dice sets."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence, Tuple, Union

from .errors import ConfigurationError
from .random_source import PythonRandomSource, RandomSource
from .types import DiceType, WeightedEntry
from .utils import pick

EntryLike = Union[WeightedEntry, Tuple[int, int]]


class Die:
    """Produces integers under one of four sampling policies.

    Build dice with the :meth:`range`, :meth:`selection`, :meth:`constant` and
    :meth:`weighted` constructors rather than calling ``Die`` directly.
    """

    def __init__(
        self,
        dice_type: DiceType,
        *,
        low: int = 0,
        high: int = 1,
        values: Sequence[int] = (),
        constant: int = 0,
        entries: Sequence[WeightedEntry] = (),
        random_source: Optional[RandomSource] = None,
    ) -> None:
        self._type = dice_type
        self._low = low
        self._high = high
        self._values = tuple(values)
        self._constant = constant
        self._entries = tuple(entries)
        self._random = random_source or PythonRandomSource()
        self._result: Optional[int] = None

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------
    @classmethod
    def range(cls, low: int, high: int, *, random_source: Optional[RandomSource] = None) -> "Die":
        """Roll an integer in ``[low, high]``."""

        if low > high:
            raise ConfigurationError(f"invalid range: low ({low}) is greater than high ({high})")
        return cls(DiceType.RANGE, low=low, high=high, random_source=random_source)

    @classmethod
    def selection(cls, values: Iterable[int], *, random_source: Optional[RandomSource] = None) -> "Die":
        """Roll one of ``values``, each equally likely."""

        values = tuple(values)
        if not values:
            raise ConfigurationError("selection dice require at least one value")
        return cls(DiceType.SELECTION, values=values, random_source=random_source)

    @classmethod
    def constant(cls, value: int, *, random_source: Optional[RandomSource] = None) -> "Die":
        """Always roll ``value``."""

        return cls(DiceType.CONSTANT, constant=value, random_source=random_source)

    @classmethod
    def weighted(cls, entries: Iterable[EntryLike], *, random_source: Optional[RandomSource] = None) -> "Die":
        """Roll a value from ``(value, weight)`` pairs, proportionally to weight.

        Entry order is part of the contract: the first entry whose cumulative
        weight reaches the draw wins.
        """

        normalized = [_to_entry(entry) for entry in entries]
        if not normalized:
            raise ConfigurationError("weighted dice require at least one entry")
        return cls(DiceType.PROBABILITY, entries=normalized, random_source=random_source)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def type(self) -> DiceType:
        return self._type

    @property
    def last_result(self) -> Optional[int]:
        """The cached result of the last roll, or ``None`` if never rolled."""

        return self._result

    @property
    def entries(self) -> tuple[WeightedEntry, ...]:
        return self._entries

    def roll(self) -> int:
        if self._type is DiceType.RANGE:
            result = self._random.next_int(self._high - self._low) + self._low
        elif self._type is DiceType.SELECTION:
            result = pick(self._values, random_source=self._random)
        elif self._type is DiceType.CONSTANT:
            result = self._constant
        else:
            result = self._roll_weighted()
        self._result = result
        return result

    def reset(self) -> None:
        """Forget the last result."""

        self._result = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _roll_weighted(self) -> int:
        cumulative: list[int] = []
        total = 0
        for entry in self._entries:
            total += entry.weight
            cumulative.append(total)

        # nothing to choose between, no randomness consumed
        if total == 0 or len(self._entries) == 1:
            return self._entries[0].value

        threshold = self._random.next_int(total - 1) + 1
        for entry, bound in zip(self._entries, cumulative):
            if bound >= threshold:
                return entry.value
        return self._entries[-1].value

    def __repr__(self) -> str:
        return f"Die(type={self._type.value!r}, last_result={self._result!r})"


class DiceSet:
    """A named group of dice rolled together and summed."""

    def __init__(self, name: str, dice: Sequence[Die], *, description: str = "", cursed: bool = False) -> None:
        if not dice:
            raise ConfigurationError("a dice set requires at least one die")
        self.name = name
        self.description = description
        self.cursed = cursed
        self._dice = list(dice)
        self._result: Optional[int] = None

    @property
    def dice(self) -> list[Die]:
        return list(self._dice)

    @property
    def result(self) -> Optional[int]:
        return self._result

    def roll(self) -> int:
        """Roll every die and return the total. Cursed sets always roll 0."""

        if self.cursed:
            self._result = 0
            return 0
        self._result = sum(die.roll() for die in self._dice)
        return self._result

    def reset(self) -> None:
        for die in self._dice:
            die.reset()
        self._result = None


def _to_entry(entry: EntryLike) -> WeightedEntry:
    if isinstance(entry, WeightedEntry):
        return entry
    value, weight = entry
    if isinstance(weight, bool) or not isinstance(weight, int):
        raise ConfigurationError(f"weight for value {value} must be an integer, got {weight!r}")
    if weight < 0:
        raise ConfigurationError(f"weight for value {value} must be non-negative, got {weight}")
    return WeightedEntry(value=value, weight=weight)


__all__ = ["DiceSet", "Die"]
