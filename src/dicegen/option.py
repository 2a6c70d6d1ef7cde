"""Pool entries tracked by a :class:`~dicegen.generator.Generator`."""

from __future__ import annotations

from typing import Generic, Optional, TypeVar

from .errors import ConfigurationError
from .policies import FeedbackPolicy, OptionState

T = TypeVar("T")

NEVER_SELECTED = -1


def validate_weight(weight: object) -> None:
    """Reject weights that are not non-negative integers."""

    if isinstance(weight, bool) or not isinstance(weight, int):
        raise ConfigurationError(f"option weight must be an integer, got {weight!r}")
    if weight < 0:
        raise ConfigurationError(f"option weight must be non-negative, got {weight}")


class GeneratorOption(Generic[T]):
    """A selectable payload with a self-adjusting weight and selection history."""

    def __init__(self, weight: int, payload: T, policy: Optional[FeedbackPolicy] = None) -> None:
        validate_weight(weight)
        self.payload = payload
        self.policy = policy
        self._initial_weight = weight
        self._default_weight = weight
        self._current_weight = weight
        self._previous_weight = 0
        self._last_selection_round = NEVER_SELECTED
        self._current_selection_round = NEVER_SELECTED
        self._generator_round = NEVER_SELECTED

    # ------------------------------------------------------------------
    # Weights
    # ------------------------------------------------------------------
    @property
    def initial_weight(self) -> int:
        return self._initial_weight

    @property
    def default_weight(self) -> int:
        return self._default_weight

    @default_weight.setter
    def default_weight(self, value: int) -> None:
        if value >= 0:
            self._default_weight = value

    @property
    def current_weight(self) -> int:
        """Weight consulted when the next sampling table is built. Never negative."""

        return self._current_weight

    @current_weight.setter
    def current_weight(self, value: int) -> None:
        # previous_weight only moves on an actual change
        if value < 0 or value == self._current_weight:
            return
        self._previous_weight = self._current_weight
        self._current_weight = value

    @property
    def previous_weight(self) -> int:
        return self._previous_weight

    # ------------------------------------------------------------------
    # Selection history
    # ------------------------------------------------------------------
    @property
    def last_selection_round(self) -> int:
        return self._last_selection_round

    @property
    def current_selection_round(self) -> int:
        return self._current_selection_round

    @property
    def was_selected_this_round(self) -> bool:
        return (
            self._current_selection_round != NEVER_SELECTED
            and self._generator_round == self._current_selection_round
        )

    @property
    def was_consecutively_selected(self) -> bool:
        """True when the two most recent selections happened in adjacent rounds."""

        return self._last_selection_round == self._current_selection_round - 1

    def mark_selected(self, round_index: int) -> None:
        if round_index < 0:
            return
        self._last_selection_round = self._current_selection_round
        self._current_selection_round = round_index

    def advance_round(self, round_index: int) -> None:
        """Record the generator round, then let the policy adjust the weights."""

        self._generator_round = round_index
        if self.policy is None:
            return
        updated = self.policy.apply(self.state())
        self.default_weight = updated.default_weight
        self.current_weight = updated.current_weight

    def state(self) -> OptionState:
        return OptionState(
            default_weight=self._default_weight,
            current_weight=self._current_weight,
            selected=self.was_selected_this_round,
            consecutive=self.was_consecutively_selected,
        )

    def clone(self, policy: Optional[FeedbackPolicy] = None) -> "GeneratorOption[T]":
        """Return a fresh option with the same initial weight and payload.

        The clone starts with no selection history. ``policy`` is used only
        when this option has none of its own.
        """

        own = self.policy if self.policy is not None else policy
        return GeneratorOption(self._initial_weight, self.payload, own)

    def reset(self) -> None:
        """Restore the construction-time weight and forget all selection history."""

        self._default_weight = self._initial_weight
        self._current_weight = self._initial_weight
        self._previous_weight = 0
        self._last_selection_round = NEVER_SELECTED
        self._current_selection_round = NEVER_SELECTED
        self._generator_round = NEVER_SELECTED

    def __repr__(self) -> str:
        return (
            f"GeneratorOption(payload={self.payload!r}, weight={self._current_weight}, "
            f"default={self._default_weight})"
        )


__all__ = ["GeneratorOption", "NEVER_SELECTED", "validate_weight"]
