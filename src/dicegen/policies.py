"""Feedback ("bump") policies that adjust option weights between rounds.

A policy never touches an option directly. It receives an immutable
:class:`OptionState` snapshot and returns the weights the option should carry
into the next round; the option then writes them back through its own
validating setters, so a policy can never drive a weight below zero.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Protocol

from .errors import ConfigurationError
from .types import PolicyKind


@dataclass(frozen=True)
class OptionState:
    """Weights and selection flags of an option at the end of a round."""

    default_weight: int
    current_weight: int
    selected: bool = False
    consecutive: bool = False


class FeedbackPolicy(Protocol):
    """Computes the next weights of an option from its current state."""

    def apply(self, state: OptionState) -> OptionState:  # pragma: no cover - protocol definition
        ...


@dataclass(frozen=True)
class DecayOnPick:
    """Permanently lowers both weights by one every time the option wins."""

    def apply(self, state: OptionState) -> OptionState:
        if not state.selected:
            return state
        return replace(
            state,
            default_weight=state.default_weight - 1,
            current_weight=state.current_weight - 1,
        )


@dataclass(frozen=True)
class TemporaryDrop:
    """Drops the weight to ``drop_value`` for one round after each win."""

    drop_value: int = 0

    def apply(self, state: OptionState) -> OptionState:
        if state.selected:
            return replace(state, current_weight=self.drop_value)
        return replace(state, current_weight=state.default_weight)


@dataclass(frozen=True)
class TemporaryDoubleDrop:
    """Drops the weight to ``drop_value`` only after two wins in a row."""

    drop_value: int = 0

    def apply(self, state: OptionState) -> OptionState:
        if state.selected and state.consecutive:
            return replace(state, current_weight=self.drop_value)
        return replace(state, current_weight=state.default_weight)


@dataclass(frozen=True)
class DecayWithDoubleDrop:
    """Combines :class:`DecayOnPick` with :class:`TemporaryDoubleDrop`."""

    drop_value: int = 0

    def apply(self, state: OptionState) -> OptionState:
        if not state.selected:
            return replace(state, current_weight=state.default_weight)
        # weights floor at zero
        decayed = max(state.default_weight - 1, 0)
        if state.consecutive:
            return replace(state, default_weight=decayed, current_weight=self.drop_value)
        return replace(state, default_weight=decayed, current_weight=decayed)


def build_policy(kind: PolicyKind | str, drop_value: int = 0) -> Optional[FeedbackPolicy]:
    """Create a built-in policy from its :class:`PolicyKind`.

    ``PolicyKind.STATIC`` returns ``None``: the option keeps its weight.
    """

    try:
        kind = PolicyKind(kind)
    except ValueError as exc:
        raise ConfigurationError(f"Unknown policy: {kind!r}") from exc
    if drop_value < 0:
        raise ConfigurationError("drop_value must be non-negative")
    if kind is PolicyKind.STATIC:
        return None
    if kind is PolicyKind.DECAY_ON_PICK:
        return DecayOnPick()
    if kind is PolicyKind.TEMPORARY_DROP:
        return TemporaryDrop(drop_value)
    if kind is PolicyKind.TEMPORARY_DOUBLE_DROP:
        return TemporaryDoubleDrop(drop_value)
    if kind is PolicyKind.DECAY_WITH_DOUBLE_DROP:
        return DecayWithDoubleDrop(drop_value)
    raise NotImplementedError(f"Unsupported policy: {kind}")


__all__ = [
    "DecayOnPick",
    "DecayWithDoubleDrop",
    "FeedbackPolicy",
    "OptionState",
    "TemporaryDoubleDrop",
    "TemporaryDrop",
    "build_policy",
]
