"""Common data types used across the dicegen package."""

from __future__ import annotations

import time
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class DiceType(str, Enum):
    """Sampling policy used by a :class:`~dicegen.dice.Die`."""

    RANGE = "range"
    SELECTION = "selection"
    CONSTANT = "constant"
    PROBABILITY = "probability"


class PolicyKind(str, Enum):
    """Built-in feedback policies that adjust option weights after each round."""

    STATIC = "static"
    DECAY_ON_PICK = "decay_on_pick"
    TEMPORARY_DROP = "temporary_drop"
    TEMPORARY_DOUBLE_DROP = "temporary_double_drop"
    DECAY_WITH_DOUBLE_DROP = "decay_with_double_drop"


class WeightedEntry(BaseModel):
    """A single value/weight row of a weighted table."""

    value: int
    weight: int = Field(default=1, ge=0)


class DrawReceipt(BaseModel):
    """Outcome of a single generator round."""

    round_index: int = Field(..., ge=1)
    index: int = Field(..., ge=0, description="Position of the chosen option in the pool.")
    payload: Any = None
    fallback: bool = Field(
        default=False,
        description="True when every weight was zero and a uniform pick was made instead.",
    )


class TelemetryEvent(BaseModel):
    """Structured event emitted by generators."""

    event: str
    payload: dict[str, object] = Field(default_factory=dict)
    generator: Optional[str] = None
    round_index: Optional[int] = None
    timestamp: float = Field(default_factory=time.time)


__all__ = [
    "DiceType",
    "DrawReceipt",
    "PolicyKind",
    "TelemetryEvent",
    "WeightedEntry",
]
