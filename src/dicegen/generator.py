"""Adaptive weighted selection over a pool of options."""

from __future__ import annotations

import logging
from typing import Generic, Iterable, Optional, Sequence, Tuple, TypeVar, Union

from .config import GeneratorConfig
from .dice import Die
from .errors import ConfigurationError, ExhaustionError
from .option import GeneratorOption
from .policies import FeedbackPolicy
from .random_source import PythonRandomSource, RandomSource
from .telemetry import DRAW, EXHAUSTED, FALLBACK, RESET, TelemetryPublisher
from .types import DrawReceipt, WeightedEntry

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

OptionLike = Union[
    GeneratorOption[T],
    Tuple[int, T],
    Tuple[int, T, Optional[FeedbackPolicy]],
]


class Generator(Generic[T]):
    """Draws payloads from a weighted pool whose weights adapt after every round.

    Each draw builds a weighted table from the options whose current weight is
    positive and rolls it. When every weight is zero the generator either
    picks uniformly among all options for that draw only
    (``always_ensure_selection``) or raises :class:`ExhaustionError`.

    After the pick the round counter advances, the winner is marked as
    selected, and every option in the pool runs its feedback policy.
    """

    def __init__(
        self,
        options: Iterable[OptionLike],
        *,
        policy: Optional[FeedbackPolicy] = None,
        config: Optional[GeneratorConfig] = None,
        random_source: Optional[RandomSource] = None,
        telemetry: Optional[TelemetryPublisher] = None,
    ) -> None:
        self.config = config or GeneratorConfig()
        items = list(options)
        seen: set[int] = set()
        for item in items:
            if isinstance(item, GeneratorOption):
                if id(item) in seen:
                    raise ConfigurationError(f"option {item!r} appears more than once in the pool")
                seen.add(id(item))
        self._options: list[GeneratorOption[T]] = [self._coerce_option(item, policy) for item in items]
        if not self._options:
            raise ConfigurationError("Generator requires at least one option")
        self.always_ensure_selection = self.config.always_ensure_selection
        self._random = random_source or PythonRandomSource(self.config.seed)
        self._telemetry = telemetry
        self._round_index = 0
        self._last_selected_index: Optional[int] = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def options(self) -> Sequence[GeneratorOption[T]]:
        return tuple(self._options)

    @property
    def round_index(self) -> int:
        return self._round_index

    @property
    def last_selected_index(self) -> Optional[int]:
        return self._last_selected_index

    def draw(self) -> T:
        """Run one round and return the chosen payload."""

        return self.draw_receipt().payload

    def draw_receipt(self) -> DrawReceipt:
        """Run one round and describe its outcome."""

        entries = [
            WeightedEntry(value=index, weight=option.current_weight)
            for index, option in enumerate(self._options)
            if option.current_weight > 0
        ]
        fallback = False
        if not entries:
            if not self.always_ensure_selection:
                LOGGER.debug("Generator %s exhausted after round %d", self._label, self._round_index)
                self._emit_telemetry(EXHAUSTED)
                raise ExhaustionError("No option has a positive weight and fallback is disabled")
            LOGGER.debug("All weights are zero, drawing uniformly over %d options", len(self._options))
            fallback = True
            entries = [WeightedEntry(value=index, weight=1) for index in range(len(self._options))]

        index = Die.weighted(entries, random_source=self._random).roll()

        self._round_index += 1
        chosen = self._options[index]
        chosen.mark_selected(self._round_index)
        for option in self._options:
            option.advance_round(self._round_index)
        self._last_selected_index = index

        receipt = DrawReceipt(
            round_index=self._round_index,
            index=index,
            payload=chosen.payload,
            fallback=fallback,
        )
        if fallback:
            self._emit_telemetry(FALLBACK, payload={"index": index})
        self._emit_telemetry(DRAW, payload={"index": index, "fallback": fallback})
        return receipt

    def draw_many(self, count: int, clear_last_selected: bool = False) -> list[T]:
        """Run ``count`` rounds and return the payloads in draw order."""

        if count < 0:
            raise ConfigurationError("count must be non-negative")
        results = [self.draw() for _ in range(count)]
        if clear_last_selected:
            self.clear_last_selected()
        return results

    def clear_last_selected(self) -> None:
        self._last_selected_index = None

    def reset(self) -> None:
        """Restore every option's initial weight and clear all history."""

        self._last_selected_index = None
        self._round_index = 0
        for option in self._options:
            option.reset()
        self._emit_telemetry(RESET)

    def attach_telemetry(self, telemetry: Optional[TelemetryPublisher]) -> None:
        self._telemetry = telemetry

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _coerce_option(item: OptionLike, shared_policy: Optional[FeedbackPolicy]) -> GeneratorOption[T]:
        # caller-owned options are cloned so the pool never shares state
        if isinstance(item, GeneratorOption):
            return item.clone(shared_policy)
        if len(item) == 2:
            weight, payload = item
            policy = None
        elif len(item) == 3:
            weight, payload, policy = item
        else:
            raise ConfigurationError(
                f"options must be (weight, payload) or (weight, payload, policy), got {item!r}"
            )
        return GeneratorOption(weight, payload, policy if policy is not None else shared_policy)

    @property
    def _label(self) -> str:
        return self.config.name or hex(id(self))

    def _emit_telemetry(self, event: str, *, payload: Optional[dict[str, object]] = None) -> None:
        if self._telemetry is None:
            return
        self._telemetry.publish(
            event,
            generator=self.config.name,
            round_index=self._round_index,
            payload=payload,
        )

    def __len__(self) -> int:
        return len(self._options)


__all__ = ["Generator"]
