"""Public package interface for dicegen."""

from .config import GeneratorConfig, OptionConfig, PolicyConfig, PoolConfig, TelemetryConfig
from .dice import DiceSet, Die
from .errors import ConfigurationError, DicegenError, ExhaustionError
from .generator import Generator
from .option import GeneratorOption
from .policies import (
    DecayOnPick,
    DecayWithDoubleDrop,
    FeedbackPolicy,
    OptionState,
    TemporaryDoubleDrop,
    TemporaryDrop,
    build_policy,
)
from .pool_loader import build_generator, load_generator
from .random_source import PythonRandomSource, RandomSource
from .telemetry import InMemoryTelemetrySink, LoggingTelemetrySink, TelemetryPublisher
from .types import DiceType, DrawReceipt, PolicyKind, TelemetryEvent, WeightedEntry
from .utils import pick, pick_index, pop_random, random_selection, random_unique_selection

__all__ = [
    "ConfigurationError",
    "DecayOnPick",
    "DecayWithDoubleDrop",
    "DiceSet",
    "DiceType",
    "DicegenError",
    "Die",
    "DrawReceipt",
    "ExhaustionError",
    "FeedbackPolicy",
    "Generator",
    "GeneratorConfig",
    "GeneratorOption",
    "InMemoryTelemetrySink",
    "LoggingTelemetrySink",
    "OptionConfig",
    "OptionState",
    "PolicyConfig",
    "PolicyKind",
    "PoolConfig",
    "PythonRandomSource",
    "RandomSource",
    "TelemetryConfig",
    "TelemetryEvent",
    "TelemetryPublisher",
    "TemporaryDoubleDrop",
    "TemporaryDrop",
    "WeightedEntry",
    "build_generator",
    "build_policy",
    "load_generator",
    "pick",
    "pick_index",
    "pop_random",
    "random_selection",
    "random_unique_selection",
]
