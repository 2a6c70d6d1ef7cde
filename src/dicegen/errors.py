"""Exception types raised by the selection engine."""

from __future__ import annotations


class DicegenError(Exception):
    """Base class for dicegen errors."""


class ConfigurationError(DicegenError, ValueError):
    """Raised when dice, options, or generators are built from invalid input."""


class ExhaustionError(DicegenError, RuntimeError):
    """Raised when a draw finds no eligible option and fallback is disabled."""


__all__ = ["ConfigurationError", "DicegenError", "ExhaustionError"]
