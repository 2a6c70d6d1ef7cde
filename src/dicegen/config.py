"""Configuration models for generators and weighted pools."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from .types import PolicyKind


class TelemetryConfig(BaseModel):
    """Controls emission of generator telemetry events."""

    enabled: bool = True
    events: Optional[set[str]] = Field(
        default=None,
        description="Event names forwarded to sinks; None forwards every event.",
    )


class GeneratorConfig(BaseModel):
    """Behavior of a single generator instance."""

    always_ensure_selection: bool = Field(
        default=True,
        description="Fall back to a uniform pick over every option when all weights are zero.",
    )
    seed: Optional[int] = Field(
        default=None,
        description="Seed for the generator's own random source when none is injected.",
    )
    name: Optional[str] = Field(
        default=None,
        description="Label attached to telemetry events.",
    )


class PolicyConfig(BaseModel):
    """Declarative form of a feedback policy."""

    kind: PolicyKind = PolicyKind.STATIC
    drop_value: int = Field(
        default=0,
        ge=0,
        description="Weight applied by the drop policies after a (repeated) selection.",
    )


class OptionConfig(BaseModel):
    """One weighted entry of a pool definition."""

    weight: int = Field(..., ge=0)
    payload: Any = None
    policy: Optional[PolicyConfig] = None


class PoolConfig(BaseModel):
    """A complete generator definition: options, shared policy, and behavior."""

    options: list[OptionConfig]
    default_policy: Optional[PolicyConfig] = Field(
        default=None,
        description="Policy applied to every option that does not declare its own.",
    )
    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)

    @field_validator("options")
    @classmethod
    def _require_options(cls, value: list[OptionConfig]) -> list[OptionConfig]:
        if not value:
            raise ValueError("a pool requires at least one option")
        return value


__all__ = [
    "GeneratorConfig",
    "OptionConfig",
    "PolicyConfig",
    "PoolConfig",
    "TelemetryConfig",
]
