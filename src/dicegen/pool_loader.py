"""Build generators from JSON or YAML pool definitions."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping, Optional

try:
    import yaml
except ImportError:  # pragma: no cover - optional dependency
    yaml = None

from .config import PolicyConfig, PoolConfig
from .generator import Generator
from .option import GeneratorOption
from .policies import FeedbackPolicy, build_policy
from .random_source import RandomSource
from .telemetry import TelemetryPublisher


def build_generator(
    pool: PoolConfig | Mapping[str, Any],
    *,
    random_source: Optional[RandomSource] = None,
    telemetry: Optional[TelemetryPublisher] = None,
) -> Generator[Any]:
    """Create a generator from a :class:`PoolConfig` or its dict form."""

    if not isinstance(pool, PoolConfig):
        pool = PoolConfig.model_validate(pool)
    shared = _policy(pool.default_policy)
    options = [
        GeneratorOption(item.weight, item.payload, _policy(item.policy) if item.policy else shared)
        for item in pool.options
    ]
    return Generator(
        options,
        config=pool.generator,
        random_source=random_source,
        telemetry=telemetry,
    )


def load_generator(
    path: str | Path,
    *,
    random_source: Optional[RandomSource] = None,
    telemetry: Optional[TelemetryPublisher] = None,
) -> Generator[Any]:
    """Load a pool definition from a JSON or YAML file and build its generator."""

    data = _read_file(path)
    return build_generator(PoolConfig.model_validate(data), random_source=random_source, telemetry=telemetry)


def _policy(config: Optional[PolicyConfig]) -> Optional[FeedbackPolicy]:
    if config is None:
        return None
    return build_policy(config.kind, config.drop_value)


def _read_file(path: str | Path) -> dict:
    payload = Path(path).read_text(encoding="utf-8")
    suffix = Path(path).suffix.lower()
    if suffix in {".yaml", ".yml"}:
        if yaml is None:
            raise RuntimeError("PyYAML is required for YAML pool files")
        return yaml.safe_load(payload) or {}
    return json.loads(payload)


__all__ = ["build_generator", "load_generator"]
