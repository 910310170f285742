"""Engine weights, thresholds and env configuration."""
from __future__ import annotations

import math
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from jobmatch.log import get_logger

log = get_logger(__name__)

load_dotenv()

CONFIG_DIR: Path = Path(__file__).resolve().parent.parent / "config"
ENGINE_CONFIG_PATH: Path = CONFIG_DIR / "engine.yaml"


class ConfigError(ValueError):
    """Raised when engine configuration is invalid."""


@dataclass(frozen=True)
class Weights:
    skills: float = 0.40
    experience: float = 0.25
    location: float = 0.15
    salary: float = 0.10
    preferences: float = 0.10

    def as_dict(self) -> dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def total(self) -> float:
        return math.fsum(self.as_dict().values())


@dataclass(frozen=True)
class EngineConfig:
    weights: Weights = field(default_factory=Weights)
    # Jaccard thresholds for fuzzy skill and job-title matching.
    skill_similarity: float = 0.7
    title_similarity: float = 0.5
    recent_days: int = 7
    feed_tolerance: int = 5
    min_score: int = 60

    def validate(self) -> EngineConfig:
        for name, value in self.weights.as_dict().items():
            if value < 0:
                raise ConfigError(f"weight {name!r} must be non-negative, got {value}")
        total = self.weights.total()
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ConfigError(f"weights must sum to 1.0, got {total}")
        for name in ("skill_similarity", "title_similarity"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigError(f"{name} must be within [0, 1], got {value}")
        if self.recent_days < 0 or self.feed_tolerance < 0:
            raise ConfigError("recent_days and feed_tolerance must be non-negative")
        if not 0 <= self.min_score <= 100:
            raise ConfigError(f"min_score must be within [0, 100], got {self.min_score}")
        return self


DEFAULT_CONFIG = EngineConfig()


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def _config_path(path: str | Path | None) -> Path:
    if path is not None:
        return Path(path)
    override = get_env("JOBMATCH_CONFIG")
    return Path(override) if override else ENGINE_CONFIG_PATH


def config_from_dict(data: dict[str, Any]) -> EngineConfig:
    """Overlay a (possibly partial) mapping on the defaults and validate it."""
    data = dict(data or {})
    unknown = set(data) - {f.name for f in fields(EngineConfig)}
    if unknown:
        raise ConfigError(f"unknown config keys: {', '.join(sorted(unknown))}")

    weights_data = data.pop("weights", None) or {}
    unknown_weights = set(weights_data) - set(Weights().as_dict())
    if unknown_weights:
        raise ConfigError(f"unknown weight keys: {', '.join(sorted(unknown_weights))}")

    try:
        weights = replace(Weights(), **{k: float(v) for k, v in weights_data.items()})
        overrides = {
            k: (float(v) if k.endswith("_similarity") else int(v))
            for k, v in data.items()
        }
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"invalid config value: {exc}") from exc

    return replace(DEFAULT_CONFIG, weights=weights, **overrides).validate()


def load_engine_config(path: str | Path | None = None) -> EngineConfig:
    """Load engine config from YAML; a missing file yields the defaults."""
    cfg_path = _config_path(path)
    if not cfg_path.exists():
        log.debug("No engine config at %s, using defaults", cfg_path)
        return DEFAULT_CONFIG

    with open(cfg_path, "r") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f"cannot parse {cfg_path}: {exc}") from exc

    if data is None:
        return DEFAULT_CONFIG
    if not isinstance(data, dict):
        raise ConfigError(f"{cfg_path} must contain a mapping")

    config = config_from_dict(data)
    log.info("Loaded engine config from %s", cfg_path)
    return config
