"""
Clustering thresholds and their environment overrides.

Env (read once at startup, usually from .env):
- CLUSTER_PROFILE: "strict" (0.5 similarity, 1000 m, 24 h; default) or "loose" (0.4, 1000 m, 48 h).
- CLUSTER_MIN_SIMILARITY / CLUSTER_MAX_DISTANCE_M / CLUSTER_MAX_HOURS: override one value of the profile.
- CLUSTER_PLACEHOLDER: "1"/"true" to return the example cluster when nothing clusters.
"""

import logging
import math
import os
from dataclasses import asdict, dataclass

logger = logging.getLogger("civic_api.config")


class ConfigError(ValueError):
    """Invalid clustering configuration."""


@dataclass(frozen=True)
class ClusterThresholds:
    min_similarity: float = 0.5  # description overlap must be strictly greater
    max_distance_m: float = 1000.0  # distance must be strictly smaller
    max_hours: float = 24.0  # creation time gap must be strictly smaller

    def __post_init__(self):
        for name in ("min_similarity", "max_distance_m", "max_hours"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or math.isnan(value):
                raise ConfigError(f"{name} must be a number, got {value!r}")
        if not 0.0 <= self.min_similarity <= 1.0:
            raise ConfigError(f"min_similarity must be in [0, 1], got {self.min_similarity}")
        if self.max_distance_m < 0:
            raise ConfigError(f"max_distance_m must be >= 0, got {self.max_distance_m}")
        if self.max_hours < 0:
            raise ConfigError(f"max_hours must be >= 0, got {self.max_hours}")

    def to_dict(self):
        return asdict(self)


STRICT = ClusterThresholds(min_similarity=0.5, max_distance_m=1000.0, max_hours=24.0)
LOOSE = ClusterThresholds(min_similarity=0.4, max_distance_m=1000.0, max_hours=48.0)

PROFILES = {"strict": STRICT, "loose": LOOSE}
DEFAULT_PROFILE = "strict"
DEFAULT_THRESHOLDS = STRICT


def _env_float(env, key: str) -> float | None:
    v = env.get(key)
    if v is None or v.strip() == "":
        return None
    try:
        return float(v.strip())
    except ValueError:
        raise ConfigError(f"{key} must be a number, got {v!r}") from None


def _env_flag(env, key: str, default: bool = False) -> bool:
    v = env.get(key)
    if v is None or v.strip() == "":
        return default
    return v.strip().lower() in ("1", "true", "yes", "on")


def get_profile(name: str | None) -> ClusterThresholds:
    key = (name or DEFAULT_PROFILE).strip().lower()
    if key not in PROFILES:
        raise ConfigError(f"unknown cluster profile {name!r} (expected one of {sorted(PROFILES)})")
    return PROFILES[key]


def load_thresholds(env=None) -> ClusterThresholds:
    """Profile from CLUSTER_PROFILE, with per-value CLUSTER_* overrides. Raises ConfigError on bad values."""
    env = os.environ if env is None else env
    base = get_profile(env.get("CLUSTER_PROFILE"))
    overrides = {
        "min_similarity": _env_float(env, "CLUSTER_MIN_SIMILARITY"),
        "max_distance_m": _env_float(env, "CLUSTER_MAX_DISTANCE_M"),
        "max_hours": _env_float(env, "CLUSTER_MAX_HOURS"),
    }
    values = base.to_dict()
    values.update({k: v for k, v in overrides.items() if v is not None})
    thresholds = ClusterThresholds(**values)
    logger.info("cluster thresholds %s", thresholds.to_dict())
    return thresholds


def placeholder_enabled(env=None) -> bool:
    env = os.environ if env is None else env
    return _env_flag(env, "CLUSTER_PLACEHOLDER")
