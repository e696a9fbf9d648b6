"""
Configuration Manager for the strategy scorecard.

Central place for the engine's tunable constants.
Every empirical value is declared explicitly and can be overridden.

Usage:
    from scorecard.config_manager import config
    hops = config.ANCESTOR_WALK_MAX_HOPS
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from scorecard.exceptions import ConfigError
from scorecard.paths import CONFIG_DIR

RUNTIME_CONFIG_PATH = CONFIG_DIR / "runtime.yaml"

logger = logging.getLogger("scorecard.config")


@dataclass
class SystemConfig:
    """
    Runtime constants.

    Values are defaults; config/runtime.yaml may override any of them.
    """

    # === Hierarchy ===

    # Upper bound on parent hops when walking from a goal to its Pillar.
    # The goal hierarchy is at most 4 levels deep; 10 leaves room for
    # malformed data while still terminating on a parent_id cycle.
    ANCESTOR_WALK_MAX_HOPS: int = 10

    # Org unit used as the dashboard root. Falls back to the first root
    # of the org forest when no unit carries this name.
    ENTERPRISE_ROOT_NAME: str = "Vantage Biopharma"

    # === Presentation ===

    # Label for alignment endpoints whose goal is not in the snapshot.
    MISSING_GOAL_LABEL: str = "Goal #{id}"

    # Year used by the program scorecard when the caller gives none.
    DEFAULT_SCORECARD_YEAR: int = 2026

    # === Storage ===

    SNAPSHOT_FILENAME: str = "scorecard_snapshot.json"


def _load_runtime_config(path: Optional[Path] = None) -> dict:
    """Load runtime overrides, if present."""
    path = path or RUNTIME_CONFIG_PATH
    if not path.exists():
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (yaml.YAMLError, OSError) as exc:
        logger.warning("Ignoring unreadable runtime config %s: %s", path, exc)
        return {}

    if not isinstance(data, dict):
        logger.warning("Ignoring runtime config %s: top level is not a mapping", path)
        return {}
    return data


def get_config(path: Optional[Path] = None) -> SystemConfig:
    """
    Build a config instance.

    Priority: runtime.yaml > defaults

    Raises:
        ConfigError: an override has the wrong type for its key
    """
    base = SystemConfig()
    overrides = _load_runtime_config(path)

    for key, value in overrides.items():
        if not hasattr(base, key):
            logger.debug("Unknown config key %s ignored", key)
            continue
        expected = type(getattr(base, key))
        if isinstance(value, bool) or not isinstance(value, expected):
            raise ConfigError(
                f"{key} must be of type {expected.__name__}, got {value!r}",
                config_path=str(path or RUNTIME_CONFIG_PATH),
            )
        setattr(base, key, value)

    return base


# Process-wide instance
config = get_config()
