"""
Where the scorecard keeps its files on disk.

data/    snapshot JSON (relocatable with SCORECARD_DATA_DIR)
logs/    rotating log files
config/  optional runtime.yaml overrides
"""
import os
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
LOGS_DIR = PROJECT_ROOT / "logs"
CONFIG_DIR = PROJECT_ROOT / "config"


def data_dir() -> Path:
    """SCORECARD_DATA_DIR when set, else <project_root>/data. Read on every call."""
    override = os.getenv("SCORECARD_DATA_DIR", "").strip()
    return Path(override).expanduser() if override else PROJECT_ROOT / "data"


def snapshot_path(filename: str) -> Path:
    return data_dir() / filename
