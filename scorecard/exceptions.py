"""
Scorecard exception hierarchy.

- ScorecardError: base for every known failure
- ConfigError: configuration problems
- SnapshotError: snapshot file unreadable or corrupt
- InvalidRecordError: a record or input value fails validation at ingestion
- NotFoundError: a specifically requested entity does not exist

The hierarchy engine itself never raises these; it degrades to empty
results instead. They belong to the registry and service layers.
"""
from typing import Any, Optional


class ScorecardError(Exception):
    """Base class for known scorecard errors."""

    def __init__(self, message: str, hint: Optional[str] = None):
        """
        Args:
            message: what went wrong
            hint: what the operator can do about it
        """
        super().__init__(message)
        self.message = message
        self.hint = hint

    def get_user_message(self) -> str:
        """Return an operator-facing message."""
        if self.hint:
            return f"{self.message}\nHint: {self.hint}"
        return self.message


class ConfigError(ScorecardError):
    """Configuration file missing, malformed or invalid."""

    def __init__(self, message: str, config_path: Optional[str] = None):
        hint = f"Check the config file: {config_path}" if config_path else "Check the config file format"
        super().__init__(message, hint)
        self.config_path = config_path


class SnapshotError(ScorecardError):
    """Snapshot data could not be loaded."""

    def __init__(self, message: str, snapshot_path: Optional[str] = None):
        hint = f"Inspect or regenerate {snapshot_path}" if snapshot_path else None
        super().__init__(message, hint)
        self.snapshot_path = snapshot_path


class InvalidRecordError(ScorecardError, ValueError):
    """A value failed validation at the ingestion boundary."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class NotFoundError(ScorecardError):
    """A requested org unit, goal or program does not exist."""

    def __init__(self, entity: str, entity_id: Any):
        super().__init__(f"{entity} with id {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id
