"""
ScorecardRegistry: in-memory snapshot of scorecard records with JSON persistence.
Path: data/scorecard_snapshot.json (see scorecard.paths / config.SNAPSHOT_FILENAME).

Records are validated and their enum spellings normalized on load. A
record that fails validation is skipped with a warning; an unreadable
file raises SnapshotError.
"""
import json
from dataclasses import fields
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar

from scorecard.config_manager import config
from scorecard.exceptions import InvalidRecordError, SnapshotError
from scorecard.logger import get_logger
from scorecard.models import (
    GoalAlignment,
    GoalItem,
    OrgUnit,
    ProgramObjective,
    ProgressUpdate,
    RagStatus,
    record_to_dict,
)
from scorecard.paths import snapshot_path
from scorecard.progress import next_version

T = TypeVar("T")

logger = get_logger("registry")

SECTIONS = {
    "org_units": OrgUnit,
    "goal_items": GoalItem,
    "goal_alignments": GoalAlignment,
    "progress_updates": ProgressUpdate,
    "program_objectives": ProgramObjective,
}


def _record_from_dict(cls: Type[T], d: Dict[str, Any]) -> T:
    if not isinstance(d, dict):
        raise InvalidRecordError(f"{cls.__name__} entry must be an object, got {type(d).__name__}")
    allowed = {f.name for f in fields(cls)}
    try:
        return cls(**{k: v for k, v in d.items() if k in allowed})
    except TypeError as exc:
        raise InvalidRecordError(f"{cls.__name__} entry is incomplete: {exc}") from exc


def default_snapshot_path() -> Path:
    return snapshot_path(config.SNAPSHOT_FILENAME)


class ScorecardRegistry:
    """In-memory registry with JSON persistence at ``path``."""

    def __init__(self, path: Optional[Path] = None):
        self._path = path if path is not None else default_snapshot_path()
        self._records: Dict[str, List[Any]] = {name: [] for name in SECTIONS}
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> None:
        if not self._path.exists():
            logger.info("No snapshot at %s, starting empty", self._path)
            return
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as exc:
            raise SnapshotError(f"Cannot read snapshot: {exc}", str(self._path)) from exc

        if not isinstance(data, dict):
            raise SnapshotError("Snapshot top level must be an object", str(self._path))

        for name, cls in SECTIONS.items():
            for index, raw in enumerate(data.get(name) or []):
                try:
                    self._records[name].append(_record_from_dict(cls, raw))
                except ValueError as exc:
                    logger.warning("Skipping %s[%d] in %s: %s", name, index, self._path.name, exc)

        logger.info(
            "Loaded snapshot %s: %s",
            self._path.name,
            ", ".join(f"{len(v)} {k}" for k, v in self._records.items()),
        )

    def save(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            name: [record_to_dict(r) for r in records]
            for name, records in self._records.items()
        }
        with open(self._path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    @property
    def org_units(self) -> List[OrgUnit]:
        return list(self._records["org_units"])

    @property
    def goal_items(self) -> List[GoalItem]:
        return list(self._records["goal_items"])

    @property
    def alignments(self) -> List[GoalAlignment]:
        return list(self._records["goal_alignments"])

    @property
    def progress_updates(self) -> List[ProgressUpdate]:
        return list(self._records["progress_updates"])

    @property
    def program_objectives(self) -> List[ProgramObjective]:
        return list(self._records["program_objectives"])

    def get_org_unit(self, unit_id: Any) -> Optional[OrgUnit]:
        return next((u for u in self._records["org_units"] if u.id == unit_id), None)

    def get_goal(self, goal_id: Any) -> Optional[GoalItem]:
        return next((g for g in self._records["goal_items"] if g.id == goal_id), None)

    def goals_by_id(self) -> Dict[Any, GoalItem]:
        return {g.id: g for g in self._records["goal_items"]}

    def versions_for(self, program_id: Any) -> List[int]:
        return [u.version for u in self._records["progress_updates"] if u.program_id == program_id]

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def add_records(
        self,
        org_units: Iterable[OrgUnit] = (),
        goal_items: Iterable[GoalItem] = (),
        goal_alignments: Iterable[GoalAlignment] = (),
        progress_updates: Iterable[ProgressUpdate] = (),
        program_objectives: Iterable[ProgramObjective] = (),
    ) -> None:
        self._records["org_units"].extend(org_units)
        self._records["goal_items"].extend(goal_items)
        self._records["goal_alignments"].extend(goal_alignments)
        self._records["progress_updates"].extend(progress_updates)
        self._records["program_objectives"].extend(program_objectives)
        self.save()

    def append_progress_update(
        self,
        program_id: Any,
        update_text: str,
        author: Optional[str] = None,
        percent_complete: Optional[float] = None,
        rag_status: Optional[Any] = None,
        metrics: Optional[Dict[str, Any]] = None,
    ) -> ProgressUpdate:
        """
        Append an update with version max(existing) + 1. Existing entries
        are never renumbered.
        """
        updates = self._records["progress_updates"]
        update = ProgressUpdate(
            id=max((u.id for u in updates), default=0) + 1,
            program_id=program_id,
            version=next_version(self.versions_for(program_id)),
            percent_complete=percent_complete,
            rag_status=rag_status or RagStatus.NOT_STARTED,
            update_text=update_text,
            author=author,
            metrics=dict(metrics or {}),
            created_at=datetime.now().isoformat(),
        )
        updates.append(update)
        self.save()
        logger.info("Program %s progress v%d recorded (%s)", program_id, update.version, update.rag_status.value)
        return update
