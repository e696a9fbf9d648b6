"""
Program progress log helpers.

- next_version: version for the next appended update
- latest_updates_by_program / program_history: read views of the log
- ProgressMetrics / DecisionEvent: schema for the metrics payload
- build_context_timeline: progress updates and embedded decisions in one
  chronological stream
"""
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from scorecard.logger import get_logger
from scorecard.models import ProgressUpdate

logger = get_logger("progress")


class DecisionEvent(BaseModel):
    """A decision recorded inside an update's metrics."""
    model_config = ConfigDict(extra="allow")

    title: Optional[str] = None
    timestamp: Optional[str] = None
    rationale: Optional[str] = None
    impact: Optional[str] = None
    decided_by: Optional[str] = None


class ProgressMetrics(BaseModel):
    """
    Metrics payload of a progress update.

    ``decisions`` is the only interpreted key; everything else is kept
    as-is (e.g. counters such as ``riddles_created``).
    """
    model_config = ConfigDict(extra="allow")

    decisions: List[DecisionEvent] = Field(default_factory=list)


def parse_metrics(raw: Optional[Mapping[str, Any]]) -> ProgressMetrics:
    """Validate a metrics payload, dropping malformed decision entries."""
    if not raw:
        return ProgressMetrics()
    if not isinstance(raw, Mapping):
        logger.warning("Ignoring non-mapping metrics payload of type %s", type(raw).__name__)
        return ProgressMetrics()

    data = dict(raw)
    raw_decisions = data.pop("decisions", None) or []
    if not isinstance(raw_decisions, list):
        logger.warning("Ignoring metrics.decisions of type %s", type(raw_decisions).__name__)
        raw_decisions = []

    decisions: List[DecisionEvent] = []
    for index, item in enumerate(raw_decisions):
        try:
            decisions.append(DecisionEvent.model_validate(item))
        except ValidationError as exc:
            logger.warning("Dropping malformed decision #%d: %s", index, exc.errors()[0]["msg"])

    if "decisions" not in raw:
        return ProgressMetrics(**data)
    return ProgressMetrics(decisions=decisions, **data)


def next_version(existing_versions: Iterable[int]) -> int:
    """max(existing) + 1, or 1 for a program with no updates."""
    return max(existing_versions, default=0) + 1


def latest_updates_by_program(updates: Iterable[ProgressUpdate]) -> Dict[Any, ProgressUpdate]:
    """program_id -> its highest-version update."""
    latest: Dict[Any, ProgressUpdate] = {}
    for update in updates:
        current = latest.get(update.program_id)
        if current is None or update.version > current.version:
            latest[update.program_id] = update
    return latest


def program_history(
    updates: Iterable[ProgressUpdate],
    program_id: Any,
    latest_only: bool = False,
) -> List[ProgressUpdate]:
    """Updates for one program, newest version first."""
    history = sorted(
        (u for u in updates if u.program_id == program_id),
        key=lambda u: u.version,
        reverse=True,
    )
    return history[:1] if latest_only else history


def _timestamp_key(raw: Any):
    if not raw or not isinstance(raw, str):
        return (1, 0.0)
    try:
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return (1, 0.0)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return (0, parsed.timestamp())


def build_context_timeline(updates: Iterable[ProgressUpdate]) -> List[Dict[str, Any]]:
    """
    Merge updates and their decision events, oldest first.

    A decision without its own timestamp takes its update's created_at.
    Entries with no parseable timestamp go last.
    """
    events: List[Dict[str, Any]] = []

    for update in updates:
        events.append({
            "type": "progress",
            "timestamp": update.created_at,
            "title": f"v{update.version} -- {update.rag_status.label}",
            "detail": update.update_text,
            "author": update.author,
            "percent": update.percent_complete or 0,
            "rag": update.rag_status.value,
            "version": update.version,
        })

        for decision in parse_metrics(update.metrics).decisions:
            events.append({
                "type": "decision",
                "timestamp": decision.timestamp or update.created_at,
                "title": decision.title,
                "detail": decision.rationale,
                "impact": decision.impact,
                "author": decision.decided_by,
                "version": update.version,
            })

    events.sort(key=lambda e: _timestamp_key(e["timestamp"]))
    return events
