"""
Status rollup: per-program current status -> per-pillar worst-wins status
-> enterprise totals.

Worst-wins precedence: Red > Amber > Not_Started > Green > Complete.

Only programs that resolve to a Pillar are grouped, and only grouped
programs count toward ``totals``. Programs without a pillar are reported
in ``unassigned_program_ids`` so the caller can log them.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from scorecard.hierarchy_engine.ancestry import find_pillar_ancestor
from scorecard.models import GoalItem, GoalLevel, ProgressUpdate, RagStatus

TOTAL_KEYS: Dict[RagStatus, str] = {
    RagStatus.GREEN: "green",
    RagStatus.AMBER: "amber",
    RagStatus.RED: "red",
    RagStatus.NOT_STARTED: "not_started",
}


@dataclass
class ProgramStatus:
    program_id: Any
    program_name: str
    rag_status: RagStatus
    percent_complete: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "program_id": self.program_id,
            "program_name": self.program_name,
            "rag_status": self.rag_status.value,
            "percent_complete": self.percent_complete,
        }


@dataclass
class PillarSummary:
    pillar_id: Any
    pillar_name: str
    overall_rag: RagStatus
    programs: List[ProgramStatus] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pillar_id": self.pillar_id,
            "pillar_name": self.pillar_name,
            "overall_rag": self.overall_rag.value,
            "programs": [p.to_dict() for p in self.programs],
        }


@dataclass
class RollupSummary:
    pillars: List[PillarSummary] = field(default_factory=list)
    totals: Dict[str, int] = field(default_factory=lambda: {k: 0 for k in TOTAL_KEYS.values()})
    unassigned_program_ids: List[Any] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pillars": [p.to_dict() for p in self.pillars],
            "totals": dict(self.totals),
        }


def worst_status(statuses: Iterable[RagStatus]) -> Optional[RagStatus]:
    """Least favourable status, or None for an empty input."""
    return max(statuses, key=lambda s: s.precedence, default=None)


def current_status(program: GoalItem, latest_update_by_program: Mapping[Any, ProgressUpdate]) -> RagStatus:
    latest = latest_update_by_program.get(program.id)
    return latest.rag_status if latest is not None else RagStatus.NOT_STARTED


def summarize(
    programs: Iterable[GoalItem],
    latest_update_by_program: Mapping[Any, ProgressUpdate],
    goals_by_id: Mapping[Any, GoalItem],
    max_hops: Optional[int] = None,
) -> RollupSummary:
    """
    Roll program statuses up to their pillars.

    Args:
        programs: goal records; anything not at Program level is skipped
        latest_update_by_program: program id -> its highest-version update
        goals_by_id: lookup used to walk each program up to its Pillar
        max_hops: ancestor walk bound (config default when None)

    Returns:
        pillars in first-seen order, each with its programs in input order
    """
    summary = RollupSummary()
    grouped: Dict[Any, PillarSummary] = {}

    for program in programs:
        if program.goal_level != GoalLevel.PROGRAM:
            continue

        pillar = find_pillar_ancestor(program, goals_by_id, max_hops=max_hops)
        if pillar is None:
            summary.unassigned_program_ids.append(program.id)
            continue

        latest = latest_update_by_program.get(program.id)
        status = current_status(program, latest_update_by_program)

        entry = grouped.get(pillar.id)
        if entry is None:
            entry = PillarSummary(pillar_id=pillar.id, pillar_name=pillar.name, overall_rag=status)
            grouped[pillar.id] = entry
            summary.pillars.append(entry)

        entry.programs.append(
            ProgramStatus(
                program_id=program.id,
                program_name=program.name,
                rag_status=status,
                percent_complete=latest.percent_complete if latest is not None else None,
            )
        )
        if status.precedence > entry.overall_rag.precedence:
            entry.overall_rag = status

        key = TOTAL_KEYS.get(status)
        if key:
            summary.totals[key] += 1

    return summary


def enterprise_status(summary: RollupSummary) -> Optional[RagStatus]:
    """Worst-wins across pillars; None when no pillar has programs."""
    return worst_status(p.overall_rag for p in summary.pillars)
