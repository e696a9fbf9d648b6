"""
Alignment classifier: typed cross-references between goals, shaped for
display and bucketed relative to a focal goal.

Bucketing rules for a focal goal G:
- cross_cutting: type is cross_cutting, whichever endpoint G is
- upstream: G is the child endpoint (another goal feeds into G)
- downstream: G is the parent endpoint (G feeds another goal)

Endpoint checks run child first, so a self-referential edge lands in
upstream; it is also listed under ``anomalies`` for the caller to report.
"""
from dataclasses import dataclass, field
from typing import Any, Collection, Dict, Iterable, List, Mapping, Optional

from scorecard.config_manager import config
from scorecard.models import AlignmentType, GoalAlignment, parse_enum


@dataclass
class ShapedAlignment:
    """An alignment edge with both endpoints' display names resolved."""
    child_goal_id: Any
    child_goal_name: str
    parent_goal_id: Any
    parent_goal_name: str
    alignment_type: AlignmentType
    alignment_strength: float
    notes: Optional[str] = None

    @property
    def is_self_referential(self) -> bool:
        return self.child_goal_id == self.parent_goal_id

    def to_dict(self) -> Dict[str, Any]:
        return {
            "child_goal_id": self.child_goal_id,
            "child_goal_name": self.child_goal_name,
            "parent_goal_id": self.parent_goal_id,
            "parent_goal_name": self.parent_goal_name,
            "alignment_type": self.alignment_type.value,
            "alignment_strength": self.alignment_strength,
            "notes": self.notes,
        }


@dataclass
class AlignmentBuckets:
    focal_goal_id: Any
    upstream: List[Any] = field(default_factory=list)
    downstream: List[Any] = field(default_factory=list)
    cross_cutting: List[Any] = field(default_factory=list)
    anomalies: List[Any] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        def dump(edges):
            return [e.to_dict() if hasattr(e, "to_dict") else e for e in edges]

        return {
            "focal_goal_id": self.focal_goal_id,
            "upstream": dump(self.upstream),
            "downstream": dump(self.downstream),
            "cross_cutting": dump(self.cross_cutting),
            "anomalies": dump(self.anomalies),
        }


def goal_label(
    goal_id: Any,
    goal_name_by_id: Mapping[Any, str],
    missing_label: Optional[str] = None,
) -> str:
    """Goal name, or the synthetic "Goal #<id>" label for unknown ids."""
    name = goal_name_by_id.get(goal_id)
    if name:
        return name
    template = missing_label or config.MISSING_GOAL_LABEL
    return template.format(id=goal_id)


def select_alignments(edges: Iterable[GoalAlignment], goal_ids: Collection[Any]) -> List[GoalAlignment]:
    """Edges with at least one endpoint in ``goal_ids``, input order kept."""
    ids = set(goal_ids)
    if not ids:
        return []
    return [e for e in edges if e.child_goal_id in ids or e.parent_goal_id in ids]


def filter_alignments(
    edges: Iterable[GoalAlignment],
    goal_id: Optional[Any] = None,
    alignment_type: Optional[Any] = None,
) -> List[GoalAlignment]:
    """Narrow edges to those touching ``goal_id`` and/or of ``alignment_type``."""
    wanted_type = parse_enum(AlignmentType, alignment_type, "alignment_type") if alignment_type else None
    result = []
    for edge in edges:
        if goal_id is not None and goal_id not in (edge.child_goal_id, edge.parent_goal_id):
            continue
        if wanted_type is not None and edge.alignment_type != wanted_type:
            continue
        result.append(edge)
    return result


def classify_alignments(
    edges: Iterable[GoalAlignment],
    goal_name_by_id: Mapping[Any, str],
    missing_label: Optional[str] = None,
) -> List[ShapedAlignment]:
    """Rehydrate each edge with both endpoint names."""
    return [
        ShapedAlignment(
            child_goal_id=e.child_goal_id,
            child_goal_name=goal_label(e.child_goal_id, goal_name_by_id, missing_label),
            parent_goal_id=e.parent_goal_id,
            parent_goal_name=goal_label(e.parent_goal_id, goal_name_by_id, missing_label),
            alignment_type=e.alignment_type,
            alignment_strength=e.alignment_strength,
            notes=e.notes,
        )
        for e in edges
    ]


def split_relative_to(focal_goal_id: Any, edges: Iterable[Any]) -> AlignmentBuckets:
    """
    Partition the edges touching ``focal_goal_id`` into upstream /
    downstream / cross_cutting. Works on raw or shaped edges.
    """
    buckets = AlignmentBuckets(focal_goal_id=focal_goal_id)
    for edge in edges:
        is_child = edge.child_goal_id == focal_goal_id
        is_parent = edge.parent_goal_id == focal_goal_id
        if not (is_child or is_parent):
            continue

        if edge.is_self_referential:
            buckets.anomalies.append(edge)

        if edge.alignment_type == AlignmentType.CROSS_CUTTING:
            buckets.cross_cutting.append(edge)
        elif is_child:
            buckets.upstream.append(edge)
        else:
            buckets.downstream.append(edge)
    return buckets
