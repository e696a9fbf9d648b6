"""
Goal hierarchy for a set of org units.

Goals whose structural parent falls outside the scope (a Program owned by
a narrower unit than its Category, say) surface as extra roots.
"""
from typing import Any, Collection, Dict, Iterable, List, Mapping, Optional

from scorecard.hierarchy_engine.tree import Node, build_tree
from scorecard.models import GoalItem, RecordStatus, record_to_dict


def goal_sort_key(goal: GoalItem):
    # (goal_level_rank, priority, name), missing priority sorts last
    return (goal.goal_level.rank, goal.priority is None, goal.priority or 0, goal.name)


def build_goal_tree(
    goals: Iterable[GoalItem],
    scope_org_ids: Collection[Any],
    org_names: Optional[Mapping[Any, str]] = None,
) -> List[Node]:
    """
    Active goals owned by a unit in ``scope_org_ids``, assembled into a forest.

    Args:
        goals: goal records in any order
        scope_org_ids: org unit ids in scope; empty -> empty forest
        org_names: optional id -> name map; when given every node carries
            ``org_unit_name``
    """
    in_scope = [
        g for g in goals
        if g.status == RecordStatus.ACTIVE and g.org_unit_id in scope_org_ids
    ]
    in_scope.sort(key=goal_sort_key)

    if org_names is None:
        return build_tree(in_scope)

    rows: List[Dict[str, Any]] = []
    for goal in in_scope:
        row = record_to_dict(goal)
        row["org_unit_name"] = org_names.get(goal.org_unit_id)
        rows.append(row)
    return build_tree(rows)


def goals_for_owner(goals: Iterable[GoalItem], owner: str) -> List[GoalItem]:
    """Goals owned by ``owner`` (exact match), ordered by (level, name)."""
    owned = [g for g in goals if g.owner == owner]
    owned.sort(key=lambda g: (g.goal_level.rank, g.name))
    return owned


def direct_children(goals: Iterable[GoalItem], goal_id: Any) -> List[GoalItem]:
    children = [g for g in goals if g.parent_id == goal_id]
    children.sort(key=goal_sort_key)
    return children
