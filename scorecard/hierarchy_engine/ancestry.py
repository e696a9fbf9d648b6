"""
Bounded upward walks over the goal tree.

Both walks are iterative with an explicit hop counter so that a parent_id
cycle in the data cannot turn them into infinite loops.
"""
from typing import Any, List, Mapping, Optional

from scorecard.config_manager import config
from scorecard.logger import get_logger
from scorecard.models import GoalItem, GoalLevel

logger = get_logger("ancestry")


def find_pillar_ancestor(
    goal: GoalItem,
    lookup: Mapping[Any, GoalItem],
    max_hops: Optional[int] = None,
) -> Optional[GoalItem]:
    """
    Nearest Pillar above ``goal``.

    Returns None when the chain ends (null or unknown parent) before a
    Pillar, or when ``max_hops`` parents have been visited without one.
    """
    limit = config.ANCESTOR_WALK_MAX_HOPS if max_hops is None else max_hops
    parent_id = goal.parent_id
    hops = 0

    while parent_id is not None:
        if hops >= limit:
            logger.debug("Pillar walk from goal %s exceeded %d hops", goal.id, limit)
            return None
        parent = lookup.get(parent_id)
        if parent is None:
            return None
        hops += 1
        if parent.goal_level == GoalLevel.PILLAR:
            return parent
        parent_id = parent.parent_id

    return None


def ancestor_ids(
    goal: GoalItem,
    lookup: Mapping[Any, GoalItem],
    max_hops: Optional[int] = None,
) -> List[Any]:
    """
    Parent ids from nearest to farthest, at most ``max_hops`` of them.

    An id whose record is not in ``lookup`` is still listed, and ends the
    chain.
    """
    limit = config.ANCESTOR_WALK_MAX_HOPS if max_hops is None else max_hops
    ids: List[Any] = []
    parent_id = goal.parent_id

    while parent_id is not None and len(ids) < limit:
        ids.append(parent_id)
        parent = lookup.get(parent_id)
        if parent is None:
            break
        parent_id = parent.parent_id

    return ids
