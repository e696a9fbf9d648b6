"""
Org hierarchy: active org units as an ordered forest, plus subtree lookups
used to scope goal queries to "this unit and everything beneath it".
"""
from typing import Any, Iterable, List, Optional, Set

from scorecard.hierarchy_engine.tree import Node, build_tree, find_node, prune_depth, subtree_ids
from scorecard.models import OrgUnit, RecordStatus


def org_sort_key(unit: OrgUnit):
    # (priority, name), units without a priority after those with one
    return (unit.priority is None, unit.priority or 0, unit.name)


def build_org_tree(units: Iterable[OrgUnit]) -> List[Node]:
    """Active units only, siblings ordered by (priority, name)."""
    active = [u for u in units if u.status == RecordStatus.ACTIVE]
    active.sort(key=org_sort_key)
    return build_tree(active)


def descendant_ids(forest: List[Node], root_name: str) -> Set[Any]:
    """
    Ids of the first unit named ``root_name`` and every unit beneath it.

    An unknown name yields an empty set ("no matching scope").
    """
    node = find_node(forest, lambda n: n.get("name") == root_name)
    if node is None:
        return set()
    return set(subtree_ids(node))


def descendant_ids_by_id(forest: List[Node], root_id: Any) -> Set[Any]:
    node = find_node(forest, lambda n: n.get("id") == root_id)
    if node is None:
        return set()
    return set(subtree_ids(node))


def org_subtree(
    forest: List[Node],
    root_id: Optional[Any] = None,
    depth: Optional[int] = None,
) -> List[Node]:
    """
    The forest rooted at ``root_id`` (whole forest when None), cut off
    ``depth`` levels below the root. Unknown root -> empty list.
    """
    if root_id is None:
        roots = forest
    else:
        node = find_node(forest, lambda n: n.get("id") == root_id)
        if node is None:
            return []
        roots = [node]
    return prune_depth(roots, depth)
