"""
Tree assembly: flat ``{id, parent_id}`` records -> nested forest.

A record is a root when its parent_id is None or names an id that is not
in the input. Siblings keep their input order, so callers sort before
assembling. No cycle detection: records on a parent_id cycle are never
reachable from a root and are left out of the forest.
"""
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional

from scorecard.models import record_to_dict

Node = Dict[str, Any]


def build_tree(items: Iterable[Any]) -> List[Node]:
    """
    Build a forest from records exposing ``id`` and ``parent_id``.

    Args:
        items: dataclass records or mappings, already in sibling order

    Returns:
        root nodes; every node is a dict copy of its record plus a
        ``children`` list
    """
    nodes: List[Node] = []
    by_id: Dict[Any, Node] = {}

    for item in items:
        node = record_to_dict(item)
        node["children"] = []
        nodes.append(node)
        by_id[node["id"]] = node

    roots: List[Node] = []
    for node in nodes:
        parent_id = node.get("parent_id")
        if parent_id is not None and parent_id in by_id:
            by_id[parent_id]["children"].append(node)
        else:
            roots.append(node)

    return roots


def flatten_tree(forest: List[Node]) -> Iterator[Node]:
    """Yield every node in pre-order (parent before children, siblings in order)."""
    stack = list(reversed(forest))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.get("children") or []))


def find_node(forest: List[Node], predicate: Callable[[Node], bool]) -> Optional[Node]:
    """First node in pre-order matching ``predicate``, or None."""
    return next((n for n in flatten_tree(forest) if predicate(n)), None)


def subtree_ids(node: Node) -> List[Any]:
    """Ids of ``node`` and all its descendants, pre-order."""
    return [n["id"] for n in flatten_tree([node])]


def prune_depth(forest: List[Node], depth: Optional[int]) -> List[Node]:
    """
    Copy of ``forest`` without nodes more than ``depth`` levels below a root.

    ``depth=0`` keeps the roots only; ``None`` keeps everything.
    """
    if depth is None:
        return forest

    def copy(node: Node, level: int) -> Node:
        out = {k: v for k, v in node.items() if k != "children"}
        if level < depth:
            out["children"] = [copy(c, level + 1) for c in node.get("children") or []]
        else:
            out["children"] = []
        return out

    return [copy(root, 0) for root in forest]
