# Hierarchy engine: tree assembly, org/goal resolution, alignment buckets,
# pillar ancestry and worst-wins status rollup. Pure functions over
# in-memory records; no storage or network access.

from scorecard.hierarchy_engine.alignment import (
    AlignmentBuckets,
    ShapedAlignment,
    classify_alignments,
    filter_alignments,
    select_alignments,
    split_relative_to,
)
from scorecard.hierarchy_engine.ancestry import ancestor_ids, find_pillar_ancestor
from scorecard.hierarchy_engine.goals import build_goal_tree, direct_children, goals_for_owner
from scorecard.hierarchy_engine.org import (
    build_org_tree,
    descendant_ids,
    descendant_ids_by_id,
    org_subtree,
)
from scorecard.hierarchy_engine.rollup import (
    PillarSummary,
    ProgramStatus,
    RollupSummary,
    enterprise_status,
    summarize,
    worst_status,
)
from scorecard.hierarchy_engine.tree import build_tree, flatten_tree

__all__ = [
    "AlignmentBuckets",
    "PillarSummary",
    "ProgramStatus",
    "RollupSummary",
    "ShapedAlignment",
    "ancestor_ids",
    "build_goal_tree",
    "build_org_tree",
    "build_tree",
    "classify_alignments",
    "descendant_ids",
    "descendant_ids_by_id",
    "direct_children",
    "enterprise_status",
    "filter_alignments",
    "find_pillar_ancestor",
    "flatten_tree",
    "goals_for_owner",
    "org_subtree",
    "select_alignments",
    "split_relative_to",
    "summarize",
    "worst_status",
]
