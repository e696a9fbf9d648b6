import pytest

from scorecard.exceptions import InvalidRecordError
from scorecard.hierarchy_engine.alignment import (
    classify_alignments,
    filter_alignments,
    goal_label,
    select_alignments,
    split_relative_to,
)
from scorecard.models import AlignmentType, GoalAlignment


NAMES = {30: "Nominate candidates", 40: "Target ID Automation", 42: "Payer Dossier"}


@pytest.fixture
def edges():
    return [
        GoalAlignment(child_goal_id=40, parent_goal_id=30, alignment_strength=0.9),
        GoalAlignment(child_goal_id=42, parent_goal_id=40, alignment_type="cross-cutting", alignment_strength=0.5),
        GoalAlignment(child_goal_id=41, parent_goal_id=999, alignment_type="secondary", alignment_strength=0.3),
        GoalAlignment(child_goal_id=50, parent_goal_id=40, alignment_type="Secondary"),
    ]


def test_goal_label_falls_back_to_synthetic_name():
    assert goal_label(40, NAMES) == "Target ID Automation"
    assert goal_label(999, NAMES) == "Goal #999"
    assert goal_label(7, {}, missing_label="#{id} (deleted)") == "#7 (deleted)"


def test_classify_resolves_both_endpoints(edges):
    shaped = classify_alignments(edges[:3], NAMES)

    assert shaped[0].child_goal_name == "Target ID Automation"
    assert shaped[0].parent_goal_name == "Nominate candidates"
    assert shaped[2].child_goal_name == "Goal #41"
    assert shaped[2].parent_goal_name == "Goal #999"
    assert shaped[1].to_dict()["alignment_type"] == "cross_cutting"
    assert shaped[1].to_dict()["alignment_strength"] == 0.5


def test_select_alignments_keeps_edges_touching_scope(edges):
    assert [e.child_goal_id for e in select_alignments(edges, [30])] == [40]
    assert [e.child_goal_id for e in select_alignments(edges, [40])] == [40, 42, 50]
    assert select_alignments(edges, []) == []


def test_filter_by_goal_and_type(edges):
    assert len(filter_alignments(edges)) == 4
    assert [e.child_goal_id for e in filter_alignments(edges, goal_id=40)] == [40, 42, 50]

    secondary = filter_alignments(edges, alignment_type="secondary")
    assert [e.child_goal_id for e in secondary] == [41, 50]

    cross = filter_alignments(edges, goal_id=40, alignment_type="Cross Cutting")
    assert [e.alignment_type for e in cross] == [AlignmentType.CROSS_CUTTING]


def test_filter_rejects_unknown_type(edges):
    with pytest.raises(InvalidRecordError):
        filter_alignments(edges, alignment_type="tertiary")


def test_split_relative_to_focal_goal(edges):
    buckets = split_relative_to(40, classify_alignments(edges, NAMES))

    assert [e.parent_goal_id for e in buckets.upstream] == [30]
    assert [e.child_goal_id for e in buckets.downstream] == [50]
    assert [e.child_goal_id for e in buckets.cross_cutting] == [42]
    assert buckets.anomalies == []


def test_split_ignores_edges_not_touching_focal(edges):
    buckets = split_relative_to(999, edges)

    assert buckets.downstream == [edges[2]]
    assert buckets.upstream == [] and buckets.cross_cutting == []


def test_self_referential_edge_is_upstream_and_anomaly():
    loop = GoalAlignment(child_goal_id=40, parent_goal_id=40)
    buckets = split_relative_to(40, [loop])

    assert buckets.upstream == [loop]
    assert buckets.downstream == []
    assert buckets.anomalies == [loop]


def test_buckets_to_dict_serializes_shaped_edges(edges):
    payload = split_relative_to(40, classify_alignments(edges, NAMES)).to_dict()

    assert payload["focal_goal_id"] == 40
    assert payload["upstream"][0]["parent_goal_name"] == "Nominate candidates"
    assert set(payload) == {"focal_goal_id", "upstream", "downstream", "cross_cutting", "anomalies"}


def test_strength_outside_unit_interval_is_rejected():
    with pytest.raises(InvalidRecordError):
        GoalAlignment(child_goal_id=1, parent_goal_id=2, alignment_strength=1.5)
