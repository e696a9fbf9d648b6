from conftest import make_goal, make_update

from scorecard.hierarchy_engine.rollup import enterprise_status, summarize, worst_status
from scorecard.models import GoalLevel, RagStatus
from scorecard.progress import latest_updates_by_program


def _pipeline(*programs):
    goals = [
        make_goal(1, GoalLevel.PILLAR, name="Advance Pipeline"),
        make_goal(2, GoalLevel.CATEGORY, parent_id=1),
        make_goal(3, GoalLevel.GOAL, parent_id=2),
    ]
    goals.extend(programs)
    return goals, {g.id: g for g in goals}


def test_worst_status_precedence():
    assert worst_status([RagStatus.GREEN, RagStatus.AMBER, RagStatus.NOT_STARTED]) == RagStatus.AMBER
    assert worst_status([RagStatus.RED, RagStatus.COMPLETE]) == RagStatus.RED
    assert worst_status([RagStatus.COMPLETE, RagStatus.COMPLETE]) == RagStatus.COMPLETE
    assert worst_status([RagStatus.GREEN, RagStatus.NOT_STARTED]) == RagStatus.NOT_STARTED
    assert worst_status([]) is None


def test_pillar_takes_worst_program_status():
    p1 = make_goal(101, GoalLevel.PROGRAM, parent_id=3, name="P1")
    p2 = make_goal(102, GoalLevel.PROGRAM, parent_id=3, name="P2")
    p3 = make_goal(103, GoalLevel.PROGRAM, parent_id=3, name="P3")
    goals, lookup = _pipeline(p1, p2, p3)
    latest = {
        101: make_update(1, 101, 2, RagStatus.RED, 20),
        102: make_update(2, 102, 1, RagStatus.GREEN, 80),
    }

    summary = summarize(goals, latest, lookup)

    assert len(summary.pillars) == 1
    pillar = summary.pillars[0]
    assert pillar.pillar_name == "Advance Pipeline"
    assert pillar.overall_rag == RagStatus.RED
    assert [p.program_name for p in pillar.programs] == ["P1", "P2", "P3"]
    assert summary.totals == {"green": 1, "amber": 0, "red": 1, "not_started": 1}


def test_program_without_update_is_not_started_with_no_percent():
    program = make_goal(101, GoalLevel.PROGRAM, parent_id=3)
    goals, lookup = _pipeline(program)

    status = summarize(goals, {}, lookup).pillars[0].programs[0]

    assert status.rag_status == RagStatus.NOT_STARTED
    assert status.percent_complete is None


def test_complete_programs_are_not_counted_in_totals():
    program = make_goal(101, GoalLevel.PROGRAM, parent_id=3)
    goals, lookup = _pipeline(program)
    latest = {101: make_update(1, 101, 4, RagStatus.COMPLETE, 100)}

    summary = summarize(goals, latest, lookup)

    assert summary.pillars[0].overall_rag == RagStatus.COMPLETE
    assert sum(summary.totals.values()) == 0


def test_unassigned_programs_are_reported_not_counted():
    orphan = make_goal(200, GoalLevel.PROGRAM, parent_id=404)
    goals, lookup = _pipeline(orphan)
    latest = {200: make_update(1, 200, 1, RagStatus.RED)}

    summary = summarize(goals, latest, lookup)

    assert summary.pillars == []
    assert summary.unassigned_program_ids == [200]
    assert summary.totals["red"] == 0
    assert enterprise_status(summary) is None


def test_pillars_in_first_seen_order(goal_items, registry):
    summary = summarize(
        [g for g in goal_items if g.id in (42, 40, 41)][::-1],
        latest_updates_by_program(registry.progress_updates),
        {g.id: g for g in goal_items},
    )

    assert [p.pillar_name for p in summary.pillars] == ["Grow Revenue", "Advance Pipeline"]
    assert enterprise_status(summary) == RagStatus.AMBER


def test_to_dict_shape():
    program = make_goal(101, GoalLevel.PROGRAM, parent_id=3, name="P1")
    goals, lookup = _pipeline(program)
    payload = summarize(goals, {101: make_update(1, 101, 1, "Amber", 45)}, lookup).to_dict()

    assert set(payload) == {"pillars", "totals"}
    assert payload["pillars"][0] == {
        "pillar_id": 1,
        "pillar_name": "Advance Pipeline",
        "overall_rag": "Amber",
        "programs": [
            {"program_id": 101, "program_name": "P1", "rag_status": "Amber", "percent_complete": 45.0}
        ],
    }
