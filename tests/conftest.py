import sys
from pathlib import Path

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from scorecard.models import (  # noqa: E402
    AlignmentType,
    GoalAlignment,
    GoalItem,
    GoalLevel,
    OrgLevel,
    OrgUnit,
    ProgramObjective,
    ProgressUpdate,
    RagStatus,
)
from scorecard.registry import ScorecardRegistry  # noqa: E402


def make_goal(goal_id, level, parent_id=None, org_unit_id=1, name=None, **kwargs):
    return GoalItem(
        id=goal_id,
        name=name or f"goal-{goal_id}",
        org_unit_id=org_unit_id,
        goal_level=level,
        parent_id=parent_id,
        **kwargs,
    )


def make_update(update_id, program_id, version, rag, percent=None, **kwargs):
    return ProgressUpdate(
        id=update_id,
        program_id=program_id,
        version=version,
        rag_status=rag,
        percent_complete=percent,
        **kwargs,
    )


@pytest.fixture
def org_units():
    return [
        OrgUnit(id=1, name="Vantage Biopharma", org_level=OrgLevel.ENTERPRISE),
        OrgUnit(id=2, name="R&D", parent_id=1, org_level=OrgLevel.BUSINESS_UNIT, priority=1),
        OrgUnit(id=3, name="Commercial", parent_id=1, org_level=OrgLevel.BUSINESS_UNIT, priority=2),
        OrgUnit(id=4, name="Discovery", parent_id=2, org_level=OrgLevel.FUNCTION),
        OrgUnit(id=5, name="Legacy Lab", parent_id=2, org_level=OrgLevel.FUNCTION, status="Archived"),
    ]


@pytest.fixture
def goal_items():
    return [
        make_goal(10, GoalLevel.PILLAR, name="Advance Pipeline", org_unit_id=1, priority=1),
        make_goal(11, GoalLevel.PILLAR, name="Grow Revenue", org_unit_id=1, priority=2),
        make_goal(20, GoalLevel.CATEGORY, parent_id=10, name="Discovery Productivity", org_unit_id=2),
        make_goal(21, GoalLevel.CATEGORY, parent_id=11, name="Launch Readiness", org_unit_id=3),
        make_goal(30, GoalLevel.GOAL, parent_id=20, name="Nominate candidates", org_unit_id=4,
                  owner="Dr. Sarah Chen"),
        make_goal(40, GoalLevel.PROGRAM, parent_id=30, name="Target ID Automation", org_unit_id=4,
                  owner="Dr. Sarah Chen"),
        make_goal(41, GoalLevel.PROGRAM, parent_id=30, name="Assay Scale-up", org_unit_id=4),
        make_goal(42, GoalLevel.PROGRAM, parent_id=21, name="Payer Dossier", org_unit_id=3),
    ]


@pytest.fixture
def registry(tmp_path, org_units, goal_items):
    reg = ScorecardRegistry(path=tmp_path / "scorecard_snapshot.json")
    reg.add_records(
        org_units=org_units,
        goal_items=goal_items,
        goal_alignments=[
            GoalAlignment(child_goal_id=40, parent_goal_id=30, alignment_type=AlignmentType.PRIMARY,
                          alignment_strength=0.9),
            GoalAlignment(child_goal_id=42, parent_goal_id=40, alignment_type="cross-cutting",
                          alignment_strength=0.5),
            GoalAlignment(child_goal_id=41, parent_goal_id=999, alignment_type=AlignmentType.SECONDARY,
                          alignment_strength=0.3),
        ],
        progress_updates=[
            make_update(1, 40, 1, RagStatus.GREEN, 10, created_at="2026-01-05T09:00:00"),
            make_update(2, 40, 2, RagStatus.AMBER, 30, created_at="2026-02-05T09:00:00"),
            make_update(3, 42, 1, "Not Started", 0, created_at="2026-02-01T09:00:00"),
        ],
        program_objectives=[
            ProgramObjective(program_id=40, year=2026, quarter="Q1", objective_text="Automate 2 screens",
                             target_value=2, target_unit="screens"),
            ProgramObjective(program_id=40, year=2025, quarter="Q4", objective_text="Pilot screen"),
        ],
    )
    return reg
