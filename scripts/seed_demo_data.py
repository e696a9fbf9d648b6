import sys
import os

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../')))

from scorecard.models import (
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
from scorecard.registry import ScorecardRegistry


def seed_demo_data(registry=None):
    print("Seeding demo snapshot...")
    registry = registry or ScorecardRegistry()

    if registry.org_units:
        print(f"Snapshot {registry.path} already has data, nothing to do.")
        return registry

    org_units = [
        OrgUnit(id=1, name="Vantage Biopharma", org_level=OrgLevel.ENTERPRISE, owner="Dr. Elena Ruiz"),
        OrgUnit(id=2, name="Research & Development", parent_id=1, org_level=OrgLevel.BUSINESS_UNIT, priority=1),
        OrgUnit(id=3, name="Commercial", parent_id=1, org_level=OrgLevel.BUSINESS_UNIT, priority=2),
        OrgUnit(id=4, name="Discovery Biology", parent_id=2, org_level=OrgLevel.FUNCTION, owner="Dr. Sarah Chen"),
        OrgUnit(id=5, name="Clinical Operations", parent_id=2, org_level=OrgLevel.FUNCTION),
        OrgUnit(id=6, name="Market Access", parent_id=3, org_level=OrgLevel.FUNCTION),
    ]

    goal_items = [
        GoalItem(id=10, name="Advance Pipeline", org_unit_id=1, goal_level=GoalLevel.PILLAR, priority=1),
        GoalItem(id=11, name="Operational Excellence", org_unit_id=1, goal_level=GoalLevel.PILLAR, priority=2),
        GoalItem(id=20, name="Discovery Productivity", org_unit_id=2, goal_level=GoalLevel.CATEGORY, parent_id=10),
        GoalItem(id=21, name="Trial Execution", org_unit_id=2, goal_level=GoalLevel.CATEGORY, parent_id=10),
        GoalItem(id=22, name="Launch Readiness", org_unit_id=3, goal_level=GoalLevel.CATEGORY, parent_id=11),
        GoalItem(id=30, name="Nominate 3 development candidates", org_unit_id=4,
                 goal_level=GoalLevel.GOAL, parent_id=20, owner="Dr. Sarah Chen"),
        GoalItem(id=31, name="Cut first-patient-in time by 20%", org_unit_id=5,
                 goal_level=GoalLevel.GOAL, parent_id=21),
        GoalItem(id=32, name="Payer dossiers ready for launch", org_unit_id=6,
                 goal_level=GoalLevel.GOAL, parent_id=22),
        GoalItem(id=40, name="Target ID Automation", org_unit_id=4, goal_level=GoalLevel.PROGRAM,
                 parent_id=30, owner="Dr. Sarah Chen"),
        GoalItem(id=41, name="Site Activation Sprint", org_unit_id=5, goal_level=GoalLevel.PROGRAM,
                 parent_id=31, owner="Marcus Lee"),
        GoalItem(id=42, name="Value Evidence Package", org_unit_id=6, goal_level=GoalLevel.PROGRAM,
                 parent_id=32, owner="Priya Nair"),
    ]

    alignments = [
        GoalAlignment(child_goal_id=40, parent_goal_id=30, alignment_type=AlignmentType.PRIMARY,
                      alignment_strength=0.9),
        GoalAlignment(child_goal_id=41, parent_goal_id=42, alignment_type=AlignmentType.CROSS_CUTTING,
                      alignment_strength=0.4, notes="Trial timelines drive evidence availability"),
        GoalAlignment(child_goal_id=31, parent_goal_id=22, alignment_type=AlignmentType.SECONDARY,
                      alignment_strength=0.6),
    ]

    progress = [
        ProgressUpdate(id=1, program_id=40, version=1, percent_complete=10, rag_status=RagStatus.GREEN,
                       update_text="Pipeline scaffolding in place", author="Dr. Sarah Chen",
                       created_at="2026-01-12T09:00:00"),
        ProgressUpdate(id=2, program_id=40, version=2, percent_complete=35, rag_status=RagStatus.AMBER,
                       update_text="Assay vendor slipped two weeks", author="Dr. Sarah Chen",
                       created_at="2026-02-09T09:00:00",
                       metrics={"decisions": [{
                           "title": "Dual-source assay reagents",
                           "timestamp": "2026-02-05T15:30:00",
                           "rationale": "Single vendor is the critical path",
                           "impact": "+4% reagent cost",
                           "decided_by": "Dr. Sarah Chen",
                       }]}),
        ProgressUpdate(id=3, program_id=41, version=1, percent_complete=5, rag_status=RagStatus.RED,
                       update_text="IRB approvals stalled at 4 sites", author="Marcus Lee",
                       created_at="2026-02-10T11:00:00"),
    ]

    objectives = [
        ProgramObjective(program_id=40, year=2026, quarter="Q1", objective_text="Automate 2 target ID screens",
                         target_value=2, target_unit="screens", status="On Track"),
        ProgramObjective(program_id=40, year=2026, quarter="Q2", objective_text="Automate 5 target ID screens",
                         target_value=5, target_unit="screens"),
        ProgramObjective(program_id=41, year=2026, quarter="Q1", objective_text="Activate 12 sites",
                         target_value=12, target_unit="sites", status="At Risk"),
    ]

    registry.add_records(
        org_units=org_units,
        goal_items=goal_items,
        goal_alignments=alignments,
        progress_updates=progress,
        program_objectives=objectives,
    )
    print(f"Seeded {len(org_units)} org units, {len(goal_items)} goals into {registry.path}")
    return registry


if __name__ == "__main__":
    seed_demo_data()
