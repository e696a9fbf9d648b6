"""
Scorecard application service.

Reads a consistent snapshot from ScorecardRegistry and hands it to the
hierarchy engine. This layer (not the engine) raises NotFoundError for
specifically requested entities and logs structural anomalies.
"""
from typing import Any, Dict, List, Optional

from scorecard.config_manager import config
from scorecard.exceptions import InvalidRecordError, NotFoundError
from scorecard.hierarchy_engine import (
    ancestor_ids,
    build_goal_tree,
    build_org_tree,
    classify_alignments,
    descendant_ids_by_id,
    direct_children,
    enterprise_status,
    filter_alignments,
    goals_for_owner,
    org_subtree,
    select_alignments,
    split_relative_to,
    summarize,
)
from scorecard.hierarchy_engine.tree import Node, find_node
from scorecard.logger import get_logger
from scorecard.models import GoalItem, GoalLevel, Quarter, RecordStatus, parse_enum, record_to_dict
from scorecard.progress import (
    build_context_timeline,
    latest_updates_by_program,
    parse_metrics,
    program_history,
)
from scorecard.registry import ScorecardRegistry

logger = get_logger("service")


class ScorecardService:
    """Application service for the scorecard dashboards."""

    def __init__(self, registry: Optional[ScorecardRegistry] = None):
        self.registry = registry or ScorecardRegistry()

    # ---------------------------------------------------------------------
    # Lookup helpers
    # ---------------------------------------------------------------------
    def require_goal(self, goal_id: Any) -> GoalItem:
        goal = self.registry.get_goal(goal_id)
        if goal is None:
            raise NotFoundError("Goal", goal_id)
        return goal

    def require_program(self, program_id: Any) -> GoalItem:
        goal = self.registry.get_goal(program_id)
        if goal is None:
            raise NotFoundError("Program", program_id)
        if not goal.is_program:
            raise InvalidRecordError(
                f"Goal {program_id} is a {goal.goal_level.value}, not a Program",
                field="program_id",
            )
        return goal

    def _org_names(self) -> Dict[Any, str]:
        return {u.id: u.name for u in self.registry.org_units}

    def _goal_names(self) -> Dict[Any, str]:
        return {g.id: g.name for g in self.registry.goal_items}

    def active_programs(self) -> List[GoalItem]:
        return [
            g for g in self.registry.goal_items
            if g.goal_level == GoalLevel.PROGRAM and g.status == RecordStatus.ACTIVE
        ]

    # ---------------------------------------------------------------------
    # Org views
    # ---------------------------------------------------------------------
    def get_org_tree(self, root_id: Optional[Any] = None, depth: Optional[int] = None) -> List[Node]:
        forest = build_org_tree(self.registry.org_units)
        return org_subtree(forest, root_id=root_id, depth=depth)

    def enterprise_root(self) -> Optional[Node]:
        forest = build_org_tree(self.registry.org_units)
        node = find_node(forest, lambda n: n.get("name") == config.ENTERPRISE_ROOT_NAME)
        if node is None and forest:
            node = forest[0]
        return node

    # ---------------------------------------------------------------------
    # Goal views
    # ---------------------------------------------------------------------
    def get_goal_tree(self, org_id: Any) -> Dict[str, Any]:
        unit = self.registry.get_org_unit(org_id)
        if unit is None:
            raise NotFoundError("Org unit", org_id)

        scope = descendant_ids_by_id(build_org_tree(self.registry.org_units), org_id)
        goals = self.registry.goal_items
        forest = build_goal_tree(goals, scope, org_names=self._org_names())

        scoped_ids = [
            g.id for g in goals
            if g.status == RecordStatus.ACTIVE and g.org_unit_id in scope
        ]
        edges = select_alignments(self.registry.alignments, scoped_ids)
        shaped = classify_alignments(edges, self._goal_names())

        return {
            "org_unit": {"id": unit.id, "name": unit.name, "org_level": unit.org_level.value},
            "goals": forest,
            "alignments": [a.to_dict() for a in shaped],
        }

    def get_alignment_map(
        self,
        goal_id: Optional[Any] = None,
        alignment_type: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        edges = filter_alignments(self.registry.alignments, goal_id=goal_id, alignment_type=alignment_type)
        shaped = classify_alignments(edges, self._goal_names())
        shaped.sort(key=lambda a: (a.parent_goal_name, a.child_goal_name))
        return [a.to_dict() for a in shaped]

    def get_goal_details(self, goal_id: Any) -> Dict[str, Any]:
        goal = self.require_goal(goal_id)
        goals = self.registry.goal_items

        edges = filter_alignments(self.registry.alignments, goal_id=goal_id)
        buckets = split_relative_to(goal_id, classify_alignments(edges, self._goal_names()))
        if buckets.anomalies:
            logger.warning("Goal %s has %d self-referential alignment(s)", goal_id, len(buckets.anomalies))

        latest = None
        if goal.is_program:
            history = program_history(self.registry.progress_updates, goal_id, latest_only=True)
            latest = record_to_dict(history[0]) if history else None

        return {
            "goal": record_to_dict(goal),
            "children": [record_to_dict(c) for c in direct_children(goals, goal_id)],
            "alignments": buckets.to_dict(),
            "ancestor_ids": ancestor_ids(goal, self.registry.goals_by_id()),
            "latest_progress": latest,
        }

    def get_goals_for_person(self, person_name: str) -> List[Dict[str, Any]]:
        org_names = self._org_names()
        result = []
        for goal in goals_for_owner(self.registry.goal_items, person_name):
            row = record_to_dict(goal)
            row["org_unit_name"] = org_names.get(goal.org_unit_id)
            result.append(row)
        return result

    # ---------------------------------------------------------------------
    # Scorecard and rollup
    # ---------------------------------------------------------------------
    def get_scorecard(self, year: Optional[int] = None, org_unit_id: Optional[Any] = None) -> List[Dict[str, Any]]:
        year = year or config.DEFAULT_SCORECARD_YEAR
        units = {u.id: u for u in self.registry.org_units}
        latest = latest_updates_by_program(self.registry.progress_updates)

        programs = self.active_programs()
        if org_unit_id is not None:
            programs = [p for p in programs if p.org_unit_id == org_unit_id]
        programs.sort(key=lambda p: p.name)

        rows = []
        for program in programs:
            objectives: Dict[str, Any] = {q.value: None for q in Quarter}
            for obj in self.registry.program_objectives:
                if obj.program_id == program.id and obj.year == year:
                    objectives[obj.quarter.value] = {
                        "objective_text": obj.objective_text,
                        "target_value": obj.target_value,
                        "target_unit": obj.target_unit,
                        "status": obj.status,
                    }

            update = latest.get(program.id)
            unit = units.get(program.org_unit_id)
            rows.append({
                "program_id": program.id,
                "program_name": program.name,
                "org_unit": unit.name if unit else None,
                "org_level": unit.org_level.value if unit else None,
                "objectives": objectives,
                "progress": {
                    "percent_complete": update.percent_complete,
                    "rag_status": update.rag_status.value,
                    "last_updated": update.created_at,
                    "update_text": update.update_text,
                    "metrics": update.metrics,
                    "version": update.version,
                    "author": update.author,
                } if update else None,
            })
        return rows

    def get_quarterly_objectives(
        self,
        program_id: Any,
        year: Optional[int] = None,
        quarter: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """A program's objectives, optionally narrowed to a year and/or quarter, by (year, quarter)."""
        self.require_program(program_id)
        wanted = parse_enum(Quarter, quarter, "quarter") if quarter else None
        quarter_order = list(Quarter)

        objectives = [
            o for o in self.registry.program_objectives
            if o.program_id == program_id
            and (year is None or o.year == year)
            and (wanted is None or o.quarter == wanted)
        ]
        objectives.sort(key=lambda o: (o.year, quarter_order.index(o.quarter)))
        return [record_to_dict(o) for o in objectives]

    def get_summary(self) -> Dict[str, Any]:
        summary = summarize(
            self.active_programs(),
            latest_updates_by_program(self.registry.progress_updates),
            self.registry.goals_by_id(),
        )
        if summary.unassigned_program_ids:
            logger.warning(
                "%d program(s) have no resolvable pillar: %s",
                len(summary.unassigned_program_ids),
                summary.unassigned_program_ids,
            )

        payload = summary.to_dict()
        banner = enterprise_status(summary)
        payload["enterprise_rag"] = banner.value if banner else None
        return payload

    # ---------------------------------------------------------------------
    # Progress
    # ---------------------------------------------------------------------
    def get_progress(self, program_id: Any, latest: bool = False) -> Dict[str, Any]:
        program = self.require_goal(program_id)
        unit = self.registry.get_org_unit(program.org_unit_id)
        updates = program_history(self.registry.progress_updates, program_id, latest_only=latest)
        return {
            "program": {
                "id": program.id,
                "name": program.name,
                "org_unit": unit.name if unit else None,
            },
            "updates": [record_to_dict(u) for u in updates],
        }

    def add_progress_update(
        self,
        program_id: Any,
        update_text: str,
        author: Optional[str] = None,
        percent_complete: Optional[float] = None,
        rag_status: Optional[str] = None,
        metrics: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        self.require_program(program_id)
        payload = parse_metrics(metrics).model_dump(exclude_unset=True) if metrics else {}
        update = self.registry.append_progress_update(
            program_id,
            update_text=update_text,
            author=author,
            percent_complete=percent_complete,
            rag_status=rag_status,
            metrics=payload,
        )
        return record_to_dict(update)

    def get_context_timeline(self, program_id: Any) -> List[Dict[str, Any]]:
        self.require_goal(program_id)
        updates = program_history(self.registry.progress_updates, program_id)
        return build_context_timeline(updates)
