"""
CLI: scorecard
Read-only views of the snapshot, plus the next progress version for a program.
"""
import click
import sys
from pathlib import Path
from typing import List, Optional

# make the scorecard package importable when run as a script
project_root = Path(__file__).parent.parent
sys.path.append(str(project_root))

from scorecard.exceptions import NotFoundError, ScorecardError
from scorecard.progress import next_version
from scorecard.registry import ScorecardRegistry
from scorecard.scorecard_service import ScorecardService


@click.group()
@click.option(
    "--snapshot",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Snapshot JSON file (default: data/scorecard_snapshot.json)",
)
@click.pass_context
def scorecard(ctx, snapshot: Optional[Path]):
    """Strategy scorecard commands"""
    try:
        ctx.obj = ScorecardService(ScorecardRegistry(path=snapshot))
    except ScorecardError as e:
        raise click.ClickException(e.get_user_message())


@scorecard.command()
@click.pass_obj
def summary(service: ScorecardService):
    """Pillar status rollup and enterprise totals"""
    data = service.get_summary()
    if not data["pillars"]:
        click.echo("No programs resolve to a pillar.")
        return

    click.echo(f"Enterprise: {_label(data['enterprise_rag'])}")
    for pillar in data["pillars"]:
        click.echo(f"\n[{_label(pillar['overall_rag'])}] {pillar['pillar_name']}")
        for program in pillar["programs"]:
            pct = program["percent_complete"]
            pct_text = f" {pct:g}%" if pct is not None else ""
            click.echo(f"  - {program['program_name']}: {_label(program['rag_status'])}{pct_text}")

    totals = data["totals"]
    click.echo(
        f"\nGreen {totals['green']} | Amber {totals['amber']} | "
        f"Red {totals['red']} | Not Started {totals['not_started']}"
    )


@scorecard.command("org-tree")
@click.option("--root-id", type=int, default=None, help="Start from this org unit")
@click.option("--depth", type=int, default=None, help="Levels below the root to show")
@click.pass_obj
def org_tree(service: ScorecardService, root_id: Optional[int], depth: Optional[int]):
    """Print the active org hierarchy"""
    forest = service.get_org_tree(root_id=root_id, depth=depth)
    if not forest:
        click.echo("No matching org units.")
        return
    for line in _render(forest, lambda n: f"{n['name']} ({n['org_level'].replace('_', ' ')})"):
        click.echo(line)


@scorecard.command("goal-tree")
@click.argument("org_id", type=int)
@click.pass_obj
def goal_tree(service: ScorecardService, org_id: int):
    """Print the goal hierarchy for an org unit and everything beneath it"""
    try:
        data = service.get_goal_tree(org_id)
    except NotFoundError as e:
        raise click.ClickException(e.message)

    click.echo(f"{data['org_unit']['name']}")
    for line in _render(data["goals"], lambda n: f"{n['goal_level']}: {n['name']}"):
        click.echo(line)
    if data["alignments"]:
        click.echo(f"\n{len(data['alignments'])} alignment(s)")
        for a in data["alignments"]:
            click.echo(
                f"  {a['child_goal_name']} -> {a['parent_goal_name']} "
                f"[{a['alignment_type']}, {a['alignment_strength']:.0%}]"
            )


@scorecard.command("next-version")
@click.argument("program_id", type=int)
@click.pass_obj
def next_version_cmd(service: ScorecardService, program_id: int):
    """Version the next progress update for PROGRAM_ID would receive"""
    try:
        service.require_program(program_id)
    except ScorecardError as e:
        raise click.ClickException(e.message)
    click.echo(str(next_version(service.registry.versions_for(program_id))))


def _label(status: Optional[str]) -> str:
    return status.replace("_", " ") if status else "n/a"


def _render(forest, describe, indent: int = 0) -> List[str]:
    lines = []
    for node in forest:
        lines.append("  " * indent + describe(node))
        lines.extend(_render(node.get("children") or [], describe, indent + 1))
    return lines


if __name__ == "__main__":
    scorecard()
