"""Define a command-line interface for generating grasps around a cuboid."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click
from rich.table import Table

from cuboid_grasps.geometry import Cuboid
from cuboid_grasps.grasping.diagnostics import NullDiagnostics, RecordingDiagnostics
from cuboid_grasps.io.logging import configure_logging, console
from cuboid_grasps.io.pydantic_schemata import load_grasp_generator_schema, load_gripper_profile
from cuboid_grasps.spatial import Pose3D

if TYPE_CHECKING:
    from collections.abc import Sequence

    from cuboid_grasps.grasping.candidates import ScoredCandidate


def _render_candidates_table(candidates: Sequence[ScoredCandidate], top: int) -> Table:
    """Render a table of the highest-quality grasp candidates (ranked for display only)."""
    ranked = sorted(candidates, key=lambda c: c.quality, reverse=True)[:top]

    table = Table(title=f"Top {len(ranked)} of {len(candidates)} grasp candidates", show_lines=False)
    table.add_column("#", justify="right", style="cyan", no_wrap=True)
    table.add_column("ID", style="bold")
    table.add_column("Quality", justify="right", style="green")
    table.add_column("Open", justify="right")
    table.add_column("Grasp pose (xyz, rpy)", style="magenta")

    for rank, candidate in enumerate(ranked, start=1):
        xyz_rpy = ", ".join(f"{value:.3f}" for value in candidate.grasp_pose.to_xyz_rpy())
        percent_open = "-" if candidate.percent_open is None else f"{candidate.percent_open:.1f}"
        table.add_row(str(rank), candidate.grasp_id, f"{candidate.quality:.4f}", percent_open, xyz_rpy)
    return table


def _render_stages_table(diagnostics: RecordingDiagnostics) -> Table:
    """Render a table listing the number of poses produced by each enumeration stage."""
    table = Table(title="Enumeration stages")
    table.add_column("Stage", style="bold")
    table.add_column("# Poses", justify="right", style="cyan")
    for stage, poses in diagnostics.stages:
        table.add_row(stage, str(len(poses)))
    return table


@click.command()
@click.option("--depth", type=float, required=True, help="Cuboid extent (m) along its x-axis.")
@click.option("--width", type=float, required=True, help="Cuboid extent (m) along its y-axis.")
@click.option("--height", type=float, required=True, help="Cuboid extent (m) along its z-axis.")
@click.option(
    "--gripper",
    "gripper_yaml",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="YAML file describing the grasp data of one or more end effectors.",
)
@click.option("--end-effector", required=True, help="Name of the end effector in the gripper YAML.")
@click.option(
    "--generator",
    "generator_yaml",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Optional YAML file of grasp generator settings (ideal orientation, weights, grasp types).",
)
@click.option("--top", type=click.IntRange(min=1), default=10, show_default=True, help="Candidates to display.")
@click.option("--verbose", is_flag=True, help="Log debug messages and summarize the enumeration stages.")
def cli(
    depth: float,
    width: float,
    height: float,
    gripper_yaml: Path,
    end_effector: str,
    generator_yaml: Path | None,
    top: int,
    verbose: bool,
) -> None:
    """Generate and score grasps around a cuboid centered at the origin."""
    settings = load_grasp_generator_schema(generator_yaml)
    verbose = verbose or settings.verbose
    configure_logging(verbose)

    try:
        cuboid = Cuboid(Pose3D.identity(), depth, width, height)
        profile = load_gripper_profile(gripper_yaml, end_effector)
    except (KeyError, ValueError) as error:
        raise click.BadParameter(str(error)) from error

    diagnostics = RecordingDiagnostics() if verbose else NullDiagnostics()
    generator = settings.build_generator(diagnostics)

    config = settings.candidate_config.to_candidate_config()

    candidates: list[ScoredCandidate] = []
    num_generated = generator.generate_grasps(cuboid, profile, candidates, config)

    if isinstance(diagnostics, RecordingDiagnostics):
        console.print(_render_stages_table(diagnostics))
    console.print(f"Generated [bold]{num_generated}[/] grasp candidates for '{end_effector}'.")
    if candidates:
        console.print(_render_candidates_table(candidates, top))


if __name__ == "__main__":
    cli()
