"""Generate and display scored grasps around a cuboid from the command line."""

from cuboid_grasps.io.grasp_cli import cli

if __name__ == "__main__":
    cli()
