"""CLI package for dockstart.

Commands:
- init (i): write a default startup.yml
- prepare (p): copy config files out of the image where missing
- run (r): docker run with the arguments defined in startup.yml
"""

from __future__ import annotations

import os
import shlex

import click
from rich.markup import escape

from .. import __version__
from ..config import init_config
from ..constants import VOLUME_ROOT_ENV
from ..docker import run_container
from ..errors import DockerNotRunningError, DockstartError
from ..logging import set_debug
from ..prepare import PrepareStatus, load_mappings, needs_extraction, prepare_mappings
from ..run_config import RunOptions
from ..runner import load_run_cmd
from .utils import check_docker, console, fail

__all__ = ["cli", "check_docker"]

ALIASES = {"i": "init", "p": "prepare", "r": "run"}


class AliasedGroup(click.Group):
    """Group that also resolves the single-letter command aliases."""

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        return super().get_command(ctx, ALIASES.get(cmd_name, cmd_name))

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        _, cmd, args = super().resolve_command(ctx, args)
        return (cmd.name if cmd else None), cmd, args


config_file_option = click.option(
    "--config-file",
    "-c",
    help="Config file name in the current directory (default: startup.yml)",
)
volume_root_option = click.option(
    "--volume-root",
    help=f"Host directory holding the mounts (default: ${VOLUME_ROOT_ENV})",
)


@click.group(cls=AliasedGroup)
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.version_option(__version__, "-v", "--version", prog_name="dockstart")
def cli(debug: bool) -> None:
    """dockstart - declarative docker run from startup.yml.

    Generate a startup.yml, copy config files out of an image, then start
    the container with the mounts and ports it describes.
    """
    if debug:
        set_debug(True)


@cli.command()
@config_file_option
def init(config_file: str | None) -> None:
    """Generate a startup.yml file."""
    try:
        path = init_config(os.getcwd(), config_file)
    except DockstartError as e:
        fail(e)
    console.print(f"Created file:\n{escape(str(path))}")


@cli.command()
@click.argument("image")
@config_file_option
@volume_root_option
def prepare(image: str, config_file: str | None, volume_root: str | None) -> None:
    """Copy config files from IMAGE where they are missing on the host."""
    options = RunOptions.from_cli(image=image, config_file=config_file, volume_root=volume_root)
    try:
        mappings = load_mappings(options)
    except DockstartError as e:
        fail(e)

    # docker is only needed when something has to be copied out of the image
    if needs_extraction(mappings) and not check_docker(options.env):
        fail(DockerNotRunningError("Docker is not running."))

    try:
        results = prepare_mappings(
            mappings, image, options.cwd, env=options.env, timeout=options.timeout
        )
    except DockstartError as e:
        fail(e)

    if not results:
        console.print("[dim]No configFileMount entries to prepare[/dim]")
    for result in results:
        if result.status is PrepareStatus.EXISTING:
            console.print(f"[dim]already exist:[/dim] {escape(result.file_path)}")
        else:
            console.print(f"[green]copied from image:[/green] {escape(result.file_path)}")


@cli.command()
@click.argument("image")
@config_file_option
@volume_root_option
@click.option("--dry-run", is_flag=True, help="Print the docker command without running it")
def run(image: str, config_file: str | None, volume_root: str | None, dry_run: bool) -> None:
    """Run IMAGE with the docker run arguments defined in startup.yml."""
    options = RunOptions.from_cli(image=image, config_file=config_file, volume_root=volume_root)
    try:
        _, cmd = load_run_cmd(options)
    except DockstartError as e:
        fail(e)

    if dry_run:
        console.print(escape(shlex.join(cmd)))
        return

    if not check_docker(options.env):
        fail(DockerNotRunningError("Docker is not running."))

    try:
        output = run_container(cmd, cwd=options.cwd, env=options.env, timeout=options.timeout)
    except DockstartError as e:
        fail(e)
    console.print(output.rstrip("\n"), markup=False)


if __name__ == "__main__":  # pragma: no cover
    cli()
