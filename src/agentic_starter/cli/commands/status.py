"""Status command."""

from pathlib import Path

import click

from agentic_starter.cli.errors import exit_with_error
from agentic_starter.core.context import StarterContext
from agentic_starter.core.install import read_status, resolve_target
from agentic_starter.errors import StarterError


@click.command("status")
@click.option(
    "--target",
    type=click.Path(path_type=Path),
    default=None,
    help="Project directory to inspect (default: current directory)",
)
@click.pass_obj
def status_cmd(ctx: StarterContext, target: Path | None) -> None:
    """Show the installed starter revision and domain packs.

    Reads only local files; nothing is fetched.
    """
    try:
        project_dir = resolve_target(target if target is not None else ctx.cwd)
        status = read_status(project_dir)
    except StarterError as e:
        exit_with_error(e)

    if status.installed_revision is None:
        click.echo(click.style("⚠️  ", fg="yellow") + "Starter configs not installed")
        click.echo("   Run 'agentic-starter install' to install them")
    else:
        click.echo(f"Installed revision: {status.installed_revision}")

    if status.domain_packs:
        click.echo("Domain packs:")
        for name in status.domain_packs:
            click.echo(f"  skills/{name}/")
    else:
        click.echo("Domain packs: (none)")
