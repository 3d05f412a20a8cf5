"""Install command."""

from pathlib import Path

import click

from agentic_starter.artifacts.domains import parse_domains
from agentic_starter.cli.errors import exit_with_error
from agentic_starter.cli.report import display_outcome
from agentic_starter.core.context import StarterContext
from agentic_starter.core.install import InstallRequest, run_install
from agentic_starter.errors import StarterError


@click.command("install")
@click.option(
    "--target",
    type=click.Path(path_type=Path),
    default=None,
    help="Project directory to install into (default: current directory)",
)
@click.option(
    "--domains",
    default=None,
    help="Comma-separated domain packs to include, e.g. rust,python",
)
@click.option("--dry-run", is_flag=True, help="Show what would be done without making changes")
@click.option("--force", is_flag=True, help="Reinstall even if the revision is already installed")
@click.option("--repo", "repo_url", default=None, help="Starter repository to install from")
@click.option("--ref", default=None, help="Branch or tag of the starter repository")
@click.option("--verbose", "-v", is_flag=True, help="Also list unchanged artifacts")
@click.pass_obj
def install_cmd(
    ctx: StarterContext,
    target: Path | None,
    domains: str | None,
    dry_run: bool,
    force: bool,
    repo_url: str | None,
    ref: str | None,
    verbose: bool,
) -> None:
    """Install .claude/ configs (skills, agents, settings) into a project.

    Fetches the starter repository, copies new and changed skills and agents,
    merges settings.json (your overrides are preserved) and adds the
    brainstorm plans directory to .gitignore.

    Domain packs (skills named domain:<name>) are only installed when
    requested with --domains.

    Examples:

    \b
      # Install into the current directory
      agentic-starter install

    \b
      # Preview an install with the rust domain pack
      agentic-starter install --target ~/Projects/my-app --domains rust --dry-run
    """
    request = InstallRequest(
        target=target if target is not None else ctx.cwd,
        domains=parse_domains(domains) if domains is not None else ctx.config.domains,
        dry_run=dry_run,
        force=force,
        repo_url=repo_url if repo_url is not None else ctx.config.repo_url,
        ref=ref if ref is not None else ctx.config.ref,
    )

    try:
        outcome = run_install(ctx, request)
    except StarterError as e:
        exit_with_error(e)

    display_outcome(outcome, verbose=verbose)
