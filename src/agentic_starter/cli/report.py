"""Render install outcomes for the terminal."""

import click

from agentic_starter.artifacts.executor import GITIGNORE_ENTRY
from agentic_starter.artifacts.models import (
    Artifact,
    ArtifactCategory,
    InstallationPlan,
    PlanEntry,
)
from agentic_starter.core.install import InstallOutcome

_CATEGORY_TITLES: dict[ArtifactCategory, str] = {
    "agent": "Agents",
    "skill": "Skills",
}

_LABELS = {
    "new": ("add", "green"),
    "updated": ("update", "yellow"),
    "unchanged": ("same", None),
}


def _short_revision(revision: str) -> str:
    return revision[:12]


def _display_path(artifact: Artifact) -> str:
    suffix = "/" if artifact.kind == "directory" else ""
    return f"{artifact.relative_path}{suffix}"


def _entry_line(entry: PlanEntry) -> str:
    text, color = _LABELS[entry.classification]
    label = click.style(f"{text:<8}", fg=color, dim=True if color is None else None)
    return f"  {label} {_display_path(entry.artifact)}"


def _display_plan(plan: InstallationPlan, *, verbose: bool) -> None:
    for category, title in _CATEGORY_TITLES.items():
        entries = plan.entries_for(category)
        click.echo(click.style(f"{title}:", bold=True))
        if not entries:
            click.echo("  (none)")
            continue
        shown = [e for e in entries if verbose or e.classification != "unchanged"]
        for entry in shown:
            click.echo(_entry_line(entry))
        hidden = len(entries) - len(shown)
        if hidden:
            click.echo(click.style(f"  ... {hidden} unchanged", dim=True))

    if plan.skipped:
        click.echo(
            f"  Skipped {len(plan.skipped)} domain pack(s); use --domains to include them"
        )
    if plan.unknown_domains:
        names = ", ".join(sorted(plan.unknown_domains))
        click.echo(click.style("⚠️  ", fg="yellow") + f"No domain pack for: {names}")


def display_outcome(outcome: InstallOutcome, *, verbose: bool) -> None:
    """Print a human-readable summary of an install run."""
    click.echo(click.style("Agentic Coding Starter setup", bold=True))
    click.echo(f"Target: {outcome.target}")

    if outcome.status == "up-to-date":
        click.echo(
            click.style("✓ ", fg="green")
            + f"Already up to date (revision {_short_revision(outcome.revision)})"
        )
        click.echo("   Use --force to reinstall anyway")
        return

    previous = (
        _short_revision(outcome.previous_revision)
        if outcome.previous_revision is not None
        else "not installed"
    )
    click.echo(f"Revision: {_short_revision(outcome.revision)} (installed: {previous})")
    click.echo("")

    plan = outcome.plan
    report = outcome.report
    if plan is None or report is None:
        return
    _display_plan(plan, verbose=verbose)

    click.echo("")
    for category, title in _CATEGORY_TITLES.items():
        counts = report.counts[category]
        click.echo(
            f"{title}: {counts.new} new, {counts.updated} updated, {counts.unchanged} unchanged"
        )

    if report.settings_action == "new":
        click.echo("settings.json: created")
    elif report.settings_action == "merge":
        click.echo("settings.json: merged (your overrides preserved)")
    elif report.settings_action == "unchanged":
        click.echo("settings.json: unchanged")

    if report.gitignore_action == "created":
        click.echo(f".gitignore: created with {GITIGNORE_ENTRY} entry")
    elif report.gitignore_action == "appended":
        click.echo(f".gitignore: added {GITIGNORE_ENTRY}")

    if outcome.stale:
        click.echo("")
        click.echo(
            click.style("⚠️  ", fg="yellow")
            + f"Found {len(outcome.stale)} stale domain pack(s) no longer in the starter:"
        )
        for artifact in sorted(outcome.stale, key=lambda a: a.relative_path):
            click.echo(f"     - {_display_path(artifact)}")
        click.echo("   They were left in place. Remove them manually if unused.")

    click.echo("")
    if report.dry_run:
        click.echo(click.style("Dry run complete. No changes were made.", fg="yellow"))
    else:
        click.echo(click.style("✓ Setup complete!", fg="green", bold=True))
