"""Apply an installation plan to a target project."""

import logging
import shutil
from pathlib import Path

from agentic_starter.artifacts.models import (
    CATEGORY_DIRS,
    CategoryCounts,
    ExecutionReport,
    GitignoreAction,
    InstallationPlan,
    PlanEntry,
    SettingsAction,
    SettingsMergeInputs,
)
from agentic_starter.artifacts.settings import SETTINGS_FILENAME, merge_settings, render_settings
from agentic_starter.artifacts.state import save_installed_revision
from agentic_starter.errors import IOFailure

logger = logging.getLogger(__name__)

GITIGNORE_ENTRY = ".brainstorm/"
GITIGNORE_COMMENT = "# Brainstorm plans (agentic-coding-starter)"


def _remove_path(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def _clear_blocking_parents(relative: Path, target_dir: Path) -> None:
    """Remove non-directories sitting where the parents of relative belong."""
    for parent in reversed(relative.parents):
        candidate = target_dir / parent
        if (candidate.is_symlink() or candidate.exists()) and not candidate.is_dir():
            _remove_path(candidate)


def _copy_directory_contents(source_dir: Path, target_dir: Path) -> int:
    """Copy directory contents recursively, returning count of files copied.

    Files that exist only in target_dir are left in place.
    """
    count = 0
    target_dir.mkdir(parents=True, exist_ok=True)
    for source_path in source_dir.rglob("*"):
        if source_path.is_file():
            relative = source_path.relative_to(source_dir)
            target_path = target_dir / relative
            _clear_blocking_parents(relative, target_dir)
            if target_path.is_dir() and not target_path.is_symlink():
                _remove_path(target_path)
            target_path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source_path, target_path)
            count += 1
    return count


def _apply_entry(entry: PlanEntry) -> None:
    """Copy one artifact into place, replacing a target of the wrong kind."""
    artifact = entry.artifact
    target = entry.target_path
    if artifact.kind == "file":
        if target.is_dir():
            _remove_path(target)
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(artifact.source_path, target)
    else:
        if target.exists() and not target.is_dir():
            _remove_path(target)
        _copy_directory_contents(artifact.source_path, target)


def _apply_settings(
    inputs: SettingsMergeInputs, settings_path: Path, *, dry_run: bool
) -> SettingsAction | None:
    """Merge settings and persist them unless dry_run.

    The merge always runs so a dry run reports the same action as a real run.
    """
    if inputs.reference is None:
        logger.debug("Snapshot has no %s; leaving local settings alone", SETTINGS_FILENAME)
        return None

    merged = merge_settings(inputs.reference, inputs.local)
    content = render_settings(merged)

    action: SettingsAction
    if inputs.local_bytes is None:
        action = "new"
    elif content == inputs.local_bytes:
        action = "unchanged"
    else:
        action = "merge"
    logger.debug("settings.json: %s", action)

    if not dry_run and action != "unchanged":
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        settings_path.write_bytes(content)
    return action


def _has_gitignore_entry(content: bytes) -> bool:
    entry = GITIGNORE_ENTRY.encode("utf-8")
    return any(line.strip() == entry for line in content.splitlines())


def update_gitignore(project_dir: Path, *, dry_run: bool) -> GitignoreAction:
    """Make sure the project's .gitignore ignores the brainstorm plans directory.

    The file is handled as bytes, so content in any encoding is kept as is.
    Returns what was (or, for a dry run, would be) done.
    """
    gitignore = project_dir / ".gitignore"
    block = f"{GITIGNORE_COMMENT}\n{GITIGNORE_ENTRY}\n".encode("utf-8")

    if not gitignore.exists():
        if not dry_run:
            gitignore.write_bytes(block)
        return "created"

    content = gitignore.read_bytes()
    if _has_gitignore_entry(content):
        return "present"

    if not dry_run:
        addition = block
        if content:
            prefix = b"" if content.endswith(b"\n") else b"\n"
            addition = prefix + b"\n" + block
        with gitignore.open("ab") as f:
            f.write(addition)
    return "appended"


def execute_plan(
    plan: InstallationPlan,
    settings_inputs: SettingsMergeInputs,
    project_dir: Path,
    revision: str,
    *,
    dry_run: bool,
) -> ExecutionReport:
    """Apply a plan to project_dir.

    Copies NEW and UPDATED artifacts, merges settings.json, updates .gitignore
    and finally records the revision. With dry_run every decision is still made
    but nothing is written.

    Raises:
        IOFailure: If any read or write at the target fails. Artifacts copied
            before the failure stay in place and the revision is not recorded.
    """
    counts = {category: CategoryCounts() for category in CATEGORY_DIRS}

    try:
        for entry in plan.entries:
            counts[entry.artifact.category].add(entry.classification)
            if entry.classification in ("new", "updated") and not dry_run:
                logger.debug("Copying %s -> %s", entry.artifact.relative_path, entry.target_path)
                _apply_entry(entry)

        settings_path = project_dir / ".claude" / SETTINGS_FILENAME
        settings_action = _apply_settings(settings_inputs, settings_path, dry_run=dry_run)
        gitignore_action = update_gitignore(project_dir, dry_run=dry_run)
    except OSError as e:
        raise IOFailure(f"Install failed: {e}") from e

    if not dry_run:
        save_installed_revision(project_dir, revision)

    return ExecutionReport(
        counts=counts,
        settings_action=settings_action,
        gitignore_action=gitignore_action,
        revision_written=not dry_run,
        dry_run=dry_run,
    )
