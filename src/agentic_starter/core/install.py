"""Install orchestration: fetch, short-circuit, plan, execute, detect stale packs.

Phases run strictly in sequence. Everything that can fail before a write
(target validation, snapshot retrieval, comparison, reading settings) happens
before the executor starts, so those failures leave the target exactly as found.
"""

import logging
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from agentic_starter.artifacts.discovery import (
    discover_artifacts,
    discover_skills,
    list_artifact_names,
)
from agentic_starter.artifacts.executor import execute_plan
from agentic_starter.artifacts.models import (
    Artifact,
    ExecutionReport,
    InstallationPlan,
    SettingsMergeInputs,
)
from agentic_starter.artifacts.planner import plan_installation
from agentic_starter.artifacts.settings import (
    SETTINGS_FILENAME,
    decode_settings,
    load_settings,
    read_settings_bytes,
)
from agentic_starter.artifacts.stale import find_stale
from agentic_starter.artifacts.state import check_revision, load_installed_revision
from agentic_starter.core.context import StarterContext
from agentic_starter.errors import IOFailure, PreconditionFailure
from agentic_starter.gateway.snapshot.types import Snapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InstallRequest:
    """Validated inputs for one install run."""

    target: Path
    domains: frozenset[str]
    dry_run: bool
    force: bool
    repo_url: str
    ref: str | None


@dataclass(frozen=True)
class InstallOutcome:
    """Everything a caller needs to report on an install run.

    stale lists installed domain-tagged artifacts the reference no longer
    ships; they are reported and left in place.

    plan, report and stale are None when the run short-circuited because the
    target already has the snapshot's revision installed.
    """

    status: Literal["installed", "dry-run", "up-to-date"]
    target: Path
    revision: str
    previous_revision: str | None
    plan: InstallationPlan | None
    report: ExecutionReport | None
    stale: tuple[Artifact, ...] | None


@dataclass(frozen=True)
class InstallStatus:
    """Offline view of what is installed in a project."""

    installed_revision: str | None
    domain_packs: tuple[str, ...]


def resolve_target(target: Path) -> Path:
    """Resolve the target directory, failing if it is not an existing directory."""
    if not target.exists():
        raise PreconditionFailure(f"Target directory does not exist: {target}")
    if not target.is_dir():
        raise PreconditionFailure(f"Target is not a directory: {target}")
    return target.resolve()


def _read_settings_inputs(snapshot: Snapshot, project_dir: Path) -> SettingsMergeInputs:
    local_path = project_dir / ".claude" / SETTINGS_FILENAME
    local_bytes = read_settings_bytes(local_path)
    local = decode_settings(local_path, local_bytes) if local_bytes is not None else None
    return SettingsMergeInputs(
        reference=load_settings(snapshot.root / SETTINGS_FILENAME),
        local=local,
        local_bytes=local_bytes,
    )


def _find_stale_artifacts(target_claude_dir: Path, snapshot_root: Path) -> tuple[Artifact, ...]:
    try:
        installed = discover_artifacts(target_claude_dir)
        reference_names = list_artifact_names(snapshot_root)
    except OSError as e:
        raise IOFailure(f"Could not scan {target_claude_dir} for stale packs: {e}") from e
    stale_names = find_stale((a.name for a in installed), reference_names)
    return tuple(a for a in installed if a.name in stale_names)


def _reconcile(snapshot: Snapshot, request: InstallRequest, project_dir: Path) -> InstallOutcome:
    revision_check = check_revision(project_dir, snapshot.revision)
    previous_revision = revision_check.installed_revision

    if not revision_check.is_stale and not request.force:
        logger.debug("Revision %s already installed", snapshot.revision)
        return InstallOutcome(
            status="up-to-date",
            target=project_dir,
            revision=snapshot.revision,
            previous_revision=previous_revision,
            plan=None,
            report=None,
            stale=None,
        )

    target_claude_dir = project_dir / ".claude"
    try:
        plan = plan_installation(snapshot.root, target_claude_dir, request.domains)
    except OSError as e:
        raise IOFailure(f"Could not compare snapshot with {target_claude_dir}: {e}") from e
    settings_inputs = _read_settings_inputs(snapshot, project_dir)

    report = execute_plan(
        plan,
        settings_inputs,
        project_dir,
        snapshot.revision,
        dry_run=request.dry_run,
    )

    stale = _find_stale_artifacts(target_claude_dir, snapshot.root)

    return InstallOutcome(
        status="dry-run" if request.dry_run else "installed",
        target=project_dir,
        revision=snapshot.revision,
        previous_revision=previous_revision,
        plan=plan,
        report=report,
        stale=stale,
    )


def run_install(ctx: StarterContext, request: InstallRequest) -> InstallOutcome:
    """Install the reference configs into request.target.

    Raises:
        PreconditionFailure: If the target is unusable or a required tool is missing
        RetrievalFailure: If the snapshot could not be fetched
        IOFailure: If reading or writing the target fails
    """
    project_dir = resolve_target(request.target)

    with tempfile.TemporaryDirectory(prefix="agentic-starter-") as scratch:
        snapshot = ctx.snapshot_source.fetch(request.repo_url, request.ref, Path(scratch))
        logger.debug("Fetched %s at %s", request.repo_url, snapshot.revision)
        return _reconcile(snapshot, request, project_dir)


def read_status(project_dir: Path) -> InstallStatus:
    """Report the installed revision and installed domain packs without fetching.

    Raises:
        IOFailure: If the revision marker or the skills directory cannot be read
    """
    try:
        skills = discover_skills(project_dir / ".claude")
    except OSError as e:
        raise IOFailure(f"Could not read {project_dir / '.claude'}: {e}") from e
    return InstallStatus(
        installed_revision=load_installed_revision(project_dir),
        domain_packs=tuple(skill.name for skill in skills if skill.domain is not None),
    )
