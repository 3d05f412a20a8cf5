"""Revision marker I/O for .claude/.starter-revision."""

from pathlib import Path

from agentic_starter.artifacts.models import RevisionCheckResult, RevisionReason
from agentic_starter.errors import IOFailure

REVISION_MARKER_FILENAME = ".starter-revision"


def get_revision_marker_path(project_dir: Path) -> Path:
    """Get path to the revision marker file."""
    return project_dir / ".claude" / REVISION_MARKER_FILENAME


def load_installed_revision(project_dir: Path) -> str | None:
    """Load the last installed revision.

    Returns None if the marker does not exist or is blank.

    Raises:
        IOFailure: If the marker exists but cannot be read as UTF-8 text
    """
    path = get_revision_marker_path(project_dir)
    if not path.exists():
        return None
    try:
        revision = path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        raise IOFailure(f"Could not read revision marker {path}: {e}") from e
    if not revision:
        return None
    return revision


def save_installed_revision(project_dir: Path, revision: str) -> None:
    """Overwrite the marker with exactly the revision string."""
    path = get_revision_marker_path(project_dir)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(revision, encoding="utf-8")
    except OSError as e:
        raise IOFailure(f"Could not write revision marker {path}: {e}") from e


def check_revision(project_dir: Path, current_revision: str) -> RevisionCheckResult:
    """Decide whether project_dir needs reconciling against a fetched revision.

    Only an exact string match with the marker counts as up to date; a missing
    or blank marker always means a full install.
    """
    installed = load_installed_revision(project_dir)

    reason: RevisionReason
    if installed is None:
        reason = "not-installed"
    elif installed != current_revision:
        reason = "revision-mismatch"
    else:
        reason = "up-to-date"

    return RevisionCheckResult(
        is_stale=reason != "up-to-date",
        reason=reason,
        current_revision=current_revision,
        installed_revision=installed,
    )
