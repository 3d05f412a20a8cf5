"""Real implementation of SnapshotSource - shallow git clone."""

import logging
import shutil
import subprocess
from pathlib import Path

from agentic_starter.errors import PreconditionFailure, RetrievalFailure
from agentic_starter.gateway.snapshot.abc import SnapshotSource
from agentic_starter.gateway.snapshot.types import Snapshot

logger = logging.getLogger(__name__)


def _run_git(args: list[str], cwd: Path | None) -> str:
    logger.debug("Running: git %s", " ".join(args))
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=False,
    )
    if result.returncode != 0:
        stderr = result.stderr.strip() or f"exit code {result.returncode}"
        raise RetrievalFailure(f"git {args[0]} failed: {stderr}")
    return result.stdout.strip()


class RealSnapshotSource(SnapshotSource):
    """Production implementation - clones the starter repository at depth 1."""

    def fetch(self, repo_url: str, ref: str | None, dest: Path) -> Snapshot:
        if shutil.which("git") is None:
            raise PreconditionFailure("git is required. Please install git first.")

        checkout = dest / "starter"
        clone_args = ["clone", "--depth", "1", "--quiet"]
        if ref is not None:
            clone_args.extend(["--branch", ref])
        clone_args.extend([repo_url, str(checkout)])
        _run_git(clone_args, cwd=None)

        revision = _run_git(["rev-parse", "HEAD"], cwd=checkout)

        claude_dir = checkout / ".claude"
        if not claude_dir.is_dir():
            raise RetrievalFailure(f"No .claude/ directory in {repo_url} at {revision}")

        return Snapshot(root=claude_dir, revision=revision)
