"""Fake implementation of SnapshotSource for testing."""

from pathlib import Path

from agentic_starter.errors import RetrievalFailure
from agentic_starter.gateway.snapshot.abc import SnapshotSource
from agentic_starter.gateway.snapshot.types import Snapshot


class FakeSnapshotSource(SnapshotSource):
    """Test implementation - serves a prepared directory, never touches the network.

    Usage:
        source = FakeSnapshotSource(root=tmp_path / "starter" / ".claude", revision="abc123")
        ctx = StarterContext(cwd=project, config=StarterConfig.default(), snapshot_source=source)

        # Verify retrieval in tests
        assert source.fetch_calls == [("https://...", None)]
    """

    def __init__(
        self,
        root: Path,
        revision: str,
        *,
        error: RetrievalFailure | None = None,
    ) -> None:
        """Initialize the fake.

        Args:
            root: Directory returned as the snapshot's .claude/ root
            revision: Revision identifier reported for the snapshot
            error: If set, fetch() raises it instead of returning a snapshot
        """
        self._root = root
        self._revision = revision
        self._error = error
        self._fetch_calls: list[tuple[str, str | None]] = []

    def fetch(self, repo_url: str, ref: str | None, dest: Path) -> Snapshot:
        self._fetch_calls.append((repo_url, ref))
        if self._error is not None:
            raise self._error
        return Snapshot(root=self._root, revision=self._revision)

    @property
    def fetch_calls(self) -> list[tuple[str, str | None]]:
        """Read-only access to (repo_url, ref) for each fetch, for test assertions."""
        return list(self._fetch_calls)
