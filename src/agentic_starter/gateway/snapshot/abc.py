"""Abstract base class for reference snapshot retrieval."""

from abc import ABC, abstractmethod
from pathlib import Path

from agentic_starter.gateway.snapshot.types import Snapshot


class SnapshotSource(ABC):
    """Abstract interface for fetching the reference configuration tree.

    The installer core only needs a complete tree and a stable revision
    identifier; how they are obtained is up to the implementation.

    Two implementations:
    - RealSnapshotSource: Production - shallow git clone of the starter repo
    - FakeSnapshotSource: Testing - returns a prepared directory, no network
    """

    @abstractmethod
    def fetch(self, repo_url: str, ref: str | None, dest: Path) -> Snapshot:
        """Fetch the reference tree into dest.

        Args:
            repo_url: Repository holding the reference .claude/ directory
            ref: Branch or tag to fetch, or None for the default branch
            dest: Empty scratch directory owned (and later removed) by the caller

        Returns:
            Snapshot whose root is the reference .claude/ directory

        Raises:
            PreconditionFailure: If a required external tool is missing
            RetrievalFailure: If the snapshot could not be obtained
        """
        ...
