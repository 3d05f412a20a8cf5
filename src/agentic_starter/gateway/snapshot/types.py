"""Types for snapshot retrieval."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Snapshot:
    """A fetched reference configuration tree.

    Attributes:
        root: The reference .claude/ directory (read-only for callers)
        revision: Identifier of exactly this tree state (e.g. a commit SHA)
    """

    root: Path
    revision: str
