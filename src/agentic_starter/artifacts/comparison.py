"""Classify a reference artifact against its installed counterpart."""

from pathlib import Path

from agentic_starter.artifacts.models import Artifact, Classification


def _iter_files(directory: Path) -> list[Path]:
    """All regular files under directory, relative to it, in stable order."""
    return sorted(p.relative_to(directory) for p in directory.rglob("*") if p.is_file())


def _same_bytes(source: Path, target: Path) -> bool:
    if not target.is_file():
        return False
    return source.read_bytes() == target.read_bytes()


def classify_file(source: Path, target: Path) -> Classification:
    """Classify a single file: NEW when absent, else byte-for-byte comparison."""
    if not target.exists():
        return "new"
    if _same_bytes(source, target):
        return "unchanged"
    return "updated"


def classify_directory(source: Path, target: Path) -> Classification:
    """Classify a directory subtree.

    The reference subtree is the universe: files that exist only in the target
    are not inspected. Any missing or differing file makes the whole directory
    UPDATED.
    """
    if not target.is_dir():
        return "new"
    for relative in _iter_files(source):
        if not _same_bytes(source / relative, target / relative):
            return "updated"
    return "unchanged"


def classify(artifact: Artifact, target_path: Path) -> Classification:
    """Classify an artifact relative to what is installed at target_path.

    Reads only; never modifies either tree.
    """
    if artifact.kind == "file":
        return classify_file(artifact.source_path, target_path)
    return classify_directory(artifact.source_path, target_path)
