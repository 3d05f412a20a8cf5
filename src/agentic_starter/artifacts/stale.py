"""Detect installed domain packs that the reference snapshot no longer ships."""

from collections.abc import Iterable

from agentic_starter.artifacts.domains import is_domain_tagged


def find_stale(
    installed_names: Iterable[str], reference_names: Iterable[str]
) -> frozenset[str]:
    """Find installed domain-tagged artifacts missing from the reference tree.

    Untagged artifacts are never reported: they may be the project's own.
    Stale artifacts are only reported, never removed.

    Args:
        installed_names: Artifact names present in the target's .claude/
        reference_names: Artifact names present in the full reference snapshot

    Returns:
        Names of stale artifacts
    """
    reference = frozenset(reference_names)
    return frozenset(
        name for name in installed_names if is_domain_tagged(name) and name not in reference
    )
