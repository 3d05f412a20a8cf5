"""Build an installation plan by comparing a snapshot with a target."""

import logging
from pathlib import Path

from agentic_starter.artifacts.comparison import classify
from agentic_starter.artifacts.discovery import discover_agents, discover_skills
from agentic_starter.artifacts.domains import is_eligible
from agentic_starter.artifacts.models import CATEGORY_DIRS, InstallationPlan, PlanEntry

logger = logging.getLogger(__name__)


def plan_installation(
    snapshot_root: Path,
    target_root: Path,
    requested_domains: frozenset[str],
) -> InstallationPlan:
    """Plan how to bring target_root in line with snapshot_root.

    Reads both trees and writes nothing.

    Args:
        snapshot_root: The reference .claude/ directory
        target_root: The target project's .claude/ directory (may not exist)
        requested_domains: Domains whose `domain:<name>` skill packs to include

    Returns:
        InstallationPlan with one entry per eligible artifact, agents first
    """
    entries: list[PlanEntry] = []
    skipped: list[str] = []

    skills = discover_skills(snapshot_root)
    available_domains = {skill.domain for skill in skills if skill.domain is not None}

    for artifact in discover_agents(snapshot_root) + skills:
        if not is_eligible(artifact.name, requested_domains):
            logger.debug("Skipping %s (domain not requested)", artifact.relative_path)
            skipped.append(artifact.name)
            continue

        target_path = target_root / CATEGORY_DIRS[artifact.category] / artifact.name
        classification = classify(artifact, target_path)
        logger.debug("%s: %s", artifact.relative_path, classification)
        entries.append(
            PlanEntry(artifact=artifact, classification=classification, target_path=target_path)
        )

    return InstallationPlan(
        entries=tuple(entries),
        skipped=tuple(skipped),
        unknown_domains=frozenset(requested_domains - available_domains),
    )
