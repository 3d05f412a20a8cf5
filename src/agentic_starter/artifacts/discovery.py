"""Discover artifacts in a .claude/ directory (reference snapshot or target)."""

from pathlib import Path

from agentic_starter.artifacts.domains import parse_domain_tag
from agentic_starter.artifacts.models import Artifact


def _visible_children(directory: Path) -> list[Path]:
    if not directory.is_dir():
        return []
    return sorted(
        (child for child in directory.iterdir() if not child.name.startswith(".")),
        key=lambda p: p.name,
    )


def discover_agents(claude_dir: Path) -> list[Artifact]:
    """Discover agents in .claude/agents/ directory.

    Pattern: agents/<agent-file> (flat files, never domain-tagged)
    """
    return [
        Artifact(
            name=agent_file.name,
            category="agent",
            kind="file",
            source_path=agent_file,
            domain=None,
        )
        for agent_file in _visible_children(claude_dir / "agents")
        if agent_file.is_file()
    ]


def discover_skills(claude_dir: Path) -> list[Artifact]:
    """Discover skills in .claude/skills/ directory.

    Pattern: skills/<skill-name>/ where skill-name may be `domain:<name>`
    """
    return [
        Artifact(
            name=skill_dir.name,
            category="skill",
            kind="directory",
            source_path=skill_dir,
            domain=parse_domain_tag(skill_dir.name),
        )
        for skill_dir in _visible_children(claude_dir / "skills")
        if skill_dir.is_dir()
    ]


def discover_artifacts(claude_dir: Path) -> list[Artifact]:
    """Scan a .claude/ directory and return agents followed by skills."""
    return discover_agents(claude_dir) + discover_skills(claude_dir)


def list_artifact_names(claude_dir: Path) -> frozenset[str]:
    """Names of every agent file and skill directory under claude_dir."""
    return frozenset(artifact.name for artifact in discover_artifacts(claude_dir))
