"""agentic-starter CLI entry point.

This package provides a Click-based CLI that installs the agentic coding
starter's .claude/ configs (skills, agents, settings) into a project.
See `agentic-starter --help` for details.
"""

from agentic_starter.cli.cli import cli


def main() -> None:
    """CLI entry point used by the `agentic-starter` console script."""
    cli()
