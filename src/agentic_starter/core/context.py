"""Application context with dependency injection."""

from dataclasses import dataclass
from pathlib import Path

import click

from agentic_starter.cli.config import StarterConfig, load_config
from agentic_starter.gateway.snapshot.abc import SnapshotSource
from agentic_starter.gateway.snapshot.real import RealSnapshotSource

APP_NAME = "agentic-starter"


@dataclass(frozen=True)
class StarterContext:
    """Immutable context holding all dependencies for installer operations.

    Created at CLI entry point and threaded through the application.
    Tests construct it directly with a FakeSnapshotSource.
    """

    cwd: Path
    config: StarterConfig
    snapshot_source: SnapshotSource


def get_config_dir() -> Path:
    """Directory holding the user's config.toml (platform-specific app dir)."""
    return Path(click.get_app_dir(APP_NAME))


def create_context() -> StarterContext:
    """Create the production context from the current directory and user config."""
    return StarterContext(
        cwd=Path.cwd(),
        config=load_config(get_config_dir()),
        snapshot_source=RealSnapshotSource(),
    )
