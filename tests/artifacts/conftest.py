"""Fixtures for artifacts tests."""

from pathlib import Path

import pytest


@pytest.fixture
def tmp_project(tmp_path: Path) -> Path:
    """A target project directory, separate from any reference snapshot."""
    project = tmp_path / "project"
    project.mkdir()
    return project
