"""Tests for installation planning."""

from pathlib import Path

from agentic_starter.artifacts.planner import plan_installation
from tests.tree_helpers import make_reference_snapshot, snapshot_tree, write_files


def test_plan_fresh_target_is_all_new(tmp_path: Path, tmp_project: Path) -> None:
    """Every eligible artifact is NEW when nothing is installed."""
    snapshot = make_reference_snapshot(tmp_path / "starter")

    plan = plan_installation(snapshot, tmp_project / ".claude", frozenset())

    assert [e.artifact.relative_path for e in plan.entries] == [
        "agents/reviewer.md",
        "agents/tester.md",
        "skills/brainstorm",
        "skills/commit",
    ]
    assert {e.classification for e in plan.entries} == {"new"}


def test_plan_without_domains_skips_every_domain_pack(tmp_path: Path, tmp_project: Path) -> None:
    """No domain pack is planned when no domain is requested."""
    snapshot = make_reference_snapshot(tmp_path / "starter")

    plan = plan_installation(snapshot, tmp_project / ".claude", frozenset())

    assert not any(e.artifact.name.startswith("domain:") for e in plan.entries)
    assert sorted(plan.skipped) == ["domain:python", "domain:rust"]


def test_plan_with_requested_domain(tmp_path: Path, tmp_project: Path) -> None:
    """Only the requested domain pack is planned."""
    snapshot = make_reference_snapshot(tmp_path / "starter")

    plan = plan_installation(snapshot, tmp_project / ".claude", frozenset({"rust"}))

    names = [e.artifact.name for e in plan.entries]
    assert "domain:rust" in names
    assert "domain:python" not in names
    assert plan.skipped == ("domain:python",)
    assert plan.unknown_domains == frozenset()


def test_plan_reports_unknown_domains(tmp_path: Path, tmp_project: Path) -> None:
    """Requested domains without a pack are reported, not fatal."""
    snapshot = make_reference_snapshot(tmp_path / "starter")

    plan = plan_installation(snapshot, tmp_project / ".claude", frozenset({"rust", "go"}))

    assert plan.unknown_domains == frozenset({"go"})


def test_plan_classifies_against_target(tmp_path: Path, tmp_project: Path) -> None:
    """Installed artifacts are compared byte for byte."""
    snapshot = make_reference_snapshot(tmp_path / "starter")
    write_files(
        tmp_project / ".claude",
        {
            "agents/reviewer.md": "# Reviewer agent\n",
            "agents/tester.md": "# Locally edited\n",
        },
    )

    plan = plan_installation(snapshot, tmp_project / ".claude", frozenset())

    by_path = {e.artifact.relative_path: e.classification for e in plan.entries}
    assert by_path["agents/reviewer.md"] == "unchanged"
    assert by_path["agents/tester.md"] == "updated"
    assert by_path["skills/commit"] == "new"


def test_plan_target_paths(tmp_path: Path, tmp_project: Path) -> None:
    """Target paths mirror the reference layout under the target .claude/."""
    snapshot = make_reference_snapshot(tmp_path / "starter")

    plan = plan_installation(snapshot, tmp_project / ".claude", frozenset({"rust"}))

    targets = {e.artifact.name: e.target_path for e in plan.entries}
    assert targets["tester.md"] == tmp_project / ".claude" / "agents" / "tester.md"
    assert targets["domain:rust"] == tmp_project / ".claude" / "skills" / "domain:rust"


def test_plan_does_not_write(tmp_path: Path, tmp_project: Path) -> None:
    """Planning leaves both trees untouched."""
    snapshot = make_reference_snapshot(tmp_path / "starter")
    before = snapshot_tree(tmp_path)

    plan_installation(snapshot, tmp_project / ".claude", frozenset({"rust"}))

    assert snapshot_tree(tmp_path) == before
    assert not (tmp_project / ".claude").exists()


def test_plan_empty_snapshot(tmp_path: Path, tmp_project: Path) -> None:
    """A snapshot without agents/ or skills/ plans nothing."""
    snapshot = tmp_path / "starter" / ".claude"
    snapshot.mkdir(parents=True)

    plan = plan_installation(snapshot, tmp_project / ".claude", frozenset())

    assert plan.entries == ()
    assert plan.skipped == ()
