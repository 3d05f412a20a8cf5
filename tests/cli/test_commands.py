"""Tests for the install and status commands."""

from pathlib import Path

from click.testing import CliRunner

from agentic_starter.artifacts.state import load_installed_revision, save_installed_revision
from agentic_starter.cli.cli import cli
from agentic_starter.cli.config import StarterConfig
from agentic_starter.core.context import StarterContext
from agentic_starter.errors import RetrievalFailure
from agentic_starter.gateway.snapshot.fake import FakeSnapshotSource
from tests.tree_helpers import make_reference_snapshot, snapshot_tree, write_files


def _setup(tmp_path: Path, *, config: StarterConfig | None = None) -> tuple[Path, StarterContext]:
    project = tmp_path / "project"
    project.mkdir()
    source = FakeSnapshotSource(
        root=make_reference_snapshot(tmp_path / "starter"), revision="abc123def4567890"
    )
    ctx = StarterContext(
        cwd=project,
        config=config if config is not None else StarterConfig.default(),
        snapshot_source=source,
    )
    return project, ctx


class TestInstallCommand:
    """Tests for agentic-starter install."""

    def test_install_into_cwd(self, tmp_path: Path) -> None:
        """Installs into the context's working directory by default."""
        project, ctx = _setup(tmp_path)

        result = CliRunner().invoke(cli, ["install"], obj=ctx)

        assert result.exit_code == 0, result.output
        assert "Setup complete!" in result.output
        assert "add      agents/reviewer.md" in result.output
        assert "settings.json: created" in result.output
        assert load_installed_revision(project) == "abc123def4567890"

    def test_install_dry_run(self, tmp_path: Path) -> None:
        """Dry run prints the plan and changes nothing."""
        project, ctx = _setup(tmp_path)

        result = CliRunner().invoke(cli, ["install", "--dry-run"], obj=ctx)

        assert result.exit_code == 0, result.output
        assert "Dry run complete. No changes were made." in result.output
        assert "skills/commit/" in result.output
        assert snapshot_tree(project) == {}

    def test_install_with_domains(self, tmp_path: Path) -> None:
        """--domains opts into the named domain packs."""
        project, ctx = _setup(tmp_path)

        result = CliRunner().invoke(cli, ["install", "--domains", "rust"], obj=ctx)

        assert result.exit_code == 0, result.output
        assert (project / ".claude" / "skills" / "domain:rust").is_dir()
        assert not (project / ".claude" / "skills" / "domain:python").exists()
        assert "Skipped 1 domain pack(s)" in result.output

    def test_config_domains_used_when_flag_missing(self, tmp_path: Path) -> None:
        """Domains from config.toml apply unless --domains is given."""
        config = StarterConfig(
            repo_url="https://example.com/fork.git", ref=None, domains=frozenset({"python"})
        )
        project, ctx = _setup(tmp_path, config=config)

        result = CliRunner().invoke(cli, ["install"], obj=ctx)

        assert result.exit_code == 0, result.output
        assert (project / ".claude" / "skills" / "domain:python").is_dir()
        assert ctx.snapshot_source.fetch_calls == [("https://example.com/fork.git", None)]

    def test_repo_and_ref_flags_override_config(self, tmp_path: Path) -> None:
        """--repo and --ref replace configured values."""
        _, ctx = _setup(tmp_path)

        result = CliRunner().invoke(
            cli,
            ["install", "--repo", "https://example.com/other.git", "--ref", "v1"],
            obj=ctx,
        )

        assert result.exit_code == 0, result.output
        assert ctx.snapshot_source.fetch_calls == [("https://example.com/other.git", "v1")]

    def test_unknown_domain_warns(self, tmp_path: Path) -> None:
        """A requested domain without a pack is reported."""
        _, ctx = _setup(tmp_path)

        result = CliRunner().invoke(cli, ["install", "--domains", "cobol"], obj=ctx)

        assert result.exit_code == 0, result.output
        assert "No domain pack for: cobol" in result.output

    def test_install_up_to_date(self, tmp_path: Path) -> None:
        """A matching revision exits 0 without changes."""
        project, ctx = _setup(tmp_path)
        save_installed_revision(project, "abc123def4567890")

        result = CliRunner().invoke(cli, ["install"], obj=ctx)

        assert result.exit_code == 0, result.output
        assert "Already up to date (revision abc123def456)" in result.output
        assert not (project / ".claude" / "agents").exists()

    def test_install_explicit_target(self, tmp_path: Path) -> None:
        """--target installs somewhere other than the working directory."""
        _, ctx = _setup(tmp_path)
        other = tmp_path / "other"
        other.mkdir()

        result = CliRunner().invoke(cli, ["install", "--target", str(other)], obj=ctx)

        assert result.exit_code == 0, result.output
        assert (other / ".claude" / "agents" / "tester.md").exists()

    def test_install_missing_target_fails(self, tmp_path: Path) -> None:
        """A missing target exits 1 with an error."""
        _, ctx = _setup(tmp_path)

        result = CliRunner().invoke(
            cli, ["install", "--target", str(tmp_path / "missing")], obj=ctx
        )

        assert result.exit_code == 1
        assert "Error: Target directory does not exist" in result.output

    def test_install_retrieval_failure(self, tmp_path: Path) -> None:
        """Retrieval failures exit 1."""
        project = tmp_path / "project"
        project.mkdir()
        ctx = StarterContext(
            cwd=project,
            config=StarterConfig.default(),
            snapshot_source=FakeSnapshotSource(
                root=tmp_path, revision="x", error=RetrievalFailure("git clone failed: boom")
            ),
        )

        result = CliRunner().invoke(cli, ["install"], obj=ctx)

        assert result.exit_code == 1
        assert "Error: git clone failed: boom" in result.output

    def test_install_reports_stale_packs(self, tmp_path: Path) -> None:
        """Stale domain packs are warned about and left in place."""
        project, ctx = _setup(tmp_path)
        write_files(project / ".claude" / "skills", {"domain:go/SKILL.md": "# Go\n"})

        result = CliRunner().invoke(cli, ["install"], obj=ctx)

        assert result.exit_code == 0, result.output
        assert "Found 1 stale domain pack(s)" in result.output
        assert "skills/domain:go/" in result.output
        assert (project / ".claude" / "skills" / "domain:go").is_dir()

    def test_install_reports_stale_agent_under_agents(self, tmp_path: Path) -> None:
        """A stale domain-tagged agent file is listed with its own path."""
        project, ctx = _setup(tmp_path)
        write_files(project / ".claude" / "agents", {"domain:go.md": "# Go agent\n"})

        result = CliRunner().invoke(cli, ["install"], obj=ctx)

        assert result.exit_code == 0, result.output
        assert "- agents/domain:go.md" in result.output
        assert "skills/domain:go.md" not in result.output

    def test_install_with_non_utf8_gitignore(self, tmp_path: Path) -> None:
        """A .gitignore in another encoding does not break the install."""
        project, ctx = _setup(tmp_path)
        (project / ".gitignore").write_bytes(b"caf\xe9/\n")

        result = CliRunner().invoke(cli, ["install"], obj=ctx)

        assert result.exit_code == 0, result.output
        assert ".gitignore: added .brainstorm/" in result.output
        assert (project / ".gitignore").read_bytes().startswith(b"caf\xe9/\n")
        assert load_installed_revision(project) == "abc123def4567890"

    def test_install_unreadable_marker_fails_cleanly(self, tmp_path: Path) -> None:
        """An undecodable revision marker exits 1 with an error message."""
        project, ctx = _setup(tmp_path)
        write_files(project / ".claude", {"agents/reviewer.md": "# Reviewer agent\n"})
        (project / ".claude" / ".starter-revision").write_bytes(b"\xff\xfe")

        result = CliRunner().invoke(cli, ["install"], obj=ctx)

        assert result.exit_code == 1
        assert "Error: Could not read revision marker" in result.output

    def test_verbose_lists_unchanged(self, tmp_path: Path) -> None:
        """Unchanged artifacts are summarized unless --verbose is given."""
        project, ctx = _setup(tmp_path)
        runner = CliRunner()
        runner.invoke(cli, ["install"], obj=ctx)

        quiet = runner.invoke(cli, ["install", "--force"], obj=ctx)
        verbose = runner.invoke(cli, ["install", "--force", "--verbose"], obj=ctx)

        assert "... 2 unchanged" in quiet.output
        assert "same     agents/reviewer.md" in verbose.output


class TestStatusCommand:
    """Tests for agentic-starter status."""

    def test_status_not_installed(self, tmp_path: Path) -> None:
        """Reports a missing install."""
        _, ctx = _setup(tmp_path)

        result = CliRunner().invoke(cli, ["status"], obj=ctx)

        assert result.exit_code == 0
        assert "Starter configs not installed" in result.output

    def test_status_installed(self, tmp_path: Path) -> None:
        """Shows the revision and domain packs."""
        project, ctx = _setup(tmp_path)
        save_installed_revision(project, "abc123")
        write_files(project / ".claude" / "skills", {"domain:rust/SKILL.md": "r"})

        result = CliRunner().invoke(cli, ["status"], obj=ctx)

        assert result.exit_code == 0
        assert "Installed revision: abc123" in result.output
        assert "skills/domain:rust/" in result.output

    def test_status_missing_target(self, tmp_path: Path) -> None:
        _, ctx = _setup(tmp_path)

        result = CliRunner().invoke(cli, ["status", "--target", str(tmp_path / "nope")], obj=ctx)

        assert result.exit_code == 1
        assert "does not exist" in result.output
