"""Data models for artifact reconciliation."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

# Category of artifact based on directory structure in .claude/
ArtifactCategory = Literal["agent", "skill"]

# Agents are flat files, skills are directory subtrees
ArtifactKind = Literal["file", "directory"]

# How an incoming artifact relates to what is installed at the target.
# "stale" is advisory only and never appears in an installation plan.
Classification = Literal["new", "updated", "unchanged", "stale"]

RevisionReason = Literal["not-installed", "revision-mismatch", "up-to-date"]

SettingsAction = Literal["new", "merge", "unchanged"]
GitignoreAction = Literal["created", "appended", "present"]

CATEGORY_DIRS: dict[ArtifactCategory, str] = {
    "agent": "agents",
    "skill": "skills",
}


@dataclass(frozen=True)
class Artifact:
    """An installable unit taken from the reference snapshot."""

    name: str
    category: ArtifactCategory
    kind: ArtifactKind
    source_path: Path
    # Domain parsed from a `domain:<name>` artifact name (None if untagged)
    domain: str | None

    @property
    def relative_path(self) -> str:
        """Path relative to the .claude/ directory, e.g. "skills/commit"."""
        return f"{CATEGORY_DIRS[self.category]}/{self.name}"


@dataclass(frozen=True)
class PlanEntry:
    """One planned action: an artifact, how it compares, and where it goes."""

    artifact: Artifact
    classification: Classification
    target_path: Path


@dataclass(frozen=True)
class InstallationPlan:
    """Ordered plan entries, agents first, then skills.

    Attributes:
        entries: One entry per eligible artifact
        skipped: Names of domain-tagged artifacts filtered out by the domain selection
        unknown_domains: Requested domains that match no domain pack in the snapshot
    """

    entries: tuple[PlanEntry, ...]
    skipped: tuple[str, ...]
    unknown_domains: frozenset[str]

    def entries_for(self, category: ArtifactCategory) -> list[PlanEntry]:
        return [e for e in self.entries if e.artifact.category == category]


@dataclass(frozen=True)
class PermissionRules:
    """The permissions record of a settings document.

    Every rule list is a set: merging unions them and serialization sorts them.
    extra holds the other permissions keys (defaultMode, additionalDirectories...).
    """

    allow: frozenset[str] = frozenset()
    deny: frozenset[str] = frozenset()
    ask: frozenset[str] = frozenset()
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SettingsDocument:
    """Typed view of .claude/settings.json.

    sandbox is an open mapping so reference documents can add sub-keys the
    merger does not understand. extra holds any other top-level keys.
    """

    schema: str | None = None
    env: dict[str, str] = field(default_factory=dict)
    permissions: PermissionRules = field(default_factory=PermissionRules)
    sandbox: dict[str, Any] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SettingsMergeInputs:
    """Both sides of the settings merge, read before any write happens."""

    reference: SettingsDocument | None
    local: SettingsDocument | None
    # Exact bytes of the existing local file, used to detect a no-op merge
    local_bytes: bytes | None


@dataclass
class CategoryCounts:
    """Per-classification counts for one artifact category."""

    new: int = 0
    updated: int = 0
    unchanged: int = 0

    def add(self, classification: Classification) -> None:
        if classification == "new":
            self.new += 1
        elif classification == "updated":
            self.updated += 1
        elif classification == "unchanged":
            self.unchanged += 1


@dataclass(frozen=True)
class ExecutionReport:
    """Result of applying an installation plan.

    The executor prints nothing; callers render this report.
    """

    counts: dict[ArtifactCategory, CategoryCounts]
    settings_action: SettingsAction | None
    gitignore_action: GitignoreAction
    revision_written: bool
    dry_run: bool


@dataclass(frozen=True)
class RevisionCheckResult:
    """Result of comparing the installed revision marker with a snapshot revision."""

    is_stale: bool
    reason: RevisionReason
    current_revision: str
    installed_revision: str | None
