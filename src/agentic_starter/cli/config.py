from dataclasses import dataclass
from pathlib import Path

import tomli

DEFAULT_REPO_URL = "https://github.com/TheCactusBlue/agentic-coding-starter.git"


@dataclass(frozen=True)
class StarterConfig:
    """In-memory representation of the user's `config.toml`.

    Example config.toml:
      # Optional: install from a fork instead of the upstream starter
      repo_url = "https://github.com/me/agentic-coding-starter.git"

      # Optional: branch or tag (defaults to the repository's default branch)
      ref = "main"

      # Domain packs installed when --domains is not given
      domains = ["python", "rust"]
    """

    repo_url: str
    ref: str | None
    domains: frozenset[str]

    @classmethod
    def default(cls) -> "StarterConfig":
        return cls(repo_url=DEFAULT_REPO_URL, ref=None, domains=frozenset())


def load_config(config_dir: Path) -> StarterConfig:
    """Load config.toml from the given directory if present; otherwise return defaults."""
    cfg_path = config_dir / "config.toml"
    if not cfg_path.exists():
        return StarterConfig.default()

    with open(cfg_path, "rb") as f:
        data = tomli.load(f)

    repo_url = str(data.get("repo_url", DEFAULT_REPO_URL))
    ref = data.get("ref")
    if ref is not None:
        ref = str(ref)
    domains = frozenset(str(d).strip() for d in data.get("domains", []) if str(d).strip())
    return StarterConfig(repo_url=repo_url, ref=ref, domains=domains)
