"""Domain tags for optional, language-specific skill packs.

A skill named `domain:<name>` applies only to projects working in that domain.
Domain packs are opt-in: an install that requests no domains gets none of them.
"""

from collections.abc import Iterable

DOMAIN_PREFIX = "domain:"


def parse_domain_tag(artifact_name: str) -> str | None:
    """Return the domain of a `domain:<name>` artifact, or None if untagged."""
    if not artifact_name.startswith(DOMAIN_PREFIX):
        return None
    return artifact_name[len(DOMAIN_PREFIX) :]


def is_domain_tagged(artifact_name: str) -> bool:
    return parse_domain_tag(artifact_name) is not None


def is_eligible(artifact_name: str, requested_domains: frozenset[str]) -> bool:
    """Check whether an artifact should be installed for the requested domains.

    Untagged artifacts are always eligible. Tagged artifacts are eligible only
    when their domain was requested, so an empty selection installs no packs.
    """
    domain = parse_domain_tag(artifact_name)
    if domain is None:
        return True
    return domain in requested_domains


def parse_domains(text: str | None) -> frozenset[str]:
    """Parse a comma-separated domain list such as "rust, python".

    Whitespace around entries is stripped and empty entries are dropped.
    """
    if text is None:
        return frozenset()
    return normalize_domains(text.split(","))


def normalize_domains(domains: Iterable[str]) -> frozenset[str]:
    return frozenset(d.strip() for d in domains if d.strip())
