"""Merge the reference settings.json with a project's local settings.

Merge rules:
- $schema: local value wins if present, else reference
- env, sandbox: recursive key-wise union, local wins on collisions
- permissions.allow (and deny/ask): set union, serialized sorted
- other permissions keys (defaultMode...): local value wins if present
- any other top-level key: local value wins if present, else reference
- fields that end up null, {} or [] are dropped from the output

The merge never fails and never asks the user anything. Dropping empty fields
means a local `"allow": []` cannot suppress the reference allow-list; that
matches the behavior of earlier installs and is kept deliberately.
"""

import json
import logging
from pathlib import Path
from typing import Any

from agentic_starter.artifacts.models import PermissionRules, SettingsDocument
from agentic_starter.errors import IOFailure

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "settings.json"

_SCHEMA_KEY = "$schema"
_KNOWN_KEYS = frozenset({_SCHEMA_KEY, "env", "permissions", "sandbox"})
_RULE_LISTS = ("allow", "deny", "ask")


def _is_empty(value: Any) -> bool:
    return value is None or value == {} or value == []


def _deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge overlay onto base; overlay wins on non-mapping collisions."""
    merged = dict(base)
    for key, value in overlay.items():
        existing = merged.get(key)
        if isinstance(existing, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(existing, value)
        else:
            merged[key] = value
    return merged


def _overlay(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Shallow merge where non-null overlay values replace base values."""
    merged = dict(base)
    for key, value in overlay.items():
        if value is not None:
            merged[key] = value
    return merged


def _as_mapping(value: Any) -> dict[str, Any]:
    if isinstance(value, dict):
        return dict(value)
    return {}


def _as_rules(value: Any) -> frozenset[str]:
    if isinstance(value, list):
        return frozenset(str(rule) for rule in value)
    return frozenset()


def parse_settings(data: dict[str, Any]) -> SettingsDocument:
    """Build a SettingsDocument from decoded settings.json content."""
    schema = data.get(_SCHEMA_KEY)
    permissions = _as_mapping(data.get("permissions"))
    return SettingsDocument(
        schema=str(schema) if schema is not None else None,
        env=_as_mapping(data.get("env")),
        permissions=PermissionRules(
            allow=_as_rules(permissions.get("allow")),
            deny=_as_rules(permissions.get("deny")),
            ask=_as_rules(permissions.get("ask")),
            extra={k: v for k, v in permissions.items() if k not in _RULE_LISTS},
        ),
        sandbox=_as_mapping(data.get("sandbox")),
        extra={k: v for k, v in data.items() if k not in _KNOWN_KEYS},
    )


def merge_settings(
    reference: SettingsDocument, local: SettingsDocument | None
) -> SettingsDocument:
    """Merge reference defaults with local overrides.

    Args:
        reference: Settings shipped with the snapshot (the base)
        local: Settings already at the target, or None if there are none

    Returns:
        The merged document. With no local settings this is the reference
        document unchanged; empty fields are dropped on serialization.
    """
    if local is None:
        return reference

    return SettingsDocument(
        schema=local.schema if local.schema is not None else reference.schema,
        env=_deep_merge(reference.env, local.env),
        permissions=PermissionRules(
            allow=reference.permissions.allow | local.permissions.allow,
            deny=reference.permissions.deny | local.permissions.deny,
            ask=reference.permissions.ask | local.permissions.ask,
            extra=_overlay(reference.permissions.extra, local.permissions.extra),
        ),
        sandbox=_deep_merge(reference.sandbox, local.sandbox),
        extra=_overlay(reference.extra, local.extra),
    )


def settings_to_dict(document: SettingsDocument) -> dict[str, Any]:
    """Convert to a JSON-ready dict, omitting every empty field."""
    permissions: dict[str, Any] = {
        name: sorted(getattr(document.permissions, name)) for name in _RULE_LISTS
    }
    permissions.update(document.permissions.extra)
    permissions = {key: value for key, value in permissions.items() if not _is_empty(value)}
    candidates: dict[str, Any] = {
        _SCHEMA_KEY: document.schema,
        "env": document.env,
        "permissions": permissions,
        "sandbox": document.sandbox,
    }
    candidates.update(document.extra)
    return {key: value for key, value in candidates.items() if not _is_empty(value)}


def render_settings(document: SettingsDocument) -> bytes:
    """Serialize to the bytes written to settings.json."""
    content = json.dumps(settings_to_dict(document), indent=2, ensure_ascii=False)
    return (content + "\n").encode("utf-8")


def read_settings_bytes(path: Path) -> bytes | None:
    """Read raw settings bytes, or None if the file does not exist."""
    if not path.exists():
        return None
    try:
        return path.read_bytes()
    except OSError as e:
        raise IOFailure(f"Could not read {path}: {e}") from e


def decode_settings(path: Path, raw: bytes) -> SettingsDocument:
    """Decode settings bytes read from path.

    Raises:
        IOFailure: If the content is not a JSON object
    """
    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise IOFailure(f"Invalid JSON in {path}: {e}") from e
    if not isinstance(data, dict):
        raise IOFailure(f"Expected a JSON object in {path}")
    return parse_settings(data)


def load_settings(path: Path) -> SettingsDocument | None:
    """Load a settings document from disk, or None if the file does not exist."""
    raw = read_settings_bytes(path)
    if raw is None:
        return None
    logger.debug("Loaded settings from %s", path)
    return decode_settings(path, raw)
