"""Plugin config resolution: explicit value → environment → default."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

import yaml

WEBHOOK_ENV_VAR = "SLACK_WEBHOOK_URL"

DEFAULT_USERNAME = "Relicta"
DEFAULT_ICON_EMOJI = ":rocket:"


# ---------------------------------------------------------------------------
# Resolved config
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SlackConfig:
    webhook_url: str = ""
    channel: str = ""           # "" → webhook's default channel
    username: str = DEFAULT_USERNAME
    icon_emoji: str = DEFAULT_ICON_EMOJI
    icon_url: str = ""          # Slack prefers icon_url over icon_emoji
    notify_on_success: bool = True
    notify_on_error: bool = True
    include_changelog: bool = False
    mentions: tuple[str, ...] = field(default_factory=tuple)


CONFIG_SCHEMA: dict = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "webhook": {
            "type": "string",
            "description": f"Slack incoming webhook URL (or use {WEBHOOK_ENV_VAR} env var)",
            "format": "uri",
        },
        "channel": {
            "type": "string",
            "description": "Channel override (e.g. #releases)",
        },
        "username": {
            "type": "string",
            "description": "Bot display name",
            "default": DEFAULT_USERNAME,
        },
        "icon_emoji": {
            "type": "string",
            "description": "Bot icon emoji",
            "default": DEFAULT_ICON_EMOJI,
        },
        "icon_url": {
            "type": "string",
            "description": "Bot icon image URL (takes precedence over icon_emoji)",
        },
        "notify_on_success": {
            "type": "boolean",
            "description": "Send a notification when a release is published",
            "default": True,
        },
        "notify_on_error": {
            "type": "boolean",
            "description": "Send a notification when a release fails",
            "default": True,
        },
        "include_changelog": {
            "type": "boolean",
            "description": "Include release notes in the success notification",
            "default": False,
        },
        "mentions": {
            "type": "array",
            "items": {"type": "string"},
            "description": "User or group IDs to mention (e.g. U123, @U456, <!subteam^S789>)",
        },
    },
}


def config_schema_json() -> str:
    return json.dumps(CONFIG_SCHEMA)


# ---------------------------------------------------------------------------
# Raw mapping → SlackConfig
# ---------------------------------------------------------------------------

def _get_string(raw: Mapping, key: str, default: str = "") -> str:
    value = raw.get(key)
    if isinstance(value, str) and value:
        return value
    return default


def _get_bool(raw: Mapping, key: str, default: bool) -> bool:
    value = raw.get(key)
    if isinstance(value, bool):
        return value
    return default


def _get_string_list(raw: Mapping, key: str) -> tuple[str, ...]:
    value = raw.get(key)
    if isinstance(value, (list, tuple)):
        return tuple(str(v) for v in value)
    return ()


def parse_config(raw: Mapping | None, env: Mapping[str, str] | None = None) -> SlackConfig:
    """Resolve a raw config mapping into a SlackConfig.

    Empty strings count as absent, so they never override a default. The
    webhook alone falls back to ``SLACK_WEBHOOK_URL`` before its default.
    Explicit booleans, ``False`` included, always win.
    """
    raw = raw or {}
    env = os.environ if env is None else env

    return SlackConfig(
        webhook_url=_get_string(raw, "webhook", env.get(WEBHOOK_ENV_VAR, "")),
        channel=_get_string(raw, "channel"),
        username=_get_string(raw, "username", DEFAULT_USERNAME),
        icon_emoji=_get_string(raw, "icon_emoji", DEFAULT_ICON_EMOJI),
        icon_url=_get_string(raw, "icon_url"),
        notify_on_success=_get_bool(raw, "notify_on_success", True),
        notify_on_error=_get_bool(raw, "notify_on_error", True),
        include_changelog=_get_bool(raw, "include_changelog", False),
        mentions=_get_string_list(raw, "mentions"),
    )


# ---------------------------------------------------------------------------
# YAML file (CLI only)
# ---------------------------------------------------------------------------

def load_config_file(path: str | Path) -> dict:
    """Load a raw plugin config mapping from a YAML file.

    A missing file yields an empty mapping; anything other than a mapping
    at the top level is rejected.
    """
    path = Path(path)
    if not path.exists():
        return {}
    parsed = yaml.safe_load(path.read_text())
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError(f"Invalid {path.name}: expected mapping, got {type(parsed).__name__}")
    return parsed
