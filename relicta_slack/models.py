"""Core data models for relicta-slack."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


def _str(value: Any) -> str:
    return "" if value is None else str(value)


class Hook(str, Enum):
    PRE_INIT = "pre-init"
    POST_INIT = "post-init"
    PRE_PLAN = "pre-plan"
    POST_PLAN = "post-plan"
    PRE_VERSION = "pre-version"
    POST_VERSION = "post-version"
    PRE_NOTES = "pre-notes"
    POST_NOTES = "post-notes"
    PRE_APPROVE = "pre-approve"
    POST_APPROVE = "post-approve"
    PRE_PUBLISH = "pre-publish"
    POST_PUBLISH = "post-publish"
    ON_SUCCESS = "on-success"
    ON_ERROR = "on-error"


# ---------------------------------------------------------------------------
# Release event (supplied by the host, never mutated here)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ConventionalCommit:
    hash: str = ""
    type: str = ""
    scope: str = ""
    description: str = ""
    breaking: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> ConventionalCommit:
        return cls(
            hash=_str(data.get("hash")),
            type=_str(data.get("type")),
            scope=_str(data.get("scope")),
            description=_str(data.get("description")),
            breaking=bool(data.get("breaking", False)),
        )


@dataclass(frozen=True)
class CategorizedChanges:
    features: list[ConventionalCommit] = field(default_factory=list)
    fixes: list[ConventionalCommit] = field(default_factory=list)
    breaking: list[ConventionalCommit] = field(default_factory=list)
    other: list[ConventionalCommit] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> CategorizedChanges:
        def _commits(key: str) -> list[ConventionalCommit]:
            return [ConventionalCommit.from_dict(c) for c in data.get(key) or []]

        return cls(
            features=_commits("features"),
            fixes=_commits("fixes"),
            breaking=_commits("breaking"),
            other=_commits("other"),
        )


@dataclass(frozen=True)
class ReleaseContext:
    """Snapshot of the release a hook fires for."""

    version: str = ""
    previous_version: str = ""
    tag_name: str = ""
    release_type: str = ""   # "major" | "minor" | "patch" | free text
    branch: str = ""
    commit_sha: str = ""
    release_notes: str = ""
    changes: CategorizedChanges | None = None

    @classmethod
    def from_dict(cls, data: dict) -> ReleaseContext:
        changes = data.get("changes")
        return cls(
            version=_str(data.get("version")),
            previous_version=_str(data.get("previous_version")),
            tag_name=_str(data.get("tag_name")),
            release_type=_str(data.get("release_type")),
            branch=_str(data.get("branch")),
            commit_sha=_str(data.get("commit_sha")),
            release_notes=_str(data.get("release_notes")),
            changes=CategorizedChanges.from_dict(changes) if isinstance(changes, dict) else None,
        )


# ---------------------------------------------------------------------------
# Slack wire payload
# ---------------------------------------------------------------------------

@dataclass
class Field:
    title: str
    value: str
    short: bool = False

    def to_dict(self) -> dict:
        return {"title": self.title, "value": self.value, "short": self.short}


@dataclass
class Attachment:
    color: str = ""      # "good" | "danger" | "warning" | "#rrggbb"
    title: str = ""
    text: str = ""
    footer: str = ""
    fields: list[Field] = field(default_factory=list)

    def to_dict(self) -> dict:
        data: dict[str, Any] = {}
        for key in ("color", "title", "text", "footer"):
            value = getattr(self, key)
            if value:
                data[key] = value
        if self.fields:
            data["fields"] = [f.to_dict() for f in self.fields]
        return data


@dataclass
class SlackMessage:
    """Message posted to an incoming webhook."""

    channel: str = ""
    username: str = ""
    icon_emoji: str = ""
    icon_url: str = ""
    text: str = ""
    attachments: list[Attachment] = field(default_factory=list)

    def to_dict(self) -> dict:
        # Empty keys are left out so Slack applies the webhook's own defaults.
        data: dict[str, Any] = {}
        for key in ("channel", "username", "icon_emoji", "icon_url", "text"):
            value = getattr(self, key)
            if value:
                data[key] = value
        if self.attachments:
            data["attachments"] = [a.to_dict() for a in self.attachments]
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: dict) -> SlackMessage:
        return cls(
            channel=data.get("channel", ""),
            username=data.get("username", ""),
            icon_emoji=data.get("icon_emoji", ""),
            icon_url=data.get("icon_url", ""),
            text=data.get("text", ""),
            attachments=[
                Attachment(
                    color=a.get("color", ""),
                    title=a.get("title", ""),
                    text=a.get("text", ""),
                    footer=a.get("footer", ""),
                    fields=[
                        Field(title=f.get("title", ""), value=f.get("value", ""),
                              short=bool(f.get("short", False)))
                        for f in a.get("fields", [])
                    ],
                )
                for a in data.get("attachments", [])
            ],
        )


# ---------------------------------------------------------------------------
# Host-facing request / response records
# ---------------------------------------------------------------------------

@dataclass
class ValidationError:
    field: str
    message: str
    code: str  # "required" | "format"


@dataclass
class ValidationResponse:
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)


@dataclass
class ExecuteRequest:
    hook: Hook
    config: dict = field(default_factory=dict)
    context: ReleaseContext = field(default_factory=ReleaseContext)
    dry_run: bool = False
    timeout: float | None = None  # seconds; None → notifier default


@dataclass
class ExecuteResponse:
    success: bool
    message: str = ""
    outputs: dict[str, Any] | None = None
    error: str = ""


@dataclass
class PluginInfo:
    name: str
    version: str
    description: str
    author: str
    hooks: list[Hook] = field(default_factory=list)
    config_schema: str = ""
