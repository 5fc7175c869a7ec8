"""Build Slack messages from release events."""

from __future__ import annotations

import html
from collections.abc import Sequence

from .config import SlackConfig
from .models import Attachment, Field, ReleaseContext, SlackMessage

MAX_CHANGELOG_LENGTH = 2000
FOOTER = "Relicta"

COLOR_SUCCESS = "good"
COLOR_FAILURE = "danger"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def build_mentions(mentions: Sequence[str] | None) -> str:
    """Format mention tokens as Slack inline mentions, space separated.

    ``U123`` and ``@U123`` become ``<@U123>``; tokens already starting with
    ``<`` (``<@U123>``, ``<!subteam^S123>``) pass through unchanged.
    """
    if not mentions:
        return ""
    parts = []
    for m in mentions:
        if m.startswith("<"):
            parts.append(m)
        else:
            parts.append(f"<@{m.removeprefix('@')}>")
    return " ".join(parts)


def truncate(text: str, limit: int = MAX_CHANGELOG_LENGTH) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


def _tag(ctx: ReleaseContext) -> str:
    return ctx.tag_name or f"v{ctx.version}"


def _with_mentions(cfg: SlackConfig, text: str) -> str:
    mentions = build_mentions(cfg.mentions)
    return f"{mentions} {text}" if mentions else text


def _base_message(cfg: SlackConfig, text: str, attachment: Attachment) -> SlackMessage:
    return SlackMessage(
        channel=cfg.channel,
        username=cfg.username,
        icon_emoji=cfg.icon_emoji,
        icon_url=cfg.icon_url,
        text=text,
        attachments=[attachment],
    )


# ---------------------------------------------------------------------------
# Success / error messages
# ---------------------------------------------------------------------------

def build_success_message(cfg: SlackConfig, ctx: ReleaseContext) -> SlackMessage:
    tag = _tag(ctx)
    title = f"Release {ctx.version}"
    if ctx.release_type:
        title += f" ({ctx.release_type})"

    fields = [Field("Version", ctx.version, short=True)]
    if ctx.previous_version:
        fields.append(Field("Previous Version", ctx.previous_version, short=True))
    if ctx.release_type:
        fields.append(Field("Release Type", ctx.release_type, short=True))
    if ctx.branch:
        fields.append(Field("Branch", ctx.branch, short=True))

    if ctx.changes is not None:
        for label, commits in (
            ("Features", ctx.changes.features),
            ("Bug Fixes", ctx.changes.fixes),
            ("Breaking Changes", ctx.changes.breaking),
        ):
            if commits:
                fields.append(Field(label, str(len(commits)), short=True))

    body = f"Release {tag} published"
    if cfg.include_changelog and ctx.release_notes:
        # Notes come from commit messages; escape so Slack shows them verbatim.
        body += "\n\n" + html.escape(truncate(ctx.release_notes))

    attachment = Attachment(
        color=COLOR_SUCCESS,
        title=title,
        text=body,
        footer=FOOTER,
        fields=fields,
    )
    return _base_message(cfg, _with_mentions(cfg, f":rocket: Release {tag} published"), attachment)


def build_error_message(cfg: SlackConfig, ctx: ReleaseContext) -> SlackMessage:
    tag = _tag(ctx)
    fields = []
    if ctx.tag_name:
        fields.append(Field("Tag", ctx.tag_name, short=True))
    if ctx.commit_sha:
        fields.append(Field("Commit", ctx.commit_sha[:7], short=True))

    attachment = Attachment(
        color=COLOR_FAILURE,
        title=f"Release {ctx.version} failed",
        text=f"Release of version {ctx.version} on branch {ctx.branch} failed.",
        footer=FOOTER,
        fields=fields,
    )
    return _base_message(cfg, _with_mentions(cfg, f":x: Release {tag} failed"), attachment)
