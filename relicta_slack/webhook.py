"""Slack incoming-webhook URL validation."""

from __future__ import annotations

from urllib.parse import urlsplit

SLACK_WEBHOOK_HOST = "hooks.slack.com"
SLACK_WEBHOOK_PATH_PREFIX = "/services/"


class WebhookURLError(ValueError):
    """Webhook URL rejected; ``code`` is "required" or "format"."""

    def __init__(self, message: str, code: str = "format"):
        super().__init__(message)
        self.code = code


def validate_webhook_url(url: str) -> None:
    """Raise WebhookURLError unless ``url`` is an https://hooks.slack.com/services/ URL.

    Checks run in order and stop at the first failure, so an empty URL is
    only ever reported as missing.
    """
    if not url:
        raise WebhookURLError("webhook URL is required", code="required")

    # urlsplit tolerates a leading ":" that leaves the scheme empty.
    if url.startswith(":"):
        raise WebhookURLError("invalid URL: missing protocol scheme")
    try:
        parts = urlsplit(url)
        netloc = parts.netloc.lower()
    except ValueError as e:
        raise WebhookURLError(f"invalid URL: {e}") from e

    if parts.scheme != "https":
        raise WebhookURLError("webhook URL must use HTTPS")
    if netloc != SLACK_WEBHOOK_HOST:
        raise WebhookURLError(f"webhook URL must be on {SLACK_WEBHOOK_HOST}")
    if not parts.path.startswith(SLACK_WEBHOOK_PATH_PREFIX):
        raise WebhookURLError(f"webhook URL path must start with {SLACK_WEBHOOK_PATH_PREFIX}")
