"""Tests for webhook URL validation."""

import pytest
from relicta_slack.webhook import WebhookURLError, validate_webhook_url


def test_valid_url():
    validate_webhook_url("https://hooks.slack.com/services/T00000000/B00000000/XXXXXXXX")


def test_empty_is_required():
    with pytest.raises(WebhookURLError, match="webhook URL is required") as exc:
        validate_webhook_url("")
    assert exc.value.code == "required"


@pytest.mark.parametrize("url, msg", [
    ("not-a-url", "must use HTTPS"),
    ("://malformed", "invalid URL"),
    ("http://hooks.slack.com/services/T00/B00/XXX", "must use HTTPS"),
    ("https://evil.com/services/T00/B00/XXX", "must be on hooks.slack.com"),
    ("https://hooks.slack.com.evil.com/services/T00/B00/XXX", "must be on hooks.slack.com"),
    ("https://hooks.slack.com/api/T00/B00/XXX", "must start with /services/"),
    ("https://hooks.slack.com/services", "must start with /services/"),
])
def test_rejected_urls(url, msg):
    with pytest.raises(WebhookURLError, match=msg) as exc:
        validate_webhook_url(url)
    assert exc.value.code == "format"


def test_unparseable_url():
    """urlsplit errors surface as format errors."""
    with pytest.raises(WebhookURLError, match="invalid URL") as exc:
        validate_webhook_url("https://[hooks.slack.com/services/T00")
    assert exc.value.code == "format"
