"""Shared fixtures for relicta-slack tests."""

import pytest
import pytest_asyncio

from relicta_slack.models import CategorizedChanges, ConventionalCommit, ReleaseContext

WEBHOOK = "https://hooks.slack.com/services/T00000000/B00000000/XXXX"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Never pick up a webhook from the developer's shell."""
    monkeypatch.delenv("SLACK_WEBHOOK_URL", raising=False)


@pytest.fixture
def base_config():
    return {"webhook": WEBHOOK, "channel": "#releases"}


@pytest.fixture
def release_ctx():
    """A minor release with one feature and one fix."""
    return ReleaseContext(
        version="1.2.3",
        previous_version="1.2.2",
        tag_name="v1.2.3",
        release_type="minor",
        branch="main",
        commit_sha="abc123def456",
        release_notes="## What's Changed\n- Feature A\n- Bug fix B",
        changes=CategorizedChanges(
            features=[ConventionalCommit(hash="abc", type="feat", description="Add feature A")],
            fixes=[ConventionalCommit(hash="def", type="fix", description="Fix bug B")],
        ),
    )


@pytest_asyncio.fixture
async def plugin():
    """Plugin with its own notifier, closed after the test."""
    from relicta_slack.notifier import SlackNotifier
    from relicta_slack.plugin import SlackPlugin
    p = SlackPlugin(notifier=SlackNotifier(timeout=5))
    yield p
    await p.close()


@pytest.fixture(autouse=True)
def restore_logging():
    """CLI runs reconfigure logging onto CliRunner's stderr; undo that."""
    import logging
    from relicta_slack.log import use_stdlib_logging
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    use_stdlib_logging()
