"""Tests for CLI commands."""

import json
from typer.testing import CliRunner
from relicta_slack.cli import app

runner = CliRunner()

WEBHOOK = "https://hooks.slack.com/services/T00000000/B00000000/XXXX"


def _write_config(tmp_path, body):
    path = tmp_path / "slack.yaml"
    path.write_text(body)
    return path


def test_info():
    result = runner.invoke(app, ["info"])
    assert result.exit_code == 0
    assert "slack 2.0.0" in result.output
    assert "post-publish, on-success, on-error" in result.output


def test_info_schema():
    result = runner.invoke(app, ["info", "--schema"])
    assert result.exit_code == 0
    assert "properties" in json.loads(result.output)


def test_init_creates_template(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["init"])
    assert result.exit_code == 0
    assert "notify_on_success" in (tmp_path / "slack.yaml").read_text()


def test_init_idempotent(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "slack.yaml").write_text("custom: true")
    result = runner.invoke(app, ["init"])
    assert result.exit_code == 0
    assert (tmp_path / "slack.yaml").read_text() == "custom: true"


def test_validate_ok(tmp_path):
    path = _write_config(tmp_path, f"webhook: {WEBHOOK}\n")
    result = runner.invoke(app, ["validate", "--config", str(path)])
    assert result.exit_code == 0
    assert "valid" in result.output


def test_validate_missing_webhook(tmp_path):
    path = _write_config(tmp_path, "channel: '#ops'\n")
    result = runner.invoke(app, ["validate", "--config", str(path)])
    assert result.exit_code == 1


def test_validate_bad_yaml(tmp_path):
    path = _write_config(tmp_path, "- a\n- b\n")
    result = runner.invoke(app, ["validate", "--config", str(path)])
    assert result.exit_code == 1


def test_execute_dry_run(tmp_path):
    config = _write_config(tmp_path, f"webhook: {WEBHOOK}\nchannel: '#releases'\n")
    context = tmp_path / "release.json"
    context.write_text(json.dumps({"version": "1.2.3", "tag_name": "v1.2.3", "branch": "main"}))
    result = runner.invoke(app, [
        "execute", "post-publish", "--config", str(config), "--context", str(context), "--dry-run",
    ])
    assert result.exit_code == 0
    assert "Would send Slack success notification" in result.output
    assert "1.2.3" in result.output


def test_execute_unhandled_hook(tmp_path):
    config = _write_config(tmp_path, "")
    result = runner.invoke(app, ["execute", "pre-plan", "--config", str(config)])
    assert result.exit_code == 0
    assert "not handled" in result.output


def test_execute_sends(tmp_path, httpx_mock):
    httpx_mock.add_response(url=WEBHOOK, status_code=200)
    config = _write_config(tmp_path, f"webhook: {WEBHOOK}\n")
    result = runner.invoke(app, ["execute", "on-error", "--config", str(config)])
    assert result.exit_code == 0
    assert "Sent Slack error notification" in result.output


def test_execute_delivery_failure(tmp_path, httpx_mock):
    httpx_mock.add_response(status_code=500)
    config = _write_config(tmp_path, f"webhook: {WEBHOOK}\n")
    result = runner.invoke(app, ["execute", "on-success", "--config", str(config)])
    assert result.exit_code == 1


def test_execute_unknown_hook(tmp_path):
    result = runner.invoke(app, ["execute", "not-a-hook"])
    assert result.exit_code != 0


def test_execute_blank_context_fields(tmp_path, httpx_mock):
    """Blank YAML keys don't show up as "None" in the posted message."""
    httpx_mock.add_response(url=WEBHOOK, status_code=200)
    config = _write_config(tmp_path, f"webhook: {WEBHOOK}\n")
    context = tmp_path / "release.yaml"
    context.write_text("version: 1.0.0\ntag_name:\nbranch:\n")
    result = runner.invoke(app, ["execute", "on-error", "--config", str(config), "--context", str(context)])
    assert result.exit_code == 0
    body = httpx_mock.get_request().content.decode()
    assert "None" not in body
    assert "v1.0.0" in body
