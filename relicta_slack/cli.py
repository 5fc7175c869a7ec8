"""relicta-slack CLI — typer-based command interface."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import typer

from .models import Hook

app = typer.Typer(
    name="relicta-slack",
    help="relicta-slack — Slack notifications for Relicta releases",
    no_args_is_help=True,
)

DEFAULT_CONFIG_NAME = "slack.yaml"

# -------------------------------------------------------------------
# Templates
# -------------------------------------------------------------------

DEFAULT_CONFIG_TEMPLATE = """\
# slack.yaml — relicta-slack plugin configuration
# The webhook falls back to the SLACK_WEBHOOK_URL environment variable.
# webhook: https://hooks.slack.com/services/T000/B000/XXXX
channel: ""
username: Relicta
icon_emoji: ":rocket:"
# icon_url: https://example.com/icon.png

notify_on_success: true
notify_on_error: true
include_changelog: false

# mentions:
#   - U123456
#   - "<!subteam^S123456>"
"""


# -------------------------------------------------------------------
# Helpers
# -------------------------------------------------------------------

def _run_async(coro):
    """Run an async coroutine from sync context."""
    return asyncio.run(coro)


def _load_config(path: Path) -> dict:
    from .config import load_config_file
    try:
        return load_config_file(path)
    except Exception as e:
        typer.echo(f"  Config Error: {e}", err=True)
        raise typer.Exit(1)


def _load_context(path: Path | None):
    from .models import ReleaseContext
    if path is None:
        return ReleaseContext()
    import yaml
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except Exception as e:
        typer.echo(f"  Context Error: {e}", err=True)
        raise typer.Exit(1)
    if not isinstance(data, dict):
        typer.echo(f"  Context Error: expected mapping in {path.name}", err=True)
        raise typer.Exit(1)
    return ReleaseContext.from_dict(data)


# -------------------------------------------------------------------
# Commands
# -------------------------------------------------------------------

@app.callback()
def main(
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level"),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit logs as JSON"),
):
    """Slack notifications for Relicta releases."""
    from .log import setup_logging
    setup_logging(log_level, json_output=json_logs)


@app.command()
def info(schema: bool = typer.Option(False, "--schema", help="Print the config JSON schema")):
    """Show plugin metadata."""
    from .plugin import SlackPlugin

    meta = SlackPlugin().describe()
    if schema:
        typer.echo(json.dumps(json.loads(meta.config_schema), indent=2))
        return

    typer.echo(f"\n  {meta.name} {meta.version}")
    typer.echo(f"  {meta.description}")
    typer.echo(f"  Author: {meta.author}")
    typer.echo(f"  Hooks: {', '.join(h.value for h in meta.hooks)}")
    typer.echo("")


@app.command()
def init(path: Path = typer.Argument(Path(DEFAULT_CONFIG_NAME), help="Config file to create")):
    """Write a config template."""
    if path.exists():
        typer.echo(f"  Exists  {path}")
        return
    path.write_text(DEFAULT_CONFIG_TEMPLATE)
    typer.echo(f"  Created {path}")


@app.command()
def validate(
    config: Path = typer.Option(Path(DEFAULT_CONFIG_NAME), "--config", "-c", help="Config file"),
):
    """Validate plugin configuration."""
    from .plugin import SlackPlugin

    resp = SlackPlugin().validate(_load_config(config))
    if resp.valid:
        typer.echo("  ✅ Configuration valid.")
        return
    for err in resp.errors:
        typer.echo(f"  ❌ {err.field}: {err.message} [{err.code}]", err=True)
    raise typer.Exit(1)


@app.command()
def execute(
    hook: Hook = typer.Argument(..., help="Lifecycle hook to run"),
    config: Path = typer.Option(Path(DEFAULT_CONFIG_NAME), "--config", "-c", help="Config file"),
    context: Path = typer.Option(None, "--context", help="Release context (YAML or JSON)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Build the message without sending it"),
):
    """Run a lifecycle hook."""
    from .models import ExecuteRequest
    from .plugin import SlackPlugin

    request = ExecuteRequest(
        hook=hook,
        config=_load_config(config),
        context=_load_context(context),
        dry_run=dry_run,
    )

    async def _execute():
        plugin = SlackPlugin()
        try:
            return await plugin.execute(request)
        finally:
            await plugin.close()

    resp = _run_async(_execute())
    if not resp.success:
        typer.echo(f"  ❌ {resp.error or resp.message}", err=True)
        raise typer.Exit(1)
    typer.echo(f"  {resp.message}")
    if resp.outputs:
        for key, value in resp.outputs.items():
            typer.echo(f"    {key}: {value}")


if __name__ == "__main__":
    app()
