"""Slack release-notification plugin: describe, validate, execute."""

from __future__ import annotations

from collections.abc import Callable

from . import __version__
from .config import SlackConfig, config_schema_json, parse_config
from .log import get_logger
from .messages import build_error_message, build_success_message
from .models import (
    ExecuteRequest,
    ExecuteResponse,
    Hook,
    PluginInfo,
    ReleaseContext,
    SlackMessage,
    ValidationError,
    ValidationResponse,
)
from .notifier import DeliveryError, SlackNotifier
from .webhook import WebhookURLError, validate_webhook_url

log = get_logger(__name__)

SUCCESS_HOOKS = (Hook.POST_PUBLISH, Hook.ON_SUCCESS)


class SlackPlugin:
    """Release hook handler that posts to a Slack incoming webhook."""

    def __init__(self, notifier: SlackNotifier | None = None):
        self._notifier = notifier

    @property
    def notifier(self) -> SlackNotifier:
        # Built on first delivery so dry runs never open a connection pool.
        if self._notifier is None:
            self._notifier = SlackNotifier()
        return self._notifier

    def describe(self) -> PluginInfo:
        return PluginInfo(
            name="slack",
            version=__version__,
            description="Send Slack notifications for releases",
            author="Relicta Team",
            hooks=[Hook.POST_PUBLISH, Hook.ON_SUCCESS, Hook.ON_ERROR],
            config_schema=config_schema_json(),
        )

    def validate(self, config: dict | None) -> ValidationResponse:
        cfg = parse_config(config)
        try:
            validate_webhook_url(cfg.webhook_url)
        except WebhookURLError as e:
            message = "Slack webhook URL is required" if e.code == "required" else str(e)
            return ValidationResponse(
                valid=False,
                errors=[ValidationError(field="webhook", message=message, code=e.code)],
            )
        return ValidationResponse(valid=True)

    async def execute(self, request: ExecuteRequest) -> ExecuteResponse:
        hook = request.hook
        if hook in SUCCESS_HOOKS:
            kind, enabled_flag, builder = "success", "notify_on_success", build_success_message
        elif hook == Hook.ON_ERROR:
            kind, enabled_flag, builder = "error", "notify_on_error", build_error_message
        else:
            return ExecuteResponse(success=True, message=f"Hook {_hook_name(hook)} not handled")

        cfg = parse_config(request.config)
        try:
            validate_webhook_url(cfg.webhook_url)
        except WebhookURLError as e:
            log.warning("slack_config_invalid", hook=_hook_name(hook), error=str(e))
            return ExecuteResponse(
                success=False, message="Invalid Slack configuration", error=str(e)
            )

        if not getattr(cfg, enabled_flag):
            return ExecuteResponse(success=True, message=f"{kind.capitalize()} notification disabled")

        return await self._notify(kind, builder, cfg, request)

    async def _notify(
        self,
        kind: str,
        builder: Callable[[SlackConfig, ReleaseContext], SlackMessage],
        cfg: SlackConfig,
        request: ExecuteRequest,
    ) -> ExecuteResponse:
        message = builder(cfg, request.context)
        outputs = {
            "channel": cfg.channel,
            "version": request.context.version,
            "hook": _hook_name(request.hook),
        }

        if request.dry_run:
            log.info("slack_dry_run", kind=kind, channel=cfg.channel)
            return ExecuteResponse(
                success=True,
                message=f"Would send Slack {kind} notification to {cfg.channel or 'default channel'}",
                outputs=outputs,
            )

        try:
            await self.notifier.send(cfg.webhook_url, message, timeout=request.timeout)
        except DeliveryError as e:
            log.error("slack_delivery_failed", kind=kind, error=str(e))
            error = f"failed to send Slack message: {e}"
            return ExecuteResponse(success=False, message=error, error=error)

        log.info("slack_notification_sent", kind=kind, channel=cfg.channel)
        return ExecuteResponse(
            success=True, message=f"Sent Slack {kind} notification", outputs=outputs
        )

    async def close(self) -> None:
        if self._notifier is not None:
            await self._notifier.close()


def _hook_name(hook: Hook | str) -> str:
    return hook.value if hasattr(hook, "value") else str(hook)
