"""Slack incoming-webhook delivery."""

from __future__ import annotations

import asyncio

import httpx

from .log import get_logger
from .models import SlackMessage

log = get_logger(__name__)

DEFAULT_TIMEOUT = 10.0


class DeliveryError(Exception):
    """A message could not be delivered to the webhook."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class SlackNotifier:
    """POST Slack messages to incoming webhooks.

    One notifier (and its connection pool) is meant to be shared by every
    hook invocation in the process; pass ``client`` to supply your own.
    Exactly one attempt is made per ``send``; retrying is the caller's call.
    """

    def __init__(self, client: httpx.AsyncClient | None = None, timeout: float = DEFAULT_TIMEOUT):
        self.timeout = timeout
        self.client = client or httpx.AsyncClient()

    async def send(self, url: str, message: SlackMessage, timeout: float | None = None) -> None:
        """POST ``message`` to ``url``; ``timeout`` bounds the whole request."""
        timeout = self.timeout if timeout is None else timeout
        try:
            resp = await asyncio.wait_for(
                self.client.post(
                    url,
                    content=message.to_json().encode("utf-8"),
                    headers={"Content-Type": "application/json"},
                    timeout=timeout,
                ),
                timeout,
            )
        except asyncio.TimeoutError as e:
            log.warning("slack_request_timeout", timeout=timeout)
            raise DeliveryError(f"request timed out after {timeout}s") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            cause = str(e) or type(e).__name__
            log.warning("slack_request_failed", error=cause)
            raise DeliveryError(f"failed to send request: {cause}") from e

        if not resp.is_success:
            log.warning("slack_bad_status", status=resp.status_code)
            raise DeliveryError(
                f"slack returned status {resp.status_code}", status_code=resp.status_code
            )

    async def close(self) -> None:
        await self.client.aclose()
