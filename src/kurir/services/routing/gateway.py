"""HTTP client for the chat-completion AI gateway."""

from __future__ import annotations

import logging
from typing import Sequence

import httpx

from ...config import settings

logger = logging.getLogger(__name__)


class GatewayNotConfiguredError(RuntimeError):
    """Raised when the gateway API key is missing."""


class UpstreamServiceError(RuntimeError):
    """The gateway could not be reached or answered with a non-success status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ChatCompletionClient:
    def __init__(
        self,
        api_key: str | None = None,
        url: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.api_key = api_key or settings.ai_gateway_api_key
        if not self.api_key:
            raise GatewayNotConfiguredError("AI gateway API key is not configured.")
        self.url = url or settings.ai_gateway_url
        self.model = model or settings.route_model
        self.timeout = timeout if timeout is not None else settings.ai_gateway_timeout_seconds
        self._transport = transport

    def _get_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            transport=self._transport,
        )

    def complete(self, messages: Sequence[dict], temperature: float) -> str:
        """Send a chat completion and return the first choice's message text."""
        payload = {
            "model": self.model,
            "messages": list(messages),
            "temperature": temperature,
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        with self._get_client() as client:
            try:
                response = client.post(self.url, json=payload, headers=headers)
            except httpx.HTTPError as exc:
                logger.error(f"AI gateway request failed: {exc}")
                raise UpstreamServiceError(f"AI gateway unreachable: {exc}") from exc

        if response.is_error:
            logger.error(f"AI gateway error: {response.status_code} {response.text[:500]}")
            raise UpstreamServiceError(
                f"AI gateway error: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise UpstreamServiceError("AI gateway returned a non-JSON body.") from exc
        logger.debug(f"AI response: {data}")

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise UpstreamServiceError("AI gateway response has no message content.") from exc
        if not isinstance(content, str):
            raise UpstreamServiceError("AI gateway message content is not text.")
        return content


def check_configured() -> bool:
    """Return True when a gateway API key is available."""
    return bool(settings.ai_gateway_api_key)
