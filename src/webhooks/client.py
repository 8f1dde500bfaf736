"""HTTP delivery of webhook payloads."""

import asyncio
from typing import Any, Optional

import httpx

from src.core.config import get_settings
from src.core.logging import get_logger

settings = get_settings()
logger = get_logger(__name__)


class WebhookClient:
    """Best-effort webhook sender.

    Every delivery is a single POST. Failures are logged and reported through
    the return value; ``deliver`` never raises.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize webhook client.

        Args:
            timeout: Per-request timeout in seconds (default from settings)
            user_agent: User-Agent header (default: "<product>-Hookshot")
            transport: Custom httpx transport (used by tests)
        """
        self.timeout = timeout or settings.webhook_timeout
        self.user_agent = user_agent or settings.webhook_user_agent
        self.transport = transport

        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "WebhookClient":
        """Enter async context manager."""
        await self._ensure_client()
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Exit async context manager."""
        await self.close()

    async def _ensure_client(self) -> None:
        """Ensure HTTP client is initialized."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers={
                    "Content-Type": "application/json",
                    "User-Agent": self.user_agent,
                },
                transport=self.transport,
            )

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def deliver(self, url: str, body: bytes) -> Optional[int]:
        """POST a serialized payload to a subscriber.

        Args:
            url: Destination payload URL
            body: UTF-8 JSON document

        Returns:
            Response status code, or None if no response was received
        """
        await self._ensure_client()
        assert self._client is not None

        try:
            # httpx timeouts are per phase; cap the whole exchange as well
            response = await asyncio.wait_for(self._client.post(url, content=body), self.timeout)
        except (httpx.HTTPError, httpx.InvalidURL, asyncio.TimeoutError) as e:
            # Unreachable or too slow endpoint, or malformed URL
            logger.info("webhook_request_failed", url=url, error=str(e) or type(e).__name__)
            return None
        except Exception as e:
            logger.error("webhook_delivery_error", url=url, error=str(e), exc_info=True)
            return None

        if not 200 <= response.status_code < 300:
            logger.info(
                "webhook_unsuccessful_response",
                url=url,
                status_code=response.status_code,
                status_text=response.reason_phrase,
                payload=body.decode("utf-8", errors="replace"),
            )
        else:
            logger.debug("webhook_delivered", url=url, status_code=response.status_code)

        return response.status_code
