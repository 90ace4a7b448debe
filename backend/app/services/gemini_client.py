"""Gemini generateContent client.

Makes exactly one outbound call per request and classifies its failures.
No retries and no response caching.
"""
import logging
from typing import Any

import httpx

from app.config import Settings
from app.services.errors import ConnectivityError, UpstreamDecodeError, UpstreamError

logger = logging.getLogger(__name__)


class GeminiClient:
    """Thin async wrapper around the Gemini generateContent endpoint."""

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings
        self.transport = transport

    def _client_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {}
        if self.transport is not None:
            kwargs["transport"] = self.transport
        if self.settings.gemini_timeout is not None:
            kwargs["timeout"] = self.settings.gemini_timeout
        return kwargs

    async def generate_content(self, payload: dict) -> Any:
        """POST the payload and return the decoded JSON body.

        Raises:
            ConnectivityError: The request could not be completed.
            UpstreamError: Non-2xx status from the API.
            UpstreamDecodeError: The body could not be read or parsed.
        """
        api_key = self.settings.gemini_api_key
        if not api_key or api_key in ("placeholder", "your-api-key-here"):
            raise ValueError("Gemini API key not configured. Set GEMINI_API_KEY in .env.")

        async with httpx.AsyncClient(**self._client_kwargs()) as client:
            request = client.build_request(
                "POST",
                self.settings.gemini_generate_url,
                params={"key": api_key},
                json=payload,
                headers={"Cache-Control": "no-store"},
            )

            try:
                response = await client.send(request, stream=True, follow_redirects=True)
            except httpx.RequestError as e:
                logger.error(f"Gemini API fetch error: {type(e).__name__}: {e}")
                raise ConnectivityError()

            try:
                logger.info(f"Gemini API response status: {response.status_code}")
                return await self._read_json(response)
            finally:
                await response.aclose()

    async def _read_json(self, response: httpx.Response) -> Any:
        if not response.is_success:
            try:
                await response.aread()
                logger.error(f"Gemini API error response: {response.text}")
            except (httpx.RequestError, httpx.StreamError) as e:
                logger.error(f"Could not read Gemini API error response: {e}")
            raise UpstreamError(response.status_code, response.reason_phrase)

        try:
            await response.aread()
            data = response.json()
        except (httpx.RequestError, httpx.StreamError, ValueError) as e:
            logger.error(f"Failed to parse Gemini API response: {e}")
            raise UpstreamDecodeError()

        logger.debug(f"Gemini API response: {data}")
        return data
