"""Plain-language narration through the Gemini REST API, with a local fallback"""

import logging

import httpx

from drivelens.config import settings
from drivelens.domain.exceptions import NarrationError
from drivelens.infrastructure.observability.metrics import narration_fallback_counter, narration_latency_histogram

logger = logging.getLogger(__name__)

FALLBACK_PREFIX = "DriveLens summary (fallback): "


def fallback_narration(prompt: str) -> str:
    return FALLBACK_PREFIX + prompt


class NarrationClient:
    """Turns a numbers-only prompt into prose; never fails the caller"""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key if api_key is not None else settings.gemini_api_key
        self.model = model or settings.narration_model
        self.base_url = base_url or settings.gemini_api_base
        self.timeout = timeout or settings.narration_timeout_seconds
        self.transport = transport

    async def narrate(self, prompt: str) -> str:
        """
        Narrate the prompt, or return the fallback string when no API key is
        configured or the model call fails.
        """
        if not self.api_key:
            narration_fallback_counter.labels(cause="no_credentials").inc()
            return fallback_narration(prompt)

        try:
            with narration_latency_histogram.time():
                text = await self._generate(prompt)
        except NarrationError as e:
            narration_fallback_counter.labels(cause="error").inc()
            logger.error(f"Narration failed: {e}")
            return fallback_narration(prompt)

        return text or prompt

    async def _generate(self, prompt: str) -> str:
        """
        Raises:
            NarrationError: On timeout, HTTP errors, or an unexpected response shape
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.post(
                    f"{self.base_url}/models/{self.model}:generateContent",
                    params={"key": self.api_key},
                    json={"contents": [{"parts": [{"text": prompt}]}]},
                )
                response.raise_for_status()
                parts = response.json()["candidates"][0]["content"]["parts"]
                return "".join(p.get("text", "") for p in parts).strip()
            except httpx.TimeoutException as e:
                raise NarrationError(f"Narration timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise NarrationError(f"Narration API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise NarrationError(f"Narration request failed: {e}") from e
            except (KeyError, IndexError, ValueError, TypeError) as e:
                raise NarrationError(f"Invalid narration response: {e}") from e
