# services/gemini.py
from __future__ import annotations

import logging
from typing import Any, Callable

from google import genai
from google.genai import types, errors as gerrors

from config import settings

_LOG = logging.getLogger(__name__)

# substrings / codes the service uses when it is saturated
_BUSY_CODES = {429, 503}
_BUSY_MARKERS = ("overloaded", "503", "unavailable", "quota exceeded", "resource_exhausted")


# ───────────── Errors ─────────────
class GeminiError(RuntimeError):
    """The model call did not produce a usable reply."""


class ServiceBusyError(GeminiError):
    """Overload / quota signal from the service; worth trying again later."""


class ApiKeyRequiredError(GeminiError):
    """No API key configured, so no call was attempted."""


def _is_busy(exc: Exception) -> bool:
    if getattr(exc, "code", None) in _BUSY_CODES:
        return True
    text = str(exc).lower()
    return any(marker in text for marker in _BUSY_MARKERS)


# ───────────── Client ─────────────
class GeminiClient:
    """
    Thin async wrapper around `google.genai`. The SDK client is only built
    once an API key is set; `client_factory` lets tests swap the SDK out.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        temperature: float | None = None,
        client_factory: Callable[..., Any] = genai.Client,
    ) -> None:
        self.model = model or settings.gemini_model
        self.temperature = settings.gemini_temperature if temperature is None else temperature
        self._factory = client_factory
        self._client: Any = None
        self._api_key: str | None = None
        if api_key:
            self.set_api_key(api_key)

    def set_api_key(self, api_key: str) -> None:
        if not api_key or not api_key.strip():
            raise ValueError("API key is required")
        self._api_key = api_key.strip()
        self._client = self._factory(api_key=self._api_key)

    def clear_api_key(self) -> None:
        self._api_key = None
        self._client = None

    @property
    def is_configured(self) -> bool:
        return self._client is not None

    async def generate(self, prompt: str, max_output_tokens: int = 2000) -> str:
        """Run one completion and return the reply text."""
        if not self.is_configured:
            raise ApiKeyRequiredError(
                "API key not configured. Please set your Gemini API key in Settings."
            )
        try:
            resp = await self._client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    temperature=self.temperature,
                    max_output_tokens=max_output_tokens,
                ),
            )
        except gerrors.APIError as e:
            if _is_busy(e):
                raise ServiceBusyError(
                    "AI service is currently busy. Please try again in a few minutes."
                ) from e
            raise GeminiError(f"Gemini request failed: {e}") from e
        except Exception as e:
            if _is_busy(e):
                raise ServiceBusyError(str(e)) from e
            raise GeminiError(f"Gemini request failed: {e}") from e

        text = resp.text
        if not text:
            raise GeminiError("Gemini returned an empty reply")
        return text
