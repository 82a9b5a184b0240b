import asyncio
from types import SimpleNamespace

import pytest

from conftest import fake_gemini
from services.gemini import ApiKeyRequiredError, GeminiClient, GeminiError, ServiceBusyError


class RateLimited(Exception):
    code = 429


def test_blank_key_rejected():
    client = GeminiClient(client_factory=lambda api_key: SimpleNamespace())
    with pytest.raises(ValueError):
        client.set_api_key("   ")
    assert not client.is_configured


def test_key_is_trimmed_and_clearable():
    seen = []
    client = GeminiClient(client_factory=lambda api_key: seen.append(api_key) or SimpleNamespace())
    client.set_api_key("  AIza-123  ")
    assert seen == ["AIza-123"]
    assert client.is_configured
    client.clear_api_key()
    assert not client.is_configured


def test_generate_returns_text_and_passes_prompt():
    client, models = fake_gemini("[]")
    assert asyncio.run(client.generate("hello")) == "[]"
    assert models.calls[0]["contents"] == "hello"
    assert models.calls[0]["config"].temperature == client.temperature


def test_generate_without_key():
    client, models = fake_gemini("[]", api_key=None)
    with pytest.raises(ApiKeyRequiredError):
        asyncio.run(client.generate("hello"))
    assert models.calls == []


@pytest.mark.parametrize(
    "exc",
    [
        RateLimited("too many requests"),
        RuntimeError("The model is overloaded. Please try again later."),
        RuntimeError("503 Service Unavailable"),
    ],
)
def test_busy_errors_are_mapped(exc):
    client, _ = fake_gemini(exc=exc)
    with pytest.raises(ServiceBusyError):
        asyncio.run(client.generate("hello"))


def test_other_errors_become_gemini_error():
    client, _ = fake_gemini(exc=ConnectionError("name resolution failed"))
    with pytest.raises(GeminiError) as info:
        asyncio.run(client.generate("hello"))
    assert not isinstance(info.value, ServiceBusyError)


def test_empty_reply_is_an_error():
    client, _ = fake_gemini(None)
    with pytest.raises(GeminiError):
        asyncio.run(client.generate("hello"))
