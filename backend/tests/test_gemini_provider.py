"""Tests for the Gemini provider, with the google-genai client mocked out."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from google.genai import errors as genai_errors

from app.llm.base import ChatMessage, ModelCandidate
from app.llm.factory import _provider_instances, get_llm_provider, resolve_api_key
from app.llm.gemini_provider import GeminiModel, GeminiProvider
from app.utils.exceptions import MissingAPIKeyError


def _error_body(code: int, status: str) -> dict:
    return {"error": {"code": code, "message": "boom", "status": status}}


def _mock_client(text: str = "reply") -> MagicMock:
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(return_value=SimpleNamespace(text=text))
    return client


async def _pager(items):
    for item in items:
        yield item


@pytest.fixture
def provider() -> GeminiProvider:
    return GeminiProvider("test-key", [ModelCandidate("gemini-2.0-flash", "v1beta")])


class TestIsModelUnavailable:
    @pytest.mark.parametrize("code,status", [(404, "NOT_FOUND"), (400, "INVALID_ARGUMENT")])
    def test_unavailable_codes(self, provider, code, status):
        assert provider.is_model_unavailable(genai_errors.ClientError(code, _error_body(code, status)))

    def test_permission_denied_is_not_retried(self, provider):
        error = genai_errors.ClientError(403, _error_body(403, "PERMISSION_DENIED"))
        assert provider.is_model_unavailable(error) is False

    def test_server_error_is_not_retried(self, provider):
        error = genai_errors.ServerError(500, _error_body(500, "INTERNAL"))
        assert provider.is_model_unavailable(error) is False

    def test_message_text_alone_does_not_count(self, provider):
        assert provider.is_model_unavailable(ValueError("404 model not found")) is False


class TestGeminiModel:
    @pytest.mark.asyncio
    async def test_generate_passes_model_and_system_instruction(self):
        client = _mock_client('{"ok": true}')
        model = GeminiModel(client, ModelCandidate("gemini-2.0-flash"), "scraper rules")

        assert await model.generate("listing text") == '{"ok": true}'
        kwargs = client.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-2.0-flash"
        assert kwargs["contents"] == "listing text"
        assert kwargs["config"].system_instruction == "scraper rules"

    @pytest.mark.asyncio
    async def test_empty_response_text(self):
        client = MagicMock()
        client.aio.models.generate_content = AsyncMock(return_value=SimpleNamespace(text=None))
        model = GeminiModel(client, ModelCandidate("gemini-2.0-flash"))
        assert await model.generate("x") == ""

    @pytest.mark.asyncio
    async def test_audio_sends_inline_part_then_instruction(self):
        client = _mock_client("hello there")
        model = GeminiModel(client, ModelCandidate("gemini-2.0-flash"))

        assert await model.generate_with_audio(b"\x00\x01", "audio/webm", "transcribe") == "hello there"
        contents = client.aio.models.generate_content.call_args.kwargs["contents"]
        assert contents[0].inline_data.data == b"\x00\x01"
        assert contents[0].inline_data.mime_type == "audio/webm"
        assert contents[1] == "transcribe"

    @pytest.mark.asyncio
    async def test_chat_replays_history(self):
        client = MagicMock()
        session = MagicMock()
        session.send_message = AsyncMock(return_value=SimpleNamespace(text="It has 4 beds."))
        client.aio.chats.create.return_value = session
        model = GeminiModel(client, ModelCandidate("gemini-2.0-flash"), "concierge")

        history = [ChatMessage("user", "Hi"), ChatMessage("model", "Welcome!")]
        assert await model.chat(history, "How many beds?") == "It has 4 beds."

        kwargs = client.aio.chats.create.call_args.kwargs
        assert [c.role for c in kwargs["history"]] == ["user", "model"]
        assert kwargs["history"][1].parts[0].text == "Welcome!"
        session.send_message.assert_awaited_once_with("How many beds?")


class TestGeminiProvider:
    def test_clients_cached_per_api_version(self, provider):
        with patch("app.llm.gemini_provider.genai.Client") as client_cls:
            provider.open_model(ModelCandidate("a", "v1beta"))
            provider.open_model(ModelCandidate("b", "v1beta"))
            provider.open_model(ModelCandidate("c", "v1"))
        assert client_cls.call_count == 2

    @pytest.mark.asyncio
    async def test_list_available_models_strips_prefix(self, provider):
        client = MagicMock()
        client.aio.models.list = AsyncMock(
            return_value=_pager(
                [SimpleNamespace(name="models/gemini-2.0-flash"), SimpleNamespace(name=None)]
            )
        )
        with patch.object(provider, "_client_for", return_value=client):
            assert await provider.list_available_models() == ["gemini-2.0-flash"]


class TestFactory:
    def test_passed_key_wins(self):
        with patch("app.llm.factory.settings") as mock_settings:
            mock_settings.google_api_key = "env-key"
            assert resolve_api_key("  saved-key ") == "saved-key"

    def test_env_key_fallback(self):
        with patch("app.llm.factory.settings") as mock_settings:
            mock_settings.google_api_key = "env-key"
            assert resolve_api_key(None) == "env-key"
            assert resolve_api_key("") == "env-key"

    def test_missing_key(self):
        with patch("app.llm.factory.settings") as mock_settings:
            mock_settings.google_api_key = ""
            with pytest.raises(MissingAPIKeyError, match="Missing Google API Key"):
                resolve_api_key(None)

    def test_provider_cached_per_key(self):
        _provider_instances.clear()
        first = get_llm_provider("key-1")
        assert get_llm_provider("key-1") is first
        assert get_llm_provider("key-2") is not first
        assert first.provider_name == "gemini"
        _provider_instances.clear()


class TestErrorTypes:
    def test_error_types_cover_sdk_and_transport(self, provider):
        quota = genai_errors.ClientError(429, _error_body(429, "RESOURCE_EXHAUSTED"))
        assert isinstance(quota, provider.error_types)
        assert isinstance(httpx.ReadTimeout("timed out"), provider.error_types)
        assert not provider.is_model_unavailable(quota)
