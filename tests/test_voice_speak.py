"""Tests for ElevenLabs synthesis and the voice-speak function route."""

import base64
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from app.core.elevenlabs_service import SpeechSynthesisError, synthesize_speech
from app.main import app

client = TestClient(app)


@pytest.fixture
def mock_settings():
    with patch("app.core.elevenlabs_service.get_settings") as mock:
        settings = MagicMock()
        settings.ELEVENLABS_API_KEY = "xi-key"
        settings.ELEVENLABS_VOICE_ID = "default-voice"
        settings.ELEVENLABS_MODEL_ID = "eleven_multilingual_v2"
        mock.return_value = settings
        yield settings


def _patch_client(MockClient, response):
    client_instance = AsyncMock()
    client_instance.post.return_value = response
    MockClient.return_value.__aenter__ = AsyncMock(return_value=client_instance)
    MockClient.return_value.__aexit__ = AsyncMock(return_value=None)
    return client_instance


class TestSynthesizeSpeech:
    @pytest.mark.asyncio
    async def test_uses_default_voice(self, mock_settings):
        response = MagicMock()
        response.is_error = False
        response.content = b"ID3audio"

        with patch("httpx.AsyncClient") as MockClient:
            http = _patch_client(MockClient, response)

            audio = await synthesize_speech("Good morning")

        assert audio == b"ID3audio"
        assert http.post.call_args[0][0].endswith("/text-to-speech/default-voice")
        assert http.post.call_args[1]["headers"] == {"xi-api-key": "xi-key"}
        payload = http.post.call_args[1]["json"]
        assert payload["model_id"] == "eleven_multilingual_v2"
        assert payload["voice_settings"]["similarity_boost"] == 0.8

    @pytest.mark.asyncio
    async def test_voice_override(self, mock_settings):
        response = MagicMock()
        response.is_error = False
        response.content = b""

        with patch("httpx.AsyncClient") as MockClient:
            http = _patch_client(MockClient, response)

            await synthesize_speech("Hi", voice_id="custom")

        assert http.post.call_args[0][0].endswith("/text-to-speech/custom")

    @pytest.mark.asyncio
    async def test_api_error(self, mock_settings):
        response = MagicMock()
        response.is_error = True
        response.status_code = 401
        response.text = "invalid api key"

        with patch("httpx.AsyncClient") as MockClient:
            _patch_client(MockClient, response)

            with pytest.raises(SpeechSynthesisError, match="invalid api key"):
                await synthesize_speech("Hi")

    @pytest.mark.asyncio
    async def test_missing_api_key(self):
        with patch("app.core.elevenlabs_service.get_settings") as mock:
            settings = MagicMock()
            settings.ELEVENLABS_API_KEY = None
            mock.return_value = settings

            with pytest.raises(ValueError, match="ELEVENLABS_API_KEY not configured"):
                await synthesize_speech("Hi")


def test_voice_speak_returns_base64_audio():
    with patch("app.api.voice_speak.synthesize_speech", new_callable=AsyncMock) as mock_speak:
        mock_speak.return_value = b"\x00\x01audio"

        response = client.post("/functions/v1/voice-speak", json={"text": "Hello", "voice_id": "v-2"})

    assert response.status_code == 200
    assert base64.b64decode(response.json()["audioContent"]) == b"\x00\x01audio"
    mock_speak.assert_awaited_once_with("Hello", voice_id="v-2")


def test_voice_speak_requires_text():
    with patch("app.api.voice_speak.synthesize_speech", new_callable=AsyncMock) as mock_speak:
        response = client.post("/functions/v1/voice-speak", json={"text": ""})

    assert response.status_code == 500
    assert response.json() == {"error": "No text provided"}
    mock_speak.assert_not_called()
