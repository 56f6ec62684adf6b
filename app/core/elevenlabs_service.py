"""ElevenLabs text-to-speech service."""

import logging

import httpx

from app.core.config import get_settings

logger = logging.getLogger(__name__)

ELEVENLABS_API_URL = "https://api.elevenlabs.io/v1"

VOICE_SETTINGS = {
    "stability": 0.5,
    "similarity_boost": 0.8,
    "style": 0.0,
    "use_speaker_boost": True,
}


class SpeechSynthesisError(Exception):
    """ElevenLabs rejected the synthesis request."""


async def synthesize_speech(text: str, voice_id: str | None = None, timeout: int = 60) -> bytes:
    """
    Convert text to speech.

    Args:
        text: Text to speak
        voice_id: ElevenLabs voice; defaults to ELEVENLABS_VOICE_ID
        timeout: Request timeout in seconds

    Returns:
        Encoded audio bytes (MPEG)

    Raises:
        ValueError: If ELEVENLABS_API_KEY is not configured
        SpeechSynthesisError: If the API returns an error
    """
    settings = get_settings()
    if not settings.ELEVENLABS_API_KEY:
        raise ValueError("ELEVENLABS_API_KEY not configured")

    voice = voice_id or settings.ELEVENLABS_VOICE_ID

    async with httpx.AsyncClient(timeout=timeout) as client:
        response = await client.post(
            f"{ELEVENLABS_API_URL}/text-to-speech/{voice}",
            headers={"xi-api-key": settings.ELEVENLABS_API_KEY},
            json={
                "text": text,
                "model_id": settings.ELEVENLABS_MODEL_ID,
                "voice_settings": VOICE_SETTINGS,
            },
        )

    if response.is_error:
        logger.error(f"ElevenLabs API error {response.status_code}: {response.text}")
        raise SpeechSynthesisError(f"ElevenLabs API error: {response.text}")

    audio = response.content
    logger.info(f"Generated audio, size: {len(audio)} bytes")
    return audio
