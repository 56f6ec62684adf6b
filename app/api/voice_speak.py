"""voice-speak function: text to base64-encoded speech."""

import base64

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.api.function_helpers import error_response, read_json_body
from app.core.elevenlabs_service import synthesize_speech
from app.core.logging import get_logger
from app.core.schemas_tools import SpeakRequest

logger = get_logger(__name__)

router = APIRouter()


@router.post("/voice-speak")
async def voice_speak(request: Request) -> JSONResponse:
    """
    Synthesize speech.

    Body: {text, voice_id?}

    Returns:
        {"audioContent": <base64 MPEG audio>}
    """
    try:
        speak = SpeakRequest.model_validate(await read_json_body(request))
        if not speak.text:
            raise ValueError("No text provided")

        logger.info(f"Converting text to speech: {speak.text[:100]}")
        audio = await synthesize_speech(speak.text, voice_id=speak.voice_id)

        return JSONResponse(content={"audioContent": base64.b64encode(audio).decode("ascii")})

    except Exception as e:
        logger.exception(f"Error in voice-speak: {e}")
        return error_response(e)
