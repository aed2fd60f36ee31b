import base64
import binascii

from fastapi import APIRouter, Depends

from ...errors import ValidationError, error_boundary
from ...schemas.interview import TranscribeRequest
from ...services.llm.client import LLMClient
from ...services.llm.interviewer import transcribe_answer
from ..deps import get_llm_client

router = APIRouter()


@router.post("/interview/transcribe")
async def transcribe_endpoint(
    request: TranscribeRequest,
    llm: LLMClient = Depends(get_llm_client),
):
    if not request.audio:
        raise ValidationError("Audio data is required")
    try:
        audio = base64.b64decode(request.audio)
    except (binascii.Error, ValueError) as exc:
        raise ValidationError("Audio data must be base64 encoded") from exc

    with error_boundary("Failed to transcribe audio"):
        text = await transcribe_answer(llm, audio)
    return {"transcription": text, "success": True}
