from fastapi import APIRouter, Depends

from ...errors import error_boundary
from ...schemas.interview import FeedbackRequest
from ...services.llm.client import LLMClient
from ...services.llm.interviewer import generate_feedback
from ..deps import get_llm_client

router = APIRouter()


@router.post("/prep/feedback")
async def answer_feedback_endpoint(
    request: FeedbackRequest,
    llm: LLMClient = Depends(get_llm_client),
):
    """
    Coach feedback on a practice answer, with the suggestion lines pulled out
    and a heuristic score.
    """
    with error_boundary("Failed to generate feedback"):
        return await generate_feedback(
            llm,
            request.question,
            request.answer,
            question_type=request.type,
            duration=request.duration,
        )
