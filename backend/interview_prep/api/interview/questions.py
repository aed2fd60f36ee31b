from fastapi import APIRouter, Depends

from ...errors import error_boundary
from ...schemas.interview import QuestionRequest
from ...services.llm.client import LLMClient
from ...services.llm.interviewer import generate_questions
from ..deps import get_llm_client

router = APIRouter()


@router.post("/interview/generate-questions")
async def generate_questions_endpoint(
    request: QuestionRequest,
    llm: LLMClient = Depends(get_llm_client),
):
    with error_boundary("Failed to generate interview questions"):
        return await generate_questions(
            llm,
            request.job_title,
            company=request.company,
            interview_type=request.interview_type,
            question_count=request.question_count,
        )
