from fastapi import APIRouter, Depends

from ...errors import error_boundary
from ...schemas.resume import ResumeWithJobRequest
from ...services.llm.client import LLMClient
from ...services.llm.matcher import analyze_match
from ..deps import get_llm_client

router = APIRouter()


@router.post("/resume/match")
async def match_resume_endpoint(
    request: ResumeWithJobRequest,
    llm: LLMClient = Depends(get_llm_client),
):
    """
    Score a resume against a job description: model assessment plus a local
    keyword coverage report.
    """
    with error_boundary("Failed to analyze resume match"):
        return await analyze_match(llm, request.resume_data, request.job_description)
