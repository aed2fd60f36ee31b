from fastapi import APIRouter, Depends

from ...config import Settings, get_settings
from ...errors import error_boundary
from ...schemas.job import JobAnalysisRequest
from ...services.llm.client import LLMClient
from ...services.llm.job_analyzer import analyze_job
from ..deps import get_llm_client

router = APIRouter()


@router.post("/job/analyze")
async def analyze_job_endpoint(
    request: JobAnalysisRequest,
    llm: LLMClient = Depends(get_llm_client),
    settings: Settings = Depends(get_settings),
):
    """
    Break a job posting into structured requirements. Pass the text directly,
    or a URL to fetch it from.
    """
    with error_boundary("Failed to analyze job description"):
        return await analyze_job(
            llm,
            description=request.text,
            url=request.url,
            fetch_timeout=settings.JOB_FETCH_TIMEOUT,
        )
