from fastapi import APIRouter, Depends

from ...errors import error_boundary
from ...schemas.resume import TailorMetadata, TailorRequest
from ...services.llm.client import LLMClient
from ...services.llm.tailor import tailor_resume
from ...services.storage import ObjectStore
from ..deps import get_llm_client, get_object_store

router = APIRouter()


@router.post("/resume/tailor")
async def tailor_resume_endpoint(
    request: TailorRequest,
    llm: LLMClient = Depends(get_llm_client),
    store: ObjectStore = Depends(get_object_store),
):
    """
    Rewrite a resume for one job posting and keep a copy in S3 when storage
    is available.
    """
    with error_boundary("Failed to tailor resume"):
        result = await tailor_resume(
            llm,
            store,
            request.resume_data,
            request.job_description,
            company_name=request.company_name,
            role_title=request.role_title,
        )

    metadata = TailorMetadata(
        company_name=request.company_name,
        role_title=request.role_title,
        created_at=result.created_at,
    )
    response = {
        "success": True,
        "tailoredResume": result.tailored_resume,
        "document": result.document,
        "s3Url": result.s3_url,
        "metadata": metadata.model_dump(by_alias=True),
    }
    if result.storage_error:
        response["storageError"] = result.storage_error
    return response
