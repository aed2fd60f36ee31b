import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Request
from starlette.datastructures import UploadFile

from ...errors import ValidationError, error_boundary
from ...services.documents.uploads import store_upload
from ...services.extraction import extract_text
from ...services.llm.client import LLMClient
from ...services.llm.parser import parse_resume_text
from ...services.storage import ObjectStore
from ..deps import get_llm_client, get_object_store

logger = logging.getLogger(__name__)

router = APIRouter()


async def _read_request(request: Request):
    content_type = request.headers.get("content-type", "")
    if "multipart/form-data" in content_type:
        form = await request.form()
        file = form.get("file")
        text = form.get("textContent")
        return (file if isinstance(file, UploadFile) else None), (text if isinstance(text, str) else None)
    if "application/json" in content_type:
        try:
            body = await request.json()
        except ValueError as exc:
            raise ValidationError("Invalid JSON format in request body") from exc
        text = body.get("textContent") if isinstance(body, dict) else None
        return None, (text if isinstance(text, str) else None)
    raise ValidationError("Content-Type must be multipart/form-data or application/json")


@router.post("/resume/upload")
async def upload_resume_endpoint(
    request: Request,
    llm: LLMClient = Depends(get_llm_client),
    store: ObjectStore = Depends(get_object_store),
):
    """
    Upload a resume (.pdf, .docx) or paste its text, parse it into structured
    resume data and keep the original and parsed copies in S3.
    """
    file, text_content = await _read_request(request)

    data: Optional[bytes] = None
    if file is not None:
        data = await file.read()
        logger.info("Processing file: %s, type: %s, size: %d", file.filename, file.content_type, len(data))
        resume_text = extract_text(file.filename or "", file.content_type, data)
    elif text_content:
        resume_text = text_content
        logger.info("Using provided text content, length: %d", len(resume_text))
    else:
        raise ValidationError("Please provide either a file or text content")

    if not resume_text.strip():
        raise ValidationError("No text content found in the uploaded file")

    with error_boundary("Failed to process resume. Please try again or contact support."):
        parsed = await parse_resume_text(llm, resume_text)

    file_name = file.filename if file is not None and file.filename else "text-input"
    stored = None
    if file is not None and data is not None:
        stored = await store_upload(store, file_name, file.content_type, data, parsed)

    return {
        "success": True,
        "data": parsed,
        "fileName": file_name,
        "fileContent": resume_text,
        "parsedData": parsed,
        "s3Url": stored.s3_url if stored else None,
        "originalFileKey": stored.original_key if stored else None,
        "saved": True,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
