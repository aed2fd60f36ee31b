import logging

from fastapi import APIRouter, Request, Response
from pydantic import ValidationError as SchemaError

from ...errors import UpstreamError, ValidationError
from ...schemas.resume import ResumeData, ResumeWithJobRequest
from ...services.rendering.pdf import render_resume_pdf

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/resume/generate-pdf")
async def generate_pdf_endpoint(request: Request):
    body = await request.body()
    if not body.strip():
        raise ValidationError("Empty request body")
    try:
        payload = ResumeWithJobRequest.model_validate_json(body)
    except SchemaError as exc:
        raise ValidationError("Invalid JSON in request body", details=str(exc)) from exc
    if not payload.resume_data:
        raise ValidationError("No resume data provided")

    try:
        resume = ResumeData.model_validate(payload.resume_data)
    except SchemaError as exc:
        raise ValidationError("Invalid resume data", details=exc.errors(include_url=False, include_context=False)) from exc

    try:
        pdf = render_resume_pdf(resume, payload.job_description)
    except Exception as exc:
        logger.exception("PDF generation error: %s", exc)
        raise UpstreamError("Failed to generate PDF", details=str(exc)) from exc

    logger.info("Generated PDF, %d bytes", len(pdf))
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": "inline; filename=resume.pdf"},
    )
