import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from langchain_core.prompts import PromptTemplate
from pydantic import ValidationError as SchemaError

from ...errors import GenerationError, ValidationError
from ...schemas.resume import DocumentEnvelope, TailoredResume
from ..rendering.plaintext import render_resume_document
from ..storage import keys
from ..storage.object_store import ObjectStore
from .client import LLMClient

logger = logging.getLogger(__name__)

TAILOR_SYSTEM_PROMPT = """You are an expert resume writer and career consultant. Tailor the provided resume to perfectly match the job description while maintaining truthfulness and accuracy.

TAILORING GUIDELINES:
1. Rewrite the professional summary to align with the job requirements
2. Reorder and emphasize relevant skills based on job priorities
3. Rephrase experience descriptions using job description keywords
4. Quantify achievements that matter most for this role
5. Highlight relevant projects and technologies
6. Optimize for ATS compatibility with job-specific keywords
7. Maintain all factual information - only change presentation and emphasis

Return JSON with the same structure as the input resume but optimized for the specific job:
{
  "summary": "Tailored professional summary with job-specific keywords",
  "skills": {
    "technical": ["reordered and emphasized technical skills"],
    "soft": ["relevant soft skills for the role"],
    "certifications": ["prioritized certifications"]
  },
  "experience": [
    {
      "company": "Same company name",
      "role": "Same role title",
      "duration": "Same duration",
      "location": "Same location",
      "achievements": ["Rephrased achievements emphasizing job-relevant metrics"],
      "responsibilities": ["Rewritten responsibilities using job keywords"],
      "keywords": ["Enhanced keywords matching job requirements"]
    }
  ],
  "education": ["Same education but emphasized relevant aspects"],
  "contact": "Same contact information",
  "ats_score": "Improved ATS score",
  "ats_recommendations": ["Updated recommendations"],
  "tailoring_notes": {
    "keyChanges": ["Summary rewritten for X role", "Emphasized Y skills"],
    "keywordsAdded": ["keyword1", "keyword2"],
    "focusAreas": ["technical leadership", "cloud architecture"]
  }
}"""

TAILOR_USER_TEMPLATE = """Tailor this resume for the specific job:

COMPANY: {company}
ROLE: {role}

ORIGINAL RESUME:
{resume}

JOB DESCRIPTION:
{job_description}

Create a perfectly tailored version that maximizes match percentage while staying truthful."""


@dataclass
class TailorResult:
    tailored_resume: Dict[str, Any]
    document: str
    created_at: str
    s3_url: Optional[str] = None
    storage_error: Optional[str] = None


def _utc_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def build_tailor_prompt(
    resume_data: Dict[str, Any],
    job_description: str,
    company_name: Optional[str] = None,
    role_title: Optional[str] = None,
) -> str:
    prompt = PromptTemplate.from_template(TAILOR_USER_TEMPLATE)
    return prompt.format(
        company=company_name or "Target Company",
        role=role_title or "Target Role",
        resume=json.dumps(resume_data, indent=2),
        job_description=job_description,
    )


def validate_tailored_resume(payload: Dict[str, Any]) -> TailoredResume:
    try:
        return TailoredResume.model_validate(payload)
    except SchemaError as exc:
        raise GenerationError(
            "Generation service returned an unexpected resume shape",
            details=exc.errors(include_url=False, include_context=False),
        ) from exc


async def persist_envelope(
    store: ObjectStore,
    envelope: DocumentEnvelope,
    timestamp_ms: Optional[int] = None,
) -> str:
    ts = timestamp_ms if timestamp_ms is not None else keys.now_millis()
    key = keys.tailored_resume_key(envelope.role_title, ts)
    await store.put(
        key,
        envelope.to_bytes(),
        "application/json",
        metadata={
            "company": envelope.company_name,
            "role": envelope.role_title,
            "timestamp": str(ts),
        },
    )
    return store.s3_url(key)


async def tailor_resume(
    llm: LLMClient,
    store: Optional[ObjectStore],
    resume_data: Optional[Dict[str, Any]],
    job_description: Optional[str],
    company_name: Optional[str] = None,
    role_title: Optional[str] = None,
) -> TailorResult:
    """
    Generate a tailored resume and store it as an envelope.

    Storage is best effort: if the store is missing, unconfigured or failing,
    the tailored resume is still returned, with ``s3_url`` left as None.
    """
    if not resume_data or not (job_description or "").strip():
        raise ValidationError("Resume data and job description are required")

    raw = await llm.complete_json(
        TAILOR_SYSTEM_PROMPT,
        build_tailor_prompt(resume_data, job_description, company_name, role_title),
    )
    tailored = validate_tailored_resume(raw)
    tailored_json = tailored.to_json()
    document = render_resume_document(tailored)
    created_at = _utc_iso()

    result = TailorResult(tailored_resume=tailored_json, document=document, created_at=created_at)

    if store is None or not store.is_configured:
        return result

    envelope = DocumentEnvelope(
        company_name=company_name or "Unknown Company",
        role_title=role_title or "Unknown Role",
        created_at=created_at,
        original_resume=resume_data,
        tailored_resume=tailored_json,
        job_description=job_description,
        document=document,
    )
    try:
        result.s3_url = await persist_envelope(store, envelope)
    except Exception as exc:
        logger.warning("S3 storage failed, continuing without storage: %s", exc)
        result.storage_error = str(exc)
    return result
