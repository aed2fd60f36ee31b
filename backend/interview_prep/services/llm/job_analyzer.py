import logging
from typing import Any, Dict, Optional

from langchain_core.prompts import PromptTemplate

from ...errors import ValidationError
from ...utils.text import strip_control_chars
from ..external.job_posting import fetch_job_description
from .client import LLMClient

logger = logging.getLogger(__name__)

JOB_ANALYSIS_SYSTEM_PROMPT = """Analyze the job description and extract structured data. Return JSON with this exact structure:
{
  "company": "Company Name",
  "role": "Job Title",
  "experience": "3+ years of relevant experience required",
  "requiredSkills": ["skill1", "skill2"],
  "preferredSkills": ["skill3", "skill4"],
  "responsibilities": ["responsibility1", "responsibility2"],
  "qualifications": ["qualification1", "qualification2"],
  "experienceLevel": "Entry/Mid/Senior/Executive",
  "requiredYears": 3,
  "location": "City, State",
  "workType": "Remote/Hybrid/Onsite",
  "companyInfo": "Brief company description",
  "keywords": ["keyword1", "keyword2"],
  "sentiment": 0.8
}"""

JOB_ANALYSIS_USER_TEMPLATE = "Analyze this job description and extract all relevant information:\n\n{description}"


async def analyze_job(
    llm: LLMClient,
    description: Optional[str] = None,
    url: Optional[str] = None,
    fetch_timeout: float = 30.0,
) -> Dict[str, Any]:
    """
    Structured breakdown of a job posting. The posting is fetched from ``url``
    only when no description text was supplied.
    """
    text = description
    if url and not text:
        text = await fetch_job_description(url, timeout=fetch_timeout)

    if not text or not text.strip():
        raise ValidationError("Job description is required")

    cleaned = strip_control_chars(text)
    logger.info("Analyzing job description, length: %d", len(cleaned))
    prompt = PromptTemplate.from_template(JOB_ANALYSIS_USER_TEMPLATE).format(description=cleaned)
    analysis = await llm.complete_json(JOB_ANALYSIS_SYSTEM_PROMPT, prompt)

    result: Dict[str, Any] = {"description": cleaned, "analysis": analysis}
    if url:
        result["url"] = url
    return result
