import logging
from typing import Any, Dict

from langchain_core.prompts import PromptTemplate
from pydantic import ValidationError as SchemaError

from ...errors import GenerationError, ValidationError
from ...schemas.resume import ResumeData
from .client import LLMClient, parse_json_object

logger = logging.getLogger(__name__)

PARSE_FAILED = "Failed to parse resume data. Please try again with a different format."

RESUME_PARSE_SYSTEM_PROMPT = """You are an expert ATS (Applicant Tracking System) consultant and resume parser. Parse the resume with extreme attention to preserving the EXACT work history details.

CRITICAL PARSING REQUIREMENTS:
- Extract company names, job titles and employment dates EXACTLY as they appear
- If multiple jobs at same company, list each role separately
- For CURRENT ROLES: set endDate to null and isCurrentRole to true
- For PAST ROLES: include the endDate and set isCurrentRole to false
- Separate technical skills, soft skills and certifications accurately

Return JSON with this exact structure:
{
  "summary": "Professional summary with skills and achievements",
  "skills": ["relevant technical/industry keywords"],
  "experience": [
    {
      "company": "Company Name",
      "role": "Job Title",
      "startDate": "MM/YYYY",
      "endDate": "MM/YYYY for past roles, null for current roles",
      "duration": "Full duration string as written in resume",
      "location": "City, State",
      "description": "Job description and achievements",
      "keywords": ["relevant keywords"],
      "isCurrentRole": false
    }
  ],
  "education": [
    {
      "institution": "University/School Name",
      "degree": "Full Degree Name",
      "field": "Field of Study",
      "year": "YYYY",
      "gpa": "X.X if mentioned",
      "honors": "Honors if mentioned"
    }
  ],
  "contact": {
    "name": "Full name",
    "email": "extracted email",
    "phone": "extracted phone",
    "location": "City, State",
    "linkedin": "LinkedIn URL",
    "github": "GitHub URL",
    "website": "Portfolio URL"
  },
  "ats_score": "1-100 rating of ATS compatibility",
  "ats_recommendations": ["Specific suggestions to improve ATS compatibility"]
}"""

RESUME_PARSE_USER_TEMPLATE = """Parse this resume text - IGNORE any metadata/artifacts like ICC_PROFILE, font information, or PDF formatting data. Focus only on actual resume content:

{resume_text}"""


async def parse_resume_text(llm: LLMClient, resume_text: str) -> Dict[str, Any]:
    """
    Turn raw resume text into structured resume data.

    A reply that is not a JSON object, or that carries none of the resume
    sections, is the caller's problem (400): the usual cause is an input the
    model could not make sense of.
    """
    prompt = PromptTemplate.from_template(RESUME_PARSE_USER_TEMPLATE).format(resume_text=resume_text)
    content = await llm.complete_text(RESUME_PARSE_SYSTEM_PROMPT, prompt, json_mode=True)
    try:
        parsed = ResumeData.model_validate(parse_json_object(content))
    except (GenerationError, SchemaError) as exc:
        logger.error("Resume parse rejected: %s", exc)
        raise ValidationError(PARSE_FAILED) from exc

    data = parsed.to_json()
    logger.info("Parsed resume: %d experience entries", len(parsed.experience))
    return data
