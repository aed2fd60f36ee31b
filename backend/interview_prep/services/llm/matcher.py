import json
from typing import Any, Dict, Optional

from langchain_core.prompts import PromptTemplate

from ...errors import ValidationError
from ..analysis.keyword_matcher import calculate_role_match
from .client import LLMClient

MATCH_SYSTEM_PROMPT = """You are an expert ATS and recruitment consultant. Analyze the resume against the job description and provide a detailed match assessment.

Calculate a match percentage based on:
1. Required skills overlap (40% weight)
2. Experience level and relevance (30% weight)
3. Education requirements (15% weight)
4. Industry keywords and terminology (15% weight)

Return JSON with this exact structure:
{
  "matchPercentage": 85,
  "skillsMatch": {"matched": ["skill1"], "missing": ["skill3"], "percentage": 75},
  "experienceMatch": {"relevantYears": 5, "requiredYears": 3, "levelMatch": "Senior", "percentage": 90},
  "educationMatch": {"meetsRequirements": true, "percentage": 100},
  "keywordMatch": {"matched": ["keyword1"], "missing": ["keyword3"], "percentage": 80},
  "strengths": ["Strong technical background"],
  "gaps": ["No cloud experience"],
  "recommendations": ["Include cloud projects"],
  "improvementPotential": 95
}"""

MATCH_USER_TEMPLATE = """Analyze this resume against the job description:

RESUME:
{resume}

JOB DESCRIPTION:
{job_description}

Provide detailed match analysis with actionable recommendations."""


async def analyze_match(
    llm: LLMClient,
    resume_data: Optional[Dict[str, Any]],
    job_description: Optional[str],
) -> Dict[str, Any]:
    if not resume_data or not (job_description or "").strip():
        raise ValidationError("Resume data and job description are required")

    prompt = PromptTemplate.from_template(MATCH_USER_TEMPLATE).format(
        resume=json.dumps(resume_data, indent=2),
        job_description=job_description,
    )
    analysis = await llm.complete_json(MATCH_SYSTEM_PROMPT, prompt)
    return {
        "success": True,
        "matchAnalysis": analysis,
        "keywordCoverage": calculate_role_match(resume_data, job_description),
    }
