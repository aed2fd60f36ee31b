"""
Mock-interview helpers: question generation, answer feedback and audio
transcription.
"""
import logging
from typing import Any, Dict, Optional

from langchain_core.prompts import PromptTemplate

from ...errors import GenerationError, NotConfigured, ValidationError
from ..analysis.answer_scorer import calculate_score, extract_suggestions
from .client import LLMClient

logger = logging.getLogger(__name__)

QUESTIONS_SYSTEM_PROMPT = (
    "You are an expert interviewer who creates realistic, professional interview "
    "questions. Always respond with valid JSON."
)

QUESTIONS_TEMPLATE = """Generate {count} {interview_type} interview questions for a {job_title} position at {company}.

Return a JSON object with a "questions" array. Each question has an "id" ("q1", "q2", ...), the "question" text, its "type" ("{interview_type}") and an optional "followUp" list of follow-up questions.

Make the questions:
- Realistic and commonly asked in actual interviews
- Appropriate for the {job_title} role
- Progressively more challenging
- Mix of different question styles (tell me about, describe a time, how would you, etc.)

Focus on {interview_type} questions specifically."""

FEEDBACK_SYSTEM_PROMPT = (
    "You are a professional interview coach providing concise, actionable feedback "
    "on interview answers. Keep feedback encouraging but honest, focusing on "
    "specific improvements."
)

FEEDBACK_TEMPLATE = """As an experienced interview coach, provide constructive feedback on this interview answer:

Question Type: {question_type}
Question: {question}
Answer: {answer}
Answer Duration: {duration} seconds

Please provide feedback that includes:
1. Strengths of the answer
2. Areas for improvement
3. Specific suggestions for a stronger response
4. Whether the answer length was appropriate for the question type

Keep the feedback encouraging but honest, and limit to 2-3 sentences for voice delivery."""


def _require_llm(llm: LLMClient) -> None:
    if not llm.is_configured:
        raise NotConfigured("OpenAI API key not configured")


async def generate_questions(
    llm: LLMClient,
    job_title: Optional[str],
    company: Optional[str] = None,
    interview_type: str = "behavioral",
    question_count: int = 5,
) -> Dict[str, Any]:
    if not job_title:
        raise ValidationError("Job title is required")
    _require_llm(llm)

    prompt = PromptTemplate.from_template(QUESTIONS_TEMPLATE).format(
        count=question_count,
        interview_type=interview_type,
        job_title=job_title,
        company=company or "the company",
    )
    result = await llm.complete_json(QUESTIONS_SYSTEM_PROMPT, prompt, temperature=0.7)
    if not isinstance(result.get("questions"), list):
        raise GenerationError("Failed to generate interview questions", details="Invalid response format from OpenAI")
    return result


async def generate_feedback(
    llm: LLMClient,
    question: Optional[str],
    answer: Optional[str],
    question_type: Optional[str] = None,
    duration: Optional[float] = None,
) -> Dict[str, Any]:
    if not question or not answer:
        raise ValidationError("Question and answer are required")
    _require_llm(llm)

    prompt = PromptTemplate.from_template(FEEDBACK_TEMPLATE).format(
        question_type=question_type or "general",
        question=question,
        answer=answer,
        duration=duration if duration is not None else "unknown",
    )
    feedback = await llm.complete_text(FEEDBACK_SYSTEM_PROMPT, prompt, temperature=0.7, max_tokens=300)
    feedback = feedback or "No feedback generated"
    return {
        "feedback": feedback,
        "suggestions": extract_suggestions(feedback),
        "score": calculate_score(answer, question_type, duration),
    }


async def transcribe_answer(llm: LLMClient, audio: bytes) -> str:
    _require_llm(llm)
    text = await llm.transcribe(audio)
    logger.info("Transcribed %d bytes of audio into %d characters", len(audio), len(text))
    return text
