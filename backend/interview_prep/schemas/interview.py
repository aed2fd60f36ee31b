from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


# For POST /interview/generate-questions
class QuestionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    job_title: Optional[str] = Field(None, alias="jobTitle")
    company: Optional[str] = None
    interview_type: str = Field("behavioral", alias="interviewType")
    question_count: int = Field(5, alias="questionCount", ge=1, le=20)


# For POST /prep/feedback
class FeedbackRequest(BaseModel):
    question: Optional[str] = None
    answer: Optional[str] = None
    type: Optional[str] = None
    duration: Optional[float] = None  # seconds


# For POST /interview/transcribe
class TranscribeRequest(BaseModel):
    audio: Optional[str] = None  # base64
