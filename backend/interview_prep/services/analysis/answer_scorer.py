import re
from typing import List, Optional

BASE_SCORE = 50

# Expected answer length in seconds, per question type
EXPECTED_DURATIONS = {
    "behavioral": 120,
    "technical": 300,
    "situational": 90,
    "company": 60,
}
DEFAULT_DURATION = 120

SUGGESTION_MARKERS = ("suggest", "improve", "consider")


def calculate_score(answer: str, question_type: Optional[str], duration: Optional[float]) -> int:
    """
    Heuristic 0-100 score for a spoken answer: length, pacing against the
    expected duration for the question type, STAR structure words and the
    presence of numbers.
    """
    score = BASE_SCORE

    word_count = len(re.split(r"\s+", answer))
    if word_count > 50:
        score += 10
    if word_count > 100:
        score += 10
    if word_count > 200:
        score += 5

    if duration is not None:
        expected = EXPECTED_DURATIONS.get(question_type or "", DEFAULT_DURATION)
        ratio = duration / expected
        if 0.5 <= ratio <= 1.5:
            score += 15
        elif 0.3 <= ratio <= 2.0:
            score += 5

    if "situation" in answer or "task" in answer:
        score += 5
    if "action" in answer or "result" in answer:
        score += 5
    if re.search(r"\d", answer):
        score += 5

    return min(100, max(0, score))


def extract_suggestions(feedback: str) -> List[str]:
    return [
        line.strip()
        for line in feedback.split("\n")
        if any(marker in line for marker in SUGGESTION_MARKERS) and line.strip()
    ]
