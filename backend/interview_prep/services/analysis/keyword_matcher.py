import json
import re
from typing import Any, Dict

_WORD = re.compile(r"[A-Za-z][A-Za-z0-9+#.\-]*")


def _keywords(text: str) -> set:
    return {w.lower().strip(".-") for w in _WORD.findall(text) if len(w.strip(".-")) > 3}


def calculate_role_match(resume_data: Dict[str, Any], job_description: str) -> dict:
    """
    Naive keyword coverage: which words of the job description (longer than
    three characters) appear anywhere in the resume.
    """
    jd_keywords = _keywords(job_description)
    if not jd_keywords:
        return {"percentage": 0, "found": [], "missing": []}

    resume_text = json.dumps(resume_data, ensure_ascii=False).lower()
    found = sorted(k for k in jd_keywords if k in resume_text)
    missing = sorted(jd_keywords.difference(found))

    percentage = int((len(found) / len(jd_keywords)) * 100)
    return {"percentage": percentage, "found": found, "missing": missing}
