"""
Object key layout. The millisecond timestamp keeps keys unique per write and
sorts them by recency without a separate index.
"""
import re
import time
from pathlib import PurePosixPath
from typing import Dict, Optional

ORIGINAL_PREFIX = "original-resumes/"
TAILORED_PREFIX = "tailored-resumes/"
PARSED_PREFIX = "parsed-resumes/"

# Iteration order matters: on duplicate keys the earlier prefix wins.
DOCUMENT_PREFIXES: Dict[str, str] = {
    "original": ORIGINAL_PREFIX,
    "tailored": TAILORED_PREFIX,
    "parsed": PARSED_PREFIX,
}

_SLUG_UNSAFE = re.compile(r"[^A-Za-z0-9._-]+")


def now_millis() -> int:
    return int(time.time() * 1000)


def slugify(value: Optional[str], default: str = "resume") -> str:
    slug = _SLUG_UNSAFE.sub("-", (value or "").strip()).strip("-")
    return slug or default


def _safe_file_name(file_name: Optional[str]) -> str:
    # Keep the original name readable but never let it add path segments.
    name = (file_name or "").replace("\\", "/").split("/")[-1].strip()
    return name or "resume"


def tailored_resume_key(role_title: Optional[str], timestamp_ms: Optional[int] = None) -> str:
    ts = timestamp_ms if timestamp_ms is not None else now_millis()
    return f"{TAILORED_PREFIX}{ts}-{slugify(role_title)}.json"


def original_resume_key(file_name: Optional[str], timestamp_ms: Optional[int] = None) -> str:
    ts = timestamp_ms if timestamp_ms is not None else now_millis()
    return f"{ORIGINAL_PREFIX}{ts}-{_safe_file_name(file_name)}"


def parsed_resume_key(file_name: Optional[str], timestamp_ms: Optional[int] = None) -> str:
    ts = timestamp_ms if timestamp_ms is not None else now_millis()
    stem = PurePosixPath(_safe_file_name(file_name)).stem
    return f"{PARSED_PREFIX}{ts}-{stem}-parsed.json"


def file_name_from_key(key: str) -> str:
    return key.rstrip("/").split("/")[-1] or "unknown"
