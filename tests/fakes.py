"""Hand-written stand-ins for the object store and the generation service."""

import json
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from interview_prep.errors import NotConfigured, NotFound, StoreError
from interview_prep.services.llm.client import parse_json_object
from interview_prep.services.storage import (
    DeleteResult,
    ObjectListing,
    ObjectSummary,
    StoredObject,
)

BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class FakeObjectStore:
    """In-memory stand-in for ObjectStore with the same async surface."""

    def __init__(self, configured: bool = True, bucket: str = "test-bucket"):
        self.bucket = bucket
        self.configured = configured
        self.objects: Dict[str, Dict[str, Any]] = {}
        self.puts: List[str] = []
        self.fail_put = False
        self.fail_list = False
        self.unreadable: set = set()
        self.delete_errors: Dict[str, str] = {}
        self.extra_listing: Dict[str, List[ObjectSummary]] = {}
        self.truncate_prefixes: set = set()

    @property
    def is_configured(self) -> bool:
        return self.configured

    def s3_url(self, key: str) -> str:
        return f"s3://{self.bucket}/{key}"

    def add(self, key: str, body: Any = b"", last_modified: Optional[datetime] = None,
            content_type: str = "application/json") -> None:
        if isinstance(body, (dict, list)):
            body = json.dumps(body).encode("utf-8")
        elif isinstance(body, str):
            body = body.encode("utf-8")
        self.objects[key] = {
            "body": body,
            "content_type": content_type,
            "last_modified": last_modified,
            "metadata": {},
        }

    async def put(self, key, body, content_type, metadata=None):
        if self.fail_put:
            raise StoreError(f"Failed to store {key}", details="connection reset")
        self.puts.append(key)
        self.objects[key] = {
            "body": body,
            "content_type": content_type,
            "last_modified": BASE_TIME + timedelta(seconds=len(self.puts)),
            "metadata": metadata or {},
        }

    async def get(self, key):
        if key in self.unreadable:
            raise StoreError(f"Failed to read {key}", details="access denied")
        if key not in self.objects:
            raise NotFound("Document not found", details=key)
        obj = self.objects[key]
        return StoredObject(body=obj["body"], content_type=obj["content_type"])

    async def list(self, prefix="", max_keys=1000):
        if self.fail_list:
            raise StoreError(f"Failed to list prefix '{prefix}'", details="timeout")
        summaries = [
            ObjectSummary(key=key, size=len(obj["body"]), last_modified=obj["last_modified"])
            for key, obj in sorted(self.objects.items())
            if key.startswith(prefix)
        ]
        summaries.extend(self.extra_listing.get(prefix, []))
        truncated = len(summaries) > max_keys or prefix in self.truncate_prefixes
        summaries = summaries[:max_keys]
        return ObjectListing(objects=summaries, is_truncated=truncated, key_count=len(summaries))

    async def delete(self, key):
        self.objects.pop(key, None)

    async def delete_many(self, keys):
        result = DeleteResult()
        for key in keys:
            if key in self.delete_errors:
                result.errors.append({"key": key, "code": "AccessDenied", "message": self.delete_errors[key]})
                continue
            self.objects.pop(key, None)
            result.deleted_count += 1
        return result

    async def presign_get(self, key, expires_in=3600):
        return f"https://{self.bucket}.s3.amazonaws.com/{key}?X-Amz-Expires={expires_in}"


class FakeLLM:
    """
    Records prompts and replays queued replies. A reply may be a dict (sent
    back as JSON), a string, or an exception to raise.
    """

    def __init__(self, replies: Optional[List[Any]] = None, configured: bool = True):
        self.replies = list(replies or [])
        self.configured = configured
        self.calls: List[Dict[str, Any]] = []
        self.transcription = "I led the migration to Kubernetes."

    @property
    def is_configured(self) -> bool:
        return self.configured

    def _next(self) -> Any:
        reply = self.replies.pop(0) if self.replies else {}
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def complete_text(self, system_prompt, user_prompt, temperature=None, max_tokens=None, json_mode=False):
        if not self.configured:
            raise NotConfigured("OpenAI API key not configured")
        self.calls.append({"system": system_prompt, "user": user_prompt, "json_mode": json_mode})
        reply = self._next()
        return json.dumps(reply) if isinstance(reply, (dict, list)) else reply

    async def complete_json(self, system_prompt, user_prompt, temperature=None):
        content = await self.complete_text(system_prompt, user_prompt, temperature=temperature, json_mode=True)
        return parse_json_object(content)

    async def transcribe(self, audio, file_name="audio.webm", language="en"):
        if not self.configured:
            raise NotConfigured("OpenAI API key not configured")
        self.calls.append({"audio": audio})
        return self.transcription


TAILORED_RESUME = {
    "summary": "Backend engineer focused on distributed payments systems.",
    "skills": {
        "technical": ["Python", "Kafka", "PostgreSQL"],
        "soft": ["Mentoring"],
        "certifications": [],
    },
    "experience": [
        {
            "company": "Acme Pay",
            "role": "Senior Engineer",
            "duration": "2021 - Present",
            "location": "Berlin",
            "achievements": ["Cut settlement latency by 40%"],
            "responsibilities": ["Own the ledger service"],
            "keywords": ["payments"],
        }
    ],
    "education": [
        {"institution": "TU Munich", "degree": "BSc", "field": "Computer Science", "year": 2016}
    ],
    "contact": {"name": "Dana Lee", "email": "dana@example.com", "phone": "555-0100", "location": "Berlin"},
    "ats_score": 88,
    "ats_recommendations": ["Mention Kubernetes"],
    "tailoring_notes": {
        "keyChanges": ["Summary rewritten for payments"],
        "keywordsAdded": ["Kafka"],
        "focusAreas": ["reliability"],
    },
}

ORIGINAL_RESUME = {
    "summary": "Engineer.",
    "skills": ["Python", "SQL"],
    "experience": [{"company": "Acme Pay", "role": "Senior Engineer", "duration": "2021 - Present"}],
    "contact": {"name": "Dana Lee", "email": "dana@example.com"},
}

