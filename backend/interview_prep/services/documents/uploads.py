import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ..storage import keys
from ..storage.object_store import ObjectStore

logger = logging.getLogger(__name__)


@dataclass
class StoredUpload:
    s3_url: Optional[str] = None
    original_key: Optional[str] = None
    parsed_key: Optional[str] = None


async def store_upload(
    store: ObjectStore,
    file_name: str,
    content_type: Optional[str],
    data: bytes,
    parsed: Dict[str, Any],
    timestamp_ms: Optional[int] = None,
) -> StoredUpload:
    """
    Keep the uploaded file under ``original-resumes/`` and its parsed form
    under ``parsed-resumes/``, both stamped with the same timestamp.

    Best effort: a storage failure is logged and an empty result returned.
    """
    if not store.is_configured:
        return StoredUpload()

    ts = timestamp_ms if timestamp_ms is not None else keys.now_millis()
    now = datetime.now(timezone.utc).isoformat()
    original_key = keys.original_resume_key(file_name, ts)
    parsed_key = keys.parsed_resume_key(file_name, ts)
    contact = parsed.get("contact")

    result = StoredUpload()
    try:
        await store.put(
            original_key,
            data,
            content_type or "application/octet-stream",
            metadata={"originalName": file_name, "uploadedAt": now, "parsedAt": str(ts)},
        )
        result.s3_url = store.s3_url(original_key)
        result.original_key = original_key
        logger.info("Original resume uploaded to S3: %s", result.s3_url)

        await store.put(
            parsed_key,
            json.dumps(parsed, indent=2).encode("utf-8"),
            "application/json",
            metadata={
                "originalFileName": file_name,
                "parsedAt": now,
                "originalKey": original_key,
                "resumeName": (contact.get("email") if isinstance(contact, dict) else None) or "unknown",
            },
        )
        result.parsed_key = parsed_key
        logger.info("Parsed resume data saved to S3: %s", store.s3_url(parsed_key))
    except Exception as exc:
        logger.warning("S3 upload failed, continuing without storage: %s", exc)
    return result
