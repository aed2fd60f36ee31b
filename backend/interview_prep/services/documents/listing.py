"""
Read-side views over the object store.

Listing results are computed fresh on every call. Per-object enrichment
(fetching and parsing JSON bodies) is best effort: a failure there degrades the
item, never the listing.
"""
import asyncio
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from ...errors import AppError, ListError, StoreError, ValidationError
from ...schemas.documents import (
    DocumentItem,
    DocumentListing,
    DocumentMetadata,
    TailoredResumeFlags,
    TailoredResumeSummary,
)
from ..storage import keys
from ..storage.object_store import ObjectListing, ObjectStore, ObjectSummary

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _recency(last_modified: Optional[datetime]) -> datetime:
    if last_modified is None:
        return EPOCH
    if last_modified.tzinfo is None:
        return last_modified.replace(tzinfo=timezone.utc)
    return last_modified


def sort_by_recency(items: List[Any]) -> List[Any]:
    """Newest first; items without a modification time go last."""
    return sorted(items, key=lambda item: _recency(item.last_modified), reverse=True)


def download_urls(key: str, api_prefix: str = "/api") -> Dict[str, str]:
    base = f"{api_prefix}/documents/download?key={quote(key, safe='')}"
    return {"download_url": base, "signed_download_url": f"{base}&download=true"}


async def _list_prefix(
    store: ObjectStore,
    prefix: str,
    limit: int,
    message: str = "Failed to list documents from S3",
) -> ObjectListing:
    try:
        return await store.list(prefix, max_keys=limit)
    except Exception as exc:
        raise ListError(message, details=str(exc)) from exc


def _metadata_projection(data: Dict[str, Any]) -> DocumentMetadata:
    return DocumentMetadata(
        original_file_name=data.get("fileName") or data.get("originalFileName"),
        company_name=data.get("companyName"),
        role_title=data.get("roleTitle"),
        uploaded_at=data.get("uploadedAt"),
        created_at=data.get("createdAt"),
    )


async def _fetch_metadata(store: ObjectStore, key: str) -> DocumentMetadata:
    try:
        stored = await store.get(key)
        body = stored.body.decode("utf-8", errors="replace").strip()
        if not body.startswith("{"):
            return DocumentMetadata()
        data = json.loads(body)
        if not isinstance(data, dict):
            return DocumentMetadata()
        return _metadata_projection(data)
    except Exception as exc:
        logger.warning("Failed to get metadata for document %s: %s", key, exc)
        return DocumentMetadata()


async def _to_item(
    store: ObjectStore,
    summary: ObjectSummary,
    doc_type: str,
    api_prefix: str,
) -> DocumentItem:
    item = DocumentItem(
        key=summary.key,
        size=summary.size,
        last_modified=summary.last_modified,
        type=doc_type,
        file_name=keys.file_name_from_key(summary.key),
        **download_urls(summary.key, api_prefix),
    )
    if doc_type == "parsed" and summary.key.endswith(".json"):
        item.metadata = await _fetch_metadata(store, summary.key)
    return item


async def fetch_documents(
    store: ObjectStore,
    prefix: str,
    doc_type: str,
    limit: int,
    api_prefix: str = "/api",
) -> DocumentListing:
    listing = await _list_prefix(store, prefix, limit)
    items = await asyncio.gather(
        *(_to_item(store, summary, doc_type, api_prefix) for summary in listing.objects)
    )
    unique: Dict[str, DocumentItem] = {}
    for item in items:
        unique.setdefault(item.key, item)
    return DocumentListing(documents=list(unique.values()), has_more=listing.is_truncated)


async def list_documents(
    store: ObjectStore,
    doc_type: str = "all",
    limit: int = 20,
    api_prefix: str = "/api",
) -> DocumentListing:
    """
    ``limit`` applies per prefix. For ``all``, prefixes are scanned in table
    order and the first occurrence of a key wins.
    """
    if doc_type == "all":
        seen = set()
        merged = DocumentListing()
        for name, prefix in keys.DOCUMENT_PREFIXES.items():
            listing = await fetch_documents(store, prefix, name, limit, api_prefix)
            merged.has_more = merged.has_more or listing.has_more
            for doc in listing.documents:
                if doc.key not in seen:
                    seen.add(doc.key)
                    merged.documents.append(doc)
    elif doc_type in keys.DOCUMENT_PREFIXES:
        merged = await fetch_documents(
            store, keys.DOCUMENT_PREFIXES[doc_type], doc_type, limit, api_prefix
        )
    else:
        raise ValidationError("Invalid document type")

    merged.documents = sort_by_recency(merged.documents)
    return merged


async def _summarize_envelope(store: ObjectStore, summary: ObjectSummary) -> Optional[TailoredResumeSummary]:
    try:
        stored = await store.get(summary.key)
        data = json.loads(stored.body.decode("utf-8")) if stored.body else {}
    except (AppError, ValueError) as exc:
        logger.error("Skipping unreadable resume object %s: %s", summary.key, exc)
        return None
    if not isinstance(data, dict):
        logger.error("Skipping non-object resume object %s", summary.key)
        return None

    return TailoredResumeSummary(
        key=summary.key,
        size=summary.size,
        last_modified=summary.last_modified,
        company_name=data.get("companyName") or "Unknown",
        role_title=data.get("roleTitle") or "Unknown Role",
        created_at=data.get("createdAt"),
        s3_url=store.s3_url(summary.key),
        metadata=TailoredResumeFlags(
            has_original=bool(data.get("originalResume")),
            has_tailored=bool(data.get("tailoredResume")),
            has_job_description=bool(data.get("jobDescription")),
        ),
    )


async def list_tailored_resumes(
    store: ObjectStore,
    prefix: str = keys.TAILORED_PREFIX,
    limit: int = 10,
) -> Dict[str, Any]:
    """
    Summaries of stored envelopes. Objects that cannot be read or parsed are
    skipped rather than failing the whole listing.
    """
    listing = await _list_prefix(store, prefix, limit, message="Failed to list resumes from S3")
    summaries = await asyncio.gather(
        *(_summarize_envelope(store, summary) for summary in listing.objects)
    )
    resumes = sort_by_recency([s for s in summaries if s is not None])
    return {
        "resumes": [r.to_json() for r in resumes],
        "total": listing.key_count,
        "hasMore": listing.is_truncated,
    }


async def get_envelope(store: ObjectStore, key: str) -> Dict[str, Any]:
    stored = await store.get(key)
    try:
        data = json.loads(stored.body.decode("utf-8"))
    except ValueError as exc:
        raise StoreError("Stored resume is not valid JSON", details=key) from exc
    if not isinstance(data, dict):
        raise StoreError("Stored resume is not a JSON object", details=key)
    return data
