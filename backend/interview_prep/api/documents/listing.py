from fastapi import APIRouter, Depends, Query

from ...config import Settings, get_settings
from ...errors import error_boundary
from ...services.documents import listing
from ...services.storage import ObjectStore
from ..deps import get_object_store

router = APIRouter()


@router.get("/documents/list")
async def list_documents_endpoint(
    doc_type: str = Query("all", alias="type"),
    limit: int = Query(20, ge=1, le=1000),
    store: ObjectStore = Depends(get_object_store),
    settings: Settings = Depends(get_settings),
):
    """
    Stored documents of one kind (original, tailored, parsed) or all of them,
    newest first.
    """
    if not store.is_configured:
        return {
            "documents": [],
            "total": 0,
            "hasMore": False,
            "message": "AWS S3 not configured - no stored documents available",
        }
    with error_boundary("Failed to list documents from S3"):
        result = await listing.list_documents(store, doc_type, limit, api_prefix=settings.API_PREFIX)
    return {
        "documents": [doc.to_json() for doc in result.documents],
        "total": result.total,
        "hasMore": result.has_more,
    }
