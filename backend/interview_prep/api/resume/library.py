from fastapi import APIRouter, Depends, Query

from ...errors import ValidationError, error_boundary
from ...services.documents import deletion, listing
from ...services.storage import ObjectStore, keys
from ..deps import get_object_store, require_store

router = APIRouter()


@router.get("/resume/list")
async def list_tailored_resumes_endpoint(
    limit: int = Query(10, ge=1, le=1000),
    prefix: str = Query(keys.TAILORED_PREFIX),
    store: ObjectStore = Depends(get_object_store),
):
    if not store.is_configured:
        return {
            "resumes": [],
            "total": 0,
            "hasMore": False,
            "message": "AWS S3 not configured - no stored resumes available",
        }
    with error_boundary("Failed to list resumes"):
        return await listing.list_tailored_resumes(store, prefix=prefix, limit=limit)


@router.get("/resume/list/item")
async def get_tailored_resume_endpoint(
    key: str = Query(""),
    store: ObjectStore = Depends(get_object_store),
):
    if not key:
        raise ValidationError("Resume key is required")
    require_store(store)
    with error_boundary("Failed to fetch resume"):
        envelope = await listing.get_envelope(store, key)
    return {"success": True, "key": key, "resume": envelope}


@router.delete("/resume/list")
async def delete_tailored_resume_endpoint(
    key: str = Query(""),
    store: ObjectStore = Depends(get_object_store),
):
    if not key:
        raise ValidationError("Resume key is required")
    require_store(store)
    with error_boundary("Failed to delete resume"):
        await deletion.delete_document(store, key)
    return {"success": True, "message": "Resume deleted successfully"}
