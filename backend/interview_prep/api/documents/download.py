from urllib.parse import quote

from fastapi import APIRouter, Depends, Query, Response

from ...config import Settings, get_settings
from ...errors import ValidationError, error_boundary
from ...services.storage import ObjectStore, keys
from ..deps import get_object_store, require_store

router = APIRouter()


@router.get("/documents/download")
async def download_document_endpoint(
    key: str = Query(""),
    download: bool = Query(False),
    store: ObjectStore = Depends(get_object_store),
    settings: Settings = Depends(get_settings),
):
    """
    ``download=true`` returns a short-lived signed URL; otherwise the object
    itself is streamed back as an attachment.
    """
    if not key:
        raise ValidationError("Document key is required")
    require_store(store)

    with error_boundary("Failed to download document"):
        if download:
            url = await store.presign_get(key, settings.SIGNED_URL_EXPIRES)
            return {"downloadUrl": url, "expiresIn": settings.SIGNED_URL_EXPIRES}
        stored = await store.get(key)

    file_name = quote(keys.file_name_from_key(key), safe=" ._-()")
    return Response(
        content=stored.body,
        media_type=stored.content_type,
        headers={"Content-Disposition": f'attachment; filename="{file_name}"'},
    )
