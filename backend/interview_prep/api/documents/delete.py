from fastapi import APIRouter, Depends

from ...errors import NotConfigured, ValidationError, error_boundary
from ...schemas.documents import DeleteKeyRequest
from ...services.documents import deletion
from ...services.storage import ObjectStore
from ..deps import get_object_store, require_store

router = APIRouter()


@router.delete("/documents/delete")
async def delete_document_endpoint(
    request: DeleteKeyRequest,
    store: ObjectStore = Depends(get_object_store),
):
    if not request.key:
        raise ValidationError("Document key is required")
    require_store(store)
    with error_boundary("Failed to delete document"):
        await deletion.delete_document(store, request.key)
    return {"success": True, "message": "Document deleted successfully"}


@router.delete("/documents/clear-all")
async def clear_all_documents_endpoint(store: ObjectStore = Depends(get_object_store)):
    """
    Empty the bucket. Objects S3 refuses to delete are listed under
    ``errors``; the response is still a 200.
    """
    if not store.is_configured:
        raise NotConfigured("S3 bucket not configured")
    with error_boundary("Failed to clear S3 bucket"):
        return await deletion.clear_all(store)
