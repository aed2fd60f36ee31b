import logging
from typing import Any, Dict

from ...errors import ValidationError
from ..storage.object_store import ObjectStore

logger = logging.getLogger(__name__)


async def delete_document(store: ObjectStore, key: str) -> None:
    """
    Delete one object. Deleting a key that does not exist still succeeds.
    """
    if not key:
        raise ValidationError("Document key is required")
    await store.delete(key)
    logger.info("Deleted %s", store.s3_url(key))


async def clear_all(store: ObjectStore) -> Dict[str, Any]:
    """
    Remove everything in the bucket (first listing page only).

    Objects that survive the batch delete are reported under ``errors``; the
    call itself only fails if the list or delete request fails outright.
    """
    logger.info("Starting S3 bucket cleanup...")
    listing = await store.list("")
    if not listing.objects:
        logger.info("No objects found in S3 bucket")
        return {"message": "No documents found to delete", "deletedCount": 0}

    logger.info("Found %d objects to delete", len(listing.objects))
    result = await store.delete_many([obj.key for obj in listing.objects])
    logger.info("Successfully deleted %d objects", result.deleted_count)

    response: Dict[str, Any] = {
        "message": "Successfully cleared S3 bucket",
        "deletedCount": result.deleted_count,
    }
    if result.errors:
        logger.error("Some objects failed to delete: %s", result.errors)
        response["errors"] = result.errors
    return response
