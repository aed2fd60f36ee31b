from .object_store import (
    DeleteResult,
    ObjectListing,
    ObjectStore,
    ObjectSummary,
    StoredObject,
)
from . import keys

__all__ = [
    "DeleteResult",
    "ObjectListing",
    "ObjectStore",
    "ObjectSummary",
    "StoredObject",
    "keys",
]
