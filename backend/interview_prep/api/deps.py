from functools import lru_cache

from fastapi import Depends

from ..config import Settings, get_settings
from ..errors import NotConfigured
from ..services.applications import ApplicationRepository, InMemoryApplicationRepository
from ..services.llm.client import LLMClient
from ..services.storage import ObjectStore


def get_object_store(settings: Settings = Depends(get_settings)) -> ObjectStore:
    return _object_store(
        settings.AWS_S3_BUCKET,
        settings.AWS_REGION,
        settings.AWS_ACCESS_KEY_ID,
        settings.AWS_SECRET_ACCESS_KEY,
    )


@lru_cache
def _object_store(bucket, region, access_key_id, secret_access_key) -> ObjectStore:
    # One boto3 client per credential set
    return ObjectStore(bucket, region, access_key_id, secret_access_key)


def get_llm_client(settings: Settings = Depends(get_settings)) -> LLMClient:
    return _llm_client(settings.OPENAI_API_KEY, settings.OPENAI_MODEL, settings.OPENAI_TRANSCRIBE_MODEL)


@lru_cache
def _llm_client(api_key, model, transcribe_model) -> LLMClient:
    return LLMClient(api_key, model=model, transcribe_model=transcribe_model)


_applications = InMemoryApplicationRepository()


def get_application_repository() -> ApplicationRepository:
    return _applications


def require_store(store: ObjectStore, status_code: int = 503) -> ObjectStore:
    """Routes that cannot do anything without storage fail fast here."""
    if not store.is_configured:
        raise NotConfigured("AWS S3 not configured", status_code=status_code)
    return store
