"""
Thin async wrapper around a boto3 S3 client.

Every blob operation the API needs goes through one configured ``ObjectStore``.
boto3 is blocking, so calls run in Starlette's thread pool. Callers check
``is_configured`` before using the store; the store itself never reports
"not configured".
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

import boto3
import boto3.session
from botocore.exceptions import BotoCoreError, ClientError
from starlette.concurrency import run_in_threadpool

from ...errors import NotFound, StoreError

logger = logging.getLogger(__name__)

MAX_BATCH_DELETE = 1000  # S3 DeleteObjects limit
_MISSING_CODES = {"NoSuchKey", "404", "NotFound"}


@dataclass
class ObjectSummary:
    key: str
    size: int = 0
    last_modified: Optional[datetime] = None


@dataclass
class ObjectListing:
    objects: List[ObjectSummary] = field(default_factory=list)
    is_truncated: bool = False
    key_count: int = 0


@dataclass
class StoredObject:
    body: bytes
    content_type: str = "application/octet-stream"


@dataclass
class DeleteResult:
    deleted_count: int = 0
    errors: List[Dict[str, Any]] = field(default_factory=list)


class ObjectStore:
    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        access_key_id: Optional[str] = None,
        secret_access_key: Optional[str] = None,
        client: Any = None,
    ) -> None:
        self.bucket = bucket
        self.region = region
        self._access_key_id = access_key_id
        self._secret_access_key = secret_access_key
        self._client = client
        # boto3's default session is not thread-safe; build the client up front,
        # on its own session, before any thread-pool call can race for it.
        if self._client is None and self.is_configured:
            self._client = self._build_client()

    def _build_client(self) -> Any:
        session = boto3.session.Session(
            aws_access_key_id=self._access_key_id,
            aws_secret_access_key=self._secret_access_key,
            region_name=self.region,
        )
        return session.client("s3")

    @property
    def is_configured(self) -> bool:
        return bool(self._access_key_id and self._secret_access_key)

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = self._build_client()
        return self._client

    def s3_url(self, key: str) -> str:
        return f"s3://{self.bucket}/{key}"

    async def put(
        self,
        key: str,
        body: bytes,
        content_type: str,
        metadata: Optional[Dict[str, str]] = None,
    ) -> None:
        params = {
            "Bucket": self.bucket,
            "Key": key,
            "Body": body,
            "ContentType": content_type,
        }
        if metadata:
            # S3 user metadata must be ASCII strings
            params["Metadata"] = {k: _ascii(v) for k, v in metadata.items()}
        try:
            await run_in_threadpool(lambda: self.client.put_object(**params))
        except (ClientError, BotoCoreError) as exc:
            raise StoreError(f"Failed to store {key}", details=str(exc)) from exc
        logger.info("Stored %s (%d bytes)", self.s3_url(key), len(body))

    async def get(self, key: str) -> StoredObject:
        try:
            response = await run_in_threadpool(
                lambda: self.client.get_object(Bucket=self.bucket, Key=key)
            )
            body = await run_in_threadpool(response["Body"].read)
        except ClientError as exc:
            if _error_code(exc) in _MISSING_CODES:
                raise NotFound("Document not found", details=key) from exc
            raise StoreError(f"Failed to read {key}", details=str(exc)) from exc
        except BotoCoreError as exc:
            raise StoreError(f"Failed to read {key}", details=str(exc)) from exc
        return StoredObject(
            body=body,
            content_type=response.get("ContentType") or "application/octet-stream",
        )

    async def list(self, prefix: str = "", max_keys: int = 1000) -> ObjectListing:
        """
        Return the first page only. Larger buckets are truncated, not iterated;
        ``is_truncated`` reports it.
        """
        params = {"Bucket": self.bucket, "MaxKeys": max_keys}
        if prefix:
            params["Prefix"] = prefix
        try:
            response = await run_in_threadpool(lambda: self.client.list_objects_v2(**params))
        except (ClientError, BotoCoreError) as exc:
            raise StoreError(f"Failed to list prefix '{prefix}'", details=str(exc)) from exc

        objects = [
            ObjectSummary(
                key=item["Key"],
                size=item.get("Size") or 0,
                last_modified=item.get("LastModified"),
            )
            for item in response.get("Contents") or []
        ]
        return ObjectListing(
            objects=objects,
            is_truncated=bool(response.get("IsTruncated")),
            key_count=response.get("KeyCount", len(objects)),
        )

    async def delete(self, key: str) -> None:
        try:
            await run_in_threadpool(
                lambda: self.client.delete_object(Bucket=self.bucket, Key=key)
            )
        except (ClientError, BotoCoreError) as exc:
            raise StoreError(f"Failed to delete {key}", details=str(exc)) from exc

    async def delete_many(self, keys: List[str]) -> DeleteResult:
        """
        Batch delete. Per-object failures come back in ``errors``; only a failed
        request raises.
        """
        result = DeleteResult()
        for start in range(0, len(keys), MAX_BATCH_DELETE):
            chunk = keys[start:start + MAX_BATCH_DELETE]
            payload = {"Objects": [{"Key": k} for k in chunk], "Quiet": False}
            try:
                response = await run_in_threadpool(
                    lambda: self.client.delete_objects(Bucket=self.bucket, Delete=payload)
                )
            except (ClientError, BotoCoreError) as exc:
                raise StoreError("Batch delete failed", details=str(exc)) from exc

            result.deleted_count += len(response.get("Deleted") or [])
            for err in response.get("Errors") or []:
                result.errors.append({
                    "key": err.get("Key"),
                    "code": err.get("Code"),
                    "message": err.get("Message"),
                })
        return result

    async def presign_get(self, key: str, expires_in: int = 3600) -> str:
        try:
            return await run_in_threadpool(
                lambda: self.client.generate_presigned_url(
                    "get_object",
                    Params={"Bucket": self.bucket, "Key": key},
                    ExpiresIn=expires_in,
                )
            )
        except (ClientError, BotoCoreError) as exc:
            raise StoreError(f"Failed to sign {key}", details=str(exc)) from exc


def _error_code(exc: ClientError) -> str:
    return str(exc.response.get("Error", {}).get("Code", ""))


def _ascii(value: Any) -> str:
    return str(value).encode("ascii", "replace").decode("ascii")
