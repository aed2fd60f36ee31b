"""ApplicationRepository: keyed store for tracked job applications."""

import secrets
import string
import threading
import time
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from ...errors import NotFound
from ...schemas.application import ApplicationStatus, JobApplication, JobApplicationCreate

_BASE36 = string.digits + string.ascii_lowercase


def _to_base36(number: int) -> str:
    if number == 0:
        return "0"
    out = []
    while number:
        number, rem = divmod(number, 36)
        out.append(_BASE36[rem])
    return "".join(reversed(out))


def generate_id() -> str:
    """Random base-36 part followed by a base-36 millisecond timestamp."""
    random_part = _to_base36(secrets.randbits(52))
    return random_part + _to_base36(int(time.time() * 1000))


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ApplicationRepository(ABC):
    """
    Interface the routes depend on. The in-memory implementation below is the
    only one today; a durable store can replace it without touching callers.
    """

    @abstractmethod
    def create(self, data: JobApplicationCreate) -> JobApplication: ...

    @abstractmethod
    def list(self, user_id: Optional[str] = None) -> List[JobApplication]: ...

    @abstractmethod
    def get(self, application_id: str) -> JobApplication: ...

    @abstractmethod
    def update_status(self, application_id: str, status: ApplicationStatus) -> JobApplication: ...

    @abstractmethod
    def delete(self, application_id: str) -> None: ...


class InMemoryApplicationRepository(ApplicationRepository):
    """
    Process-lifetime storage. Every read-modify-write happens under one lock,
    so concurrent updates to the same id are serialized (last write wins).

    Status changes are not checked against a transition graph: any status can
    follow any other.
    """

    def __init__(self) -> None:
        self._records: Dict[str, JobApplication] = {}
        self._lock = threading.Lock()

    def create(self, data: JobApplicationCreate) -> JobApplication:
        now = _utcnow()
        with self._lock:
            application_id = generate_id()
            while application_id in self._records:
                application_id = generate_id()
            record = JobApplication(
                id=application_id,
                applied_date=now,
                last_updated=now,
                created_at=now,
                **data.model_dump(),
            )
            self._records[application_id] = record
        return record

    def list(self, user_id: Optional[str] = None) -> List[JobApplication]:
        with self._lock:
            records = list(self._records.values())
        if user_id:
            records = [r for r in records if r.user_id == user_id]
        # Insertion order breaks ties between records created in the same tick
        ordered = sorted(enumerate(records), key=lambda pair: (pair[1].created_at, pair[0]), reverse=True)
        return [record for _, record in ordered]

    def get(self, application_id: str) -> JobApplication:
        with self._lock:
            record = self._records.get(application_id)
        if record is None:
            raise NotFound("Job application not found")
        return record

    def update_status(self, application_id: str, status: ApplicationStatus) -> JobApplication:
        with self._lock:
            current = self._records.get(application_id)
            if current is None:
                raise NotFound("Job application not found")
            now = _utcnow()
            # lastUpdated only moves forward, even if the clock has not ticked
            if now <= current.last_updated:
                now = current.last_updated + timedelta(microseconds=1)
            updated = current.model_copy(update={"status": status, "last_updated": now})
            self._records[application_id] = updated
        return updated

    def delete(self, application_id: str) -> None:
        with self._lock:
            if self._records.pop(application_id, None) is None:
                raise NotFound("Job application not found")

    def clear(self) -> None:
        with self._lock:
            self._records.clear()
