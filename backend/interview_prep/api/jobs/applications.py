import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from ...schemas.application import JobApplicationCreate, StatusUpdate
from ...services.applications import ApplicationRepository
from ..deps import get_application_repository

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/jobs/applications", status_code=status.HTTP_201_CREATED)
def create_application(
    request: JobApplicationCreate,
    repo: ApplicationRepository = Depends(get_application_repository),
):
    record = repo.create(request)
    logger.info("Created job application %s (%s at %s)", record.id, record.job_title, record.company)
    return record.to_json()


@router.get("/jobs/applications")
def list_applications(
    user_id: Optional[str] = Query(None, alias="userId"),
    repo: ApplicationRepository = Depends(get_application_repository),
):
    return {"applications": [record.to_json() for record in repo.list(user_id)]}


@router.get("/jobs/applications/{application_id}")
def get_application(
    application_id: str,
    repo: ApplicationRepository = Depends(get_application_repository),
):
    return repo.get(application_id).to_json()


@router.patch("/jobs/applications/{application_id}")
def update_application_status(
    application_id: str,
    request: StatusUpdate,
    repo: ApplicationRepository = Depends(get_application_repository),
):
    record = repo.update_status(application_id, request.status)
    logger.info("Job application %s is now %s", application_id, record.status)
    return record.to_json()


@router.delete("/jobs/applications/{application_id}")
def delete_application(
    application_id: str,
    repo: ApplicationRepository = Depends(get_application_repository),
):
    repo.delete(application_id)
    return {"message": "Job application deleted successfully"}
