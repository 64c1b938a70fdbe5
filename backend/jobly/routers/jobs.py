from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Request
from sqlalchemy.orm import Session

from jobly.database import get_db
from jobly.dependencies import allow_anyone, require_admin, require_logged_in
from jobly.errors import InvalidInputError
from jobly.schemas.job import (
    JobCreate,
    JobDeletedResponse,
    JobEnvelope,
    JobFilter,
    JobListEnvelope,
    JobUpdate,
    SQL_INT_MAX,
)
from jobly.services.job_service import job_service

router = APIRouter(prefix="/jobs", tags=["jobs"])

FILTER_PARAMS = {"title", "minSalary", "maxSalary", "hasEquity"}

# Writes need a login first, then admin rights, as two separate checks.
admin_only = [Depends(require_logged_in), Depends(require_admin)]

JobId = Annotated[int, Path(ge=0, le=SQL_INT_MAX)]


@router.post("", response_model=JobEnvelope, status_code=201, dependencies=admin_only)
async def create_job(req: JobCreate, db: Session = Depends(get_db)):
    return {"job": job_service.create(db, req)}


@router.get("", response_model=JobListEnvelope, dependencies=[Depends(allow_anyone)])
async def list_jobs(
    request: Request,
    title: str | None = None,
    min_salary: int | None = Query(None, alias="minSalary", ge=0, le=SQL_INT_MAX),
    max_salary: int | None = Query(None, alias="maxSalary", ge=0, le=SQL_INT_MAX),
    has_equity: bool | None = Query(None, alias="hasEquity"),
    db: Session = Depends(get_db),
):
    if set(request.query_params) - FILTER_PARAMS:
        raise InvalidInputError("Invalid filter query")

    filters = JobFilter(
        title=title,
        min_salary=min_salary,
        max_salary=max_salary,
        has_equity=has_equity,
    )
    return {"jobs": job_service.find_filtered(db, filters)}


@router.get("/{job_id}", response_model=JobEnvelope, dependencies=[Depends(allow_anyone)])
async def get_job(job_id: JobId, db: Session = Depends(get_db)):
    return {"job": job_service.get(db, job_id)}


@router.patch("/{job_id}", response_model=JobEnvelope, dependencies=admin_only)
async def update_job(job_id: JobId, req: JobUpdate, db: Session = Depends(get_db)):
    update_data = req.model_dump(exclude_unset=True)
    return {"job": job_service.update(db, job_id, update_data)}


@router.delete("/{job_id}", response_model=JobDeletedResponse, dependencies=admin_only)
async def delete_job(job_id: JobId, db: Session = Depends(get_db)):
    job_service.remove(db, job_id)
    return {"deleted": job_id}
