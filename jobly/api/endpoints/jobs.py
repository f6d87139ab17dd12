import logging
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import ensure_admin
from jobly.crud import job as job_crud
from jobly.crud.params import parse_jobs_query
from jobly.schemas.job import (
    JobCreateRequest,
    JobUpdateRequest,
    JobEnvelope,
    JobListEnvelope,
    JobDeletedResponse,
)
from jobly.schemas.user import CurrentUser

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=JobEnvelope)
def create_job(
    request: JobCreateRequest,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(ensure_admin),
):
    """
    Create a job posting.

    Body: { title, salary, equity, companyHandle }

    Authorization required: admin
    """
    new_job = job_crud.create(db, request)
    return {"job": new_job}


@router.get("/", response_model=JobListEnvelope)
def list_jobs(request: Request, db: Session = Depends(get_db)):
    """
    List jobs ordered by title.

    Optional query filters:
    - title: case-insensitive substring
    - minSalary: salary at least this much
    - hasEquity: true for equity above zero, false for no equity

    Authorization required: none
    """
    filters = parse_jobs_query(request.query_params)
    return {"jobs": job_crud.find_all(db, filters)}


@router.get("/{job_id}", response_model=JobEnvelope)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """
    Retrieve a job by ID.

    Authorization required: none
    """
    return {"job": job_crud.get(db, job_id)}


@router.patch("/{job_id}", response_model=JobEnvelope)
def update_job(
    job_id: int,
    request: JobUpdateRequest,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(ensure_admin),
):
    """
    Partially update a job. Fields can be: { title, salary, equity, companyHandle }

    Authorization required: admin
    """
    data = request.model_dump(exclude_unset=True, by_alias=True)
    return {"job": job_crud.update(db, job_id, data)}


@router.delete("/{job_id}", response_model=JobDeletedResponse)
def delete_job(
    job_id: int,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(ensure_admin),
):
    """
    Delete a job by ID.

    Authorization required: admin
    """
    job_crud.remove(db, job_id)
    logger.info(f"Admin {admin.username} deleted job {job_id}")
    return {"deleted": job_id}
