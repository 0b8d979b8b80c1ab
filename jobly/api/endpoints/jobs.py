from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import ensure_admin
from jobly.core.errors import InvalidInput, validation_messages
from jobly.crud import company as company_crud
from jobly.crud import job as job_crud
from jobly.schemas.company import DeletedResponse
from jobly.schemas.job import (
    JobCreateRequest,
    JobUpdateRequest,
    JobFilterParams,
    JobEnvelope,
    JobDetailEnvelope,
    JobListEnvelope,
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])


def parse_job_filters(request: Request) -> dict:
    """
    Validate search query parameters.

    hasEquity accepts the usual boolean spellings (true/false, 1/0);
    hasEquity=false is the same as leaving it out.
    """
    try:
        params = JobFilterParams.model_validate(dict(request.query_params))
    except ValidationError as e:
        raise InvalidInput(validation_messages(e.errors()))

    return params.model_dump(by_alias=True, exclude_none=True)


@router.post("/", status_code=201, response_model=JobEnvelope)
def create_job(
    request: JobCreateRequest,
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin)
):
    """
    Create a job for an existing company.

    Authorization required: admin
    """
    if not company_crud.exists(db, request.company_handle):
        raise InvalidInput(f"No company: {request.company_handle}")

    job = job_crud.create(db, request.model_dump(by_alias=True))
    return {"job": job}


@router.get("/", response_model=JobListEnvelope)
def list_jobs(
    filters: dict = Depends(parse_job_filters),
    db: Session = Depends(get_db)
):
    """
    List jobs, optionally filtered.

    Query parameters:
        title: Case-insensitive partial match on job title
        minSalary: Minimum salary
        hasEquity: true to only list jobs with non-zero equity

    Authorization required: none
    """
    jobs = job_crud.find_all(db, filters)
    return {"jobs": jobs}


@router.get("/{job_id}", response_model=JobDetailEnvelope)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """
    Retrieve a job with its company.

    Authorization required: none
    """
    job = job_crud.get(db, job_id)
    return {"job": job}


@router.patch("/{job_id}", response_model=JobEnvelope)
def update_job(
    job_id: int,
    request: JobUpdateRequest,
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin)
):
    """
    Partially update a job. Only the fields sent are changed.

    Fields can be: title, salary, equity

    Authorization required: admin
    """
    job = job_crud.update(db, job_id, request.model_dump(exclude_unset=True))
    return {"job": job}


@router.delete("/{job_id}", response_model=DeletedResponse)
def delete_job(
    job_id: int,
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin)
):
    """
    Delete a job.

    Authorization required: admin
    """
    job_crud.remove(db, job_id)
    return {"deleted": str(job_id)}
