from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import ensure_admin
from jobly.core.errors import InvalidInput, validation_messages
from jobly.crud import company as company_crud
from jobly.schemas.company import (
    CompanyCreateRequest,
    CompanyUpdateRequest,
    CompanyFilterParams,
    CompanyEnvelope,
    CompanyDetailEnvelope,
    CompanyListEnvelope,
    DeletedResponse,
)

router = APIRouter(prefix="/companies", tags=["Companies"])


def parse_company_filters(request: Request) -> dict:
    """
    Validate search query parameters.

    Values are coerced (minEmployees=5 -> 5); unknown keys are passed
    through so the filter builder can reject them.
    """
    try:
        params = CompanyFilterParams.model_validate(dict(request.query_params))
    except ValidationError as e:
        raise InvalidInput(validation_messages(e.errors()))

    return params.model_dump(by_alias=True, exclude_none=True)


@router.post("/", status_code=201, response_model=CompanyEnvelope)
def create_company(
    request: CompanyCreateRequest,
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin)
):
    """
    Create a company.

    Authorization required: admin
    """
    company = company_crud.create(db, request.model_dump(by_alias=True))
    return {"company": company}


@router.get("/", response_model=CompanyListEnvelope)
def list_companies(
    filters: dict = Depends(parse_company_filters),
    db: Session = Depends(get_db)
):
    """
    List companies, optionally filtered.

    Query parameters:
        name: Case-insensitive partial match on company name
        minEmployees: Minimum number of employees
        maxEmployees: Maximum number of employees

    Authorization required: none
    """
    companies = company_crud.find_all(db, filters)
    return {"companies": companies}


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
def get_company(handle: str, db: Session = Depends(get_db)):
    """
    Retrieve a company with its jobs.

    Authorization required: none
    """
    company = company_crud.get(db, handle)
    return {"company": company}


@router.patch("/{handle}", response_model=CompanyEnvelope)
def update_company(
    handle: str,
    request: CompanyUpdateRequest,
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin)
):
    """
    Partially update a company. Only the fields sent are changed.

    Fields can be: name, description, numEmployees, logoUrl

    Authorization required: admin
    """
    company = company_crud.update(db, handle, request.model_dump(by_alias=True, exclude_unset=True))
    return {"company": company}


@router.delete("/{handle}", response_model=DeletedResponse)
def delete_company(
    handle: str,
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin)
):
    """
    Delete a company and its jobs.

    Authorization required: admin
    """
    company_crud.remove(db, handle)
    return {"deleted": handle}
