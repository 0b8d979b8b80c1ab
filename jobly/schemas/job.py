from pydantic import BaseModel, Field
from typing import List, Optional
from decimal import Decimal

from jobly.schemas.company import CompanyResponse


class JobCreateRequest(BaseModel):
    """Schema for creating a new job"""
    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1)
    company_handle: str = Field(..., min_length=1, max_length=25, alias="companyHandle")

    class Config:
        extra = "forbid"


class JobUpdateRequest(BaseModel):
    """
    Schema for a partial job update.

    A job can never move to another company, so companyHandle (and id)
    are rejected along with any other unknown field.
    """
    title: str = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1)

    class Config:
        extra = "forbid"


class JobFilterParams(BaseModel):
    """
    Query parameters for searching jobs.

    Unknown keys are kept so the filter builder can reject them. Fields
    are only read under their query names; min_salary is unknown.
    """
    title: str = Field(None, min_length=1)
    min_salary: int = Field(None, ge=0, alias="minSalary")
    has_equity: bool = Field(None, alias="hasEquity")

    class Config:
        extra = "allow"


class JobResponse(BaseModel):
    """Schema for job response"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[Decimal] = None
    company_handle: str = Field(..., alias="companyHandle")

    class Config:
        populate_by_name = True


class JobListItem(JobResponse):
    """Job as returned by search, with its company's name"""
    company_name: Optional[str] = Field(None, alias="companyName")


class JobDetailResponse(BaseModel):
    """Job with the company that posted it"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[Decimal] = None
    company: CompanyResponse


class JobEnvelope(BaseModel):
    job: JobResponse


class JobDetailEnvelope(BaseModel):
    job: JobDetailResponse


class JobListEnvelope(BaseModel):
    jobs: List[JobListItem]
