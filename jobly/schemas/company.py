from pydantic import BaseModel, Field
from typing import List, Optional
from decimal import Decimal


class CompanyCreateRequest(BaseModel):
    """Schema for creating a new company"""
    handle: str = Field(..., min_length=1, max_length=25, pattern=r"^[a-z0-9-]+$")
    name: str = Field(..., min_length=1)
    description: str
    num_employees: Optional[int] = Field(None, ge=0, alias="numEmployees")
    logo_url: Optional[str] = Field(None, alias="logoUrl")

    class Config:
        extra = "forbid"


class CompanyUpdateRequest(BaseModel):
    """
    Schema for a partial company update.

    Only fields present in the request are changed. The handle is not
    accepted; name and description may be omitted but not set to null.
    """
    name: str = Field(None, min_length=1)
    description: str = None
    num_employees: Optional[int] = Field(None, ge=0, alias="numEmployees")
    logo_url: Optional[str] = Field(None, alias="logoUrl")

    class Config:
        extra = "forbid"


class CompanyFilterParams(BaseModel):
    """
    Query parameters for searching companies.

    Unknown keys are kept so the filter builder can reject them. Fields
    are only read under their query names; min_employees is unknown.
    """
    name: str = Field(None, min_length=1)
    min_employees: int = Field(None, ge=0, alias="minEmployees")
    max_employees: int = Field(None, ge=0, alias="maxEmployees")

    class Config:
        extra = "allow"


class CompanyResponse(BaseModel):
    """Schema for company response"""
    handle: str
    name: str
    description: str
    num_employees: Optional[int] = Field(None, alias="numEmployees")
    logo_url: Optional[str] = Field(None, alias="logoUrl")

    class Config:
        populate_by_name = True


class CompanyJobResponse(BaseModel):
    """A job as listed under its company"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[Decimal] = None


class CompanyDetailResponse(CompanyResponse):
    """Company with the jobs it has posted"""
    jobs: List[CompanyJobResponse] = []


class CompanyEnvelope(BaseModel):
    company: CompanyResponse


class CompanyDetailEnvelope(BaseModel):
    company: CompanyDetailResponse


class CompanyListEnvelope(BaseModel):
    companies: List[CompanyResponse]


class DeletedResponse(BaseModel):
    """Identifier of a deleted record"""
    deleted: str
