from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

from jobly.schemas.job import MAX_INT


class CompanyCreateRequest(BaseModel):
    """Schema for creating a new company"""
    handle: str = Field(..., min_length=1, max_length=25)
    name: str = Field(..., min_length=1)
    description: str
    num_employees: Optional[int] = Field(None, ge=0, le=MAX_INT, alias="numEmployees")
    logo_url: Optional[str] = Field(None, alias="logoUrl")

    class Config:
        populate_by_name = True
        extra = "forbid"


class CompanyUpdateRequest(BaseModel):
    """Schema for a partial company update. The handle cannot change."""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, ge=0, le=MAX_INT, alias="numEmployees")
    logo_url: Optional[str] = Field(None, alias="logoUrl")

    @field_validator("name", "description")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("cannot be null")
        return v

    class Config:
        populate_by_name = True
        extra = "forbid"


class CompanyFilter(BaseModel):
    """Typed filters for GET /companies. Absent fields impose no constraint."""
    name: Optional[str] = None
    min_employees: Optional[float] = Field(None, ge=0, le=MAX_INT, alias="minEmployees")
    max_employees: Optional[float] = Field(None, ge=0, le=MAX_INT, alias="maxEmployees")

    class Config:
        populate_by_name = True
        extra = "forbid"
        frozen = True


class CompanyJob(BaseModel):
    """Job summary nested in a company detail"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[float] = None


class CompanyResponse(BaseModel):
    """Schema for company response"""
    handle: str
    name: str
    description: str
    num_employees: Optional[int] = Field(None, alias="numEmployees")
    logo_url: Optional[str] = Field(None, alias="logoUrl")

    class Config:
        populate_by_name = True


class CompanyDetailResponse(CompanyResponse):
    """Company with the jobs it offers"""
    jobs: List[CompanyJob] = []


class CompanyEnvelope(BaseModel):
    company: CompanyResponse


class CompanyDetailEnvelope(BaseModel):
    company: CompanyDetailResponse


class CompanyListEnvelope(BaseModel):
    companies: List[CompanyResponse]


class CompanyDeletedResponse(BaseModel):
    deleted: str
