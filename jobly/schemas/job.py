from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

# Upper bound of the INTEGER columns these values are stored in or compared with
MAX_INT = 2_147_483_647


class JobCreateRequest(BaseModel):
    """Schema for creating a new job"""
    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0, le=MAX_INT)
    equity: Optional[float] = Field(None, ge=0, le=1)
    company_handle: str = Field(..., min_length=1, max_length=25, alias="companyHandle")

    class Config:
        populate_by_name = True
        extra = "forbid"


class JobUpdateRequest(BaseModel):
    """
    Schema for a partial job update.

    Unknown keys, including `id`, are rejected. Salary and equity may be
    cleared with null; title and companyHandle may not.
    """
    title: Optional[str] = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0, le=MAX_INT)
    equity: Optional[float] = Field(None, ge=0, le=1)
    company_handle: Optional[str] = Field(None, min_length=1, max_length=25, alias="companyHandle")

    @field_validator("title", "company_handle")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("cannot be null")
        return v

    class Config:
        populate_by_name = True
        extra = "forbid"


class JobFilter(BaseModel):
    """Typed filters for GET /jobs. Absent fields impose no constraint."""
    title: Optional[str] = None
    min_salary: Optional[float] = Field(None, ge=0, le=MAX_INT, alias="minSalary")
    has_equity: Optional[bool] = Field(None, alias="hasEquity")

    class Config:
        populate_by_name = True
        extra = "forbid"
        frozen = True


class JobResponse(BaseModel):
    """Schema for job response"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[float] = None
    company_handle: str = Field(..., alias="companyHandle")

    class Config:
        populate_by_name = True


class JobEnvelope(BaseModel):
    job: JobResponse


class JobListEnvelope(BaseModel):
    jobs: List[JobResponse]


class JobDeletedResponse(BaseModel):
    deleted: int
