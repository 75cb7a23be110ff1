from pydantic import BaseModel, Field, field_validator
from typing import Any, List, Optional

# Fraction of the company: "0", "0.25", ".5", "1", "1.0"
EQUITY_PATTERN = r"^(0|0?\.[0-9]+|1(\.0+)?)$"


class JobCreateRequest(BaseModel):
    """Schema for creating a new job"""
    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[str] = Field(None, pattern=EQUITY_PATTERN)
    company_handle: str = Field(..., min_length=1, max_length=25, alias="companyHandle")

    class Config:
        populate_by_name = True
        extra = "forbid"


class JobUpdateRequest(BaseModel):
    """Partial update; a job cannot move to another company"""
    title: str = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[str] = Field(None, pattern=EQUITY_PATTERN)

    class Config:
        extra = "forbid"


class JobFilter(BaseModel):
    """Query-string filters for listing jobs"""
    title: Optional[str] = None
    min_salary: Optional[int] = Field(None, ge=0, alias="minSalary")
    has_equity: Optional[bool] = Field(None, alias="hasEquity")

    class Config:
        populate_by_name = True
        extra = "forbid"


class JobResponse(BaseModel):
    """Schema for job response"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[str] = None
    company_handle: str = Field(..., alias="companyHandle")

    @field_validator("equity", mode="before")
    @classmethod
    def equity_as_string(cls, v: Any) -> Optional[str]:
        """NUMERIC comes back as Decimal (Postgres) or float/int (SQLite)"""
        if v is None or isinstance(v, str):
            return v
        return str(v)

    class Config:
        populate_by_name = True


class JobEnvelope(BaseModel):
    job: JobResponse


class JobListResponse(BaseModel):
    jobs: List[JobResponse]
