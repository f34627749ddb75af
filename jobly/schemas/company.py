from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional

from jobly.schemas.job import JobResponse


class CompanyBase(BaseModel):
    """Company fields; serialized with camelCase names (numEmployees, logoUrl)"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    handle: str = Field(..., min_length=1, max_length=25)
    name: str = Field(..., min_length=1)
    description: str
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: Optional[str] = None


class CompanyCreate(CompanyBase):
    """Schema for creating a new company"""
    pass


class CompanyResponse(CompanyBase):
    """Schema for company response"""
    pass


class CompanyDetailResponse(CompanyResponse):
    """Company with the jobs it owns"""
    jobs: List[JobResponse] = []


class CompanyUpdate(BaseModel):
    """
    Values allowed in a partial update. Every field is optional; handle is
    not updatable and is rejected before this runs.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: Optional[str] = None
