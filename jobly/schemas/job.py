from decimal import Decimal, InvalidOperation
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Any, Optional


def equity_to_str(value: Any) -> Optional[str]:
    """Drivers return NUMERIC as Decimal (Postgres) or float/int (SQLite)"""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        raise ValueError("equity must be a decimal string")
    if isinstance(value, float):
        return repr(value)
    return str(value)


def check_equity(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise ValueError("equity must be a decimal string")
    if not amount.is_finite() or amount < 0 or amount > 1:
        raise ValueError("equity must be between 0 and 1")
    return value


class JobBase(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[str] = None
    company_handle: str = Field(..., min_length=1, max_length=25)

    @field_validator("equity", mode="before")
    @classmethod
    def normalize_equity(cls, v: Any) -> Optional[str]:
        return equity_to_str(v)


class JobCreate(JobBase):
    """Schema for creating a new job; equity must lie in [0, 1]"""

    @field_validator("equity")
    @classmethod
    def check_equity_range(cls, v: Optional[str]) -> Optional[str]:
        return check_equity(v)


class JobUpdate(BaseModel):
    """
    Values allowed in a partial update. Every field is optional; the
    company handle is not updatable and is rejected before this runs.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: Optional[str] = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[str] = None

    @field_validator("equity", mode="before")
    @classmethod
    def normalize_equity(cls, v: Any) -> Optional[str]:
        return equity_to_str(v)

    @field_validator("equity")
    @classmethod
    def check_equity_range(cls, v: Optional[str]) -> Optional[str]:
        return check_equity(v)


class JobResponse(JobBase):
    """Schema for job response"""
    pass
