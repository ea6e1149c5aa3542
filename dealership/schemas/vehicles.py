# Vehicles

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field, field_validator

from dealership.models.vehicles import VehicleStatus
from dealership.utils import as_naive_utc, utcnow

MIN_YEAR = 1900


def not_null(value):
    # Omitted fields never reach validators; an explicit null does
    if value is None:
        raise ValueError("may not be null")
    return value


def _check_year(value: Optional[int]) -> Optional[int]:
    if value is None:
        return value
    max_year = utcnow().year + 1
    if value < MIN_YEAR or value > max_year:
        raise ValueError(f"year must be between {MIN_YEAR} and {max_year}")
    return value


class VehicleBase(BaseModel):
    vin: str = Field(min_length=1)
    make: str = Field(min_length=1)
    model: str = Field(min_length=1)
    year: int
    color: str = Field(min_length=1)
    mileage: int = Field(ge=0)

class VehicleCreate(VehicleBase):
    acquisition_cost: float = Field(gt=0)
    notes: Optional[str] = None

    @field_validator("year")
    @classmethod
    def validate_year(cls, value: Optional[int]) -> Optional[int]:
        return _check_year(value)

class VehicleUpdate(BaseModel):
    make: Optional[str] = Field(default=None, min_length=1)
    model: Optional[str] = Field(default=None, min_length=1)
    year: Optional[int] = None
    color: Optional[str] = Field(default=None, min_length=1)
    mileage: Optional[int] = Field(default=None, ge=0)
    status: Optional[VehicleStatus] = None
    listing_price: Optional[float] = Field(default=None, gt=0)
    sale_price: Optional[float] = Field(default=None, gt=0)
    sale_date: Optional[datetime] = None
    notes: Optional[str] = None

    @field_validator("make", "model", "year", "color", "mileage", "status")
    @classmethod
    def reject_null(cls, value):
        return not_null(value)

    @field_validator("year")
    @classmethod
    def validate_year(cls, value: Optional[int]) -> Optional[int]:
        return _check_year(value)

    @field_validator("sale_date")
    @classmethod
    def validate_sale_date(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_naive_utc(value) if value is not None else None

class VehicleOut(VehicleBase):
    id: int
    status: VehicleStatus
    acquisition_date: datetime
    acquisition_cost: float
    listing_price: Optional[float] = None
    sale_price: Optional[float] = None
    sale_date: Optional[datetime] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    class Config:
        from_attributes = True
