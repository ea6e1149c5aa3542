# Vendors, Expenses

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field, field_validator

from dealership.models.expenses import ExpenseType
from dealership.utils import as_naive_utc
from .vehicles import not_null

# --- VENDORS ---
class VendorBase(BaseModel):
    name: str = Field(min_length=1)
    contact_info: Optional[str] = None
class VendorCreate(VendorBase): pass
class VendorUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    contact_info: Optional[str] = None

    @field_validator("name")
    @classmethod
    def reject_null(cls, value):
        return not_null(value)

class VendorOut(VendorBase):
    id: int
    created_at: datetime
    class Config: from_attributes = True

# --- EXPENSES ---
class ExpenseCreate(BaseModel):
    vehicle_id: int
    vendor_id: Optional[int] = None
    amount: float = Field(gt=0)
    expense_type: ExpenseType
    description: str = Field(min_length=1)
    expense_date: Optional[datetime] = None

    @field_validator("expense_date")
    @classmethod
    def validate_expense_date(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_naive_utc(value) if value is not None else None

class ExpenseUpdate(BaseModel):
    vendor_id: Optional[int] = None
    amount: Optional[float] = Field(default=None, gt=0)
    expense_type: Optional[ExpenseType] = None
    description: Optional[str] = Field(default=None, min_length=1)
    expense_date: Optional[datetime] = None

    @field_validator("amount", "expense_type", "description", "expense_date")
    @classmethod
    def reject_null(cls, value):
        return not_null(value)

    @field_validator("expense_date")
    @classmethod
    def validate_expense_date(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_naive_utc(value) if value is not None else None

class ExpenseOut(BaseModel):
    id: int
    vehicle_id: int
    vendor_id: Optional[int] = None
    amount: float
    expense_type: ExpenseType
    description: str
    expense_date: datetime
    created_at: datetime
    class Config: from_attributes = True
