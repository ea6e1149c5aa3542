# Sale / refund / expense transactions

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field, field_validator

from dealership.models.operations import TransactionType
from dealership.utils import as_naive_utc

class TransactionCreate(BaseModel):
    vehicle_id: int
    type: TransactionType
    amount: float
    description: str = Field(min_length=1)
    transaction_date: Optional[datetime] = None

    @field_validator("transaction_date")
    @classmethod
    def validate_transaction_date(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_naive_utc(value) if value is not None else None

class TransactionOut(BaseModel):
    id: int
    vehicle_id: int
    type: TransactionType
    amount: float
    description: str
    transaction_date: datetime
    created_at: datetime
    class Config: from_attributes = True
