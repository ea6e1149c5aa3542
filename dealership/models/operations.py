# dealership/models/operations.py

import enum

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, Numeric, Text
from sqlalchemy.orm import relationship
from dealership.database import Base
from dealership.utils import utcnow

class TransactionType(str, enum.Enum):
    EXPENSE = 'expense'
    SALE = 'sale'
    REFUND = 'refund'

class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False, index=True)

    type = Column(
        Enum(TransactionType, name='transaction_type', values_callable=lambda e: [m.value for m in e]),
        nullable=False, index=True
    )
    amount = Column(Numeric(10, 2), nullable=False)
    description = Column(Text, nullable=False)
    transaction_date = Column(DateTime, nullable=False, default=utcnow, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    vehicle = relationship("Vehicle", back_populates="transactions")
