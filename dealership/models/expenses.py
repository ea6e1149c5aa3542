# Vendors & Expenses

import enum

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship
from dealership.database import Base
from dealership.utils import utcnow

class ExpenseType(str, enum.Enum):
    ACQUISITION = 'acquisition'
    RECONDITIONING = 'reconditioning'
    MARKETING = 'marketing'
    TRANSPORT = 'transport'
    STORAGE = 'storage'
    INSPECTION = 'inspection'
    REPAIRS = 'repairs'
    DETAILING = 'detailing'
    OTHER = 'other'

class Vendor(Base):
    __tablename__ = "vendors"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    contact_info = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    expenses = relationship("Expense", back_populates="vendor")

class Expense(Base):
    __tablename__ = "expenses"
    id = Column(Integer, primary_key=True, index=True)

    vehicle_id = Column(Integer, ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False, index=True)
    vendor_id = Column(Integer, ForeignKey("vendors.id"), nullable=True, index=True)

    amount = Column(Numeric(10, 2), nullable=False)
    expense_type = Column(
        Enum(ExpenseType, name='expense_type', values_callable=lambda e: [m.value for m in e]),
        nullable=False, index=True
    )
    description = Column(Text, nullable=False)
    expense_date = Column(DateTime, nullable=False, default=utcnow, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    vehicle = relationship("Vehicle", back_populates="expenses")
    vendor = relationship("Vendor", back_populates="expenses")
