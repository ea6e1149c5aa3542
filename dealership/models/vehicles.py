# Vehicle inventory

import enum

from sqlalchemy import Column, DateTime, Enum, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship
from dealership.database import Base
from dealership.utils import utcnow

class VehicleStatus(str, enum.Enum):
    ACQUIRED = 'acquired'
    RECONDITIONING = 'reconditioning'
    LISTED = 'listed'
    SOLD = 'sold'
    ARCHIVED = 'archived'

class Vehicle(Base):
    __tablename__ = "vehicles"
    id = Column(Integer, primary_key=True, index=True)

    # Specs Data
    vin = Column(String, nullable=False, unique=True, index=True)
    make = Column(String, nullable=False, index=True)
    model = Column(String, nullable=False, index=True)
    year = Column(Integer, nullable=False)
    color = Column(String, nullable=False)
    mileage = Column(Integer, nullable=False)
    status = Column(
        Enum(VehicleStatus, name='vehicle_status', values_callable=lambda e: [m.value for m in e]),
        nullable=False, default=VehicleStatus.ACQUIRED, index=True
    )

    # Money / lifecycle
    acquisition_date = Column(DateTime, nullable=False, default=utcnow, index=True)
    acquisition_cost = Column(Numeric(10, 2), nullable=False)
    listing_price = Column(Numeric(10, 2), nullable=True)
    sale_price = Column(Numeric(10, 2), nullable=True)
    sale_date = Column(DateTime, nullable=True, index=True)
    notes = Column(Text, nullable=True)

    # Metadata
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    # Relationships (deleting a vehicle removes its ledger rows)
    expenses = relationship("Expense", back_populates="vehicle", cascade="all, delete-orphan")
    transactions = relationship("Transaction", back_populates="vehicle", cascade="all, delete-orphan")
