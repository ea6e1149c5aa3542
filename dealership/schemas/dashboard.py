# Analytics, KPI, Reports

from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, field_validator

from dealership.models.vehicles import VehicleStatus
from dealership.models.expenses import ExpenseType
from dealership.utils import as_naive_utc
from .vehicles import VehicleOut
from .expenses import ExpenseOut
from .operations import TransactionOut

# --- FILTERS ---
class FinancialReportFilters(BaseModel):
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    status: Optional[VehicleStatus] = None
    make: Optional[str] = None
    model: Optional[str] = None

    @field_validator("start_date", "end_date")
    @classmethod
    def normalize_dates(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_naive_utc(value) if value is not None else None

# --- KPI ---
class DashboardKpi(BaseModel):
    total_inventory: int
    total_inventory_value: float
    vehicles_in_reconditioning: int
    vehicles_listed: int
    vehicles_sold_this_month: int
    total_profit_this_month: float
    avg_days_to_sale: Optional[float] = None

# --- REPORTS ---
class ProfitLoss(BaseModel):
    vehicle_id: int
    acquisition_cost: float
    total_expenses: float
    total_cost: float
    sale_price: Optional[float] = None
    profit_loss: Optional[float] = None
    is_sold: bool

class InventoryAging(BaseModel):
    vehicle_id: int
    vin: str
    make: str
    model: str
    year: int
    status: VehicleStatus
    acquisition_date: datetime
    days_in_inventory: int
    total_cost: float

class ExpenseBreakdown(BaseModel):
    expense_type: ExpenseType
    total_amount: float
    count: int

class VehicleDetails(BaseModel):
    vehicle: VehicleOut
    expenses: List[ExpenseOut] = []
    transactions: List[TransactionOut] = []
    profit_loss: ProfitLoss
