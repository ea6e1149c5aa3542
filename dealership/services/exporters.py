"""
CSV renderings of the financial reports.

Strings are double-quoted, money is fixed to two decimals, a missing amount
is an empty field and every line (header included) ends with ``\\n``.
"""

from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from dealership import models, schemas
from dealership.services import reports

PROFIT_LOSS_HEADER = "Vehicle ID,VIN,Make,Model,Acquisition Cost,Total Expenses,Sale Price,Profit/Loss"
INVENTORY_AGING_HEADER = "Vehicle ID,VIN,Make,Model,Year,Status,Days in Inventory,Total Cost"
EXPENSE_BREAKDOWN_HEADER = "Expense Type,Total Amount,Count"


def quoted(value) -> str:
    text = str(value.value if hasattr(value, "value") else value)
    return '"' + text.replace('"', '""') + '"'


def money(value: Optional[float]) -> str:
    if value is None:
        return ""
    return f"{value:.2f}"


def render_csv(header: str, rows: Iterable[List[str]]) -> str:
    lines = [header]
    lines.extend(",".join(row) for row in rows)
    return "\n".join(lines) + "\n"


def export_profit_loss_to_csv(db: Session, filters: Optional[schemas.FinancialReportFilters] = None) -> str:
    report = reports.get_profit_loss_report(db, filters)
    if not report:
        return render_csv(PROFIT_LOSS_HEADER, [])

    vehicle_ids = [pl.vehicle_id for pl in report]
    vehicles = {
        v.id: v
        for v in db.query(models.Vehicle).filter(models.Vehicle.id.in_(vehicle_ids)).all()
    }

    rows = []
    for pl in report:
        vehicle = vehicles.get(pl.vehicle_id)
        if vehicle is None:
            continue
        rows.append([
            str(pl.vehicle_id),
            quoted(vehicle.vin),
            quoted(vehicle.make),
            quoted(vehicle.model),
            money(pl.acquisition_cost),
            money(pl.total_expenses),
            money(pl.sale_price),
            money(pl.profit_loss),
        ])
    return render_csv(PROFIT_LOSS_HEADER, rows)


def export_inventory_aging_to_csv(db: Session, now: Optional[datetime] = None) -> str:
    rows = [
        [
            str(item.vehicle_id),
            quoted(item.vin),
            quoted(item.make),
            quoted(item.model),
            str(item.year),
            quoted(item.status),
            str(item.days_in_inventory),
            money(item.total_cost),
        ]
        for item in reports.get_inventory_aging(db, now=now)
    ]
    return render_csv(INVENTORY_AGING_HEADER, rows)


def export_expense_breakdown_to_csv(db: Session, filters: Optional[schemas.FinancialReportFilters] = None) -> str:
    rows = [
        [quoted(item.expense_type), money(item.total_amount), str(item.count)]
        for item in reports.get_expense_breakdown(db, filters)
    ]
    return render_csv(EXPENSE_BREAKDOWN_HEADER, rows)
