"""
Dashboard KPI snapshot.

The figures come from several independent queries and are not read inside
one transaction, so concurrent writes can make them disagree slightly.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import and_, func
from sqlalchemy.orm import Session

from dealership import models, schemas
from dealership.services.reports import whole_days_between
from dealership.utils import to_decimal, utcnow

IN_STOCK_EXCLUDED = (models.VehicleStatus.SOLD, models.VehicleStatus.ARCHIVED)


def start_of_month(now: datetime) -> datetime:
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def get_dashboard_kpis(db: Session, now: Optional[datetime] = None) -> schemas.DashboardKpi:
    now = now or utcnow()
    month_start = start_of_month(now)
    in_stock = models.Vehicle.status.notin_(IN_STOCK_EXCLUDED)

    # Inventory (everything not sold or archived)
    total_inventory = db.query(func.count(models.Vehicle.id)).filter(in_stock).scalar() or 0

    acquisition_value = db.query(func.sum(models.Vehicle.acquisition_cost)).filter(in_stock).scalar()
    expenses_value = (
        db.query(func.sum(models.Expense.amount))
        .join(models.Vehicle, models.Expense.vehicle_id == models.Vehicle.id)
        .filter(in_stock)
        .scalar()
    )
    total_inventory_value = to_decimal(acquisition_value) + to_decimal(expenses_value)

    # Status counts
    vehicles_in_reconditioning = db.query(func.count(models.Vehicle.id)).filter(
        models.Vehicle.status == models.VehicleStatus.RECONDITIONING
    ).scalar() or 0
    vehicles_listed = db.query(func.count(models.Vehicle.id)).filter(
        models.Vehicle.status == models.VehicleStatus.LISTED
    ).scalar() or 0

    # Sales this month
    sold_this_month = and_(
        models.Vehicle.status == models.VehicleStatus.SOLD,
        models.Vehicle.sale_date >= month_start,
        models.Vehicle.sale_date <= now,
    )
    vehicles_sold_this_month = db.query(func.count(models.Vehicle.id)).filter(sold_this_month).scalar() or 0

    sold_rows = (
        db.query(
            models.Vehicle.id,
            models.Vehicle.acquisition_cost,
            models.Vehicle.sale_price,
            func.coalesce(func.sum(models.Expense.amount), 0).label("total_expenses"),
        )
        .outerjoin(models.Expense, models.Expense.vehicle_id == models.Vehicle.id)
        .filter(sold_this_month, models.Vehicle.sale_price.isnot(None))
        .group_by(models.Vehicle.id, models.Vehicle.acquisition_cost, models.Vehicle.sale_price)
        .all()
    )
    total_profit_this_month = sum(
        (
            to_decimal(r.sale_price) - to_decimal(r.acquisition_cost) - to_decimal(r.total_expenses)
            for r in sold_rows
        ),
        Decimal("0"),
    )

    # Average days to sale, over every sold vehicle
    sold_dates = (
        db.query(models.Vehicle.acquisition_date, models.Vehicle.sale_date)
        .filter(
            models.Vehicle.status == models.VehicleStatus.SOLD,
            models.Vehicle.sale_date.isnot(None),
        )
        .all()
    )
    avg_days_to_sale = None
    if sold_dates:
        days = [whole_days_between(acquired, sold) for acquired, sold in sold_dates]
        avg_days_to_sale = sum(days) / len(days)

    return schemas.DashboardKpi(
        total_inventory=total_inventory,
        total_inventory_value=float(total_inventory_value),
        vehicles_in_reconditioning=vehicles_in_reconditioning,
        vehicles_listed=vehicles_listed,
        vehicles_sold_this_month=vehicles_sold_this_month,
        total_profit_this_month=float(total_profit_this_month),
        avg_days_to_sale=avg_days_to_sale,
    )
