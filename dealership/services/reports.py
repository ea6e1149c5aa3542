"""
Financial reports derived from vehicles and their expenses.

Every figure is computed from the current table contents; nothing here is
stored. Currency math is done in ``Decimal`` and converted to ``float`` only
when the response objects are built.
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import and_, func
from sqlalchemy.orm import Session

from dealership import models, schemas
from dealership.utils import to_decimal, utcnow


def whole_days_between(start: datetime, end: datetime) -> int:
    """Whole days from ``start`` to ``end``, truncated toward zero."""
    delta = end - start
    if delta >= timedelta(0):
        return delta.days
    return -((-delta).days)


def vehicle_conditions(filters: Optional[schemas.FinancialReportFilters], date_column=None) -> list:
    """
    Turns the optional report filters into a list of SQL predicates.

    Date bounds apply to ``date_column`` (vehicle acquisition date unless told
    otherwise); status/make/model always apply to the vehicle.
    """
    if filters is None:
        return []
    if date_column is None:
        date_column = models.Vehicle.acquisition_date

    conditions = []
    if filters.start_date:
        conditions.append(date_column >= filters.start_date)
    if filters.end_date:
        conditions.append(date_column <= filters.end_date)
    if filters.status:
        conditions.append(models.Vehicle.status == filters.status)
    if filters.make:
        conditions.append(models.Vehicle.make == filters.make)
    if filters.model:
        conditions.append(models.Vehicle.model == filters.model)
    return conditions


def _total_expenses_column():
    return func.coalesce(func.sum(models.Expense.amount), 0).label("total_expenses")


def _profit_loss_query(db: Session):
    return (
        db.query(
            models.Vehicle.id.label("vehicle_id"),
            models.Vehicle.acquisition_cost,
            models.Vehicle.sale_price,
            _total_expenses_column(),
        )
        .outerjoin(models.Expense, models.Expense.vehicle_id == models.Vehicle.id)
        .group_by(models.Vehicle.id, models.Vehicle.acquisition_cost, models.Vehicle.sale_price)
    )


def build_profit_loss(vehicle_id: int, acquisition_cost, total_expenses, sale_price) -> schemas.ProfitLoss:
    acquisition_cost = to_decimal(acquisition_cost)
    total_expenses = to_decimal(total_expenses)
    total_cost = acquisition_cost + total_expenses
    sale = to_decimal(sale_price) if sale_price is not None else None
    profit_loss = sale - total_cost if sale is not None else None

    return schemas.ProfitLoss(
        vehicle_id=vehicle_id,
        acquisition_cost=float(acquisition_cost),
        total_expenses=float(total_expenses),
        total_cost=float(total_cost),
        sale_price=float(sale) if sale is not None else None,
        profit_loss=float(profit_loss) if profit_loss is not None else None,
        # Sold means a sale price is recorded, whatever the status says
        is_sold=sale is not None,
    )


def get_profit_loss_report(
    db: Session, filters: Optional[schemas.FinancialReportFilters] = None
) -> List[schemas.ProfitLoss]:
    query = _profit_loss_query(db)
    conditions = vehicle_conditions(filters)
    if conditions:
        query = query.filter(and_(*conditions))

    rows = query.order_by(models.Vehicle.id).all()
    return [
        build_profit_loss(r.vehicle_id, r.acquisition_cost, r.total_expenses, r.sale_price)
        for r in rows
    ]


def get_vehicle_profit_loss(db: Session, vehicle_id: int) -> Optional[schemas.ProfitLoss]:
    """Profit/loss for one vehicle, or ``None`` if the vehicle does not exist."""
    row = _profit_loss_query(db).filter(models.Vehicle.id == vehicle_id).first()
    if row is None:
        return None
    return build_profit_loss(row.vehicle_id, row.acquisition_cost, row.total_expenses, row.sale_price)


def get_inventory_aging(db: Session, now: Optional[datetime] = None) -> List[schemas.InventoryAging]:
    """
    Listed vehicles with their age in whole days and their total cost so far.
    """
    now = now or utcnow()
    rows = (
        db.query(
            models.Vehicle.id,
            models.Vehicle.vin,
            models.Vehicle.make,
            models.Vehicle.model,
            models.Vehicle.year,
            models.Vehicle.status,
            models.Vehicle.acquisition_date,
            models.Vehicle.acquisition_cost,
            _total_expenses_column(),
        )
        .outerjoin(models.Expense, models.Expense.vehicle_id == models.Vehicle.id)
        .filter(models.Vehicle.status == models.VehicleStatus.LISTED)
        .group_by(
            models.Vehicle.id,
            models.Vehicle.vin,
            models.Vehicle.make,
            models.Vehicle.model,
            models.Vehicle.year,
            models.Vehicle.status,
            models.Vehicle.acquisition_date,
            models.Vehicle.acquisition_cost,
        )
        .order_by(models.Vehicle.acquisition_date, models.Vehicle.id)
        .all()
    )

    return [
        schemas.InventoryAging(
            vehicle_id=r.id,
            vin=r.vin,
            make=r.make,
            model=r.model,
            year=r.year,
            status=r.status,
            acquisition_date=r.acquisition_date,
            days_in_inventory=whole_days_between(r.acquisition_date, now),
            total_cost=float(to_decimal(r.acquisition_cost) + to_decimal(r.total_expenses)),
        )
        for r in rows
    ]


def get_expense_breakdown(
    db: Session, filters: Optional[schemas.FinancialReportFilters] = None
) -> List[schemas.ExpenseBreakdown]:
    """
    Spend per expense type. Dates filter on the expense date; vehicle
    attributes require the join to vehicles.
    """
    query = db.query(
        models.Expense.expense_type,
        func.sum(models.Expense.amount).label("total_amount"),
        func.count(models.Expense.id).label("expense_count"),
    )

    needs_join = filters is not None and (filters.status or filters.make or filters.model)
    if needs_join:
        query = query.join(models.Vehicle, models.Expense.vehicle_id == models.Vehicle.id)

    conditions = vehicle_conditions(filters, date_column=models.Expense.expense_date)
    if conditions:
        query = query.filter(and_(*conditions))

    rows = query.group_by(models.Expense.expense_type).all()
    # Ordered by the stored text value, whatever the backend enum ordering
    rows.sort(key=lambda r: r.expense_type.value)
    return [
        schemas.ExpenseBreakdown(
            expense_type=r.expense_type,
            total_amount=float(to_decimal(r.total_amount)),
            count=r.expense_count,
        )
        for r in rows
    ]


def get_vehicle_details(db: Session, vehicle_id: int) -> Optional[schemas.VehicleDetails]:
    vehicle = db.query(models.Vehicle).filter(models.Vehicle.id == vehicle_id).first()
    if not vehicle:
        return None

    expenses = (
        db.query(models.Expense)
        .filter(models.Expense.vehicle_id == vehicle_id)
        .order_by(models.Expense.expense_date.desc())
        .all()
    )
    transactions = (
        db.query(models.Transaction)
        .filter(models.Transaction.vehicle_id == vehicle_id)
        .order_by(models.Transaction.transaction_date.desc())
        .all()
    )
    total_expenses = sum((to_decimal(e.amount) for e in expenses), Decimal("0"))

    return schemas.VehicleDetails(
        vehicle=schemas.VehicleOut.model_validate(vehicle),
        expenses=[schemas.ExpenseOut.model_validate(e) for e in expenses],
        transactions=[schemas.TransactionOut.model_validate(t) for t in transactions],
        profit_loss=build_profit_loss(vehicle.id, vehicle.acquisition_cost, total_expenses, vehicle.sale_price),
    )
