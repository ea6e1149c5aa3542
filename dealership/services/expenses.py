import logging
from typing import List, Optional

from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from dealership import models, schemas
from dealership.exceptions import NotFoundError
from dealership.utils import utcnow

logger = logging.getLogger(__name__)


def _ensure_vendor(db: Session, vendor_id: Optional[int]) -> None:
    if vendor_id is None:
        return
    if not db.query(models.Vendor).filter(models.Vendor.id == vendor_id).first():
        raise NotFoundError(f"Vendor with id {vendor_id} not found")


def create_expense(db: Session, payload: schemas.ExpenseCreate) -> models.Expense:
    """
    Records an expense against an existing vehicle (and vendor, when given).
    """
    vehicle = db.query(models.Vehicle).filter(models.Vehicle.id == payload.vehicle_id).first()
    if not vehicle:
        raise NotFoundError(f"Vehicle with id {payload.vehicle_id} not found")
    _ensure_vendor(db, payload.vendor_id)

    expense = models.Expense(
        vehicle_id=payload.vehicle_id,
        vendor_id=payload.vendor_id,
        amount=payload.amount,
        expense_type=payload.expense_type,
        description=payload.description,
        expense_date=payload.expense_date or utcnow(),
    )
    try:
        db.add(expense)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Expense creation failed: {e}")
        raise
    db.refresh(expense)
    return expense


def update_expense(db: Session, expense_id: int, payload: schemas.ExpenseUpdate) -> models.Expense:
    expense = get_expense_by_id(db, expense_id)
    if not expense:
        raise NotFoundError(f"Expense with id {expense_id} not found")

    update_data = payload.model_dump(exclude_unset=True)
    _ensure_vendor(db, update_data.get("vendor_id"))

    for key, value in update_data.items():
        setattr(expense, key, value)

    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Expense update failed: {e}")
        raise
    db.refresh(expense)
    return expense


def get_expenses(db: Session) -> List[models.Expense]:
    return db.query(models.Expense).order_by(desc(models.Expense.expense_date)).all()


def get_expense_by_id(db: Session, expense_id: int) -> Optional[models.Expense]:
    return db.query(models.Expense).filter(models.Expense.id == expense_id).first()


def get_expenses_by_vehicle_id(db: Session, vehicle_id: int) -> List[models.Expense]:
    return (
        db.query(models.Expense)
        .filter(models.Expense.vehicle_id == vehicle_id)
        .order_by(desc(models.Expense.expense_date))
        .all()
    )


def delete_expense(db: Session, expense_id: int) -> None:
    expense = get_expense_by_id(db, expense_id)
    if not expense:
        raise NotFoundError(f"Expense with id {expense_id} not found")

    try:
        db.delete(expense)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Expense deletion failed: {e}")
        raise
