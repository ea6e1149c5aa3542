import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from dealership import models, schemas
from dealership.exceptions import ConflictError, NotFoundError

logger = logging.getLogger(__name__)


def create_vendor(db: Session, payload: schemas.VendorCreate) -> models.Vendor:
    vendor = models.Vendor(**payload.model_dump())
    try:
        db.add(vendor)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Vendor creation failed: {e}")
        raise
    db.refresh(vendor)
    return vendor


def update_vendor(db: Session, vendor_id: int, payload: schemas.VendorUpdate) -> models.Vendor:
    vendor = get_vendor_by_id(db, vendor_id)
    if not vendor:
        raise NotFoundError(f"Vendor with id {vendor_id} not found")

    for key, value in payload.model_dump(exclude_unset=True).items():
        setattr(vendor, key, value)

    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Vendor update failed: {e}")
        raise
    db.refresh(vendor)
    return vendor


def get_vendors(db: Session) -> List[models.Vendor]:
    return db.query(models.Vendor).order_by(models.Vendor.name).all()


def get_vendor_by_id(db: Session, vendor_id: int) -> Optional[models.Vendor]:
    return db.query(models.Vendor).filter(models.Vendor.id == vendor_id).first()


def delete_vendor(db: Session, vendor_id: int) -> None:
    """
    Refuses to delete a vendor that is still referenced by an expense.
    """
    vendor = get_vendor_by_id(db, vendor_id)
    if not vendor:
        raise NotFoundError(f"Vendor with id {vendor_id} not found")

    expense_count = db.query(func.count(models.Expense.id)).filter(
        models.Expense.vendor_id == vendor_id
    ).scalar() or 0
    if expense_count > 0:
        raise ConflictError(
            f"Cannot delete vendor with id {vendor_id} because it has associated expenses"
        )

    try:
        db.delete(vendor)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Vendor deletion failed: {e}")
        raise
