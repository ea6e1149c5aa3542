"""
Sale, refund and expense transactions.

A ``sale`` transaction is the only thing that moves a vehicle into (and, when
deleted, back out of) the ``sold`` state. The transaction row and the vehicle
update are committed together; the vehicle row is locked for the duration so
two concurrent sales of the same vehicle are serialised on backends that
support ``SELECT ... FOR UPDATE``.
"""

import logging
from typing import List, Optional

from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from dealership import models, schemas
from dealership.exceptions import NotFoundError
from dealership.utils import utcnow

logger = logging.getLogger(__name__)


def _lock_vehicle(db: Session, vehicle_id: int) -> Optional[models.Vehicle]:
    return (
        db.query(models.Vehicle)
        .filter(models.Vehicle.id == vehicle_id)
        .with_for_update()
        .first()
    )


def create_transaction(db: Session, payload: schemas.TransactionCreate) -> models.Transaction:
    vehicle = _lock_vehicle(db, payload.vehicle_id)
    if not vehicle:
        db.rollback()
        raise NotFoundError(f"Vehicle with ID {payload.vehicle_id} not found")

    transaction = models.Transaction(
        vehicle_id=payload.vehicle_id,
        type=payload.type,
        amount=payload.amount,
        description=payload.description,
        transaction_date=payload.transaction_date or utcnow(),
    )
    db.add(transaction)

    if payload.type == models.TransactionType.SALE:
        vehicle.status = models.VehicleStatus.SOLD
        vehicle.sale_price = payload.amount
        vehicle.sale_date = transaction.transaction_date
        vehicle.updated_at = utcnow()

    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Transaction creation failed: {e}")
        raise

    if payload.type == models.TransactionType.SALE:
        logger.info(f"Vehicle {payload.vehicle_id} marked sold at {payload.amount:.2f}")
    db.refresh(transaction)
    return transaction


def get_transactions(db: Session) -> List[models.Transaction]:
    return db.query(models.Transaction).order_by(desc(models.Transaction.transaction_date)).all()


def get_transaction_by_id(db: Session, transaction_id: int) -> Optional[models.Transaction]:
    return db.query(models.Transaction).filter(models.Transaction.id == transaction_id).first()


def get_transactions_by_vehicle_id(db: Session, vehicle_id: int) -> List[models.Transaction]:
    return (
        db.query(models.Transaction)
        .filter(models.Transaction.vehicle_id == vehicle_id)
        .order_by(desc(models.Transaction.transaction_date))
        .all()
    )


def delete_transaction(db: Session, transaction_id: int) -> None:
    transaction = get_transaction_by_id(db, transaction_id)
    if not transaction:
        raise NotFoundError(f"Transaction with ID {transaction_id} not found")

    vehicle_id = transaction.vehicle_id
    is_sale = transaction.type == models.TransactionType.SALE
    if is_sale:
        # Revert the vehicle to listed
        vehicle = _lock_vehicle(db, vehicle_id)
        if vehicle:
            vehicle.status = models.VehicleStatus.LISTED
            vehicle.sale_price = None
            vehicle.sale_date = None
            vehicle.updated_at = utcnow()

    try:
        db.delete(transaction)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Transaction deletion failed: {e}")
        raise

    if is_sale:
        logger.info(f"Sale transaction {transaction_id} removed, vehicle {vehicle_id} relisted")
