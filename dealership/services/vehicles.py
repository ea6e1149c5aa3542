import logging
from typing import List, Optional

from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from dealership import models, schemas
from dealership.exceptions import ConflictError, NotFoundError
from dealership.utils import utcnow

logger = logging.getLogger(__name__)


def create_vehicle(db: Session, payload: schemas.VehicleCreate) -> models.Vehicle:
    """
    Registers an acquired vehicle. Status always starts as ``acquired``.
    """
    if db.query(models.Vehicle).filter(models.Vehicle.vin == payload.vin).first():
        raise ConflictError("VIN already exists.")

    vehicle = models.Vehicle(
        **payload.model_dump(),
        status=models.VehicleStatus.ACQUIRED,
    )
    try:
        db.add(vehicle)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Vehicle creation failed: {e}")
        raise
    db.refresh(vehicle)
    return vehicle


def update_vehicle(db: Session, vehicle_id: int, payload: schemas.VehicleUpdate) -> models.Vehicle:
    """
    Partial update. Status and sale fields are written independently;
    only the transaction path keeps them in step.
    """
    vehicle = get_vehicle_by_id(db, vehicle_id)
    if not vehicle:
        raise NotFoundError(f"Vehicle with id {vehicle_id} not found")

    update_data = payload.model_dump(exclude_unset=True)
    for key, value in update_data.items():
        setattr(vehicle, key, value)
    vehicle.updated_at = utcnow()

    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Vehicle update failed: {e}")
        raise
    db.refresh(vehicle)
    return vehicle


def get_vehicles(db: Session) -> List[models.Vehicle]:
    return db.query(models.Vehicle).order_by(desc(models.Vehicle.acquisition_date)).all()


def get_vehicle_by_id(db: Session, vehicle_id: int) -> Optional[models.Vehicle]:
    return db.query(models.Vehicle).filter(models.Vehicle.id == vehicle_id).first()


def delete_vehicle(db: Session, vehicle_id: int) -> None:
    """
    Removes the vehicle together with its expenses and transactions.
    """
    vehicle = get_vehicle_by_id(db, vehicle_id)
    if not vehicle:
        raise NotFoundError(f"Vehicle with id {vehicle_id} not found")

    try:
        db.delete(vehicle)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Vehicle deletion failed: {e}")
        raise
    logger.info(f"Deleted vehicle {vehicle_id} and its ledger entries")
