# dealership/routers/vehicle.py
from typing import List
from fastapi import APIRouter, Depends, status, HTTPException, Response
from sqlalchemy.orm import Session

from dealership import schemas, oauth2
from dealership.database import get_db
from dealership.services import reports, vehicles as vehicle_service

router = APIRouter(
    prefix="/api/v1/vehicles",
    tags=['Vehicles API'],
    dependencies=[Depends(oauth2.get_current_user)]
)

# 1. CREATE
@router.post("/", status_code=status.HTTP_201_CREATED, response_model=schemas.VehicleOut)
def create_vehicle(vehicle_data: schemas.VehicleCreate, db: Session = Depends(get_db)):
    return vehicle_service.create_vehicle(db, vehicle_data)

# 2. READ ALL
@router.get("/", response_model=List[schemas.VehicleOut])
def get_all_vehicles(db: Session = Depends(get_db)):
    return vehicle_service.get_vehicles(db)

# 3. READ ONE
@router.get("/{id}", response_model=schemas.VehicleOut)
def get_vehicle_by_id(id: int, db: Session = Depends(get_db)):
    vehicle = vehicle_service.get_vehicle_by_id(db, id)
    if not vehicle:
        raise HTTPException(status_code=404, detail="Vehicle not found.")
    return vehicle

# 4. DETAILS (vehicle + ledger + profit/loss)
@router.get("/{id}/details", response_model=schemas.VehicleDetails)
def get_vehicle_details(id: int, db: Session = Depends(get_db)):
    details = reports.get_vehicle_details(db, id)
    if not details:
        raise HTTPException(status_code=404, detail="Vehicle not found.")
    return details

# 5. UPDATE
@router.put("/{id}", response_model=schemas.VehicleOut)
def update_vehicle(id: int, vehicle_data: schemas.VehicleUpdate, db: Session = Depends(get_db)):
    return vehicle_service.update_vehicle(db, id, vehicle_data)

# 6. DELETE (cascades expenses and transactions)
@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_vehicle(id: int, db: Session = Depends(get_db)):
    vehicle_service.delete_vehicle(db, id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
