from typing import List
from fastapi import APIRouter, Depends, status, HTTPException, Response
from sqlalchemy.orm import Session

from dealership import schemas, oauth2
from dealership.database import get_db
from dealership.services import vendors as vendor_service

router = APIRouter(
    prefix="/api/v1/vendors",
    tags=['Vendors API'],
    dependencies=[Depends(oauth2.get_current_user)]
)

@router.post("/", status_code=status.HTTP_201_CREATED, response_model=schemas.VendorOut)
def create_vendor(vendor_data: schemas.VendorCreate, db: Session = Depends(get_db)):
    return vendor_service.create_vendor(db, vendor_data)

@router.get("/", response_model=List[schemas.VendorOut])
def get_all_vendors(db: Session = Depends(get_db)):
    return vendor_service.get_vendors(db)

@router.get("/{id}", response_model=schemas.VendorOut)
def get_vendor_by_id(id: int, db: Session = Depends(get_db)):
    vendor = vendor_service.get_vendor_by_id(db, id)
    if not vendor:
        raise HTTPException(status_code=404, detail="Vendor not found.")
    return vendor

@router.put("/{id}", response_model=schemas.VendorOut)
def update_vendor(id: int, vendor_data: schemas.VendorUpdate, db: Session = Depends(get_db)):
    return vendor_service.update_vendor(db, id, vendor_data)

@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_vendor(id: int, db: Session = Depends(get_db)):
    vendor_service.delete_vendor(db, id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
