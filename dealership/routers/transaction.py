from typing import List
from fastapi import APIRouter, Depends, HTTPException, status, Response
from sqlalchemy.orm import Session

from dealership import schemas, oauth2
from dealership.database import get_db
from dealership.services import transactions as transaction_service

router = APIRouter(
    prefix="/api/v1/transactions",
    tags=['Transactions API'],
    dependencies=[Depends(oauth2.get_current_user)]
)

@router.post("/", response_model=schemas.TransactionOut, status_code=status.HTTP_201_CREATED)
def create_transaction(payload: schemas.TransactionCreate, db: Session = Depends(get_db)):
    """
    Records a transaction. A `sale` marks the vehicle sold.
    """
    return transaction_service.create_transaction(db, payload)

@router.get("/", response_model=List[schemas.TransactionOut])
def read_all_transactions(db: Session = Depends(get_db)):
    return transaction_service.get_transactions(db)

@router.get("/vehicle/{vehicle_id}", response_model=List[schemas.TransactionOut])
def read_transactions_for_vehicle(vehicle_id: int, db: Session = Depends(get_db)):
    return transaction_service.get_transactions_by_vehicle_id(db, vehicle_id)

@router.get("/{transaction_id}", response_model=schemas.TransactionOut)
def read_transaction_by_id(transaction_id: int, db: Session = Depends(get_db)):
    transaction = transaction_service.get_transaction_by_id(db, transaction_id)
    if not transaction:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return transaction

@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_transaction(transaction_id: int, db: Session = Depends(get_db)):
    """
    Deleting a `sale` puts the vehicle back to listed.
    """
    transaction_service.delete_transaction(db, transaction_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
