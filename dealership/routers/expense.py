from typing import List
from fastapi import APIRouter, Depends, HTTPException, status, Response
from sqlalchemy.orm import Session

# --- Project Imports ---
from dealership import schemas, oauth2
from dealership.database import get_db
from dealership.services import expenses as expense_service, reports

router = APIRouter(
    prefix="/api/v1/expenses",
    tags=['Expenses API'],
    dependencies=[Depends(oauth2.get_current_user)]
)

# =================================================================================
# BREAKDOWN (MUST BE DEFINED BEFORE /{expense_id})
# =================================================================================
@router.get("/breakdown", response_model=List[schemas.ExpenseBreakdown])
def get_expense_breakdown(
    filters: schemas.FinancialReportFilters = Depends(),
    db: Session = Depends(get_db)
):
    return reports.get_expense_breakdown(db, filters)

# =================================================================================
# CREATE
# =================================================================================
@router.post("/", response_model=schemas.ExpenseOut, status_code=status.HTTP_201_CREATED)
def create_expense(expense_payload: schemas.ExpenseCreate, db: Session = Depends(get_db)):
    return expense_service.create_expense(db, expense_payload)

# =================================================================================
# READ
# =================================================================================
@router.get("/", response_model=List[schemas.ExpenseOut])
def read_all_expenses(db: Session = Depends(get_db)):
    return expense_service.get_expenses(db)

@router.get("/vehicle/{vehicle_id}", response_model=List[schemas.ExpenseOut])
def read_expenses_for_vehicle(vehicle_id: int, db: Session = Depends(get_db)):
    return expense_service.get_expenses_by_vehicle_id(db, vehicle_id)

@router.get("/{expense_id}", response_model=schemas.ExpenseOut)
def read_expense_by_id(expense_id: int, db: Session = Depends(get_db)):
    expense = expense_service.get_expense_by_id(db, expense_id)
    if not expense:
        raise HTTPException(status_code=404, detail="Expense not found")
    return expense

# =================================================================================
# UPDATE / DELETE
# =================================================================================
@router.put("/{expense_id}", response_model=schemas.ExpenseOut)
def update_expense(expense_id: int, expense_payload: schemas.ExpenseUpdate, db: Session = Depends(get_db)):
    return expense_service.update_expense(db, expense_id, expense_payload)

@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_expense(expense_id: int, db: Session = Depends(get_db)):
    expense_service.delete_expense(db, expense_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
