from typing import List, Optional
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from dealership import schemas, oauth2
from dealership.database import get_db
from dealership.services import exporters, reports as report_service

router = APIRouter(
    prefix="/api/v1/reports",
    tags=["Reports"],
    dependencies=[Depends(oauth2.get_current_user)]
)

def _csv_response(content: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )

@router.get("/profit-loss", response_model=List[schemas.ProfitLoss])
def get_profit_loss_report(
    filters: schemas.FinancialReportFilters = Depends(),
    db: Session = Depends(get_db)
):
    return report_service.get_profit_loss_report(db, filters)

@router.get("/profit-loss/{vehicle_id}", response_model=Optional[schemas.ProfitLoss])
def get_vehicle_profit_loss(vehicle_id: int, db: Session = Depends(get_db)):
    # Unknown vehicle -> null, not 404
    return report_service.get_vehicle_profit_loss(db, vehicle_id)

@router.get("/inventory-aging", response_model=List[schemas.InventoryAging])
def get_inventory_aging(db: Session = Depends(get_db)):
    return report_service.get_inventory_aging(db)

@router.get("/expense-breakdown", response_model=List[schemas.ExpenseBreakdown])
def get_expense_breakdown(
    filters: schemas.FinancialReportFilters = Depends(),
    db: Session = Depends(get_db)
):
    return report_service.get_expense_breakdown(db, filters)

# --- CSV EXPORTS ---
@router.get("/export/profit-loss.csv")
def export_profit_loss(
    filters: schemas.FinancialReportFilters = Depends(),
    db: Session = Depends(get_db)
):
    return _csv_response(exporters.export_profit_loss_to_csv(db, filters), "profit-loss.csv")

@router.get("/export/inventory-aging.csv")
def export_inventory_aging(db: Session = Depends(get_db)):
    return _csv_response(exporters.export_inventory_aging_to_csv(db), "inventory-aging.csv")

@router.get("/export/expense-breakdown.csv")
def export_expense_breakdown(
    filters: schemas.FinancialReportFilters = Depends(),
    db: Session = Depends(get_db)
):
    return _csv_response(exporters.export_expense_breakdown_to_csv(db, filters), "expense-breakdown.csv")
