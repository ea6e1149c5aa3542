# dealership/routers/dashboard.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from dealership import schemas, oauth2
from dealership.database import get_db
from dealership.services import dashboard as dashboard_service

router = APIRouter(
    prefix="/api/v1/dashboard-data",
    tags=["Dashboard Data"],
    dependencies=[Depends(oauth2.get_current_user)]
)

@router.get("/kpis", response_model=schemas.DashboardKpi)
def get_dashboard_kpis_data(db: Session = Depends(get_db)):
    return dashboard_service.get_dashboard_kpis(db)
