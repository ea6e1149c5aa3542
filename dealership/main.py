import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dealership.config import get_settings
from dealership.database import engine, Base
from dealership.exceptions import DealershipError
from dealership.utils import utcnow
from dealership import models  # Registers models with SQLAlchemy

# Import Routers
from dealership.routers import (
    auth, vehicle, vendor, expense, transaction, dashboard, reports
)

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize DB
Base.metadata.create_all(bind=engine)

app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Domain errors -> HTTP
@app.exception_handler(DealershipError)
async def dealership_error_handler(request: Request, exc: DealershipError):
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

# =================================================================
# REGISTER API ROUTERS
# =================================================================
app.include_router(auth.router)
app.include_router(dashboard.router)
app.include_router(reports.router)

# --- INVENTORY ---
app.include_router(vehicle.router)
app.include_router(vendor.router)
app.include_router(expense.router)
app.include_router(transaction.router)

@app.get("/api/v1/healthcheck")
def healthcheck():
    return {"status": "ok", "timestamp": utcnow().isoformat()}
