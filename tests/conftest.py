import itertools
import os
from datetime import datetime
from decimal import Decimal

# Settings are read at import time; point them at an in-memory database.
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret")
os.environ["SQLALCHEMY_DATABASE_URI"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient

from dealership import models, oauth2
from dealership.database import Base, SessionLocal, engine, get_db
from dealership.main import app
from dealership.security import hash_password

# Pinned clock for reports that depend on "now"
NOW = datetime(2024, 6, 15, 12, 0, 0)


@pytest.fixture()
def db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def user(db):
    account = models.User(username="tester", password_hash=hash_password("S3cret!pass"))
    db.add(account)
    db.commit()
    db.refresh(account)
    return account


@pytest.fixture()
def anon_client(db):
    """Client sharing the test session, with real token checks."""
    app.dependency_overrides[get_db] = lambda: db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def client(db, user):
    """Authenticated client."""
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[oauth2.get_current_user] = lambda: user
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def make_vehicle(db):
    counter = itertools.count(1)

    def _make(**overrides):
        n = next(counter)
        data = {
            "vin": f"VIN{n:05d}",
            "make": "Toyota",
            "model": "Camry",
            "year": 2020,
            "color": "Blue",
            "mileage": 50000,
            "status": models.VehicleStatus.ACQUIRED,
            "acquisition_date": datetime(2024, 1, 1),
            "acquisition_cost": Decimal("15000.00"),
        }
        data.update(overrides)
        vehicle = models.Vehicle(**data)
        db.add(vehicle)
        db.commit()
        db.refresh(vehicle)
        return vehicle

    return _make


@pytest.fixture()
def make_vendor(db):
    def _make(name="Quick Lube", contact_info=None):
        vendor = models.Vendor(name=name, contact_info=contact_info)
        db.add(vendor)
        db.commit()
        db.refresh(vendor)
        return vendor

    return _make


@pytest.fixture()
def make_expense(db):
    def _make(vehicle, amount, expense_type=models.ExpenseType.REPAIRS, **overrides):
        data = {
            "vehicle_id": vehicle.id,
            "amount": Decimal(str(amount)),
            "expense_type": expense_type,
            "description": f"{expense_type.value} work",
            "expense_date": datetime(2024, 2, 1),
        }
        data.update(overrides)
        expense = models.Expense(**data)
        db.add(expense)
        db.commit()
        db.refresh(expense)
        return expense

    return _make
