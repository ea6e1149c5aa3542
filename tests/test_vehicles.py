from datetime import datetime

import pytest

from dealership import models, schemas
from dealership.exceptions import ConflictError, NotFoundError
from dealership.services import expenses as expense_service
from dealership.services import transactions as transaction_service
from dealership.services import vehicles as vehicle_service

VEHICLE_PAYLOAD = {
    "vin": "1HGCM82633A004352",
    "make": "Honda",
    "model": "Accord",
    "year": 2019,
    "color": "Red",
    "mileage": 60000,
    "acquisition_cost": 18000,
}


def test_create_vehicle_defaults_to_acquired(client):
    response = client.post("/api/v1/vehicles/", json={**VEHICLE_PAYLOAD, "notes": "trade-in"})
    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "acquired"
    assert body["acquisition_cost"] == 18000.0
    assert body["sale_price"] is None
    assert body["sale_date"] is None
    assert body["notes"] == "trade-in"


def test_create_vehicle_duplicate_vin_conflicts(client):
    assert client.post("/api/v1/vehicles/", json=VEHICLE_PAYLOAD).status_code == 201
    response = client.post("/api/v1/vehicles/", json=VEHICLE_PAYLOAD)
    assert response.status_code == 409


@pytest.mark.parametrize("field,value", [
    ("year", 1899),
    ("mileage", -1),
    ("acquisition_cost", 0),
    ("vin", ""),
])
def test_create_vehicle_validation(client, field, value):
    response = client.post("/api/v1/vehicles/", json={**VEHICLE_PAYLOAD, field: value})
    assert response.status_code == 422


def test_get_vehicle_by_id_missing(client, db):
    assert vehicle_service.get_vehicle_by_id(db, 999) is None
    assert client.get("/api/v1/vehicles/999").status_code == 404


def test_list_vehicles_newest_acquisition_first(client, make_vehicle):
    make_vehicle(acquisition_date=datetime(2024, 1, 1))
    newer = make_vehicle(acquisition_date=datetime(2024, 3, 1))
    body = client.get("/api/v1/vehicles/").json()
    assert [v["id"] for v in body][0] == newer.id


def test_update_vehicle_partial(client, make_vehicle):
    vehicle = make_vehicle()
    response = client.put(
        f"/api/v1/vehicles/{vehicle.id}",
        json={"status": "listed", "listing_price": 21000},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "listed"
    assert body["listing_price"] == 21000.0
    assert body["make"] == "Toyota"


def test_update_vehicle_allows_status_without_sale_fields(db, make_vehicle):
    vehicle = make_vehicle()
    updated = vehicle_service.update_vehicle(
        db, vehicle.id, schemas.VehicleUpdate(status=models.VehicleStatus.SOLD)
    )
    assert updated.status == models.VehicleStatus.SOLD
    assert updated.sale_price is None


def test_update_missing_vehicle_raises(db):
    with pytest.raises(NotFoundError):
        vehicle_service.update_vehicle(db, 42, schemas.VehicleUpdate(color="Green"))


def test_update_missing_vehicle_returns_404(client):
    assert client.put("/api/v1/vehicles/42", json={"color": "Green"}).status_code == 404


@pytest.mark.parametrize("field", ["make", "model", "year", "color", "mileage", "status"])
def test_update_vehicle_rejects_null_for_required_field(client, db, make_vehicle, field):
    vehicle = make_vehicle()
    response = client.put(f"/api/v1/vehicles/{vehicle.id}", json={field: None})
    assert response.status_code == 422
    db.refresh(vehicle)
    assert vehicle.make == "Toyota"


def test_update_vehicle_clears_nullable_fields(client, make_vehicle):
    vehicle = make_vehicle(notes="Dent on hood", listing_price=19000)
    response = client.put(
        f"/api/v1/vehicles/{vehicle.id}",
        json={"notes": None, "listing_price": None, "sale_date": None},
    )
    assert response.status_code == 200
    assert response.json()["notes"] is None
    assert response.json()["listing_price"] is None


def test_delete_vehicle_cascades(client, db, make_vehicle, make_expense):
    vehicle = make_vehicle()
    make_expense(vehicle, 2000)
    transaction_service.create_transaction(db, schemas.TransactionCreate(
        vehicle_id=vehicle.id, type="refund", amount=100, description="deposit refund",
    ))

    assert client.delete(f"/api/v1/vehicles/{vehicle.id}").status_code == 204

    assert expense_service.get_expenses_by_vehicle_id(db, vehicle.id) == []
    assert transaction_service.get_transactions_by_vehicle_id(db, vehicle.id) == []
    assert db.query(models.Expense).count() == 0
    assert db.query(models.Transaction).count() == 0


def test_delete_missing_vehicle(client, db):
    with pytest.raises(NotFoundError):
        vehicle_service.delete_vehicle(db, 7)
    assert client.delete("/api/v1/vehicles/7").status_code == 404


def test_duplicate_vin_service_error(db, make_vehicle):
    existing = make_vehicle()
    payload = schemas.VehicleCreate(**{**VEHICLE_PAYLOAD, "vin": existing.vin})
    with pytest.raises(ConflictError):
        vehicle_service.create_vehicle(db, payload)
