import pytest

from dealership import models, schemas
from dealership.exceptions import ConflictError, NotFoundError
from dealership.services import vendors as vendor_service


def test_vendor_crud(client):
    created = client.post("/api/v1/vendors/", json={"name": "Body Shop", "contact_info": "555-0100"})
    assert created.status_code == 201
    vendor_id = created.json()["id"]

    updated = client.put(f"/api/v1/vendors/{vendor_id}", json={"contact_info": None})
    assert updated.status_code == 200
    assert updated.json()["name"] == "Body Shop"
    assert updated.json()["contact_info"] is None

    assert client.get(f"/api/v1/vendors/{vendor_id}").status_code == 200
    assert client.delete(f"/api/v1/vendors/{vendor_id}").status_code == 204
    assert client.get(f"/api/v1/vendors/{vendor_id}").status_code == 404


def test_vendors_sorted_by_name(db, make_vendor):
    make_vendor("Zeta Towing")
    make_vendor("Alpha Detailing")
    assert [v.name for v in vendor_service.get_vendors(db)] == ["Alpha Detailing", "Zeta Towing"]


def test_create_vendor_requires_name(client):
    assert client.post("/api/v1/vendors/", json={"name": ""}).status_code == 422


def test_update_missing_vendor(db):
    with pytest.raises(NotFoundError):
        vendor_service.update_vendor(db, 5, schemas.VendorUpdate(name="X"))


def test_update_vendor_rejects_null_name(client, make_vendor):
    vendor = make_vendor()
    assert client.put(f"/api/v1/vendors/{vendor.id}", json={"name": None}).status_code == 422
    assert client.get(f"/api/v1/vendors/{vendor.id}").json()["name"] == "Quick Lube"


def test_delete_vendor_with_expenses_conflicts(client, db, make_vehicle, make_vendor, make_expense):
    vendor = make_vendor()
    vehicle = make_vehicle()
    expense = make_expense(vehicle, 300, vendor_id=vendor.id)

    with pytest.raises(ConflictError):
        vendor_service.delete_vendor(db, vendor.id)

    response = client.delete(f"/api/v1/vendors/{vendor.id}")
    assert response.status_code == 409
    assert "associated expenses" in response.json()["detail"]

    db.expire_all()
    assert vendor_service.get_vendor_by_id(db, vendor.id) is not None
    assert db.query(models.Expense).filter(models.Expense.id == expense.id).one().vendor_id == vendor.id


def test_delete_missing_vendor(client):
    assert client.delete("/api/v1/vendors/123").status_code == 404
