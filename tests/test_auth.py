from dealership.services import auth as auth_service


def test_healthcheck(anon_client):
    response = anon_client.get("/api/v1/healthcheck")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_default_user_is_created_once(anon_client, db):
    response = anon_client.post("/api/v1/auth/default-user")
    assert response.status_code == 200
    first = response.json()
    assert first["username"] == "admin"
    assert "password_hash" not in first

    again = anon_client.post("/api/v1/auth/default-user")
    assert again.json()["id"] == first["id"]


def test_create_default_user_returns_existing_account(db, user):
    assert auth_service.create_default_user(db).id == user.id


def test_login_issues_token_that_opens_protected_routes(anon_client, user):
    response = anon_client.post(
        "/api/v1/auth/login", data={"username": "tester", "password": "S3cret!pass"}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["username"] == "tester"

    headers = {"Authorization": f"Bearer {body['access_token']}"}
    assert anon_client.get("/api/v1/vehicles/", headers=headers).status_code == 200


def test_login_rejects_wrong_password(anon_client, user):
    response = anon_client.post(
        "/api/v1/auth/login", data={"username": "tester", "password": "nope"}
    )
    assert response.status_code == 401


def test_login_service_unknown_user(db):
    assert auth_service.login(db, "ghost", "whatever") is None


def test_protected_routes_require_token(anon_client):
    assert anon_client.get("/api/v1/vehicles/").status_code == 401
    assert anon_client.get("/api/v1/dashboard-data/kpis").status_code == 401
    bad = {"Authorization": "Bearer not-a-jwt"}
    assert anon_client.get("/api/v1/reports/profit-loss", headers=bad).status_code == 401
