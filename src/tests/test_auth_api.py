from datetime import timedelta
from unittest.mock import patch

from core import constants
from core.security import create_access_token


def test_register(client, db_session):
    response = client.post(
        "/api/auth/register",
        json={
            "name": "Joana Lima",
            "email": " Joana@Example.com ",
            "phone": "(21) 97777-6666",
            "password": "segredo1",
        },
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["token"]
    assert data["user"]["email"] == "joana@example.com"
    assert data["user"]["planType"] == "free"
    assert data["user"]["balance"] == 0
    assert "passwordHash" not in data["user"]


def test_register_missing_fields(client):
    response = client.post("/api/auth/register", json={"email": "x@example.com"})

    assert response.status_code == 400
    assert response.json()["error"] == constants.MSG_MISSING_REGISTER_FIELDS


def test_register_short_password(client):
    response = client.post(
        "/api/auth/register",
        json={"name": "A", "email": "a@example.com", "phone": "1", "password": "123"},
    )

    assert response.status_code == 400
    assert response.json()["error"] == constants.MSG_SHORT_PASSWORD


def test_register_duplicate_email(client, make_user):
    user = make_user()

    response = client.post(
        "/api/auth/register",
        json={"name": "B", "email": user.email, "phone": "1", "password": "123456"},
    )

    assert response.status_code == 409
    assert response.json()["error"] == constants.MSG_EMAIL_IN_USE


def test_login(client, db_session, make_user, user_password):
    user = make_user()

    with patch("services.user_service.logger") as mock_logger:
        response = client.post(
            "/api/auth/login", json={"email": user.email, "password": user_password}
        )

    assert response.status_code == 200
    assert response.json()["data"]["user"]["id"] == str(user.id)
    mock_logger.info.assert_called_once()

    db_session.refresh(user)
    assert user.last_login_at is not None


def test_login_wrong_password(client, make_user):
    user = make_user()

    response = client.post("/api/auth/login", json={"email": user.email, "password": "nope"})

    assert response.status_code == 401
    assert response.json()["error"] == constants.MSG_INVALID_CREDENTIALS


def test_login_suspended(client, make_user, user_password):
    user = make_user(is_suspended=True, suspended_reason="Leitura fraudulenta")

    response = client.post(
        "/api/auth/login", json={"email": user.email, "password": user_password}
    )

    assert response.status_code == 403
    assert response.json()["error"] == "Conta suspensa: Leitura fraudulenta"


def test_me(client, make_user, auth_headers):
    user = make_user(plan_type=constants.PlanType.PREMIUM)

    response = client.get("/api/auth/me", headers=auth_headers(user))

    assert response.status_code == 200
    assert response.json()["data"]["user"]["planType"] == "premium"


def test_me_with_expired_token(client, make_user):
    user = make_user()
    token = create_access_token(
        user.id, user.email, user.is_admin, expires_delta=timedelta(seconds=-10)
    )

    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["error"] == constants.MSG_TOKEN_EXPIRED


def test_me_with_garbage_token(client):
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer abc.def"})

    assert response.status_code == 401
    assert response.json()["error"] == constants.MSG_TOKEN_INVALID


def test_onboarding(client, make_user, auth_headers):
    user = make_user()

    response = client.post(
        "/api/auth/onboarding",
        json={"commitment": "committed", "incomeRange": "medium"},
        headers=auth_headers(user),
    )

    assert response.status_code == 200
    data = response.json()["data"]["user"]
    assert data["onboardingCompleted"] is True
    assert data["commitment"] == "committed"
    assert data["incomeRange"] == "medium"


def test_onboarding_invalid(client, make_user, auth_headers):
    user = make_user()

    response = client.post(
        "/api/auth/onboarding",
        json={"commitment": "sometimes", "incomeRange": "medium"},
        headers=auth_headers(user),
    )

    assert response.status_code == 400
    assert response.json()["error"] == constants.MSG_INVALID_ONBOARDING


def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["version"] == "1.0.0"


def test_unknown_route(client):
    response = client.get("/api/nowhere")

    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "error": "Rota não encontrada: GET /api/nowhere",
    }
