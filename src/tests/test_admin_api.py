from unittest.mock import patch
import uuid

import pytest

from core import constants
from models import Book


@pytest.fixture(scope="function")
def admin(make_user):
    return make_user(
        name="Admin",
        level=constants.ADMIN_LEVEL,
        is_admin=True,
        plan_type=constants.PlanType.PREMIUM,
    )


def test_admin_routes_reject_regular_users(client, make_user, auth_headers):
    user = make_user()

    with patch("api.api_v1.deps.logger") as mock_logger:
        response = client.get("/api/admin/users", headers=auth_headers(user))

    assert response.status_code == 403
    assert response.json()["error"] == constants.MSG_ADMIN_ONLY
    mock_logger.warning.assert_called_once()


def test_list_users_paginated(client, make_user, admin, auth_headers):
    for _ in range(3):
        make_user()

    response = client.get("/api/admin/users?page=2&limit=3", headers=auth_headers(admin))

    assert response.status_code == 200
    page = response.json()["data"]
    assert page["total"] == 4
    assert page["page"] == 2
    assert page["limit"] == 3
    assert page["totalPages"] == 2
    assert len(page["data"]) == 1


def test_suspend_and_unsuspend_user(client, make_user, admin, auth_headers):
    user = make_user()

    suspended = client.post(
        f"/api/admin/users/{user.id}/suspend",
        json={"reason": "Leitura automatizada"},
        headers=auth_headers(admin),
    )
    assert suspended.status_code == 200

    blocked = client.get("/api/auth/me", headers=auth_headers(user))
    assert blocked.status_code == 403
    assert blocked.json()["error"] == "Conta suspensa: Leitura automatizada"

    client.post(f"/api/admin/users/{user.id}/unsuspend", headers=auth_headers(admin))
    assert client.get("/api/auth/me", headers=auth_headers(user)).status_code == 200


def test_create_book_derives_reading_stats(client, db_session, admin, auth_headers):
    content = " ".join(["palavra"] * 400)

    response = client.post(
        "/api/admin/books",
        json={
            "title": "Novo Livro",
            "author": "Autora",
            "genre": "Conto",
            "synopsis": "Curto.",
            "content": content,
            "baseRewardMoney": 700,
            "rewardPoints": 70,
        },
        headers=auth_headers(admin),
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["wordCount"] == 400
    book = db_session.get(Book, uuid.UUID(data["id"]))
    assert book.estimated_read_time == 120


def test_update_book(client, db_session, make_book, admin, auth_headers):
    book = make_book()

    response = client.patch(
        f"/api/admin/books/{book.id}",
        json={"active": False, "baseRewardMoney": 900},
        headers=auth_headers(admin),
    )

    assert response.status_code == 200
    db_session.refresh(book)
    assert book.active is False
    assert book.base_reward_money == 900
    assert book.title == "A Casa das Marés"


def test_admin_withdrawal_flow(client, make_user, admin, auth_headers):
    user = make_user(balance=9000)
    created = client.post(
        "/api/withdrawals",
        json={"amount": 6000, "pixKey": "11988887777", "pixKeyType": "phone"},
        headers=auth_headers(user),
    ).json()["data"]["withdrawal"]

    pending = client.get(
        "/api/admin/withdrawals?status=PENDING", headers=auth_headers(admin)
    ).json()["data"]
    assert [item["id"] for item in pending] == [created["id"]]

    approved = client.post(
        f"/api/admin/withdrawals/{created['id']}/approve",
        json={"transactionId": "E2E-42"},
        headers=auth_headers(admin),
    )
    assert approved.status_code == 200
    assert approved.json()["data"]["withdrawal"]["status"] == "COMPLETED"

    again = client.post(
        f"/api/admin/withdrawals/{created['id']}/reject",
        json={"reason": "tarde demais"},
        headers=auth_headers(admin),
    )
    assert again.status_code == 409
    assert again.json()["error"] == constants.MSG_WITHDRAWAL_NOT_PENDING
