"""
End-to-end lending flow through the HTTP API.

Two users register and activate their accounts, one shares a book, the other
borrows and returns it, the owner approves the return, and a third user's
reservation and feedback round the flow off. Each lending step leaves exactly
one notification for the party it concerns.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import AsyncClient

from book_network.server.services.deps import get_jwt_service
from test.helpers import login, sent_code

pytestmark = pytest.mark.asyncio


async def _register_and_activate(client: AsyncClient, mock_email_service, first_name: str, email: str) -> dict:
    response = await client.post(
        "/api/v1/auth/register",
        json={"first_name": first_name, "last_name": "Tester", "email": email, "password": "password123"},
    )
    assert response.status_code == 202
    response = await client.post("/api/v1/auth/activate-account", json={"token": sent_code(mock_email_service)})
    assert response.status_code == 200
    return await login(client, email)


async def _notifications(client: AsyncClient, headers: dict) -> list:
    response = await client.get("/api/v1/users/me/notifications", headers=headers)
    assert response.status_code == 200
    return response.json()


async def test_borrow_return_approve_with_notifications(client: AsyncClient, mock_email_service):
    owner = await _register_and_activate(client, mock_email_service, "Olive", "olive@example.com")
    borrower = await _register_and_activate(client, mock_email_service, "Bruno", "bruno@example.com")
    waiting = await _register_and_activate(client, mock_email_service, "Wanda", "wanda@example.com")

    response = await client.post(
        "/api/v1/books",
        json={"title": "Dune", "author_name": "Frank Herbert", "isbn": "9780441013593", "synopsis": "Spice", "shareable": True},
        headers=owner,
    )
    book_id = response.json()["id"]

    # Borrow
    response = await client.post(f"/api/v1/books/borrow/{book_id}", headers=borrower)
    assert response.status_code == 200
    loan_id = response.json()["id"]
    assert [n["status"] for n in await _notifications(client, owner)] == ["BORROWED"]

    # Nobody else can borrow it now, but they can reserve it
    response = await client.post(f"/api/v1/books/borrow/{book_id}", headers=waiting)
    assert response.status_code == 403
    assert response.json()["detail"] == "The requested book is already borrowed by another user"
    response = await client.post(f"/api/v1/books/reservations/{book_id}", headers=waiting)
    assert response.status_code == 200
    owner_inbox = await _notifications(client, owner)
    assert [n["status"] for n in owner_inbox] == ["RESERVED", "BORROWED"]
    assert owner_inbox[0]["message"] == "Wanda Tester has reserved your book"

    # Return
    response = await client.patch(f"/api/v1/books/borrow/return/{book_id}", headers=borrower)
    assert response.json()["id"] == loan_id
    assert [n["status"] for n in await _notifications(client, owner)] == ["RETURNED", "RESERVED", "BORROWED"]

    # Approve
    response = await client.patch(f"/api/v1/books/borrow/return/approve/{book_id}", headers=owner)
    assert response.json()["id"] == loan_id
    borrower_inbox = await _notifications(client, borrower)
    assert [n["status"] for n in borrower_inbox] == ["RETURN_APPROVED"]
    assert borrower_inbox[0]["book_title"] == "Dune"

    # A second approval has nothing left to approve
    response = await client.patch(f"/api/v1/books/borrow/return/approve/{book_id}", headers=owner)
    assert response.status_code == 403

    # The book is available again
    response = await client.post(f"/api/v1/books/borrow/{book_id}", headers=waiting)
    assert response.status_code == 200

    # Feedback and rate
    response = await client.post(
        "/api/v1/feedbacks", json={"book_id": book_id, "note": 4, "comment": "Great"}, headers=borrower
    )
    assert response.status_code == 200
    response = await client.post(
        "/api/v1/feedbacks", json={"book_id": book_id, "note": 5, "comment": "Loved it"}, headers=waiting
    )
    assert response.status_code == 200
    response = await client.post(
        "/api/v1/feedbacks", json={"book_id": book_id, "note": 5, "comment": "Mine"}, headers=owner
    )
    assert response.status_code == 403

    response = await client.get(f"/api/v1/books/{book_id}", headers=borrower)
    assert response.json()["rate"] == 4.5
    response = await client.get(f"/api/v1/feedbacks/book/{book_id}", headers=borrower)
    feedback = response.json()
    assert feedback["total_elements"] == 2
    assert sorted(f["own_feedback"] for f in feedback["content"]) == [False, True]


async def test_live_push_reaches_connected_owner(client: AsyncClient, mock_email_service, channel):
    owner = await _register_and_activate(client, mock_email_service, "Olive", "olive@example.com")
    borrower = await _register_and_activate(client, mock_email_service, "Bruno", "bruno@example.com")
    response = await client.post(
        "/api/v1/books",
        json={"title": "Emma", "author_name": "Jane Austen", "isbn": "1", "synopsis": "Matchmaking", "shareable": True},
        headers=owner,
    )
    book_id = response.json()["id"]
    owner_id = get_jwt_service().decode_token(owner["Authorization"].split()[1])["userId"]
    websocket = MagicMock()
    websocket.accept = AsyncMock()
    websocket.send_json = AsyncMock()
    await channel.connect(owner_id, websocket)

    await client.post(f"/api/v1/books/borrow/{book_id}", headers=borrower)

    message = websocket.send_json.await_args.args[0]
    assert message["destination"] == "/notifications"
    assert message["payload"]["status"] == "BORROWED"
    assert message["payload"]["message"] == "Your book has been borrowed"
