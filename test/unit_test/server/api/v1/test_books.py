"""API tests for the book endpoints."""

import pytest
import pytest_asyncio
from httpx import AsyncClient

from test.helpers import login

pytestmark = pytest.mark.asyncio

BOOK = {
    "title": "Dune",
    "author_name": "Frank Herbert",
    "isbn": "9780441013593",
    "synopsis": "Desert planet",
    "shareable": True,
}


@pytest_asyncio.fixture
async def owner_headers(client, user_factory):
    await user_factory("owner@example.com", first_name="Olive", last_name="Owner")
    return await login(client, "owner@example.com")


@pytest_asyncio.fixture
async def reader_headers(client, user_factory):
    await user_factory("reader@example.com", first_name="Rita", last_name="Reader")
    return await login(client, "reader@example.com")


async def _create_book(client: AsyncClient, headers: dict, **overrides) -> int:
    response = await client.post("/api/v1/books", json={**BOOK, **overrides}, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()["id"]


async def test_requires_authentication(client: AsyncClient):
    response = await client.get("/api/v1/books")

    assert response.status_code == 401


async def test_rejects_foreign_token(client: AsyncClient):
    response = await client.get("/api/v1/books", headers={"Authorization": "Bearer not-a-token"})

    assert response.status_code == 401
    assert response.json()["error_type"] == "AuthenticationError"


async def test_create_and_list(client: AsyncClient, owner_headers, reader_headers):
    book_id = await _create_book(client, owner_headers)

    response = await client.get("/api/v1/books", params={"page": 0, "size": 5}, headers=reader_headers)
    assert response.status_code == 200
    page = response.json()
    assert page["total_elements"] == 1
    assert page["number"] == 0
    assert page["size"] == 5
    assert page["content"][0]["id"] == book_id
    assert page["content"][0]["owner"] == "Olive Owner"

    response = await client.get("/api/v1/books", headers=owner_headers)
    assert response.json()["content"] == []

    response = await client.get("/api/v1/books/owner", headers=owner_headers)
    assert [b["id"] for b in response.json()["content"]] == [book_id]


async def test_get_book(client: AsyncClient, owner_headers):
    book_id = await _create_book(client, owner_headers)

    response = await client.get(f"/api/v1/books/{book_id}", headers=owner_headers)
    assert response.status_code == 200
    assert response.json()["rate"] == 0.0

    response = await client.get("/api/v1/books/9999", headers=owner_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "No book found with the ID : 9999"


async def test_invalid_paging(client: AsyncClient, owner_headers):
    response = await client.get("/api/v1/books", params={"page": -1}, headers=owner_headers)

    assert response.status_code == 422


async def test_borrow_return_approve(client: AsyncClient, owner_headers, reader_headers):
    book_id = await _create_book(client, owner_headers)

    response = await client.post(f"/api/v1/books/borrow/{book_id}", headers=reader_headers)
    assert response.status_code == 200
    loan_id = response.json()["id"]

    response = await client.post(f"/api/v1/books/borrow/{book_id}", headers=owner_headers)
    assert response.status_code == 403

    response = await client.get("/api/v1/books/borrowed", headers=reader_headers)
    assert response.json()["content"][0]["returned"] is False

    response = await client.patch(f"/api/v1/books/borrow/return/approve/{book_id}", headers=owner_headers)
    assert response.status_code == 403

    response = await client.patch(f"/api/v1/books/borrow/return/{book_id}", headers=reader_headers)
    assert response.json()["id"] == loan_id

    response = await client.get("/api/v1/books/returned", headers=owner_headers)
    assert response.json()["total_elements"] == 1

    response = await client.patch(f"/api/v1/books/borrow/return/approve/{book_id}", headers=owner_headers)
    assert response.status_code == 200
    assert response.json()["id"] == loan_id


async def test_archived_book_cannot_be_borrowed(client: AsyncClient, owner_headers, reader_headers):
    book_id = await _create_book(client, owner_headers)
    response = await client.patch(f"/api/v1/books/archived/{book_id}", headers=owner_headers)
    assert response.status_code == 200

    response = await client.post(f"/api/v1/books/borrow/{book_id}", headers=reader_headers)

    assert response.status_code == 403
    assert response.json()["detail"] == "This book cannot be borrowed (archived or not shareable)."


async def test_toggle_by_non_owner(client: AsyncClient, owner_headers, reader_headers):
    book_id = await _create_book(client, owner_headers)

    response = await client.patch(f"/api/v1/books/shareable/{book_id}", headers=reader_headers)

    assert response.status_code == 403


async def test_reservations(client: AsyncClient, owner_headers, reader_headers, user_factory):
    book_id = await _create_book(client, owner_headers)
    await user_factory("other@example.com")
    other_headers = await login(client, "other@example.com")

    response = await client.post(f"/api/v1/books/reservations/{book_id}", headers=other_headers)
    assert response.status_code == 403

    await client.post(f"/api/v1/books/borrow/{book_id}", headers=reader_headers)
    response = await client.post(f"/api/v1/books/reservations/{book_id}", headers=other_headers)
    assert response.status_code == 200

    response = await client.post(f"/api/v1/books/reservations/{book_id}", headers=other_headers)
    assert response.status_code == 409

    response = await client.get("/api/v1/books/reservations", headers=other_headers)
    assert [b["id"] for b in response.json()["content"]] == [book_id]

    response = await client.delete(f"/api/v1/books/reservations/{book_id}", headers=other_headers)
    assert response.status_code == 204

    response = await client.delete(f"/api/v1/books/reservations/{book_id}", headers=other_headers)
    assert response.status_code == 404


async def test_upload_cover(client: AsyncClient, owner_headers):
    book_id = await _create_book(client, owner_headers)

    response = await client.post(
        f"/api/v1/books/cover/{book_id}",
        files={"file": ("cover.png", b"\x89PNG-bytes", "image/png")},
        headers=owner_headers,
    )
    assert response.status_code == 202
    assert response.json() == {"stored": True}

    response = await client.get(f"/api/v1/books/{book_id}", headers=owner_headers)
    assert response.json()["cover"] is not None
