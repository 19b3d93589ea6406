"""Helpers shared by API and integration tests."""

from __future__ import annotations

from unittest.mock import MagicMock

from httpx import AsyncClient

DEFAULT_PASSWORD = "password123"


def sent_code(mock_email_service: MagicMock) -> str:
    """Return the verification code of the most recent email."""
    return mock_email_service.send_email.await_args.args[4]


async def login(client: AsyncClient, email: str, password: str = DEFAULT_PASSWORD) -> dict:
    """Authenticate through the API and return the bearer header."""
    response = await client.post("/api/v1/auth/authenticate", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}
