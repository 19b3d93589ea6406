"""Unit tests for the Brevo email service using ``httpx.MockTransport``."""

import json

import httpx
import pytest

from book_network.core.errors import EmailDeliveryError
from book_network.core.models.domain import EmailTemplateName
from book_network.server.core.config import MailConfig
from book_network.server.services.email_service import EmailService, render_template

CONFIG = MailConfig(
    api_key="xkeysib-test",
    api_url="http://mock/v3/smtp/email",
    sender_email="no-reply@example.com",
    sender_name="Book Network",
)


def _service(handler) -> EmailService:
    return EmailService(CONFIG, client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


class TestRenderTemplate:
    @pytest.mark.parametrize("template", list(EmailTemplateName))
    def test_every_template_renders_its_variables(self, template):
        html = render_template(
            template,
            {"username": "Ada Lovelace", "confirmationUrl": "http://front/x", "activationCode": "123456"},
        )

        assert "Ada Lovelace" in html
        assert "123456" in html
        assert "http://front/x" in html


class TestBuildPayload:
    def test_payload_uses_brevo_field_names(self):
        payload = EmailService(CONFIG).build_payload(
            "ada@example.com",
            "Ada Lovelace",
            EmailTemplateName.activate_account,
            "http://front/activate",
            "654321",
            "Account activation",
        )
        body = payload.model_dump(by_alias=True)

        assert body["sender"] == {"email": "no-reply@example.com", "name": "Book Network"}
        assert body["to"] == [{"email": "ada@example.com", "name": "Ada Lovelace"}]
        assert body["subject"] == "Account activation"
        assert "654321" in body["htmlContent"]


class TestSendEmail:
    @pytest.mark.asyncio
    async def test_posts_with_api_key(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["url"] = str(request.url)
            captured["api_key"] = request.headers.get("api-key")
            captured["body"] = json.loads(request.content)
            return httpx.Response(201, json={"messageId": "<1@brevo>"})

        await _service(handler).send_email(
            "ada@example.com", "Ada", EmailTemplateName.forgot_password, "http://front/reset", "111222", "Reset"
        )

        assert captured["url"] == "http://mock/v3/smtp/email"
        assert captured["api_key"] == "xkeysib-test"
        assert captured["body"]["to"][0]["email"] == "ada@example.com"
        assert "111222" in captured["body"]["htmlContent"]

    @pytest.mark.asyncio
    async def test_rejected_message_raises(self):
        service = _service(lambda request: httpx.Response(401, json={"code": "unauthorized"}))

        with pytest.raises(EmailDeliveryError, match="HTTP 401"):
            await service.send_email(
                "ada@example.com", "Ada", EmailTemplateName.activate_account, "http://front", "1", "Subject"
            )

    @pytest.mark.asyncio
    async def test_transport_error_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(EmailDeliveryError, match="connection refused"):
            await _service(handler).send_email(
                "ada@example.com", "Ada", EmailTemplateName.set_password, "http://front", "1", "Subject"
            )
