"""
Transactional email delivery.

Renders one of the builtin templates and posts it to the Brevo transactional
email API with ``httpx``. Sending is awaited so that callers can compensate
(e.g. delete a freshly issued token) when delivery fails.
"""

from __future__ import annotations

import logging
from string import Template
from typing import Dict, List, Optional

import httpx
from pydantic import BaseModel, Field

from book_network.core.errors import EmailDeliveryError
from book_network.core.models.domain import EmailTemplateName
from book_network.server.core.config import MailConfig

_BUILTIN_TEMPLATES: Dict[str, str] = {
    EmailTemplateName.activate_account.value: (
        "<html><body>"
        "<h2>Hello $username,</h2>"
        "<p>Welcome to Book Network. Use the code below to activate your account:</p>"
        "<h3>$activationCode</h3>"
        '<p>Or follow this link: <a href="$confirmationUrl">$confirmationUrl</a></p>'
        "<p>The code expires in 15 minutes.</p>"
        "</body></html>"
    ),
    EmailTemplateName.forgot_password.value: (
        "<html><body>"
        "<h2>Hello $username,</h2>"
        "<p>We received a request to reset your password. Your verification code is:</p>"
        "<h3>$activationCode</h3>"
        '<p>Enter it on <a href="$confirmationUrl">$confirmationUrl</a> to choose a new password.</p>'
        "<p>If you did not ask for this, you can ignore this email.</p>"
        "</body></html>"
    ),
    EmailTemplateName.set_password.value: (
        "<html><body>"
        "<h2>Hello $username,</h2>"
        "<p>An account was created for you on Book Network. Use the code below to set your password:</p>"
        "<h3>$activationCode</h3>"
        '<p>Follow this link: <a href="$confirmationUrl">$confirmationUrl</a></p>'
        "</body></html>"
    ),
}


def render_template(template_name: EmailTemplateName, variables: Dict[str, str]) -> str:
    """Fill a builtin template with ``username``, ``confirmationUrl`` and ``activationCode``."""
    try:
        template = _BUILTIN_TEMPLATES[template_name.value]
    except KeyError as exc:
        raise KeyError(f"email template not found: {template_name.value!r}") from exc
    return Template(template).safe_substitute(variables)


class EmailAddress(BaseModel):
    email: str
    name: Optional[str] = None


class BrevoEmailPayload(BaseModel):
    """Request body of ``POST /v3/smtp/email``."""

    sender: EmailAddress
    to: List[EmailAddress]
    subject: str
    html_content: str = Field(serialization_alias="htmlContent")


class EmailService:
    """Send templated emails through the Brevo API.

    - POST ``{api_url}`` with the ``api-key`` header
    - Non-2xx responses and transport errors become ``EmailDeliveryError``
    """

    def __init__(self, config: MailConfig, *, client: Optional[httpx.AsyncClient] = None) -> None:
        self._config = config
        self._http = client
        self._logger = logging.getLogger(__name__)

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self._config.api_key:
            headers["api-key"] = self._config.api_key
        return headers

    def build_payload(
        self,
        to: str,
        username: str,
        template_name: EmailTemplateName,
        confirmation_url: str,
        activation_code: str,
        subject: str,
    ) -> BrevoEmailPayload:
        html = render_template(
            template_name,
            {
                "username": username,
                "confirmationUrl": confirmation_url,
                "activationCode": activation_code,
            },
        )
        return BrevoEmailPayload(
            sender=EmailAddress(email=self._config.sender_email, name=self._config.sender_name),
            to=[EmailAddress(email=to, name=username)],
            subject=subject,
            html_content=html,
        )

    async def send_email(
        self,
        to: str,
        username: str,
        template_name: EmailTemplateName,
        confirmation_url: str,
        activation_code: str,
        subject: str,
    ) -> None:
        """
        Render ``template_name`` and deliver it to ``to``.

        Args:
            to: Recipient email address
            username: Recipient display name, also injected into the template
            template_name: Builtin template to render
            confirmation_url: Link injected into the template
            activation_code: Verification code injected into the template
            subject: Email subject

        Raises:
            EmailDeliveryError: If the API rejects the message or cannot be reached
        """
        payload = self.build_payload(to, username, template_name, confirmation_url, activation_code, subject)
        body = payload.model_dump(by_alias=True)
        self._logger.debug("EmailService.send_email: POST %s template=%s", self._config.api_url, template_name.value)
        try:
            if self._http is not None:
                response = await self._http.post(self._config.api_url, json=body, headers=self._headers())
            else:
                async with httpx.AsyncClient(timeout=self._config.timeout) as client:
                    response = await client.post(self._config.api_url, json=body, headers=self._headers())
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            self._logger.error(f"Mail API rejected email to {to}: HTTP {e.response.status_code}")
            raise EmailDeliveryError(to, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            self._logger.error(f"Mail API unreachable while sending to {to}: {e}")
            raise EmailDeliveryError(to, str(e) or type(e).__name__) from e
        self._logger.info(f"Sent '{template_name.value}' email to {to}")
