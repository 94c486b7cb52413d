"""
Email sender adapters.

ConsoleEmailSender is the development default; SendGridEmailSender talks to
the SendGrid v3 mail API over httpx.
"""

import logging
from typing import Optional

import httpx

from src.app.services.email_sender import EmailMessage, EmailSender
from src.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)

DISPATCH_FAILED = Error(
    "EMAIL_DISPATCH_FAILED",
    "Email service unavailable, please try again later",
    public=True,
)


class ConsoleEmailSender(EmailSender):
    """Logs outgoing mail instead of delivering it. Bodies are not logged."""

    async def send(self, message: EmailMessage) -> Result[None]:
        logger.info(f"Email (console backend) to={message.to} subject={message.subject!r}")
        return Return.ok(None)


class SendGridEmailSender(EmailSender):
    """Delivers mail through the SendGrid v3 /mail/send endpoint"""

    def __init__(
        self,
        api_key: str,
        from_address: str,
        api_url: str = "https://api.sendgrid.com/v3/mail/send",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.from_address = from_address
        self.api_url = api_url
        self.timeout = timeout
        self.transport = transport

    def _payload(self, message: EmailMessage) -> dict:
        content = [{"type": "text/plain", "value": message.text}]
        if message.html:
            content.append({"type": "text/html", "value": message.html})
        return {
            "personalizations": [{"to": [{"email": message.to}]}],
            "from": {"email": self.from_address},
            "subject": message.subject,
            "content": content,
        }

    async def send(self, message: EmailMessage) -> Result[None]:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.post(
                    self.api_url,
                    json=self._payload(message),
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
        except httpx.HTTPError as exc:
            logger.error(f"SendGrid request failed: {type(exc).__name__}: {exc}")
            return Return.err(DISPATCH_FAILED)

        if response.status_code >= 300:
            logger.error(
                f"SendGrid rejected message: status={response.status_code} "
                f"errors={provider_errors(response)}"
            )
            return Return.err(DISPATCH_FAILED)

        return Return.ok(None)


def provider_errors(response: httpx.Response) -> list:
    """field/message pairs from a SendGrid error body; the raw body may echo recipients"""
    try:
        body = response.json()
    except ValueError:
        return []
    errors = body.get("errors") if isinstance(body, dict) else None
    if not isinstance(errors, list):
        return []
    return [
        {"field": e.get("field"), "message": e.get("message")}
        for e in errors
        if isinstance(e, dict)
    ]
