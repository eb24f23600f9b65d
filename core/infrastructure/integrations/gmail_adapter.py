"""
Gmail Integration Adapter.

Sends generated email content through Gmail SMTP using an App Password.
smtplib is blocking, so the send runs in a worker thread.
"""
import asyncio
import logging
import smtplib
from email.message import EmailMessage
from email.utils import make_msgid
from typing import Any, Callable, Mapping

from core.application.interfaces import IIntegrationAdapter
from core.domain.clock import utc_now
from core.domain.entities import IntegrationResult
from core.domain.exceptions import IntegrationError
from core.infrastructure.integrations.content import extract_deliverable, parse_email_content


logger = logging.getLogger(__name__)

GMAIL_SMTP_HOST = "smtp.gmail.com"
GMAIL_SMTP_SSL_PORT = 465

_LOGIN_HELP = (
    "Gmail login failed. Please check:\n"
    "• You're using a Gmail App Password (not your regular password)\n"
    "• App Password is 16 characters with no spaces\n"
    "• 2-Step Verification is enabled on your Gmail account\n"
    "• You're using the correct Gmail address"
)


class GmailSmtpAdapter(IIntegrationAdapter):
    """
    Gmail implementation of the integration adapter.

    Recipients are taken from the generated text unless the payload carries
    an explicit ``recipients`` list.
    """

    integration_id = "gmail"

    def __init__(
        self,
        host: str = GMAIL_SMTP_HOST,
        port: int = GMAIL_SMTP_SSL_PORT,
        timeout: float = 30.0,
        smtp_factory: Callable[..., smtplib.SMTP] = smtplib.SMTP_SSL,
    ):
        """
        Initialize Gmail adapter.

        Args:
            host: SMTP host
            port: SMTP SSL port
            timeout: Socket timeout in seconds
            smtp_factory: Callable returning an SMTP connection (injectable for tests)
        """
        self.host = host
        self.port = port
        self.timeout = timeout
        self._smtp_factory = smtp_factory

    async def execute(
        self, payload: Mapping[str, Any], credentials: Mapping[str, str]
    ) -> IntegrationResult:
        deliverable = extract_deliverable(payload)
        if not deliverable:
            raise IntegrationError("No email content provided")

        sender = credentials.get("gmail_email")
        password = credentials.get("gmail_app_password")
        if not sender or not password:
            raise IntegrationError(
                "Gmail credentials missing. Need gmail_email and gmail_app_password"
            )

        email_data = parse_email_content(deliverable)
        recipients = list(payload.get("recipients") or email_data.to)

        message = EmailMessage()
        message["From"] = sender
        message["To"] = ", ".join(recipients)
        message["Subject"] = email_data.subject
        message["Message-ID"] = make_msgid(domain="gmail.com")
        message.set_content(email_data.text_body)
        message.add_alternative(email_data.html_body, subtype="html")

        logger.info(f"Sending email via Gmail: {sender} -> {', '.join(recipients)}")

        try:
            await asyncio.to_thread(self._send, sender, password, message)
        except smtplib.SMTPAuthenticationError as exc:
            logger.error(f"Gmail sending failed: {exc}")
            raise IntegrationError(_LOGIN_HELP) from exc
        except (smtplib.SMTPException, OSError) as exc:
            logger.error(f"Gmail sending failed: {exc}")
            raise IntegrationError(f"Gmail connection failed: {exc}") from exc

        logger.info(f"Email sent successfully! Message ID: {message['Message-ID']}")

        return IntegrationResult.ok(
            self.integration_id,
            {
                "messageId": message["Message-ID"],
                "to": recipients,
                "subject": email_data.subject,
                "sent": True,
                "provider": "Gmail SMTP",
                "timestamp": utc_now().isoformat(),
            },
        )

    def _send(self, sender: str, password: str, message: EmailMessage) -> None:
        with self._smtp_factory(self.host, self.port, timeout=self.timeout) as smtp:
            smtp.login(sender, password)
            smtp.send_message(message)
