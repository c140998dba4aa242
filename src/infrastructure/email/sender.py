"""Transactional email delivery."""

import asyncio
import logging
import smtplib
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Protocol

from core.config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmailMessage:
    """A rendered email with plain-text and HTML alternatives."""

    to: str
    subject: str
    text_body: str
    html_body: str
    from_name: str | None = None


class IEmailSender(Protocol):
    """Protocol for email delivery. Failures are reported, never raised."""

    async def send(self, message: EmailMessage) -> bool:
        """Deliver a message. Returns True on success, False on any failure."""
        ...


class SMTPEmailSender:
    """SMTP implementation of IEmailSender.

    ``smtplib`` is blocking, so delivery runs in a worker thread.
    """

    def __init__(self, settings: Settings) -> None:
        self._host = settings.smtp_host
        self._port = settings.smtp_port
        self._user = settings.smtp_user
        self._password = settings.smtp_password
        self._from = settings.smtp_from
        self._use_tls = settings.smtp_use_tls
        self._timeout = settings.smtp_timeout

    @property
    def is_configured(self) -> bool:
        """Check if an SMTP host is set."""
        return bool(self._host)

    async def send(self, message: EmailMessage) -> bool:
        """Deliver a message. Returns True on success, False on any failure."""
        if not self.is_configured:
            logger.warning("email_send_skipped: SMTP host not configured (to=%s)", message.to)
            return False
        return await asyncio.to_thread(self._send_sync, message)

    def _build(self, message: EmailMessage) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = message.subject
        msg["From"] = f'"{message.from_name}" <{self._from}>' if message.from_name else self._from
        msg["To"] = message.to
        msg.attach(MIMEText(message.text_body, "plain"))
        msg.attach(MIMEText(message.html_body, "html"))
        return msg

    def _send_sync(self, message: EmailMessage) -> bool:
        msg = self._build(message)
        try:
            with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as server:
                if self._use_tls:
                    server.starttls()
                if self._user:
                    server.login(self._user, self._password)
                server.sendmail(self._from, [message.to], msg.as_string())
            logger.info("email_sent: to=%s subject=%s", message.to, message.subject)
            return True
        except smtplib.SMTPAuthenticationError:
            logger.error("email_auth_failed: could not authenticate with SMTP server")
            return False
        except (smtplib.SMTPException, OSError) as exc:
            logger.error("email_send_failed: to=%s error=%s", message.to, exc)
            return False


async def deliver(sender: IEmailSender, message: EmailMessage) -> bool:
    """Send an email announcing an already committed change.

    Delivery problems never propagate: the caller only learns whether the
    message went out.
    """
    try:
        return await sender.send(message)
    except Exception:
        logger.exception("email_send_failed: to=%s", message.to)
        return False
