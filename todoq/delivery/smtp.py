"""
todoq Summary Delivery

SMTP email delivery for completed-task summaries.
"""

from __future__ import annotations

import smtplib
from email.message import EmailMessage
from email.utils import formataddr, formatdate, make_msgid

from todoq.config import SMTP_SSL_PORT, SUMMARY_SUBJECT, smtp_settings
from todoq.observability.logging import get_logger
from todoq.observability.telemetry import counter, log_event
from todoq.utils.redaction import redact_email

logger = get_logger(__name__)


class SummaryDelivery:
    """Handles email delivery for task summaries"""

    def __init__(
        self,
        smtp_host: str | None = None,
        smtp_port: int | None = None,
        smtp_user: str | None = None,
        smtp_password: str | None = None,
        from_email: str | None = None,
        from_name: str | None = None,
    ):
        """
        Initialize SMTP delivery

        Environment variables (if params not provided):
        - SMTP_HOST / EMAIL_HOST: SMTP server hostname
        - SMTP_PORT / EMAIL_PORT: SMTP server port (default: 587, 465 means implicit TLS)
        - SMTP_USER / EMAIL_USER: SMTP username
        - SMTP_PASSWORD / EMAIL_PASS: SMTP password
        - SMTP_FROM_EMAIL: From email address (default: SMTP user)
        - SMTP_FROM_NAME: From name (default: "To-Do App")
        """
        settings = smtp_settings()
        self.smtp_host = smtp_host or settings["host"]
        self.smtp_port = int(smtp_port or settings["port"])
        self.smtp_user = smtp_user or settings["user"]
        self.smtp_password = smtp_password or settings["password"]
        self.from_email = from_email or settings["from_email"] or self.smtp_user
        self.from_name = from_name or settings["from_name"]

        if not all([self.smtp_host, self.smtp_user, self.smtp_password, self.from_email]):
            logger.warning("SMTP not fully configured. Set SMTP_* environment variables.")
            self.enabled = False
        else:
            self.enabled = True
            logger.info(
                "SMTP delivery configured: %s@%s:%s",
                redact_email(self.smtp_user),
                self.smtp_host,
                self.smtp_port,
            )

    @property
    def has_sender(self) -> bool:
        """True if a sender identity is configured."""
        return bool(self.from_email)

    def build_message(self, to_email: str, summary_text: str) -> EmailMessage:
        """Plain-text summary message addressed to to_email."""
        msg = EmailMessage()
        msg["Subject"] = SUMMARY_SUBJECT
        msg["From"] = formataddr((self.from_name, self.from_email))
        msg["To"] = to_email
        msg["Date"] = formatdate(localtime=True)
        msg["Message-ID"] = make_msgid(domain=self.from_email.split("@")[-1])
        msg.set_content(summary_text)
        return msg

    def send_summary(self, to_email: str, summary_text: str) -> bool:
        """
        Send a summary email

        Args:
            to_email: Recipient email address
            summary_text: Plain-text body

        Returns:
            True if sent successfully, False otherwise
        """
        if not self.enabled:
            counter("summary.delivery.disabled")
            logger.error("SMTP delivery not enabled. Configure SMTP_* environment variables.")
            return False

        try:
            msg = self.build_message(to_email, summary_text)

            logger.info("Connecting to %s:%s", self.smtp_host, self.smtp_port)

            if self.smtp_port == SMTP_SSL_PORT:
                with smtplib.SMTP_SSL(self.smtp_host, self.smtp_port) as server:
                    server.login(self.smtp_user, self.smtp_password)
                    server.send_message(msg)
            else:
                with smtplib.SMTP(self.smtp_host, self.smtp_port) as server:
                    server.starttls()
                    server.login(self.smtp_user, self.smtp_password)
                    server.send_message(msg)

            counter("summary.delivery.sent")
            log_event(
                "summary.delivery.sent",
                to=redact_email(to_email),
                message_id=msg["Message-ID"],
            )
            return True

        except (smtplib.SMTPException, OSError, ValueError) as e:
            counter("summary.delivery.failed")
            logger.exception("Failed to send summary: %s", e)
            return False
