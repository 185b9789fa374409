import logging
import smtplib
from abc import ABC, abstractmethod
from email.message import EmailMessage
from typing import Optional

from config import settings

logger = logging.getLogger(__name__)


class EmailDeliveryError(Exception):
    """Raised when a transport could not hand a message over."""
    pass


class EmailService(ABC):
    """Fire-and-forget email capability injected into the library manager."""

    @abstractmethod
    def send_email(self, address: str, message: str) -> None:
        pass


class ConsoleEmailService(EmailService):
    """Prints the message instead of sending it. Default for demos and tests."""

    def send_email(self, address: str, message: str) -> None:
        print(f"Sending email to {address}: {message}")


class SmtpEmailService(EmailService):
    """Sends plain-text mail through an SMTP relay configured in settings."""

    def __init__(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        from_email: Optional[str] = None,
        from_name: Optional[str] = None,
        use_tls: Optional[bool] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.host = host or settings.smtp_host
        self.port = port or settings.smtp_port
        self.username = username if username is not None else settings.smtp_username
        self.password = password if password is not None else settings.smtp_password
        self.from_email = from_email or settings.smtp_from_email
        self.from_name = from_name or settings.smtp_from_name
        self.use_tls = settings.smtp_use_tls if use_tls is None else use_tls
        self.timeout = timeout or settings.smtp_timeout
        self.subject = f"{settings.app_name} notification"

    def _build_message(self, address: str, message: str) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = f"{self.from_name} <{self.from_email}>"
        msg["To"] = address
        msg["Subject"] = self.subject
        msg.set_content(message)
        return msg

    def send_email(self, address: str, message: str) -> None:
        msg = self._build_message(address, message)
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
                if self.use_tls:
                    smtp.starttls()
                if self.username and self.password:
                    smtp.login(self.username, self.password)
                smtp.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Email to {address} failed via {self.host}:{self.port}: {e}")
            raise EmailDeliveryError(f"Could not send email to {address}") from e
        logger.info(f"Email sent to {address} via {self.host}:{self.port}")


def create_email_service(backend: Optional[str] = None) -> EmailService:
    """Pick an email transport by name; falls back to ``settings.email_backend``."""
    name = (backend or settings.email_backend or "console").lower().strip()
    if name == "console":
        return ConsoleEmailService()
    if name == "smtp":
        return SmtpEmailService()
    raise ValueError(f"Unknown email backend: {name}. Use console or smtp.")
