import smtplib
from unittest.mock import MagicMock

import pytest

from config import settings
from library_core.services import (
    ConsoleEmailService,
    EmailDeliveryError,
    SmtpEmailService,
    create_email_service,
)


def test_console_service_prints(capsys):
    ConsoleEmailService().send_email("user01@example.com", "You borrowed the book Dune")
    assert capsys.readouterr().out == "Sending email to user01@example.com: You borrowed the book Dune\n"

def test_factory_selects_backend(monkeypatch):
    assert isinstance(create_email_service("console"), ConsoleEmailService)
    assert isinstance(create_email_service("SMTP"), SmtpEmailService)

    monkeypatch.setattr(settings, "email_backend", "smtp")
    assert isinstance(create_email_service(), SmtpEmailService)

def test_factory_rejects_unknown_backend():
    with pytest.raises(ValueError, match="Unknown email backend: pigeon"):
        create_email_service("pigeon")

def test_smtp_service_sends_one_message(monkeypatch):
    smtp = MagicMock()
    smtp_cls = MagicMock()
    smtp_cls.return_value.__enter__.return_value = smtp
    monkeypatch.setattr("library_core.services.email_service.smtplib.SMTP", smtp_cls)

    service = SmtpEmailService(
        host="mail.example.com",
        port=2525,
        username="library",
        password="secret",
        from_email="desk@example.com",
        from_name="Front Desk",
        use_tls=True,
    )
    service.send_email("user01@example.com", "You borrowed the book Dune")

    smtp_cls.assert_called_once_with("mail.example.com", 2525, timeout=settings.smtp_timeout)
    smtp.starttls.assert_called_once()
    smtp.login.assert_called_once_with("library", "secret")
    sent = smtp.send_message.call_args[0][0]
    assert sent["To"] == "user01@example.com"
    assert sent["From"] == "Front Desk <desk@example.com>"
    assert sent.get_content().strip() == "You borrowed the book Dune"

def test_smtp_service_skips_login_without_credentials(monkeypatch):
    smtp = MagicMock()
    smtp_cls = MagicMock()
    smtp_cls.return_value.__enter__.return_value = smtp
    monkeypatch.setattr("library_core.services.email_service.smtplib.SMTP", smtp_cls)

    SmtpEmailService(username="", password="", use_tls=False).send_email("a@example.com", "hi")

    smtp.starttls.assert_not_called()
    smtp.login.assert_not_called()
    smtp.send_message.assert_called_once()

def test_smtp_failure_is_wrapped(monkeypatch):
    smtp_cls = MagicMock(side_effect=smtplib.SMTPConnectError(421, "unavailable"))
    monkeypatch.setattr("library_core.services.email_service.smtplib.SMTP", smtp_cls)

    with pytest.raises(EmailDeliveryError, match="a@example.com"):
        SmtpEmailService().send_email("a@example.com", "hi")
