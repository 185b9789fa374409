"""Library Core - Services Package

Outbound collaborators of the library manager:
- Email capability (console and SMTP transports)
"""

from library_core.services.email_service import (
    ConsoleEmailService,
    EmailDeliveryError,
    EmailService,
    SmtpEmailService,
    create_email_service,
)

__all__ = [
    "ConsoleEmailService",
    "EmailDeliveryError",
    "EmailService",
    "SmtpEmailService",
    "create_email_service",
]
