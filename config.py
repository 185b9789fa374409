import os
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


@dataclass
class Settings:
    # Application
    app_name: str = os.getenv("APP_NAME", "Library Core")
    app_version: str = os.getenv("APP_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "WARNING").upper()

    # Email delivery: "console" or "smtp"
    email_backend: str = os.getenv("EMAIL_BACKEND", "console").lower()

    # Builder contract checks
    strict_validation: bool = _env_flag("STRICT_VALIDATION", "False")

    # SMTP settings (only used by the smtp backend)
    smtp_host: str = os.getenv("SMTP_HOST", "smtp.gmail.com")
    smtp_port: int = int(os.getenv("SMTP_PORT", "587"))
    smtp_username: Optional[str] = os.getenv("SMTP_USERNAME")
    smtp_password: Optional[str] = os.getenv("SMTP_PASSWORD")
    smtp_from_email: str = os.getenv("SMTP_FROM_EMAIL", "noreply@library.com")
    smtp_from_name: str = os.getenv("SMTP_FROM_NAME", "Library System")
    smtp_use_tls: bool = _env_flag("SMTP_USE_TLS", "True")
    smtp_timeout: float = float(os.getenv("SMTP_TIMEOUT", "10"))


settings = Settings()
