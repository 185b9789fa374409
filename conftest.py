from typing import List, Tuple

import pytest

from library_core import LibraryManager
from library_core.services import EmailService
from utils.ui_helpers import OUTPUT_MODE_ENV


class RecordingEmailService(EmailService):
    """Keeps every (address, message) pair instead of sending it."""

    def __init__(self) -> None:
        self.sent: List[Tuple[str, str]] = []

    def send_email(self, address: str, message: str) -> None:
        self.sent.append((address, message))


@pytest.fixture(autouse=True)
def fresh_shared_library(monkeypatch):
    # Every test starts without a shared manager and in plain output mode
    LibraryManager.reset_instance()
    monkeypatch.delenv(OUTPUT_MODE_ENV, raising=False)
    yield
    LibraryManager.reset_instance()


@pytest.fixture
def email_service():
    return RecordingEmailService()


@pytest.fixture
def lib(email_service):
    return LibraryManager(email_service)
