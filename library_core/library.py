from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from library_core.book import Book
from library_core.loan import Loan
from library_core.services.email_service import EmailDeliveryError, EmailService, create_email_service
from library_core.user import Observer, User

logger = logging.getLogger(__name__)


class BookNotFoundError(LookupError):
    pass


class LoanStatus(Enum):
    LOANED = "LOANED"
    BOOK_NOT_FOUND = "BOOK_NOT_FOUND"


@dataclass(frozen=True)
class LoanResult:
    """Outcome of :meth:`LibraryManager.loan_book`."""

    status: LoanStatus
    isbn: str
    loan: Optional[Loan] = None
    book: Optional[Book] = None
    email_sent: bool = False

    @property
    def ok(self) -> bool:
        return self.status is LoanStatus.LOANED

    def unwrap(self) -> Loan:
        """Return the loan, or raise ``BookNotFoundError`` if nothing was loaned."""
        if self.loan is None:
            raise BookNotFoundError(f"Book with ISBN {self.isbn} not found.")
        return self.loan


class LibraryManager:
    """Owns the catalog, the loan history and the subscriber list.

    One shared instance is available through :meth:`get_instance`; the email
    capability it is built with is fixed by the first call. Code that wants
    explicit wiring can construct a manager directly and pass it around.
    """

    _instance: Optional["LibraryManager"] = None
    _lock = threading.Lock()

    def __init__(self, email_service: EmailService) -> None:
        self.email_service = email_service
        self.books: List[Book] = []
        self.loans: List[Loan] = []
        self.observers: List[Observer] = []
        self.members: Dict[str, User] = {}

    # ------------------------- Shared instance ------------------------- #
    @classmethod
    def get_instance(cls, email_service: Optional[EmailService] = None) -> "LibraryManager":
        """Return the shared manager, creating it with ``email_service`` on first use."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    service = email_service or create_email_service()
                    cls._instance = cls(service)
                    logger.info(f"Library manager created with {type(service).__name__}")
                    return cls._instance
        if email_service is not None and email_service is not cls._instance.email_service:
            logger.warning(
                f"Library manager already exists; ignoring {type(email_service).__name__}, "
                f"keeping {type(cls._instance.email_service).__name__}"
            )
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        with cls._lock:
            cls._instance = None

    # ------------------------- Subscribers ------------------------- #
    def add_observer(self, observer: Observer) -> None:
        self.observers.append(observer)
        logger.debug(f"Observer registered: {observer!r}")

    def remove_observer(self, observer: Observer) -> bool:
        try:
            self.observers.remove(observer)
        except ValueError:
            return False
        logger.debug(f"Observer removed: {observer!r}")
        return True

    def register_user(self, user: User) -> None:
        """Add ``user`` to the member directory and subscribe it to catalog news."""
        self.members[user.user_id] = user
        self.add_observer(user)
        logger.info(f"User {user.user_id} registered")

    def _notify_all(self, message: str) -> None:
        for observer in list(self.observers):
            try:
                observer.notify(message)
            except Exception as e:
                logger.error(f"Observer {observer!r} failed on {message!r}: {e}")
                raise

    # ------------------------- Core operations ------------------------- #
    def add_book(self, book: Book) -> None:
        self.books.append(book)
        logger.info(f"Book added: {book.title} (ISBN: {book.isbn})")
        self._notify_all(f"New book added: {book.title}")

    def loan_book(self, isbn: str, user_ref: str) -> LoanResult:
        """Lend the first book whose ISBN equals ``isbn`` and email the borrower.

        ``user_ref`` is looked up among registered members by id, then by
        email. Unknown ISBNs change nothing and return a ``BOOK_NOT_FOUND``
        result. A failed confirmation email leaves the loan recorded and is
        reported through ``email_sent``.
        """
        book = self.find_book(isbn)
        if book is None:
            logger.warning(f"Loan skipped: no book with ISBN {isbn}")
            return LoanResult(status=LoanStatus.BOOK_NOT_FOUND, isbn=isbn)

        user_id, address = self._resolve_borrower(user_ref)
        loan = Loan(isbn=isbn, user_id=user_id, date=datetime.now())
        self.loans.append(loan)
        logger.info(f"Book {isbn} loaned to {user_id}")
        try:
            self.email_service.send_email(address, f"You borrowed the book {book.title}")
        except EmailDeliveryError as e:
            logger.error(f"Loan of {isbn} recorded but confirmation to {address} was not delivered: {e}")
            return LoanResult(status=LoanStatus.LOANED, isbn=isbn, loan=loan, book=book, email_sent=False)
        return LoanResult(status=LoanStatus.LOANED, isbn=isbn, loan=loan, book=book, email_sent=True)

    def _resolve_borrower(self, user_ref: str) -> Tuple[str, str]:
        """Map a user reference to ``(user_id, email address)``."""
        member = self.members.get(user_ref)
        if member is None:
            member = next((u for u in self.members.values() if u.email == user_ref), None)
        if member is not None:
            return member.user_id, member.email
        logger.warning(f"Borrower {user_ref} is not a registered member; using it as the address")
        return user_ref, user_ref

    # ------------------------- Queries ------------------------- #
    def find_book(self, isbn: str) -> Optional[Book]:
        return next((b for b in self.books if b.isbn == isbn), None)

    def list_books(self) -> List[Book]:
        return list(self.books)

    def list_loans(self) -> List[Loan]:
        return list(self.loans)

    def loans_for(self, user_id: str) -> List[Loan]:
        return [loan for loan in self.loans if loan.user_id == user_id]

    def list_observers(self) -> List[Observer]:
        return list(self.observers)

    def get_statistics(self) -> Dict[str, Any]:
        return {
            "total_books": len(self.books),
            "unique_authors": len({b.author for b in self.books}),
            "total_loans": len(self.loans),
            "subscribers": len(self.observers),
        }
