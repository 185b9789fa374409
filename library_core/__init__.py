"""Library Core - catalog, subscriber notification and loans

- Data models (book.py, loan.py)
- Members and the observer contract (user.py)
- Library manager (library.py)
- Email transports (services/)
"""

from library_core.book import Book, BookBuilder
from library_core.library import BookNotFoundError, LibraryManager, LoanResult, LoanStatus
from library_core.loan import Loan
from library_core.user import Observer, User

__all__ = [
    "Book",
    "BookBuilder",
    "BookNotFoundError",
    "LibraryManager",
    "Loan",
    "LoanResult",
    "LoanStatus",
    "Observer",
    "User",
]
