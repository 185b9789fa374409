from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from config import settings
from utils.validators import ISBNValidator, TextValidator


@dataclass(frozen=True)
class Book:
    """A single catalog entry. Frozen: a built book never changes."""

    title: str
    author: str
    isbn: str

    def __str__(self) -> str:
        return f"{self.title} by {self.author} (ISBN: {self.isbn})"

    def to_dict(self) -> dict:
        return {"title": self.title, "author": self.author, "isbn": self.isbn}

    @staticmethod
    def from_dict(data: dict) -> "Book":
        return Book(
            title=data.get("title", ""),
            author=data.get("author", ""),
            isbn=data.get("isbn", data.get("ISBN", "")),
        )


class BookBuilder:
    """Fluent builder for :class:`Book`.

    Setters return the builder so construction reads as a chain::

        book = BookBuilder().set_title("Dune").set_author("Frank Herbert").set_isbn("9780441013593").build()

    By default nothing is validated and empty fields are allowed. With
    ``strict=True`` (or ``STRICT_VALIDATION=true``) ``build()`` checks the
    title, author and ISBN checksum and raises ``ValueError`` on the first
    violation.
    """

    def __init__(self, strict: Optional[bool] = None) -> None:
        self._title = ""
        self._author = ""
        self._isbn = ""
        self.strict = settings.strict_validation if strict is None else strict

    def set_title(self, title: str) -> "BookBuilder":
        self._title = title
        return self

    def set_author(self, author: str) -> "BookBuilder":
        self._author = author
        return self

    def set_isbn(self, isbn: str) -> "BookBuilder":
        self._isbn = isbn
        return self

    def build(self) -> Book:
        if self.strict:
            self._check_contract()
        return Book(title=self._title, author=self._author, isbn=self._isbn)

    def _check_contract(self) -> None:
        if not TextValidator.validate_title(self._title):
            raise ValueError(f"Invalid title: {self._title!r}")
        if not TextValidator.validate_author(self._author):
            raise ValueError(f"Invalid author: {self._author!r}")
        if not ISBNValidator.is_valid_isbn(self._isbn):
            raise ValueError(f"Invalid ISBN: {self._isbn!r}")
