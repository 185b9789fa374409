import dataclasses

import pytest

from config import settings
from library_core import Book, BookBuilder


def test_builder_chains_and_builds():
    builder = BookBuilder()
    assert builder.set_title("The Great Gatsby") is builder
    book = builder.set_author("F. Scott Fitzgerald").set_isbn("123456789").build()

    assert book == Book("The Great Gatsby", "F. Scott Fitzgerald", "123456789")

def test_build_returns_independent_snapshots():
    builder = BookBuilder().set_title("First").set_author("Someone").set_isbn("1")
    first = builder.build()
    second = builder.set_title("Second").build()

    assert first.title == "First"
    assert second.title == "Second"
    assert first is not second

def test_empty_builder_is_accepted_by_default():
    book = BookBuilder(strict=False).build()
    assert (book.title, book.author, book.isbn) == ("", "", "")

def test_book_is_immutable():
    book = Book("Ulysses", "James Joyce", "9780199535675")
    with pytest.raises(dataclasses.FrozenInstanceError):
        book.title = "Changed"

def test_strict_builder_accepts_valid_book():
    book = (
        BookBuilder(strict=True)
        .set_title("Ulysses")
        .set_author("James Joyce")
        .set_isbn("9780199535675")
        .build()
    )
    assert book.isbn == "9780199535675"

@pytest.mark.parametrize("title, author, isbn, field", [
    ("", "James Joyce", "9780199535675", "title"),
    ("Ulysses", "1234", "9780199535675", "author"),
    ("Ulysses", "James Joyce", "9780199535676", "ISBN"),
])
def test_strict_builder_rejects_invalid_fields(title, author, isbn, field):
    builder = BookBuilder(strict=True).set_title(title).set_author(author).set_isbn(isbn)
    with pytest.raises(ValueError, match=f"Invalid {field}"):
        builder.build()

def test_strict_default_follows_settings(monkeypatch):
    monkeypatch.setattr(settings, "strict_validation", True)
    with pytest.raises(ValueError):
        BookBuilder().build()

def test_dict_conversion():
    book = Book.from_dict({"title": "Sapiens", "author": "Yuval Noah Harari", "ISBN": "9780099590088"})
    assert book.isbn == "9780099590088"
    assert book.to_dict() == {"title": "Sapiens", "author": "Yuval Noah Harari", "isbn": "9780099590088"}

def test_str_format():
    assert str(Book("Dune", "Frank Herbert", "9780441013593")) == "Dune by Frank Herbert (ISBN: 9780441013593)"

def test_strict_builder_accepts_numeric_title():
    book = BookBuilder(strict=True).set_title("1984").set_author("George Orwell").set_isbn("9780451524935").build()
    assert book.title == "1984"
