"""
Unit tests for the Book model and its document mapping.
"""

from decimal import Decimal

import pytest
from bson import ObjectId
from bson.decimal128 import Decimal128
from pydantic import ValidationError

from api.documents import BOOK_FIELDS, from_document, parse_object_id, to_document
from api.models import Book


class TestBook:
    """Test cases for the Book model."""

    def test_name_alias(self):
        book = Book.model_validate({"name": "Clean Code", "price": "43.15"})

        assert book.book_name == "Clean Code"
        assert book.price == Decimal("43.15")
        assert book.id is None
        assert book.model_dump(by_alias=True)["name"] == "Clean Code"

    def test_populate_by_attribute_name(self):
        assert Book(book_name="Refactoring").book_name == "Refactoring"

    def test_price_must_fit_decimal128(self):
        with pytest.raises(ValidationError) as exc_info:
            Book(name="Clean Code", price=Decimal("1.0000000000000000000000000000000001"))

        assert "34 significant digits" in str(exc_info.value)

    def test_price_at_decimal128_precision(self):
        price = Decimal("1.000000000000000000000000000000001")
        assert Book(name="Clean Code", price=price).price == price

    def test_price_must_be_finite(self):
        with pytest.raises(ValidationError):
            Book(name="Clean Code", price=Decimal("NaN"))

    def test_invalid_id(self):
        with pytest.raises(ValidationError) as exc_info:
            Book(id="not-an-id", name="Clean Code")

        assert "ObjectId" in str(exc_info.value)


class TestDocumentMapping:
    """Test cases for Book <-> document conversion."""

    def test_field_table(self):
        assert BOOK_FIELDS == {
            "book_name": "Name",
            "price": "Price",
            "category": "Category",
            "author": "Author",
        }

    def test_to_document(self):
        book_id = ObjectId()
        book = Book(id=str(book_id), name="Clean Code", price=Decimal("43.15"), author="Robert C. Martin")

        document = to_document(book)

        assert document == {
            "_id": book_id,
            "Name": "Clean Code",
            "Price": Decimal128("43.15"),
            "Category": None,
            "Author": "Robert C. Martin",
        }
        assert "_id" not in to_document(book, include_id=False)

    def test_to_document_without_id(self):
        assert "_id" not in to_document(Book(name="Clean Code"))

    def test_from_document(self):
        book_id = ObjectId()
        book = from_document({
            "_id": book_id,
            "Name": "Clean Code",
            "Price": Decimal128("43.15"),
            "Category": "Computers",
        })

        assert book.id == str(book_id)
        assert book.book_name == "Clean Code"
        assert book.price == Decimal("43.15")
        assert book.category == "Computers"
        assert book.author is None

    def test_price_is_exact(self):
        book = from_document(to_document(Book(id=str(ObjectId()), price=Decimal("0.10"))))
        assert book.price + Decimal("0.20") == Decimal("0.30")

    def test_parse_object_id(self):
        book_id = ObjectId()
        assert parse_object_id(str(book_id)) == book_id
        assert parse_object_id("123") is None
        assert parse_object_id(None) is None
