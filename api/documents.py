"""
Mapping between Book models and MongoDB documents.
"""

from decimal import Decimal
from typing import Any, Dict, Optional

from bson import ObjectId
from bson.decimal128 import Decimal128

from api.models import Book

# Book attribute -> document field
BOOK_FIELDS: Dict[str, str] = {
    "book_name": "Name",
    "price": "Price",
    "category": "Category",
    "author": "Author",
}

ID_FIELD = "_id"


def parse_object_id(book_id: Optional[str]) -> Optional[ObjectId]:
    """
    Convert a transport id to an ObjectId.

    Returns None for anything that is not a valid ObjectId string, since
    such an id cannot match any stored document.
    """
    if book_id is None or not ObjectId.is_valid(book_id):
        return None
    return ObjectId(book_id)


def to_document(book: Book, include_id: bool = True) -> Dict[str, Any]:
    """
    Build a MongoDB document from a Book.

    Every mapped field is written, so omitted values are stored as null.
    The id is only written when present and ``include_id`` is set.
    """
    document: Dict[str, Any] = {}

    if include_id and book.id is not None:
        document[ID_FIELD] = ObjectId(book.id)

    for attribute, field in BOOK_FIELDS.items():
        value = getattr(book, attribute)
        if isinstance(value, Decimal):
            value = Decimal128(value)
        document[field] = value

    return document


def from_document(document: Dict[str, Any]) -> Book:
    """Build a Book from a MongoDB document."""
    values: Dict[str, Any] = {"id": str(document[ID_FIELD])}

    for attribute, field in BOOK_FIELDS.items():
        value = document.get(field)
        if isinstance(value, Decimal128):
            value = value.to_decimal()
        values[attribute] = value

    return Book(**values)
