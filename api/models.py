"""
API models and schemas for the Bookstore API.
"""

from datetime import datetime
from decimal import Decimal, DecimalException
from typing import Any, Optional

from bson import ObjectId
from bson.decimal128 import Decimal128
from pydantic import BaseModel, ConfigDict, Field, field_validator


class Book(BaseModel):
    """
    A book as exchanged over HTTP.

    The title is carried as ``name`` on the wire and held as ``book_name``
    internally. ``id`` is optional on input; storage assigns one on create.
    """
    id: Optional[str] = Field(None, description="Unique book identifier (ObjectId string)")
    book_name: Optional[str] = Field(None, alias="name", description="Book title")
    price: Optional[Decimal] = Field(None, description="Book price")
    category: Optional[str] = Field(None, description="Book category")
    author: Optional[str] = Field(None, description="Book author")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "name": "Clean Code",
                "price": 43.15,
                "category": "Computers",
                "author": "Robert C. Martin"
            }
        }
    )

    @field_validator('id')
    @classmethod
    def validate_id(cls, v):
        """Ensure a supplied id is a valid ObjectId string."""
        if v is not None and not ObjectId.is_valid(v):
            raise ValueError('id must be a 24-character hex ObjectId string')
        return v

    @field_validator('price')
    @classmethod
    def validate_price(cls, v):
        """Ensure a price can be stored exactly as a 128-bit decimal."""
        if v is None:
            return v
        if not v.is_finite():
            raise ValueError('price must be a finite number')
        try:
            Decimal128(v)
        except DecimalException:
            raise ValueError('price must have at most 34 significant digits and fit a 128-bit decimal')
        return v


class ErrorResponse(BaseModel):
    """Error response model."""
    error: str = Field(..., description="Error message")
    detail: Optional[Any] = Field(None, description="Additional error details")
    status_code: int = Field(..., description="HTTP status code")


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(..., description="Service status")
    timestamp: datetime = Field(..., description="Current timestamp")
    version: str = Field(..., description="API version")
    database_status: str = Field(..., description="Database connection status")
