"""
Book endpoints.

| Endpoint            | Description                      | Method |
|---------------------|----------------------------------|--------|
| `/api/book`         | List all books                   | GET    |
| `/api/book/{id}`    | Retrieve a book                  | GET    |
| `/api/book`         | Create a book                    | POST   |
| `/api/book/{id}`    | Replace a book                   | PUT    |
| `/api/book/{id}`    | Delete a book                    | DELETE |
"""

from typing import List

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from api.config import APIConfig
from api.database import BookRepository
from api.documents import parse_object_id
from api.models import Book, ErrorResponse
from api.serialization import DecimalJSONResponse, DecimalJSONRoute

logger = structlog.get_logger(__name__)

router = APIRouter(
    prefix="/api/book",
    tags=["Books"],
    route_class=DecimalJSONRoute,
    default_response_class=DecimalJSONResponse
)

NOT_FOUND_RESPONSE = {404: {"model": ErrorResponse, "description": "Book not found"}}


def get_book_repository(request: Request) -> BookRepository:
    """Return the repository created at startup."""
    return request.app.state.book_repository


def get_api_config(request: Request) -> APIConfig:
    return request.app.state.api_config


def book_not_found(book_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Book with ID '{book_id}' not found"
    )


@router.get("", response_model=List[Book])
async def list_books(repository: BookRepository = Depends(get_book_repository)):
    """Get all books."""
    books = await repository.list_books()
    return DecimalJSONResponse(content=[book.model_dump(by_alias=True) for book in books])


@router.get("/{book_id}", response_model=Book, responses=NOT_FOUND_RESPONSE)
async def get_book(book_id: str, repository: BookRepository = Depends(get_book_repository)):
    """
    Get a single book by ID.

    - **book_id**: Book identifier (MongoDB ObjectId)
    """
    book = await repository.get_book(book_id)
    if book is None:
        raise book_not_found(book_id)
    return DecimalJSONResponse(content=book.model_dump(by_alias=True))


@router.post("", response_model=Book, status_code=status.HTTP_201_CREATED)
async def create_book(
    book: Book,
    request: Request,
    repository: BookRepository = Depends(get_book_repository)
):
    """
    Create a book.

    The id may be omitted, in which case it is assigned by the database.
    The Location header points at the new book.
    """
    created = await repository.create_book(book)
    return DecimalJSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=created.model_dump(by_alias=True),
        headers={"Location": str(request.url_for("get_book", book_id=created.id))}
    )


@router.put(
    "/{book_id}",
    response_model=Book,
    responses={**NOT_FOUND_RESPONSE, 400: {"model": ErrorResponse, "description": "Invalid book"}}
)
async def replace_book(
    book_id: str,
    book: Book,
    repository: BookRepository = Depends(get_book_repository),
    api_config: APIConfig = Depends(get_api_config)
):
    """
    Replace every field of a book and return the stored result.

    Fields omitted from the body are stored as null. The body id is
    ignored unless id matching is enforced, in which case a differing
    body id is rejected.
    """
    if api_config.enforce_id_match and book.id is not None and parse_object_id(book.id) != parse_object_id(book_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Body id '{book.id}' does not match path id '{book_id}'"
        )

    replaced = await repository.replace_book(book_id, book)
    if replaced is None:
        raise book_not_found(book_id)
    return DecimalJSONResponse(content=replaced.model_dump(by_alias=True))


@router.delete(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=NOT_FOUND_RESPONSE
)
async def delete_book(book_id: str, repository: BookRepository = Depends(get_book_repository)):
    """Delete a book by ID."""
    deleted = await repository.delete_book(book_id)
    if not deleted:
        raise book_not_found(book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
