"""
Database service layer for the Bookstore API.
"""

from typing import Dict, List, Optional

import structlog
from motor.motor_asyncio import AsyncIOMotorCollection

from api.documents import from_document, parse_object_id, to_document
from api.models import Book

logger = structlog.get_logger(__name__)


class BookRepository:
    """
    Book operations against a single MongoDB collection.

    Each method is one round trip to the collection. Absence is reported
    as None or False; driver errors are logged and re-raised.
    """

    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    async def list_books(self) -> List[Book]:
        """Get every book in the collection, in storage order."""
        try:
            cursor = self.collection.find({})
            documents = await cursor.to_list(length=None)

            books = [from_document(document) for document in documents]
            logger.debug("Retrieved books", count=len(books))
            return books

        except Exception as e:
            logger.error("Failed to list books", error=str(e))
            raise

    async def get_book(self, book_id: str) -> Optional[Book]:
        """
        Get a single book by ID.

        Args:
            book_id: Book identifier

        Returns:
            Book if found, None otherwise
        """
        object_id = parse_object_id(book_id)
        if object_id is None:
            logger.debug("Book id is not an ObjectId", book_id=book_id)
            return None

        try:
            document = await self.collection.find_one({"_id": object_id})
            if document is None:
                return None
            return from_document(document)

        except Exception as e:
            logger.error("Failed to get book by ID", book_id=book_id, error=str(e))
            raise

    async def create_book(self, book: Book) -> Book:
        """
        Insert a new book.

        Args:
            book: Book to insert; the id is assigned by storage when absent

        Returns:
            The stored book, including its id
        """
        document = to_document(book)
        try:
            result = await self.collection.insert_one(document)
        except Exception as e:
            logger.error("Failed to insert book", book_name=book.book_name, error=str(e))
            raise

        created = book.model_copy(update={"id": str(result.inserted_id)})
        logger.info("Book created", book_id=created.id, book_name=created.book_name)
        return created

    async def replace_book(self, book_id: str, book: Book) -> Optional[Book]:
        """
        Replace a whole book and read it back.

        The stored id never changes; any id carried by ``book`` is not
        written. Nothing is inserted when no book exists at ``book_id``.

        Args:
            book_id: Identifier of the book to replace
            book: New field values

        Returns:
            The book as stored after the replace, or None if not found
        """
        object_id = parse_object_id(book_id)
        if object_id is None:
            logger.debug("Book id is not an ObjectId", book_id=book_id)
            return None

        try:
            result = await self.collection.replace_one(
                {"_id": object_id},
                to_document(book, include_id=False),
                upsert=False
            )
            if result.matched_count == 0:
                logger.warning("Book not found for replace", book_id=book_id)

            document = await self.collection.find_one({"_id": object_id})

        except Exception as e:
            logger.error("Failed to replace book", book_id=book_id, error=str(e))
            raise

        if document is None:
            return None

        logger.info("Book replaced", book_id=book_id)
        return from_document(document)

    async def delete_book(self, book_id: str) -> bool:
        """
        Delete a book by ID.

        Args:
            book_id: Identifier of the book to delete

        Returns:
            bool: True if deleted, False if not found
        """
        object_id = parse_object_id(book_id)
        if object_id is None:
            logger.debug("Book id is not an ObjectId", book_id=book_id)
            return False

        try:
            result = await self.collection.delete_one({"_id": object_id})
        except Exception as e:
            logger.error("Failed to delete book", book_id=book_id, error=str(e))
            raise

        if result.deleted_count == 0:
            logger.warning("Book not found for deletion", book_id=book_id)
            return False

        logger.info("Book deleted", book_id=book_id)
        return True

    async def ping(self) -> Dict:
        """
        Perform database health check.

        Returns:
            Dictionary with health status
        """
        try:
            await self.collection.database.command("ping")
            return {"status": "healthy", "collection": self.collection.name}
        except Exception as e:
            logger.error("Database health check failed", error=str(e))
            return {"status": "unhealthy", "error": str(e)}
