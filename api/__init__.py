"""
FastAPI REST API for the Bookstore.

This package exposes a single Book resource stored in MongoDB:
- List, retrieve, create, replace and delete books under /api/book
- Health reporting for the database connection
"""
