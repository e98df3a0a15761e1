"""
Database settings for the Bookstore API.
Read once from the environment at startup and injected into the app.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BookstoreDatabaseSettings(BaseSettings):
    """
    Connection settings for the books collection.
    Uses pydantic BaseSettings for environment variable management;
    instances are frozen once constructed.
    """

    collection_name: str = Field(default="Books", description="Name of the books collection")
    connection_string: str = Field(default="mongodb://localhost:27017", description="MongoDB connection URL")
    database_name: str = Field(default="BookstoreDb", description="Name of the database")
    server_selection_timeout_ms: int = Field(default=5000, description="Driver server selection timeout")

    model_config = SettingsConfigDict(
        env_prefix="BOOKSTORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    @field_validator('collection_name', 'database_name')
    @classmethod
    def validate_names(cls, v):
        """Ensure collection and database names are usable."""
        if not v or not v.strip():
            raise ValueError('name must not be empty')
        if '$' in v:
            raise ValueError("name must not contain '$'")
        return v.strip()

    @field_validator('server_selection_timeout_ms')
    @classmethod
    def validate_timeout(cls, v):
        """Ensure timeout is reasonable."""
        if v < 100 or v > 300_000:
            raise ValueError('server_selection_timeout_ms must be between 100 and 300000')
        return v
