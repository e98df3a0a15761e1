#!/usr/bin/env python3
"""
Script to run the Bookstore API server.
"""

import uvicorn

from api.config import APIConfig
from utilities.config import BookstoreDatabaseSettings
from utilities.logger import get_logger, setup_logging


def main():
    """Run the API server."""
    config = APIConfig()
    db_settings = BookstoreDatabaseSettings()

    setup_logging(
        log_level=config.log_level,
        log_format=config.log_format,
        log_file=config.log_file,
        debug=config.debug,
        service_version=config.api_version
    )
    logger = get_logger(__name__)
    logger.info(
        "Starting Bookstore API server",
        host=config.host,
        port=config.port,
        debug=config.debug,
        database=db_settings.database_name,
        collection=db_settings.collection_name
    )

    uvicorn.run(
        "api.main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level=config.log_level.lower(),
        access_log=True
    )


if __name__ == "__main__":
    main()
