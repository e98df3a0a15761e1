"""
Structured logging for the Bookstore API using structlog.

Every event carries the service name and version; events logged while a
request is handled also carry the request id, method and path bound by
``bind_request_context``.
"""

import logging
import sys
import uuid
from pathlib import Path
from typing import Optional
import structlog
from structlog.stdlib import LoggerFactory

SERVICE_NAME = "bookstore-api"


class ServiceContext:
    """Processor adding the service identity to every event."""

    def __init__(self, service: str, version: str):
        self.service = service
        self.version = version

    def __call__(self, logger, method_name, event_dict):
        event_dict.setdefault("service", self.service)
        event_dict.setdefault("service_version", self.version)
        return event_dict


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "json",
    log_file: Optional[str] = None,
    debug: bool = False,
    service_version: str = "1.0.0"
) -> None:
    """
    Set up structured logging for the API process.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Output format (json or console)
        log_file: Optional log file path, always written as JSON lines
        debug: Add call site information to every event
        service_version: Version reported with every event
    """
    level = getattr(logging, log_level.upper())

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        ServiceContext(SERVICE_NAME, service_version),
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]
    if debug:
        shared_processors.append(structlog.processors.CallsiteParameterAdder())

    structlog.configure(
        processors=[structlog.stdlib.filter_by_level]
        + shared_processors
        + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    if log_format == "json":
        console_renderer = structlog.processors.JSONRenderer()
    else:
        console_renderer = structlog.dev.ConsoleRenderer(colors=True)

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, console_renderer],
        foreign_pre_chain=shared_processors,
    ))
    handlers = [stream_handler]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, structlog.processors.JSONRenderer()],
            foreign_pre_chain=shared_processors,
        ))
        handlers.append(file_handler)

    # uvicorn and motor records go through the same formatter
    logging.basicConfig(level=level, handlers=handlers, force=True)

    logger = structlog.get_logger(__name__)
    logger.info(
        "Logging system initialized",
        level=log_level,
        format=log_format,
        file=str(log_file) if log_file else None,
        debug=debug
    )


def bind_request_context(method: str, path: str, request_id: Optional[str] = None) -> str:
    """
    Bind request details to every event logged in the current context.

    Returns:
        The request id, generated when not supplied
    """
    request_id = request_id or uuid.uuid4().hex
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id, method=method, path=path)
    return request_id


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)
