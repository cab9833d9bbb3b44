import logging
import sys
import uuid

import structlog
from flask import g, request
from structlog.types import Processor

REQUEST_ID_HEADER = "X-Request-ID"

# urllib3 logs every Sheets call; google.auth logs each token refresh
NOISY_LOGGERS = ("urllib3", "google.auth")


def _renderer(is_debug: bool) -> Processor:
    if is_debug:
        return structlog.dev.ConsoleRenderer(colors=True)
    return structlog.processors.JSONRenderer()


def configure_logging(log_level: str = "INFO", is_debug: bool = False):
    """
    Set up structlog on top of the standard library logger.

    Debug runs get colored console lines; everything else emits one JSON
    object per event so the output can be shipped as is.
    """
    level = log_level.upper()
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.dict_tracebacks,
        _renderer(is_debug),
    ]

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    structlog.get_logger(__name__).info(
        "logging.configured", mode="console" if is_debug else "json", level=level
    )


def init_request_logging(app):
    """Bind a request id into the structlog context for every request."""

    @app.before_request
    def bind_request_id():
        structlog.contextvars.clear_contextvars()
        g.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        structlog.contextvars.bind_contextvars(
            request_id=g.request_id,
            method=request.method,
            path=request.path,
        )

    @app.after_request
    def echo_request_id(response):
        request_id = getattr(g, "request_id", None)
        if request_id:
            response.headers[REQUEST_ID_HEADER] = request_id
        return response
