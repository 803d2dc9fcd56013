"""
This module provides a request logging middleware for the corsgate demo server.

Each request is logged with its method, path, `Origin` header and response
status, and the processing time is added as an `X-Process-Time` header.
"""

import logging
import time
from collections.abc import Callable
from typing import Any, cast

from fastapi import FastAPI, Request, Response

logger = logging.getLogger(__name__)


def add_logging_middleware(app: FastAPI) -> None:
    """
    Adds a request logging middleware to the FastAPI application.

    Args:
        app: The `FastAPI` application instance.
    """

    @app.middleware("http")
    async def log_requests(request: Request, call_next: Callable[[Request], Any]) -> Response:
        start_time = time.time()

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(
            "%s %s origin=%s -> %d (%.3fs)",
            request.method,
            request.url.path,
            request.headers.get("origin", "-"),
            response.status_code,
            process_time,
        )

        response.headers["X-Process-Time"] = str(process_time)

        return cast(Response, response)
