"""
This module connects the negotiation engine to Starlette and FastAPI applications.

`CORSNegotiationMiddleware` runs `corsgate.engine.execute` for every HTTP request
and acts on the outcome:

- A recognized preflight is answered here with HTTP 200 and the negotiated
  headers; the application never sees it.
- Any other request is passed on. The negotiated headers are stored on
  ``request.state.cors_headers`` and added to the application's response.
- A failing policy callback raises `PolicyCallbackError`, which the host turns
  into its usual internal server error response.
"""

import logging
from collections.abc import Awaitable, Callable

from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from .config import get_config
from .engine import VARY, Fatal, ShortCircuit, execute
from .policy import CORSPolicy, implemented_callbacks
from .static_policy import StaticPolicy

logger = logging.getLogger(__name__)


def apply_cors_headers(response: Response, headers: dict[str, str]) -> None:
    """
    Adds negotiated CORS headers to a response produced by the application.

    Headers the application already set are kept, except `Vary`, whose values
    are merged.

    Args:
        response: The downstream response.
        headers: The negotiated CORS headers.
    """
    for name, value in headers.items():
        if name == VARY:
            response.headers.add_vary_header(value)
        elif name not in response.headers:
            response.headers[name] = value


class CORSNegotiationMiddleware(BaseHTTPMiddleware):
    """
    HTTP middleware that negotiates CORS against a pluggable policy.

    Args:
        app: The next ASGI application in the chain.
        policy: The policy consulted for every request.
    """

    def __init__(self, app: ASGIApp, policy: CORSPolicy):
        super().__init__(app)
        self.policy = policy

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        outcome = execute(request, self.policy)

        if isinstance(outcome, Fatal):
            raise outcome.error

        if isinstance(outcome, ShortCircuit):
            return Response(status_code=outcome.status_code, headers=outcome.headers)

        request.state.cors_headers = outcome.headers
        response = await call_next(request)
        apply_cors_headers(response, outcome.headers)
        return response


def add_cors_middleware(app: FastAPI, policy: CORSPolicy | None = None) -> None:
    """
    Adds the CORS negotiation middleware to the FastAPI application.

    Args:
        app: The `FastAPI` application instance.
        policy: The policy to negotiate with. When omitted, a `StaticPolicy`
            is built from the global configuration.
    """
    if policy is None:
        policy = StaticPolicy.from_config(get_config())
    logger.info("CORS policy %s provides %s", type(policy).__name__, ", ".join(implemented_callbacks(policy)) or "no optional callbacks")
    app.add_middleware(CORSNegotiationMiddleware, policy=policy)
