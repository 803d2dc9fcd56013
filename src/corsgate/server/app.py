"""
This module configures and initializes the FastAPI demo server for corsgate.

The server exists to exercise the CORS negotiation middleware end to end: it
wires a policy into the middleware stack, adds request logging and exposes a
few small routes whose responses show which CORS headers were negotiated.

Key responsibilities include:
- Building the application around a given policy, or a `StaticPolicy` loaded
  from the global configuration.
- Configuring middleware for CORS negotiation and request logging.
- Including the health and echo routers and a root endpoint with basic
  server information.
"""

from fastapi import FastAPI

from .. import __version__
from ..middleware import add_cors_middleware
from ..policy import CORSPolicy
from .middleware.logging import add_logging_middleware
from .routes import echo, health


def create_app(policy: CORSPolicy | None = None) -> FastAPI:
    """
    Creates the demo FastAPI application.

    Args:
        policy: The CORS policy to negotiate with. When omitted, a
            `StaticPolicy` is built from the global configuration.

    Returns:
        The configured `FastAPI` application.
    """
    app = FastAPI(
        title="corsgate demo server",
        description="Policy-driven CORS negotiation middleware",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    add_cors_middleware(app, policy)
    # Outermost, so short-circuited preflights are logged too
    add_logging_middleware(app)

    app.include_router(health.router, prefix="/api/v1")
    app.include_router(echo.router, prefix="/api/v1")

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint with basic server information."""
        return {
            "name": "corsgate demo server",
            "version": __version__,
            "docs_url": "/docs",
            "health_url": "/api/v1/health",
            "echo_url": "/api/v1/echo",
        }

    return app


app = create_app()
