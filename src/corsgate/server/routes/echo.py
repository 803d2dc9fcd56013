"""
This module defines the echo endpoint used to observe CORS negotiation.

The endpoint sets two custom response headers, `X-Exposed` and `X-Hidden`, so a
browser (or a test) can check which of them the negotiated
`Access-Control-Expose-Headers` makes visible to scripts. The body reports the
CORS headers the middleware attached to the request.
"""

from typing import Any

from fastapi import APIRouter, Request, Response

from ..models.response import EchoResponse

router = APIRouter(tags=["echo"])


@router.api_route("/echo", methods=["GET", "POST", "PUT", "DELETE"], response_model=EchoResponse)
async def echo(request: Request, response: Response) -> Any:
    """
    Echoes the request method, origin and negotiated CORS headers.

    Args:
        request: The incoming request.
        response: The response whose headers are extended.

    Returns:
        An `EchoResponse` describing the request.
    """
    response.headers["X-Exposed"] = "exposed"
    response.headers["X-Hidden"] = "hidden"
    return EchoResponse(
        method=request.method,
        origin=request.headers.get("origin"),
        cors_headers=getattr(request.state, "cors_headers", {}),
    )
