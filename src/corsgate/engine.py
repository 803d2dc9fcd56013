"""
This module implements the CORS negotiation engine.

`execute` runs once per request. It inspects the request headers, asks the
policy every authorization question in a fixed order, accumulates the CORS
response headers and decides what the host should do with the request:

- `ShortCircuit`: reply immediately (a recognized preflight, always HTTP 200).
- `Continue`: hand the request to the application and emit the accumulated
  headers on whatever response it produces.
- `Fatal`: a policy callback raised; the host should treat it as an internal
  error.

A rejected origin, a rejected method or a malformed preflight is signalled to
the browser only by the absence of CORS headers, never by a status code.

The engine is synchronous and keeps no state between requests: each call gets
its own `NegotiationContext`.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from .errors import PolicyCallbackError
from .policy import POLICY_CALLBACKS, WILDCARD, CORSPolicy
from .tokens import join_tokens, parse_single_token

logger = logging.getLogger(__name__)

# Request headers
ORIGIN = "origin"
REQUEST_METHOD = "access-control-request-method"
REQUEST_HEADERS = "access-control-request-headers"

# Response headers
ALLOW_ORIGIN = "access-control-allow-origin"
ALLOW_CREDENTIALS = "access-control-allow-credentials"
ALLOW_METHODS = "access-control-allow-methods"
ALLOW_HEADERS = "access-control-allow-headers"
EXPOSE_HEADERS = "access-control-expose-headers"
MAX_AGE = "access-control-max-age"
VARY = "vary"


class CORSExchange(Protocol):
    """The view of a request the engine needs. Starlette's `Request` satisfies it."""

    @property
    def method(self) -> str: ...

    @property
    def headers(self) -> Mapping[str, str]: ...


@dataclass
class NegotiationContext:
    """
    Mutable per-request accumulator threaded through the negotiation steps.

    Attributes:
        method: The HTTP method of the request.
        origin: The `Origin` header value; empty when the request is not CORS.
        request_method: The method requested by a preflight.
        preflight: True once a valid preflight has been recognized.
        allowed_methods: Methods authorized by the policy.
        allowed_headers: Header names authorized by the policy, seeded with
            ``origin``.
        request_headers_present: Whether the preflight carried
            `Access-Control-Request-Headers`.
        policy_state: Opaque state owned by the policy.
        response_headers: CORS headers accumulated so far.
    """

    method: str
    origin: str = ""
    request_method: str = ""
    preflight: bool = False
    allowed_methods: list[str] = field(default_factory=list)
    allowed_headers: list[str] = field(default_factory=lambda: ["origin"])
    request_headers_present: bool = False
    policy_state: Any = None
    response_headers: dict[str, str] = field(default_factory=dict)

    def set_header(self, name: str, value: str) -> None:
        """Adds or overwrites a response header."""
        self.response_headers[name] = value


@dataclass(frozen=True)
class ShortCircuit:
    """Reply immediately with `status_code` and `headers`; the app is not called."""

    status_code: int = 200
    headers: dict[str, str] = field(default_factory=dict)
    reason: str = ""


@dataclass(frozen=True)
class Continue:
    """Pass `request` on to the application and emit `headers` on its response."""

    request: Any
    headers: dict[str, str] = field(default_factory=dict)
    reason: str = ""


@dataclass(frozen=True)
class Fatal:
    """A policy callback failed; `error` describes which one and why."""

    error: PolicyCallbackError


Outcome = ShortCircuit | Continue | Fatal


def execute(request: CORSExchange, policy: CORSPolicy) -> Outcome:
    """
    Negotiates CORS for a single request.

    Args:
        request: The inbound request.
        policy: The policy consulted for every authorization decision.

    Returns:
        The disposition of the request, with the CORS response headers to emit.
    """
    ctx = NegotiationContext(method=request.method)
    try:
        return _negotiate(request, policy, ctx)
    except PolicyCallbackError as exc:
        return Fatal(error=exc)


def _negotiate(request: CORSExchange, policy: CORSPolicy, ctx: NegotiationContext) -> Outcome:
    origin = request.headers.get(ORIGIN)
    if not origin:
        return _terminate(request, ctx, "not-cors")
    ctx.origin = origin

    ctx.policy_state = _init_policy(request, policy, ctx)

    origins = _call(request, policy, ctx, "allowed_origins")
    if not _origin_allowed(origin, origins):
        return _terminate(request, ctx, "origin-rejected")

    if ctx.method == "OPTIONS":
        raw_method = request.headers.get(REQUEST_METHOD)
        if raw_method is not None:
            token = parse_single_token(raw_method)
            if token is None:
                return _terminate(request, ctx, "malformed-request-method")
            ctx.preflight = True
            ctx.request_method = token
            return _preflight(request, policy, ctx)

    return _actual_request(request, policy, ctx)


def _origin_allowed(origin: str, origins: Any) -> bool:
    if isinstance(origins, str):
        return origins in (WILDCARD, origin)
    return origin in (origins or [])


def _preflight(request: CORSExchange, policy: CORSPolicy, ctx: NegotiationContext) -> Outcome:
    ctx.request_headers_present = request.headers.get(REQUEST_HEADERS) is not None

    max_age = _call(request, policy, ctx, "max_age")
    if isinstance(max_age, int) and not isinstance(max_age, bool) and max_age >= 0:
        ctx.set_header(MAX_AGE, str(max_age))

    methods = _call_tokens(request, policy, ctx, "allowed_methods")
    if ctx.request_method not in methods:
        return _terminate(request, ctx, "method-rejected")
    ctx.allowed_methods = methods

    # Requested header names are not validated against the allowed list.
    ctx.allowed_headers = ctx.allowed_headers + _call_tokens(request, policy, ctx, "allowed_headers")

    ctx.set_header(ALLOW_METHODS, join_tokens(ctx.allowed_methods))
    if ctx.request_headers_present:
        ctx.set_header(ALLOW_HEADERS, join_tokens(ctx.allowed_headers))
    else:
        ctx.set_header(ALLOW_HEADERS, "")

    return _allow_credentials(request, policy, ctx)


def _actual_request(request: CORSExchange, policy: CORSPolicy, ctx: NegotiationContext) -> Outcome:
    exposed = _call_tokens(request, policy, ctx, "exposed_headers")
    if exposed:
        ctx.set_header(EXPOSE_HEADERS, join_tokens(exposed))
    return _allow_credentials(request, policy, ctx)


def _allow_credentials(request: CORSExchange, policy: CORSPolicy, ctx: NegotiationContext) -> Outcome:
    # The request origin is always echoed, never "*", so the response stays
    # valid whether or not credentials are allowed.
    ctx.set_header(ALLOW_ORIGIN, ctx.origin)
    if _call(request, policy, ctx, "allow_credentials"):
        ctx.set_header(ALLOW_CREDENTIALS, "true")
    ctx.set_header(VARY, "origin")
    return _terminate(request, ctx, "authorized")


def _terminate(request: CORSExchange, ctx: NegotiationContext, reason: str) -> Outcome:
    logger.debug("CORS %s request from %r: %s (preflight=%s)", ctx.method, ctx.origin, reason, ctx.preflight)
    headers = dict(ctx.response_headers)
    if ctx.preflight:
        return ShortCircuit(status_code=200, headers=headers, reason=reason)
    return Continue(request=request, headers=headers, reason=reason)


def _init_policy(request: CORSExchange, policy: CORSPolicy, ctx: NegotiationContext) -> Any:
    try:
        return policy.policy_init(request)
    except Exception as exc:
        raise _policy_failure(request, policy, ctx, "policy_init", 1, exc) from exc


def _call(request: CORSExchange, policy: CORSPolicy, ctx: NegotiationContext, callback: str) -> Any:
    """Invokes an optional callback, or returns its default if the policy lacks it."""
    fn = getattr(policy, callback, None)
    if not callable(fn):
        return POLICY_CALLBACKS[callback]
    try:
        value, ctx.policy_state = fn(request, ctx.policy_state)
    except Exception as exc:
        raise _policy_failure(request, policy, ctx, callback, 2, exc) from exc
    return value


def _call_tokens(request: CORSExchange, policy: CORSPolicy, ctx: NegotiationContext, callback: str) -> list[str]:
    """Invokes a callback that must return a list of tokens; a bare string is a failure."""
    value = _call(request, policy, ctx, callback)
    try:
        if isinstance(value, str):
            raise TypeError(f"{callback} must return a list of tokens, got the string {value!r}")
        return list(value or [])
    except TypeError as exc:
        raise _policy_failure(request, policy, ctx, callback, 2, exc) from exc


def _policy_failure(
    request: CORSExchange, policy: CORSPolicy, ctx: NegotiationContext, callback: str, arity: int, exc: Exception
) -> PolicyCallbackError:
    policy_name = type(policy).__name__
    logger.error(
        "CORS policy %s terminating in %s/%d for the reason %r; request was %s %s with headers %s",
        policy_name,
        callback,
        arity,
        exc,
        ctx.method,
        getattr(request, "url", ""),
        dict(request.headers),
        exc_info=exc,
    )
    return PolicyCallbackError(policy_name, callback, arity, exc)
