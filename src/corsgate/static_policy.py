"""
A configuration-driven CORS policy.

`StaticPolicy` answers every negotiation question from fixed settings, which is
what most deployments need. Settings left as None are not exposed as callbacks
at all, so the engine applies its own defaults for them.
"""

from collections.abc import Callable, Iterable
from typing import Any

from .config import CORSGateConfig
from .errors import PolicyConfigurationError
from .policy import WILDCARD, CORSPolicy
from .tokens import is_token

Callback = Callable[[Any, Any], tuple[Any, Any]]


def _constant(value: Any) -> Callback:
    def callback(_request: Any, state: Any) -> tuple[Any, Any]:
        return value, state

    return callback


def _tokens(kind: str, values: str | Iterable[str]) -> list[str]:
    # A single name is a one-element list, as for origins.
    result = [values] if isinstance(values, str) else list(values)
    for value in result:
        if not is_token(value):
            raise PolicyConfigurationError(f"Invalid {kind} {value!r}: not an HTTP token")
    return result


class StaticPolicy(CORSPolicy):
    """
    A CORS policy backed by fixed settings.

    Args:
        allowed_origins: `WILDCARD` (or ``["*"]``) to allow any origin, or a
            list of exact origins.
        allowed_methods: Methods a preflight may request; a single string is
            one method.
        allowed_headers: Header names a preflight may request.
        exposed_headers: Response headers exposed to scripts.
        max_age: Seconds a preflight result may be cached.
        allow_credentials: Whether credentialed requests are allowed.

    Raises:
        PolicyConfigurationError: If a method or header name is not a valid
            token, or `max_age` is negative.
    """

    def __init__(
        self,
        allowed_origins: str | Iterable[str] | None = None,
        allowed_methods: str | Iterable[str] | None = None,
        allowed_headers: str | Iterable[str] | None = None,
        exposed_headers: str | Iterable[str] | None = None,
        max_age: int | None = None,
        allow_credentials: bool | None = None,
    ):
        if allowed_origins is not None:
            if isinstance(allowed_origins, str):
                allowed_origins = [allowed_origins]
            origins = list(allowed_origins)
            self.allowed_origins = _constant(WILDCARD if origins == [WILDCARD] else origins)
        if allowed_methods is not None:
            self.allowed_methods = _constant(_tokens("method", allowed_methods))
        if allowed_headers is not None:
            self.allowed_headers = _constant(_tokens("header name", allowed_headers))
        if exposed_headers is not None:
            self.exposed_headers = _constant(_tokens("header name", exposed_headers))
        if max_age is not None:
            if max_age < 0:
                raise PolicyConfigurationError(f"Invalid max_age {max_age}: must be non-negative")
            self.max_age = _constant(max_age)
        if allow_credentials is not None:
            self.allow_credentials = _constant(allow_credentials)

    @classmethod
    def from_config(cls, config: CORSGateConfig) -> "StaticPolicy":
        """Builds a policy from the policy section of a `CORSGateConfig`."""
        return cls(
            allowed_origins=config.allowed_origins,
            allowed_methods=config.allowed_methods,
            allowed_headers=config.allowed_headers,
            exposed_headers=config.exposed_headers,
            max_age=config.max_age,
            allow_credentials=config.allow_credentials,
        )

    def policy_init(self, request: Any) -> dict[str, Any]:
        return {"method": request.method}
