"""
This module defines the contract between the negotiation engine and a CORS policy.

A policy is the decision authority consulted for every authorization question:
which origins are allowed, which methods and headers a preflight may use, which
response headers are exposed, how long a preflight may be cached and whether
credentials are allowed.

Only `policy_init` is required. Every other callback is optional: when a policy
does not define it, the engine uses the documented default and does not call
anything. A policy that defines a callback returning the default value is not
the same thing, since the callback still runs and may update its state.

Each optional callback has the signature ``(request, state) -> (value, state)``.
The state returned by `policy_init` is owned by the policy; the engine passes it
from one callback to the next without looking at it.
"""

from abc import ABC, abstractmethod
from typing import Any, Final

WILDCARD: Final = "*"

# Optional callbacks and the value used when a policy does not define one.
POLICY_CALLBACKS: Final[dict[str, Any]] = {
    "allowed_origins": [],
    "allowed_methods": [],
    "allowed_headers": [],
    "exposed_headers": [],
    "max_age": None,
    "allow_credentials": False,
}


class CORSPolicy(ABC):
    """
    Base class for CORS policies.

    Subclasses implement `policy_init` and any subset of the optional callbacks
    listed in `POLICY_CALLBACKS`:

    - ``allowed_origins(request, state)``: `WILDCARD` or a list of origins.
    - ``allowed_methods(request, state)``: a list of method tokens.
    - ``allowed_headers(request, state)``: a list of header names.
    - ``exposed_headers(request, state)``: a list of header names.
    - ``max_age(request, state)``: a non-negative int, or None.
    - ``allow_credentials(request, state)``: a bool.

    The optional callbacks are intentionally not declared here so that their
    absence can be detected.
    """

    @abstractmethod
    def policy_init(self, request: Any) -> Any:
        """
        Creates the per-request policy state.

        Args:
            request: The request being negotiated.

        Returns:
            An opaque state value handed to every subsequent callback.
        """


def implemented_callbacks(policy: object) -> list[str]:
    """
    Lists the optional callbacks a policy provides.

    Args:
        policy: The policy object to inspect.

    Returns:
        The names from `POLICY_CALLBACKS` the policy exposes as callables, in
        negotiation order.
    """
    return [name for name in POLICY_CALLBACKS if callable(getattr(policy, name, None))]
