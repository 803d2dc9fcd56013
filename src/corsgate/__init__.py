"""corsgate - policy-driven CORS negotiation middleware."""

__version__ = "0.1.0"

from .engine import Continue, Fatal, NegotiationContext, Outcome, ShortCircuit, execute
from .errors import CORSGateError, PolicyCallbackError, PolicyConfigurationError
from .middleware import CORSNegotiationMiddleware, add_cors_middleware
from .policy import POLICY_CALLBACKS, WILDCARD, CORSPolicy, implemented_callbacks
from .static_policy import StaticPolicy
from .tokens import is_token, join_tokens, parse_single_token

__all__ = [
    "execute",
    "Outcome",
    "ShortCircuit",
    "Continue",
    "Fatal",
    "NegotiationContext",
    "CORSPolicy",
    "WILDCARD",
    "POLICY_CALLBACKS",
    "implemented_callbacks",
    "StaticPolicy",
    "CORSNegotiationMiddleware",
    "add_cors_middleware",
    "CORSGateError",
    "PolicyCallbackError",
    "PolicyConfigurationError",
    "join_tokens",
    "parse_single_token",
    "is_token",
]
