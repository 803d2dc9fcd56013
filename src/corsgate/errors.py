"""
Exception types raised by corsgate.

Negotiation outcomes such as a rejected origin or a malformed preflight are not
errors and never raise. Only a failing policy callback or an invalid policy
configuration surfaces as an exception.
"""


class CORSGateError(Exception):
    """Base class for all corsgate errors."""


class PolicyCallbackError(CORSGateError):
    """
    Raised when a CORS policy callback fails during negotiation.

    Attributes:
        policy: The name of the policy class that failed.
        callback: The name of the callback that raised.
        arity: The number of arguments the callback was invoked with.
        cause: The exception raised by the callback.
    """

    def __init__(self, policy: str, callback: str, arity: int, cause: BaseException):
        self.policy = policy
        self.callback = callback
        self.arity = arity
        self.cause = cause
        super().__init__(f"CORS policy {policy} terminating in {callback}/{arity}: {cause!r}")


class PolicyConfigurationError(CORSGateError):
    """Raised when a static policy is built from invalid settings."""
