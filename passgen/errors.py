from __future__ import annotations


class PassgenError(Exception):
    """Base class for every error raised by passgen."""


# Bad policy input, or a policy that cannot produce a credential
class PolicyError(PassgenError, ValueError):
    pass


# No cryptographically strong randomness available
class RandomSourceError(PassgenError, RuntimeError):
    pass


# Breach service unreachable or answered with a non-2xx status
class BreachNetworkError(PassgenError):
    pass


# Breach service answered, but the body is not a range listing
class BreachResponseError(BreachNetworkError):
    pass
