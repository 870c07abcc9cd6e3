"""
Domain errors raised by the service layer.

All of them derive from ``ValueError`` so that callers which only care
about "the request was wrong" can catch a single type.  Endpoints map
each subclass to its HTTP status; none of them is retried.
"""


class RecommendationError(ValueError):
    """Base class for recommendation use-case failures."""


class ValidationError(RecommendationError):
    """A submission field is missing or malformed."""


class ConflictError(RecommendationError):
    """A recommendation with the same name already exists."""


class NotFoundError(RecommendationError):
    """No recommendation matches the request (or the pool is empty)."""
