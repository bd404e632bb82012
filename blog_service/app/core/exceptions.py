"""
Typed failures raised by the service layer.

All errors derive from ``ValueError`` so callers that only care about
"the request was rejected" can keep catching that.  Each class carries
the HTTP status the API layer answers with.
"""


class BlogServiceError(ValueError):
    """Base class for rejected operations."""

    status_code = 400


class AlreadyExists(BlogServiceError):
    """The entity the caller tried to create is already there."""

    status_code = 409


class NotFound(BlogServiceError):
    """The referenced profile or post does not exist."""

    status_code = 404


class InvalidArgument(BlogServiceError):
    """An argument failed validation (rating range, blank text, ...)."""

    status_code = 400
