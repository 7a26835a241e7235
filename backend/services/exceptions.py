"""Service-level errors that map to HTTP responses.

Each class carries the status code the API layer answers with; the
message becomes the ``error`` field of the JSON body.
"""


class ServiceError(Exception):
    """Base class for errors raised by the service layer."""

    status_code = 500

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(message)


class InvalidRequestError(ServiceError):
    """The request is well-formed but its values are not acceptable."""

    status_code = 400


class NotFoundError(ServiceError):
    """No row matches the requested bank, account, profile or bill."""

    status_code = 404


class ServiceUnavailableError(ServiceError):
    """A required configuration row is missing."""

    status_code = 503
