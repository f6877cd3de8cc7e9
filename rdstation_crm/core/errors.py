"""Error taxonomy for RD Station CRM calls.

Every failure that leaves the request pipeline is one of these classes,
chained to the exception that caused it.
"""


class RDStationError(Exception):
    """Base class for classified client errors."""

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause


class InvalidInput(RDStationError):
    """Raised when the query encoder is given something that is not a flat record."""
    pass


class SerializationError(RDStationError):
    """Raised when a request body cannot be encoded as JSON."""
    pass


class TransportError(RDStationError):
    """Raised on connection failures, timeouts and cancellation."""
    pass


class BodyReadError(RDStationError):
    """Raised when the body of a rejected response cannot be read."""

    def __init__(
        self,
        message: str,
        status_code: int,
        cause: BaseException | None = None,
    ):
        super().__init__(message, cause)
        self.status_code = status_code


class ApiError(RDStationError):
    """Raised when the API answers with a status outside the acceptable set."""

    def __init__(self, message: str, status_code: int, body: str):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class DecodeError(RDStationError):
    """Raised when a response body cannot be decoded into the target type."""
    pass
