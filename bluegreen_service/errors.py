"""
Service exceptions.

Each error knows its HTTP status and public message; the API layer turns
them into JSON bodies carrying the pool identity.
"""


class ServiceError(Exception):
    """Base class for errors surfaced to callers."""

    status_code: int = 500
    message: str = "Internal Server Error"
    include_timestamp: bool = False

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidChaosModeError(ServiceError):
    """Requested chaos mode is not one of the supported values."""

    status_code = 400
    message = 'Invalid chaos mode. Use "error" or "timeout"'

    def __init__(self, value: object):
        self.value = value
        super().__init__()


class MalformedBodyError(ServiceError):
    """Request declared a JSON body that does not parse."""

    status_code = 400
    message = "Malformed JSON body"


class PayloadTooLargeError(ServiceError):
    """Request body exceeds the accepted size."""

    status_code = 413
    message = "Request body too large"


class SimulatedChaosError(ServiceError):
    """Intentional failure while chaos ERROR mode is active."""

    status_code = 500
    message = "Chaos mode enabled - simulated error"
    include_timestamp = True


class SimulatedTimeoutError(ServiceError):
    """A bounded chaos hang ran out before the caller gave up."""

    status_code = 504
    message = "Chaos mode enabled - simulated timeout"
    include_timestamp = True


class CallerDisconnectedError(Exception):
    """The caller closed the connection while a chaos hang was pending."""
