from typing import List, Optional, Sequence, Tuple

from galog.constants import (
    EXIT_CODE_CONFIGURATION_ERROR,
    EXIT_CODE_DELIVERY_ERROR,
)


class GalogError(Exception):
    """
    Base error for galog.

    Args:
        message (str): The error message.
    """
    def __init__(self, message: str = "An error occurred while sending events to Google Analytics."):
        self.message = message
        super().__init__(self.message)

    def get_exit_code(self) -> int:
        """
        Get the exit code associated with this error.

        Returns:
            int: The exit code.
        """
        return EXIT_CODE_DELIVERY_ERROR


class ConfigurationError(GalogError):
    """
    Error raised when the sink cannot be built from the provided options.

    Args:
        field (Optional[str]): The offending option.
        message (str): The error message template.
    """
    def __init__(self, field: Optional[str] = None,
                 message: str = "Invalid sink configuration: {field} is required."):
        self.field = field
        self.message = message.format(field=field or "a value")
        super().__init__(self.message)

    def get_exit_code(self) -> int:
        return EXIT_CODE_CONFIGURATION_ERROR


class TransportError(GalogError):
    """
    Error raised when a payload could not be delivered to the collection endpoint.

    Args:
        message (str): The error message.
        status_code (Optional[int]): The HTTP status code, when a response was received.
    """
    def __init__(self, message: str = "Unable to deliver events to the collection endpoint.",
                 status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class NetworkConnectionError(TransportError):
    """
    Error raised when there is a network connection issue.
    """

    def __init__(self, message: str = "Network connection error: Unable to reach the collection endpoint.\n"
                                      "Please check your internet connection and try again."):
        super().__init__(message)


class RequestTimeoutError(TransportError):
    """
    Error raised when a request times out.
    """

    def __init__(self, message: str = "Request timed out: The collection endpoint did not respond in time."):
        super().__init__(message)


class TooManyRequestsError(TransportError):
    """
    Error raised when the collection endpoint rate limits the client.

    Args:
        reason (Optional[str]): The reason for the error.
    """
    def __init__(self, reason: Optional[str] = None,
                 message: str = "Too many requests: the collection endpoint is rate limiting this client."):
        if reason:
            message += f"\nDetails: {reason}"
        super().__init__(message, status_code=429)


class InvalidCredentialError(TransportError):
    """
    Error raised when the measurement id or the API secret are rejected.

    Args:
        status_code (int): The HTTP status code.
        reason (Optional[str]): The reason for the error.
    """
    def __init__(self, status_code: int = 403, reason: Optional[str] = None,
                 message: str = "The measurement id or API secret was rejected by the collection endpoint."):
        if reason:
            message += f"\nDetails: {reason}"
        super().__init__(message, status_code=status_code)


class ClientRequestError(TransportError):
    """
    Error raised for any other 4xx response.
    """
    def __init__(self, status_code: int, reason: Optional[str] = None):
        message = f"The collection endpoint rejected the request ({status_code})."
        if reason:
            message += f"\nDetails: {reason}"
        super().__init__(message, status_code=status_code)


class ServerError(TransportError):
    """
    Error raised when the collection endpoint fails on its side.

    Args:
        status_code (int): The HTTP status code.
        reason (Optional[str]): The reason for the error.
    """
    def __init__(self, status_code: int = 500, reason: Optional[str] = None,
                 message: str = "Server error: the collection endpoint failed to process the request."):
        if reason:
            message += f"\nDetails: {reason}"
        super().__init__(message, status_code=status_code)


class DeliveryError(GalogError):
    """
    Error raised after every slice of a batch was attempted and at least one failed.

    Args:
        failures (Sequence[Tuple[int, BaseException]]): Slice index and error of each failed slice.
        total (int): Number of slices attempted.
    """
    def __init__(self, failures: Sequence[Tuple[int, BaseException]], total: int):
        self.failures: List[Tuple[int, BaseException]] = list(failures)
        self.total = total
        first = self.failures[0][1] if self.failures else None
        message = f"{len(self.failures)} of {total} payload(s) could not be delivered."
        if first is not None:
            message += f"\nFirst failure: {first}"
        super().__init__(message)

    @property
    def errors(self) -> List[BaseException]:
        return [error for _, error in self.failures]
