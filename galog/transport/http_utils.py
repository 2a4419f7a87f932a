import functools
import json
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

import httpx

from galog.errors import (
    ClientRequestError,
    InvalidCredentialError,
    NetworkConnectionError,
    RequestTimeoutError,
    ServerError,
    TooManyRequestsError,
)

F = TypeVar("F", bound=Callable[..., httpx.Response])
AF = TypeVar("AF", bound=Callable[..., Awaitable[httpx.Response]])
logger = logging.getLogger(__name__)


def extract_detail(response: httpx.Response) -> Optional[str]:
    """
    Extract error detail from an HTTP response.

    The validation endpoint answers with ``validationMessages``; other
    errors may carry a ``detail`` or ``error.message`` field.

    Returns:
        The extracted detail message, or None if extraction fails
    """
    try:
        data = response.json()
    except (json.JSONDecodeError, ValueError, AttributeError):
        return None

    if not isinstance(data, dict):
        return None

    if data.get("detail"):
        return data["detail"]

    error = data.get("error")
    if isinstance(error, dict) and error.get("message"):
        return error["message"]

    messages = data.get("validationMessages")
    if messages:
        return "; ".join(
            str(m.get("description", m)) if isinstance(m, dict) else str(m)
            for m in messages
        )

    return None


def check_response(response: httpx.Response) -> httpx.Response:
    """
    Return successful responses, raise the matching galog error otherwise.
    """
    if response.is_success:
        return response

    if response.status_code in (401, 403):
        raise InvalidCredentialError(
            status_code=response.status_code, reason=extract_detail(response)
        )
    if response.status_code == 429:
        logger.warning("Rate limit exceeded")
        raise TooManyRequestsError(reason=extract_detail(response) or response.text)
    if response.is_client_error:
        raise ClientRequestError(
            response.status_code,
            reason=extract_detail(response) or response.reason_phrase,
        )
    if response.is_server_error:
        detail = extract_detail(response)
        logger.warning(f"Server error {response.status_code}: {detail}")
        raise ServerError(status_code=response.status_code, reason=detail)

    # Fallback for unexpected status codes
    response.raise_for_status()
    return response


def map_transport_errors(func: F) -> F:
    """
    Decorator translating httpx failures and error statuses into galog
    transport errors. No retry is attempted.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> Any:
        try:
            response = func(*args, **kwargs)
        except httpx.TimeoutException as e:
            raise RequestTimeoutError() from e
        except httpx.TransportError as e:
            raise NetworkConnectionError() from e

        return check_response(response)

    return wrapper  # type: ignore


def map_async_transport_errors(func: AF) -> AF:
    """
    Async flavour of ``map_transport_errors``.
    """

    @functools.wraps(func)
    async def wrapper(*args, **kwargs) -> Any:
        try:
            response = await func(*args, **kwargs)
        except httpx.TimeoutException as e:
            raise RequestTimeoutError() from e
        except httpx.TransportError as e:
            raise NetworkConnectionError() from e

        return check_response(response)

    return wrapper  # type: ignore
