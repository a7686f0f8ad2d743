"""Custom exception classes for the rokka client."""

from typing import Any

from rokka_client.core.utils.constants import (
    ERROR_CODE_BUSINESS_LOGIC,
    ERROR_CODE_CONNECTION_FAILED,
    ERROR_CODE_INVALID_ARGUMENT,
    ERROR_CODE_INVALID_RESPONSE,
    ERROR_CODE_REQUEST_FAILED,
    ERROR_CODE_RESOURCE_NOT_FOUND,
)


class RokkaClientError(Exception):
    """Root of the errors raised by the rokka clients.

    ``error_code`` is one of the ``ERROR_CODE_*`` constants and ``details``
    holds the request context, such as the path or the offending field.
    Catch this class to handle any failure of an API call.
    """

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}

        super().__init__(self.message)


class InvalidArgumentError(RokkaClientError):
    """Raised when a method is called with arguments it cannot send."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_INVALID_ARGUMENT,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class InvalidResponseError(RokkaClientError):
    """Raised when a response body cannot be mapped to a model."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_INVALID_RESPONSE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class ConnectionFailedError(RokkaClientError):
    """Raised when no response was received, even after retrying."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_CONNECTION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class RequestFailedError(RokkaClientError):
    """Raised when the API answers a request with an error status."""

    status_code: int
    body: str

    def __init__(
        self,
        *,
        message: str,
        status_code: int,
        body: str = "",
        error_code: str = ERROR_CODE_REQUEST_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.status_code = status_code
        self.body = body

        super().__init__(
            message=message,
            error_code=error_code,
            details={"status_code": status_code, **(details or {})},
        )


class NotFoundError(RequestFailedError):
    """Raised when a requested resource does not exist."""

    def __init__(
        self,
        *,
        message: str,
        status_code: int = 404,
        body: str = "",
        error_code: str = ERROR_CODE_RESOURCE_NOT_FOUND,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=status_code,
            body=body,
            error_code=error_code,
            details=details,
        )


class BusinessLogicError(RokkaClientError):
    """Raised when a metadata operation is rejected by the API.

    The raw response body and status code are kept for the caller to inspect.
    """

    status_code: int
    body: str

    def __init__(
        self,
        *,
        message: str,
        status_code: int,
        body: str = "",
        error_code: str = ERROR_CODE_BUSINESS_LOGIC,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.status_code = status_code
        self.body = body

        super().__init__(
            message=message,
            error_code=error_code,
            details={"status_code": status_code, **(details or {})},
        )
