"""Base client attaching the API version and credentials to every call."""

from http import HTTPStatus
from typing import Any

import requests
from aws_lambda_powertools import Logger

from rokka_client.core.models.credentials import Credentials
from rokka_client.core.models.errors import (
    ConnectionFailedError,
    NotFoundError,
    RequestFailedError,
)
from rokka_client.core.utils.constants import (
    API_KEY_HEADER,
    API_VERSION_HEADER,
    DEFAULT_API_BASE_URL,
    DEFAULT_API_VERSION,
    LOGGER_SERVICE_NAME,
)

logger = Logger(service=LOGGER_SERVICE_NAME, UTC=True)


class BaseClient:
    """Shared request handling of the rokka clients.

    Every request carries the ``Api-Version`` header. Requests that need
    credentials also carry the ``Api-Key`` header; the API secret is stored
    but never sent.
    """

    def __init__(
        self,
        session: requests.Session,
        *,
        api_version: int = DEFAULT_API_VERSION,
        credentials: Credentials | None = None,
    ) -> None:
        self._session = session
        self._api_version = api_version
        self._credentials = credentials or Credentials()

    @property
    def session(self) -> requests.Session:
        return self._session

    @property
    def api_version(self) -> int:
        return self._api_version

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    @property
    def base_url(self) -> str:
        return getattr(self._session, "base_url", DEFAULT_API_BASE_URL)

    def set_credentials(self, key: str, secret: str) -> None:
        """Replace the stored API key and secret."""
        self._credentials = Credentials(key=key, secret=secret)

    @staticmethod
    def resolve_organization(organization: str | None, default: str) -> str:
        """Return ``organization``, or ``default`` when it is empty."""
        return organization or default

    def call(
        self,
        method: str,
        path: str,
        *,
        needs_credentials: bool = True,
        **options: Any,
    ) -> requests.Response:
        """
        Send a request to the API and return the raw response.

        The status code is not interpreted; callers decide what an error is.

        Args:
            method: HTTP method
            path: Path relative to the API base URL
            needs_credentials: Send the Api-Key header
            **options: Passed through to ``requests.Session.request``

        Returns:
            The response of the last attempt

        Raises:
            ConnectionFailedError: If no response was received, after retries
        """
        headers: dict[str, str] = dict(options.pop("headers", None) or {})
        headers[API_VERSION_HEADER] = str(self._api_version)

        if needs_credentials:
            headers[API_KEY_HEADER] = self._credentials.key

        logger.debug("Sending request", extra={"method": method, "path": path})

        try:
            response = self._session.request(method, path, headers=headers, **options)
        except (requests.ConnectionError, requests.Timeout) as exc:
            raise ConnectionFailedError(
                message=f"Unable to reach the API for {method} {path}",
                details={"method": method, "path": path, "error": str(exc)},
            ) from exc

        logger.debug(
            "Received response",
            extra={"method": method, "path": path, "status_code": response.status_code},
        )

        return response

    def call_checked(
        self,
        method: str,
        path: str,
        *,
        needs_credentials: bool = True,
        **options: Any,
    ) -> requests.Response:
        """Like ``call``, but raise for error status codes.

        Raises:
            NotFoundError: For a 404 response
            RequestFailedError: For any other status of 400 or above
            ConnectionFailedError: If no response was received, after retries
        """
        response = self.call(method, path, needs_credentials=needs_credentials, **options)

        if response.status_code < HTTPStatus.BAD_REQUEST:
            return response

        details = {"method": method, "path": path}

        if response.status_code == HTTPStatus.NOT_FOUND:
            raise NotFoundError(
                message=f"Resource not found for {method} {path}",
                body=response.text,
                details=details,
            )

        raise RequestFailedError(
            message=f"{method} {path} failed with status {response.status_code}",
            status_code=response.status_code,
            body=response.text,
            details=details,
        )
