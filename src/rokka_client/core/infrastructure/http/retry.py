"""Retry policy applied around the HTTP transport.

Requests are retried when no response was received at all, or when the API
signals overload (429, 502, 503). The delay grows linearly: 2s before the
first retry, 4s before the second, and so on, up to 10 retries.
"""

import time
from collections.abc import Callable, Mapping
from typing import Any, cast

import requests
from aws_lambda_powertools import Logger
from requests.adapters import BaseAdapter, HTTPAdapter

from rokka_client.core.utils.constants import (
    LOGGER_SERVICE_NAME,
    MAX_RETRIES,
    RETRY_DELAY_STEP_MS,
    RETRYABLE_STATUS_CODES,
)

logger = Logger(service=LOGGER_SERVICE_NAME, UTC=True)


class RetryPolicy:
    """Decides whether a failed attempt is retried and how long to wait."""

    def __init__(
        self,
        *,
        max_retries: int = MAX_RETRIES,
        delay_step_ms: int = RETRY_DELAY_STEP_MS,
        retryable_status_codes: frozenset[int] = RETRYABLE_STATUS_CODES,
    ) -> None:
        self.max_retries = max_retries
        self.delay_step_ms = delay_step_ms
        self.retryable_status_codes = retryable_status_codes

    def should_retry(
        self,
        retries: int,
        response: requests.Response | None = None,
        exception: Exception | None = None,
    ) -> bool:
        """
        Return True if the request should be sent again.

        Args:
            retries: Number of retries already done for this request
            response: Response of the last attempt, if one was received
            exception: Error raised by the last attempt, if any

        Returns:
            True for connection failures and overload status codes while
            fewer than ``max_retries`` retries have been made
        """
        if retries >= self.max_retries:
            return False

        if isinstance(exception, requests.ConnectionError):
            return True

        if response is not None:
            return response.status_code in self.retryable_status_codes

        return False

    def delay_ms(self, number_of_retries: int) -> int:
        """Milliseconds to wait before retry number ``number_of_retries`` (1-based)."""
        return self.delay_step_ms * number_of_retries


class RetryAdapter(BaseAdapter):
    """Transport adapter that resends requests according to a RetryPolicy.

    Wraps another adapter (a plain ``HTTPAdapter`` by default) which does the
    actual sending. Mount it on a session for the schemes it should handle.
    """

    def __init__(
        self,
        adapter: BaseAdapter | None = None,
        *,
        policy: RetryPolicy | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        super().__init__()
        self._adapter = adapter or HTTPAdapter()
        self._policy = policy or RetryPolicy()
        self._sleep = sleep

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    def send(  # type: ignore[override]
        self,
        request: requests.PreparedRequest,
        **kwargs: Any,
    ) -> requests.Response:
        retries = 0

        while True:
            response: requests.Response | None = None
            exception: requests.ConnectionError | None = None

            try:
                response = self._adapter.send(request, **kwargs)
            except requests.ConnectionError as exc:
                exception = exc

            if not self._policy.should_retry(retries, response, exception):
                if exception is not None:
                    raise exception
                return cast(requests.Response, response)

            retries += 1
            delay_ms = self._policy.delay_ms(retries)

            logger.info(
                "Retrying request",
                extra=self._retry_log_fields(request, retries, delay_ms, response, exception),
            )

            if response is not None:
                response.close()

            self._sleep(delay_ms / 1000)

    def close(self) -> None:
        self._adapter.close()

    @staticmethod
    def _retry_log_fields(
        request: requests.PreparedRequest,
        retries: int,
        delay_ms: int,
        response: requests.Response | None,
        exception: Exception | None,
    ) -> Mapping[str, Any]:
        return {
            "method": request.method,
            "url": request.url,
            "retry": retries,
            "delay_ms": delay_ms,
            "status_code": response.status_code if response is not None else None,
            "error": str(exception) if exception is not None else None,
        }
