"""HTTP session bound to the API base URL."""

from typing import Any

import requests

from rokka_client.core.infrastructure.http.retry import RetryAdapter, RetryPolicy
from rokka_client.core.utils.constants import DEFAULT_API_BASE_URL, DEFAULT_TIMEOUT


class ApiSession(requests.Session):
    """``requests`` session resolving relative paths against a base URL.

    Applies a default timeout to every request that does not set one.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_BASE_URL,
        *,
        timeout: float | None = DEFAULT_TIMEOUT,
    ) -> None:
        super().__init__()
        self.base_url = base_url
        self.timeout = timeout

    def build_url(self, path: str) -> str:
        """Build the full URL from a path, leaving absolute URLs untouched."""
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    def request(  # type: ignore[override]
        self,
        method: str,
        url: str,
        *args: Any,
        **kwargs: Any,
    ) -> requests.Response:
        kwargs.setdefault("timeout", self.timeout)
        return super().request(method, self.build_url(url), *args, **kwargs)


def build_retrying_session(
    base_url: str = DEFAULT_API_BASE_URL,
    *,
    policy: RetryPolicy | None = None,
    timeout: float | None = DEFAULT_TIMEOUT,
) -> ApiSession:
    """Create an ``ApiSession`` with the retry adapter mounted for http and https."""
    session = ApiSession(base_url, timeout=timeout)
    adapter = RetryAdapter(policy=policy)

    session.mount("https://", adapter)
    session.mount("http://", adapter)

    return session
