"""Factory building clients with a configured HTTP session.

Arguments passed explicitly take precedence over the ``ROKKA_*``
environment variables, which take precedence over the built-in defaults.
"""

import os

from rokka_client.clients.image import ImageClient
from rokka_client.clients.user import UserClient
from rokka_client.core.infrastructure.http.retry import RetryPolicy
from rokka_client.core.infrastructure.http.session import ApiSession, build_retrying_session
from rokka_client.core.utils.constants import (
    DEFAULT_API_BASE_URL,
    DEFAULT_TIMEOUT,
    ENV_API_BASE_URL,
    ENV_API_KEY,
    ENV_API_SECRET,
    ENV_ORGANIZATION,
)


def _setting(value: str | None, env_name: str, default: str = "") -> str:
    """Return ``value``, else the environment variable, else ``default``."""
    if value:
        return value
    return os.getenv(env_name) or default


class ClientFactory:
    """Static helpers to create image and user clients."""

    @staticmethod
    def get_image_client(
        organization: str | None = None,
        api_key: str | None = None,
        api_secret: str | None = None,
        base_url: str | None = None,
        *,
        retry_policy: RetryPolicy | None = None,
        timeout: float | None = DEFAULT_TIMEOUT,
    ) -> ImageClient:
        """
        Return an image client.

        Args:
            organization: Default organization of the client
            api_key: API key
            api_secret: API secret
            base_url: Optional API base URL
            retry_policy: Optional retry policy replacing the default one
            timeout: Per request timeout in seconds

        Returns:
            Configured ImageClient
        """
        session = ClientFactory.build_session(
            _setting(base_url, ENV_API_BASE_URL, DEFAULT_API_BASE_URL),
            retry_policy=retry_policy,
            timeout=timeout,
        )

        return ImageClient(
            session,
            _setting(organization, ENV_ORGANIZATION),
            _setting(api_key, ENV_API_KEY),
            _setting(api_secret, ENV_API_SECRET),
        )

    @staticmethod
    def get_user_client(
        base_url: str | None = None,
        *,
        retry_policy: RetryPolicy | None = None,
        timeout: float | None = DEFAULT_TIMEOUT,
    ) -> UserClient:
        """Return a user client without credentials."""
        session = ClientFactory.build_session(
            _setting(base_url, ENV_API_BASE_URL, DEFAULT_API_BASE_URL),
            retry_policy=retry_policy,
            timeout=timeout,
        )

        return UserClient(session)

    @staticmethod
    def build_session(
        base_url: str = DEFAULT_API_BASE_URL,
        *,
        retry_policy: RetryPolicy | None = None,
        timeout: float | None = DEFAULT_TIMEOUT,
    ) -> ApiSession:
        """Return a session bound to ``base_url`` that retries failed requests."""
        return build_retrying_session(base_url, policy=retry_policy, timeout=timeout)
