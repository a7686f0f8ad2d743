from collections.abc import Callable

import requests

from rokka_client.core.infrastructure.http.retry import RetryAdapter, RetryPolicy
from rokka_client.core.infrastructure.http.session import ApiSession, build_retrying_session


class TestApiSession:
    def test_build_url_joins_relative_paths(self) -> None:
        session = ApiSession("https://api.rokka.io")

        assert session.build_url("stacks/testorg") == "https://api.rokka.io/stacks/testorg"
        assert session.build_url("/operations") == "https://api.rokka.io/operations"

    def test_build_url_handles_trailing_slash(self) -> None:
        session = ApiSession("http://api.rokka.local:8888/")

        assert session.build_url("operations") == "http://api.rokka.local:8888/operations"

    def test_build_url_keeps_absolute_urls(self) -> None:
        session = ApiSession("https://api.rokka.io")

        assert session.build_url("https://other.example/x") == "https://other.example/x"

    def test_default_timeout_is_applied(
        self, session: ApiSession, adapter, make_response: Callable[..., requests.Response]
    ) -> None:
        adapter.queue(make_response(200), make_response(200))

        session.get("operations")
        session.get("operations", timeout=5)

        assert adapter.last_request.url == "https://api.rokka.io/operations"
        assert adapter.send_kwargs[0]["timeout"] == 30
        assert adapter.send_kwargs[1]["timeout"] == 5


class TestBuildRetryingSession:
    def test_mounts_retry_adapter(self) -> None:
        policy = RetryPolicy(max_retries=3)

        session = build_retrying_session("http://api.rokka.local:8888", policy=policy, timeout=10)

        assert session.base_url == "http://api.rokka.local:8888"
        assert session.timeout == 10

        for url in ("https://api.rokka.io", "http://api.rokka.local:8888"):
            mounted = session.get_adapter(url)
            assert isinstance(mounted, RetryAdapter)
            assert mounted.policy is policy
