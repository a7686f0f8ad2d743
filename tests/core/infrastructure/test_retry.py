"""Unit tests for the retry policy and the retrying transport adapter."""

from collections.abc import Callable

import pytest
import requests

from rokka_client.core.infrastructure.http.retry import RetryAdapter, RetryPolicy


def prepared_request(method: str = "GET") -> requests.PreparedRequest:
    return requests.Request(method, "https://api.rokka.io/sourceimages/testorg").prepare()


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def retry_adapter(adapter, sleeps: list[float]) -> RetryAdapter:
    return RetryAdapter(adapter, sleep=sleeps.append)


class TestRetryPolicy:
    @pytest.mark.parametrize("status_code", [429, 502, 503])
    def test_retries_overload_status(
        self, status_code: int, make_response: Callable[..., requests.Response]
    ) -> None:
        policy = RetryPolicy()

        assert policy.should_retry(0, make_response(status_code)) is True

    @pytest.mark.parametrize("status_code", [200, 201, 204, 400, 403, 404, 500, 504])
    def test_does_not_retry_other_status(
        self, status_code: int, make_response: Callable[..., requests.Response]
    ) -> None:
        policy = RetryPolicy()

        assert policy.should_retry(0, make_response(status_code)) is False

    def test_retries_connection_errors(self) -> None:
        policy = RetryPolicy()

        assert policy.should_retry(0, None, requests.ConnectionError("refused")) is True
        assert policy.should_retry(0, None, requests.ConnectTimeout("timed out")) is True

    def test_does_not_retry_read_timeouts(self) -> None:
        policy = RetryPolicy()

        assert policy.should_retry(0, None, requests.ReadTimeout("slow")) is False

    def test_stops_after_ten_retries(self, make_response: Callable[..., requests.Response]) -> None:
        policy = RetryPolicy()

        assert policy.should_retry(9, make_response(503)) is True
        assert policy.should_retry(10, make_response(503)) is False
        assert policy.should_retry(10, None, requests.ConnectionError("refused")) is False

    def test_linear_delay(self) -> None:
        policy = RetryPolicy()

        assert [policy.delay_ms(n) for n in range(1, 5)] == [2000, 4000, 6000, 8000]
        assert policy.delay_ms(10) == 20000


class TestRetryAdapter:
    def test_three_connection_failures_then_success(
        self,
        adapter,
        retry_adapter: RetryAdapter,
        sleeps: list[float],
        make_response: Callable[..., requests.Response],
    ) -> None:
        adapter.queue(
            requests.ConnectionError("refused"),
            requests.ConnectionError("refused"),
            requests.ConnectionError("refused"),
            make_response(200, json_body={"items": []}),
        )

        response = retry_adapter.send(prepared_request())

        assert response.status_code == 200
        assert len(adapter.requests) == 4
        assert sleeps == [2.0, 4.0, 6.0]

    def test_retries_overload_then_success(
        self,
        adapter,
        retry_adapter: RetryAdapter,
        sleeps: list[float],
        make_response: Callable[..., requests.Response],
    ) -> None:
        adapter.queue(make_response(429), make_response(502), make_response(204))

        response = retry_adapter.send(prepared_request("DELETE"))

        assert response.status_code == 204
        assert sleeps == [2.0, 4.0]

    def test_returns_inner_response_unchanged(
        self,
        adapter,
        retry_adapter: RetryAdapter,
        make_response: Callable[..., requests.Response],
    ) -> None:
        response = make_response(201, json_body={"items": []})
        adapter.queue(response)

        assert retry_adapter.send(prepared_request("POST")) is response

    def test_not_found_is_not_retried(
        self,
        adapter,
        retry_adapter: RetryAdapter,
        sleeps: list[float],
        make_response: Callable[..., requests.Response],
    ) -> None:
        adapter.queue(make_response(404))

        response = retry_adapter.send(prepared_request())

        assert response.status_code == 404
        assert len(adapter.requests) == 1
        assert sleeps == []

    def test_returns_last_response_when_exhausted(
        self,
        adapter,
        retry_adapter: RetryAdapter,
        sleeps: list[float],
        make_response: Callable[..., requests.Response],
    ) -> None:
        adapter.queue(*[make_response(503) for _ in range(11)])

        response = retry_adapter.send(prepared_request())

        assert response.status_code == 503
        assert len(adapter.requests) == 11
        assert sleeps == [2.0 * n for n in range(1, 11)]

    def test_raises_connection_error_when_exhausted(
        self,
        adapter,
        retry_adapter: RetryAdapter,
        sleeps: list[float],
    ) -> None:
        adapter.queue(*[requests.ConnectionError("refused") for _ in range(11)])

        with pytest.raises(requests.ConnectionError):
            retry_adapter.send(prepared_request())

        assert len(adapter.requests) == 11
        assert len(sleeps) == 10

    def test_other_errors_propagate_immediately(
        self,
        adapter,
        retry_adapter: RetryAdapter,
        sleeps: list[float],
    ) -> None:
        adapter.queue(requests.ReadTimeout("slow"))

        with pytest.raises(requests.ReadTimeout):
            retry_adapter.send(prepared_request())

        assert sleeps == []

    def test_custom_policy(
        self,
        adapter,
        sleeps: list[float],
        make_response: Callable[..., requests.Response],
    ) -> None:
        retry_adapter = RetryAdapter(
            adapter,
            policy=RetryPolicy(max_retries=1, delay_step_ms=10),
            sleep=sleeps.append,
        )
        adapter.queue(make_response(503), make_response(503))

        response = retry_adapter.send(prepared_request())

        assert response.status_code == 503
        assert sleeps == [0.01]
