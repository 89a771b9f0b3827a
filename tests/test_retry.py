"""Retry policy tests."""

import logging
from datetime import datetime, timedelta, timezone
from email.utils import format_datetime

import httpx
import pytest

from secrets_manager import SecretsManagerClient
from secrets_manager.auth import BearerTokenAuthenticator
from secrets_manager.exceptions import (
    SecretsManagerRateLimitError,
    SecretsManagerServiceError,
    SecretsManagerTimeoutError,
    SecretsManagerTransportError,
)
from secrets_manager.retry import RetryPolicy, parse_retry_after
from secrets_manager.schemas.secrets import ArbitrarySecretPrototype
from tests.fake_service import FAKE_URL, FakeSecretsManager


def _prototype() -> ArbitrarySecretPrototype:
    return ArbitrarySecretPrototype(name="example-arbitrary-secret", payload="secret-data")


class FakeClock:
    """Monotonic clock advanced by hand."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class DrippingStream(httpx.SyncByteStream):
    """Response body whose chunks each take ``step`` seconds to arrive."""

    def __init__(self, clock: FakeClock, chunks: list[bytes], step: float) -> None:
        self.clock = clock
        self.chunks = chunks
        self.step = step

    def __iter__(self):
        for chunk in self.chunks:
            self.clock.now += self.step
            yield chunk


class TestRetryPolicy:
    """Delay computation and retry gating."""

    def test_parse_retry_after_seconds(self) -> None:
        """Parse delta-seconds values.

        Returns
        -------
        None
            Asserts parsing.
        """
        assert parse_retry_after("0") == 0.0
        assert parse_retry_after(" 7 ") == 7.0
        assert parse_retry_after("-3") is None
        assert parse_retry_after("soon") is None
        assert parse_retry_after(None) is None

    def test_parse_retry_after_http_date(self) -> None:
        """Parse HTTP-date values relative to now.

        Returns
        -------
        None
            Asserts parsing.
        """
        past = format_datetime(datetime.now(timezone.utc) - timedelta(minutes=5), usegmt=True)
        future = format_datetime(datetime.now(timezone.utc) + timedelta(seconds=60), usegmt=True)

        assert parse_retry_after(past) == 0.0
        assert 50.0 < parse_retry_after(future) <= 60.0

    def test_delay_honors_retry_after_in_full(self) -> None:
        """Wait as long as ``Retry-After`` asks, even beyond the backoff cap.

        Returns
        -------
        None
            Asserts delay computation.
        """
        policy = RetryPolicy(backoff_max=8.0)
        request = httpx.Request("GET", FAKE_URL)

        short = httpx.Response(429, headers={"Retry-After": "2"}, request=request)
        long = httpx.Response(429, headers={"Retry-After": "20"}, request=request)

        assert policy.compute_delay(1, short) == 2.0
        assert policy.compute_delay(1, long) == 20.0

    def test_exponential_backoff_with_jitter(self) -> None:
        """Double the base delay per attempt within the jitter band.

        Returns
        -------
        None
            Asserts delay bounds.
        """
        policy = RetryPolicy(backoff_base=0.5, backoff_max=8.0, jitter=0.25)

        for attempt, base in ((1, 0.5), (2, 1.0), (3, 2.0), (6, 8.0)):
            delay = policy.compute_delay(attempt)
            assert base * 0.75 <= delay <= base * 1.25

    def test_post_is_retried_only_when_safe(self) -> None:
        """Gate non-idempotent retries on connect failures and 429/503.

        Returns
        -------
        None
            Asserts retry gating.
        """
        policy = RetryPolicy()

        assert policy.should_retry_status("GET", 500)
        assert policy.should_retry_status("DELETE", 504)
        assert not policy.should_retry_status("GET", 404)
        assert not policy.should_retry_status("POST", 500)
        assert policy.should_retry_status("POST", 503)
        assert policy.should_retry_status("POST", 429)
        assert policy.should_retry_error("POST", httpx.ConnectError("refused"))
        assert not policy.should_retry_error("POST", httpx.ReadTimeout("slow"))
        assert policy.should_retry_error("GET", httpx.ReadError("reset"))


class TestClientRetries:
    """Retries through the client against the fake service."""

    def test_get_is_retried_after_transient_status(
        self, client: SecretsManagerClient, fake_service: FakeSecretsManager
    ) -> None:
        """Repeat a read after 503 and 500 responses.

        Parameters
        ----------
        client : SecretsManagerClient
            Client bound to the fake service.
        fake_service : FakeSecretsManager
            Fake service.

        Returns
        -------
        None
            Asserts the eventual success.
        """
        fake_service.failures = [
            httpx.Response(503, headers={"Retry-After": "0"}),
            httpx.Response(500),
        ]

        response = client.list_secret_groups()

        assert response.status_code == 200
        assert len(fake_service.requests) == 3

    def test_create_is_not_retried_after_server_error(
        self, client: SecretsManagerClient, fake_service: FakeSecretsManager
    ) -> None:
        """Surface a 500 on create without a second attempt.

        Parameters
        ----------
        client : SecretsManagerClient
            Client bound to the fake service.
        fake_service : FakeSecretsManager
            Fake service.

        Returns
        -------
        None
            Asserts a single attempt.
        """
        fake_service.failures = [httpx.Response(500)]

        with pytest.raises(SecretsManagerServiceError):
            client.create_secret(_prototype())

        assert len(fake_service.requests) == 1
        assert fake_service.secrets == {}

    def test_create_is_retried_after_connect_failure(
        self,
        client: SecretsManagerClient,
        fake_service: FakeSecretsManager,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Repeat a create whose connection was never established.

        Parameters
        ----------
        client : SecretsManagerClient
            Client bound to the fake service.
        fake_service : FakeSecretsManager
            Fake service.
        caplog : pytest.LogCaptureFixture
            Log capture helper.

        Returns
        -------
        None
            Asserts a single created secret and a retry warning.
        """
        fake_service.failures = [httpx.ConnectError("connection refused")]

        with caplog.at_level(logging.WARNING, logger="secrets_manager"):
            response = client.create_secret(_prototype())

        assert response.status_code == 201
        assert len(fake_service.secrets) == 1
        assert "retrying" in caplog.text

    def test_rate_limit_surfaces_after_budget(
        self, client: SecretsManagerClient, fake_service: FakeSecretsManager
    ) -> None:
        """Give up after the configured number of attempts.

        Parameters
        ----------
        client : SecretsManagerClient
            Client bound to the fake service.
        fake_service : FakeSecretsManager
            Fake service.

        Returns
        -------
        None
            Asserts the rate-limit error.
        """
        fake_service.failures = [
            httpx.Response(429, headers={"Retry-After": "0"}) for _ in range(10)
        ]

        with pytest.raises(SecretsManagerRateLimitError):
            client.create_secret(_prototype())

        assert len(fake_service.requests) == client.retry_policy.max_attempts == 4

    def test_disabled_policy_makes_one_attempt(
        self, fake_service: FakeSecretsManager
    ) -> None:
        """Map a single transport failure straight to an error.

        Parameters
        ----------
        fake_service : FakeSecretsManager
            Fake service.

        Returns
        -------
        None
            Asserts error mapping without retries.
        """
        client = SecretsManagerClient(
            url=FAKE_URL,
            authenticator=BearerTokenAuthenticator("test-token"),
            retry_policy=RetryPolicy.disabled(),
            transport=fake_service.transport(),
        )
        fake_service.failures = [
            httpx.ReadError("connection reset"),
            httpx.ReadTimeout("read timed out"),
        ]

        with pytest.raises(SecretsManagerTransportError) as exc_info:
            client.get_secret("abc")
        assert not isinstance(exc_info.value, SecretsManagerTimeoutError)

        with pytest.raises(SecretsManagerTimeoutError):
            client.get_secret("abc")

        assert len(fake_service.requests) == 2
        client.close()

    def test_exhausted_budget_times_out_before_dispatch(
        self, fake_service: FakeSecretsManager
    ) -> None:
        """Fail with a timeout when the wall-clock budget is already spent.

        Parameters
        ----------
        fake_service : FakeSecretsManager
            Fake service.

        Returns
        -------
        None
            Asserts the timeout.
        """
        with SecretsManagerClient(
            url=FAKE_URL,
            authenticator=BearerTokenAuthenticator("test-token"),
            retry_policy=RetryPolicy(max_elapsed=0.0),
            transport=fake_service.transport(),
        ) as client:
            with pytest.raises(SecretsManagerTimeoutError):
                client.list_secret_groups()

        assert fake_service.requests == []

    def test_long_retry_after_is_waited_out(
        self,
        client: SecretsManagerClient,
        fake_service: FakeSecretsManager,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Sleep the full ``Retry-After`` when the deadline allows it.

        Parameters
        ----------
        client : SecretsManagerClient
            Client bound to the fake service.
        fake_service : FakeSecretsManager
            Fake service.
        monkeypatch : pytest.MonkeyPatch
            Patches the pipeline sleep.

        Returns
        -------
        None
            Asserts the slept delay.
        """
        delays: list[float] = []
        monkeypatch.setattr("secrets_manager.pipeline.sleep", delays.append)
        fake_service.failures = [httpx.Response(429, headers={"Retry-After": "20"})]

        response = client.list_secret_groups()

        assert response.status_code == 200
        assert delays == [20.0]
        assert len(fake_service.requests) == 2

    def test_retry_after_beyond_deadline_surfaces_error(
        self,
        client: SecretsManagerClient,
        fake_service: FakeSecretsManager,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Give up at once when ``Retry-After`` would overrun the deadline.

        Parameters
        ----------
        client : SecretsManagerClient
            Client bound to the fake service.
        fake_service : FakeSecretsManager
            Fake service.
        monkeypatch : pytest.MonkeyPatch
            Patches the pipeline sleep.

        Returns
        -------
        None
            Asserts the rate-limit error without a retry.
        """
        delays: list[float] = []
        monkeypatch.setattr("secrets_manager.pipeline.sleep", delays.append)
        fake_service.failures = [httpx.Response(429, headers={"Retry-After": "120"})]

        with pytest.raises(SecretsManagerRateLimitError):
            client.list_secret_groups()

        assert delays == []
        assert len(fake_service.requests) == 1

    def test_slow_body_is_cut_at_deadline(
        self, fake_service: FakeSecretsManager, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Abort a response whose body keeps arriving past the deadline.

        Parameters
        ----------
        fake_service : FakeSecretsManager
            Fake service.
        monkeypatch : pytest.MonkeyPatch
            Patches the pipeline clock.

        Returns
        -------
        None
            Asserts the timeout.
        """
        clock = FakeClock()
        monkeypatch.setattr("secrets_manager.pipeline.monotonic", clock)
        fake_service.failures = [
            httpx.Response(
                200,
                stream=DrippingStream(
                    clock, [b'{"secret_groups": [', b"], ", b'"total_count": 0}'], 20.0
                ),
            )
        ]

        with SecretsManagerClient(
            url=FAKE_URL,
            authenticator=BearerTokenAuthenticator("test-token"),
            retry_policy=RetryPolicy.disabled(),
            transport=fake_service.transport(),
        ) as client:
            with pytest.raises(SecretsManagerTimeoutError):
                client.list_secret_groups()

        assert len(fake_service.requests) == 1
