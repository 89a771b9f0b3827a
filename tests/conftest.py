"""Pytest fixtures."""

from collections.abc import Iterator
from pathlib import Path

import pytest

from secrets_manager import BearerTokenAuthenticator, RetryPolicy, SecretsManagerClient
from secrets_manager.config import get_service_settings
from tests.fake_service import FAKE_URL, FakeSecretsManager

SERVICE_VARIABLES = (
    "SECRETS_MANAGER_URL",
    "SECRETS_MANAGER_AUTH_TYPE",
    "SECRETS_MANAGER_APIKEY",
    "SECRETS_MANAGER_AUTH_URL",
    "SECRETS_MANAGER_BEARER_TOKEN",
    "IBM_CREDENTIALS_FILE",
)


@pytest.fixture(autouse=True)
def _isolate_configuration(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Iterator[None]:
    """Reset cached settings and hide ambient credentials.

    Parameters
    ----------
    tmp_path : Path
        Temporary path fixture.
    monkeypatch : pytest.MonkeyPatch
        Environment monkeypatch helper.

    Yields
    ------
    None
        Applies environment overrides for each test.
    """
    get_service_settings.cache_clear()
    for name in SERVICE_VARIABLES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    yield
    get_service_settings.cache_clear()


@pytest.fixture()
def fake_service() -> FakeSecretsManager:
    """Create an empty in-memory service.

    Returns
    -------
    FakeSecretsManager
        Fake service instance.
    """
    return FakeSecretsManager()


@pytest.fixture()
def client(fake_service: FakeSecretsManager) -> Iterator[SecretsManagerClient]:
    """Create an SDK client bound to the fake service.

    Parameters
    ----------
    fake_service : FakeSecretsManager
        Fake service handling requests.

    Yields
    ------
    SecretsManagerClient
        Client with instant retries.
    """
    with SecretsManagerClient(
        url=FAKE_URL,
        authenticator=BearerTokenAuthenticator("test-token"),
        retry_policy=RetryPolicy(backoff_base=0.0),
        transport=fake_service.transport(),
    ) as sdk_client:
        yield sdk_client
