"""Service configuration tests."""

from pathlib import Path

import pytest

from secrets_manager import (
    BearerTokenAuthenticator,
    IAMAuthenticator,
    NoAuthAuthenticator,
    SecretsManagerValidationError,
)
from secrets_manager.config import (
    build_authenticator,
    credentials_file,
    env_prefix,
    load_service_properties,
)


def _write_credentials(path: Path, **values: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("".join(f"{key}={value}\n" for key, value in values.items()))
    return path


class TestServiceProperties:
    """Property loading from the environment and credentials files."""

    def test_environment_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Read prefixed variables and default the auth type to IAM.

        Parameters
        ----------
        monkeypatch : pytest.MonkeyPatch
            Environment monkeypatch helper.

        Returns
        -------
        None
            Asserts loaded properties.
        """
        monkeypatch.setenv("SECRETS_MANAGER_URL", "https://sm.example.test")
        monkeypatch.setenv("SECRETS_MANAGER_APIKEY", "example-apikey")

        assert load_service_properties() == {
            "URL": "https://sm.example.test",
            "AUTH_TYPE": "iam",
            "APIKEY": "example-apikey",
        }

    def test_credentials_file_from_variable(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Load the file named by ``IBM_CREDENTIALS_FILE``.

        Parameters
        ----------
        tmp_path : Path
            Temporary path fixture.
        monkeypatch : pytest.MonkeyPatch
            Environment monkeypatch helper.

        Returns
        -------
        None
            Asserts loaded properties.
        """
        path = _write_credentials(
            tmp_path / "conf" / "credentials.env",
            SECRETS_MANAGER_URL="https://file.example.test",
            SECRETS_MANAGER_AUTH_TYPE="BearerToken",
            SECRETS_MANAGER_BEARER_TOKEN="file-token",
            OTHER_SERVICE_URL="https://other.example.test",
        )
        monkeypatch.setenv("IBM_CREDENTIALS_FILE", str(path))

        assert credentials_file() == path
        assert load_service_properties() == {
            "URL": "https://file.example.test",
            "AUTH_TYPE": "bearertoken",
            "BEARER_TOKEN": "file-token",
        }

    def test_environment_wins_over_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Prefer a variable over the same key in the credentials file.

        Parameters
        ----------
        tmp_path : Path
            Temporary path fixture.
        monkeypatch : pytest.MonkeyPatch
            Environment monkeypatch helper.

        Returns
        -------
        None
            Asserts precedence.
        """
        _write_credentials(
            tmp_path / "ibm-credentials.env",
            SECRETS_MANAGER_URL="https://file.example.test",
            SECRETS_MANAGER_AUTH_TYPE="noauth",
        )
        monkeypatch.setenv("SECRETS_MANAGER_URL", "https://env.example.test")

        properties = load_service_properties()

        assert properties["URL"] == "https://env.example.test"
        assert properties["AUTH_TYPE"] == "noauth"

    def test_home_directory_file(self, tmp_path: Path) -> None:
        """Fall back to the credentials file in the home directory.

        Parameters
        ----------
        tmp_path : Path
            Temporary path fixture.

        Returns
        -------
        None
            Asserts the located file.
        """
        path = _write_credentials(
            tmp_path / "home" / "ibm-credentials.env",
            SECRETS_MANAGER_URL="https://home.example.test",
            SECRETS_MANAGER_AUTH_TYPE="noauth",
        )

        assert credentials_file() == path
        assert load_service_properties()["URL"] == "https://home.example.test"

    def test_missing_url_is_rejected(self) -> None:
        """Fail when no URL is configured anywhere.

        Returns
        -------
        None
            Asserts the validation error.
        """
        with pytest.raises(SecretsManagerValidationError, match="SECRETS_MANAGER_URL"):
            load_service_properties()

    def test_iam_requires_apikey(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Fail when the IAM auth type has no API key.

        Parameters
        ----------
        monkeypatch : pytest.MonkeyPatch
            Environment monkeypatch helper.

        Returns
        -------
        None
            Asserts the validation error.
        """
        monkeypatch.setenv("SECRETS_MANAGER_URL", "https://sm.example.test")

        with pytest.raises(SecretsManagerValidationError, match="APIKEY"):
            load_service_properties()

    def test_other_service_name(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Derive the prefix from the service name.

        Parameters
        ----------
        monkeypatch : pytest.MonkeyPatch
            Environment monkeypatch helper.

        Returns
        -------
        None
            Asserts prefixed loading.
        """
        monkeypatch.setenv("SM_STAGING_URL", "https://staging.example.test")
        monkeypatch.setenv("SM_STAGING_AUTH_TYPE", "noauth")

        assert env_prefix("sm-staging") == "SM_STAGING_"
        assert load_service_properties("sm-staging")["URL"] == (
            "https://staging.example.test"
        )


class TestBuildAuthenticator:
    """Authenticator selection by auth type."""

    def test_auth_types(self) -> None:
        """Create the authenticator named by ``AUTH_TYPE``.

        Returns
        -------
        None
            Asserts authenticator types.
        """
        iam = build_authenticator(
            {"AUTH_TYPE": "iam", "APIKEY": "key", "AUTH_URL": "https://iam.example.test/"}
        )
        bearer = build_authenticator({"AUTH_TYPE": "bearertoken", "BEARER_TOKEN": "t"})
        noauth = build_authenticator({"AUTH_TYPE": "noauth"})

        assert isinstance(iam, IAMAuthenticator)
        assert iam.url == "https://iam.example.test"
        assert isinstance(bearer, BearerTokenAuthenticator)
        assert isinstance(noauth, NoAuthAuthenticator)
        iam.close()

    def test_unusable_properties_are_rejected(self) -> None:
        """Reject unknown auth types and missing bearer tokens.

        Returns
        -------
        None
            Asserts validation errors.
        """
        with pytest.raises(SecretsManagerValidationError):
            build_authenticator({"AUTH_TYPE": "basic"})
        with pytest.raises(SecretsManagerValidationError):
            build_authenticator({"AUTH_TYPE": "bearertoken"})
