"""Client tests against the in-memory service."""

import json

import pytest

from secrets_manager import (
    LockMode,
    NoAuthAuthenticator,
    SecretsManagerAPIError,
    SecretsManagerClient,
    SecretsManagerConflictError,
    SecretsManagerNotFoundError,
    SecretsManagerPreconditionError,
    SecretsManagerValidationError,
    SigningState,
    VersionAlias,
    encode,
)
from secrets_manager.schemas.actions import (
    PrivateCertificateConfigurationActionRotateCRLPrototype,
    PrivateCertificateConfigurationActionSignIntermediate,
)
from secrets_manager.schemas.common import (
    NotificationsRegistration,
    NotificationsRegistrationPrototype,
    SecretGroup,
    SecretLockPrototype,
)
from secrets_manager.schemas.configurations import (
    PrivateCertificateConfigurationIntermediateCA,
    PrivateCertificateConfigurationIntermediateCAPrototype,
    PrivateCertificateConfigurationRootCA,
    PrivateCertificateConfigurationRootCAPrototype,
    PrivateCertificateConfigurationTemplate,
    PrivateCertificateConfigurationTemplatePrototype,
)
from secrets_manager.schemas.secrets import (
    ArbitrarySecret,
    ArbitrarySecretMetadata,
    ArbitrarySecretMetadataPatch,
    ArbitrarySecretPrototype,
    PrivateCertificate,
    PrivateCertificatePrototype,
)
from tests.fake_service import FAKE_URL, FakeSecretsManager

ROOT_CA = "example-root-CA"
INTERMEDIATE_CA = "example-intermediate-CA"
TEMPLATE = "example-certificate-template"
ROOT_CA_TYPE = "private_cert_configuration_root_ca"
INTERMEDIATE_CA_TYPE = "private_cert_configuration_intermediate_ca"


def _create_arbitrary(client: SecretsManagerClient) -> ArbitrarySecret:
    return client.create_secret(
        ArbitrarySecretPrototype(
            name="example-arbitrary-secret",
            secret_group_id="default",
            payload="secret-data",
        )
    ).get_result()


def _create_ca_chain(client: SecretsManagerClient) -> None:
    client.create_configuration(
        PrivateCertificateConfigurationRootCAPrototype(
            name=ROOT_CA, common_name="ibm.com", max_ttl="43830h"
        )
    )
    client.create_configuration(
        PrivateCertificateConfigurationIntermediateCAPrototype(
            name=INTERMEDIATE_CA,
            common_name="ibm.com",
            max_ttl="87600h",
            signing_method="internal",
            issuer=ROOT_CA,
        )
    )


class TestSecrets:
    """Secret lifecycle operations."""

    def test_create_and_read_back(
        self, client: SecretsManagerClient, fake_service: FakeSecretsManager
    ) -> None:
        """Create an arbitrary secret and read it back by id.

        Parameters
        ----------
        client : SecretsManagerClient
            Client bound to the fake service.
        fake_service : FakeSecretsManager
            Fake service.

        Returns
        -------
        None
            Asserts the created and fetched records.
        """
        response = client.create_secret(
            ArbitrarySecretPrototype(
                name="example-arbitrary-secret",
                secret_group_id="default",
                payload="secret-data",
            )
        )

        assert response.status_code == 201
        assert json.loads(fake_service.requests[0].content) == {
            "secret_type": "arbitrary",
            "name": "example-arbitrary-secret",
            "secret_group_id": "default",
            "payload": "secret-data",
        }
        created = response.get_result()
        assert isinstance(created, ArbitrarySecret)
        assert created.id

        fetched = client.get_secret(created.id).get_result()

        assert isinstance(fetched, ArbitrarySecret)
        assert fetched.state == "active"
        assert encode(fetched) == encode(created)

    def test_merge_patch_metadata(
        self, client: SecretsManagerClient, fake_service: FakeSecretsManager
    ) -> None:
        """Send exactly the fields set on a typed partial.

        Parameters
        ----------
        client : SecretsManagerClient
            Client bound to the fake service.
        fake_service : FakeSecretsManager
            Fake service.

        Returns
        -------
        None
            Asserts the patch body and the updated metadata.
        """
        secret = _create_arbitrary(client)

        client.update_secret_metadata(
            secret.id,
            ArbitrarySecretMetadataPatch(
                name="updated-arbitrary-secret-name-example",
                description="updated Arbitrary Secret description",
                labels=["dev", "us-south"],
            ),
        )
        patch_request = fake_service.requests[-1]
        metadata = client.get_secret_metadata(secret.id).get_result()

        assert patch_request.headers["Content-Type"] == "application/merge-patch+json"
        assert json.loads(patch_request.content) == {
            "name": "updated-arbitrary-secret-name-example",
            "description": "updated Arbitrary Secret description",
            "labels": ["dev", "us-south"],
        }
        assert isinstance(metadata, ArbitrarySecretMetadata)
        assert metadata.name == "updated-arbitrary-secret-name-example"
        assert metadata.labels == ["dev", "us-south"]

    def test_get_by_name_type_and_delete(
        self, client: SecretsManagerClient, fake_service: FakeSecretsManager
    ) -> None:
        """Address a secret by group, type and name and then delete it.

        Parameters
        ----------
        client : SecretsManagerClient
            Client bound to the fake service.
        fake_service : FakeSecretsManager
            Fake service.

        Returns
        -------
        None
            Asserts lookup and deletion.
        """
        secret = _create_arbitrary(client)

        found = client.get_secret_by_name_type(
            "arbitrary", "example-arbitrary-secret", "default"
        ).get_result()
        deleted = client.delete_secret(secret.id)

        assert found.id == secret.id
        assert (
            fake_service.requests[1].url.path
            == "/api/v2/secret_groups/default/secret_types/arbitrary"
            "/secrets/example-arbitrary-secret"
        )
        assert deleted.status_code == 204
        assert deleted.result is None
        with pytest.raises(SecretsManagerNotFoundError):
            client.get_secret(secret.id)

    def test_version_alias_is_a_path_segment(
        self, client: SecretsManagerClient, fake_service: FakeSecretsManager
    ) -> None:
        """Send a version alias where a version id is expected.

        Parameters
        ----------
        client : SecretsManagerClient
            Client bound to the fake service.
        fake_service : FakeSecretsManager
            Fake service.

        Returns
        -------
        None
            Asserts the request path.
        """
        with pytest.raises(SecretsManagerNotFoundError):
            client.get_secret_version("abc", VersionAlias.PREVIOUS)

        assert (
            fake_service.requests[-1].url.path
            == "/api/v2/secrets/abc/versions/previous"
        )

    def test_default_headers(
        self, client: SecretsManagerClient, fake_service: FakeSecretsManager
    ) -> None:
        """Identify the SDK and authenticate every request.

        Parameters
        ----------
        client : SecretsManagerClient
            Client bound to the fake service.
        fake_service : FakeSecretsManager
            Fake service.

        Returns
        -------
        None
            Asserts request headers.
        """
        client.list_secret_groups()

        request = fake_service.requests[0]
        assert request.headers["User-Agent"].startswith("secrets-manager-sdk/")
        assert request.headers["Authorization"] == "Bearer test-token"
        assert request.headers["Accept"] == "application/json"


class TestSecretGroups:
    """Secret group operations."""

    def test_create_and_get(
        self, client: SecretsManagerClient, fake_service: FakeSecretsManager
    ) -> None:
        """Wrap the group fields into the request body.

        Parameters
        ----------
        client : SecretsManagerClient
            Client bound to the fake service.
        fake_service : FakeSecretsManager
            Fake service.

        Returns
        -------
        None
            Asserts the created group.
        """
        group = client.create_secret_group("example-group").get_result()

        assert isinstance(group, SecretGroup)
        assert json.loads(fake_service.requests[0].content) == {"name": "example-group"}
        assert client.get_secret_group(group.id).get_result().name == "example-group"
        assert client.list_secret_groups().get_result().secret_groups[0].id == group.id

    def test_duplicate_name_conflicts(self, client: SecretsManagerClient) -> None:
        """Map a 409 to the conflict error with its trace.

        Parameters
        ----------
        client : SecretsManagerClient
            Client bound to the fake service.

        Returns
        -------
        None
            Asserts the typed error.
        """
        client.create_secret_group("example-group", description="first")

        with pytest.raises(SecretsManagerConflictError) as exc_info:
            client.create_secret_group("example-group")

        assert exc_info.value.status_code == 409
        assert exc_info.value.trace.startswith("trace-")
        assert str(exc_info.value) == "secret group already exists"


class TestLocks:
    """Bulk lock operations."""

    def test_remove_previous_replaces_lock(
        self, client: SecretsManagerClient, fake_service: FakeSecretsManager
    ) -> None:
        """Leave one lock after creating the same lock twice.

        Parameters
        ----------
        client : SecretsManagerClient
            Client bound to the fake service.
        fake_service : FakeSecretsManager
            Fake service.

        Returns
        -------
        None
            Asserts the remaining lock.
        """
        secret = _create_arbitrary(client)
        locks = [SecretLockPrototype(name="lock-example-1")]

        first = client.create_secret_locks_bulk(
            secret.id, locks, mode=LockMode.REMOVE_PREVIOUS
        )
        second = client.create_secret_locks_bulk(
            secret.id, locks, mode=LockMode.REMOVE_PREVIOUS
        )
        listed = client.list_secret_locks(secret.id).get_result()

        assert first.status_code == second.status_code == 201
        assert second.get_result().versions[0].locks == ["lock-example-1"]
        assert [lock.name for lock in listed.locks] == ["lock-example-1"]

    def test_exclusive_mode_conflicts_with_existing_locks(
        self, client: SecretsManagerClient
    ) -> None:
        """Refuse an exclusive lock while other locks exist.

        Parameters
        ----------
        client : SecretsManagerClient
            Client bound to the fake service.

        Returns
        -------
        None
            Asserts the conflict.
        """
        secret = _create_arbitrary(client)
        client.create_secret_locks_bulk(secret.id, [{"name": "lock-a"}])

        with pytest.raises(SecretsManagerConflictError):
            client.create_secret_locks_bulk(
                secret.id, [{"name": "lock-b"}], mode=LockMode.EXCLUSIVE
            )

    def test_delete_locks_by_name(
        self, client: SecretsManagerClient, fake_service: FakeSecretsManager
    ) -> None:
        """Delete selected locks with a comma-joined name filter.

        Parameters
        ----------
        client : SecretsManagerClient
            Client bound to the fake service.
        fake_service : FakeSecretsManager
            Fake service.

        Returns
        -------
        None
            Asserts the remaining locks.
        """
        secret = _create_arbitrary(client)
        client.create_secret_locks_bulk(
            secret.id, [{"name": "lock-a"}, {"name": "lock-b"}, {"name": "lock-c"}]
        )

        client.delete_secret_locks_bulk(secret.id, name=["lock-a", "lock-c"])

        assert fake_service.requests[-1].url.params["name"] == "lock-a,lock-c"
        assert [lock["name"] for lock in fake_service.locks[secret.id]] == ["lock-b"]

    def test_empty_lock_list_is_rejected(
        self, client: SecretsManagerClient, fake_service: FakeSecretsManager
    ) -> None:
        """Require at least one lock before sending.

        Parameters
        ----------
        client : SecretsManagerClient
            Client bound to the fake service.
        fake_service : FakeSecretsManager
            Fake service.

        Returns
        -------
        None
            Asserts client-side validation.
        """
        with pytest.raises(SecretsManagerValidationError):
            client.create_secret_locks_bulk("abc", [])

        assert fake_service.requests == []


class TestConfigurations:
    """Configuration and private CA operations."""

    def test_configuration_name_requires_type_hint(
        self, client: SecretsManagerClient
    ) -> None:
        """Resolve a configuration by name only with its type hint.

        Parameters
        ----------
        client : SecretsManagerClient
            Client bound to the fake service.

        Returns
        -------
        None
            Asserts both outcomes.
        """
        _create_ca_chain(client)

        with pytest.raises(SecretsManagerAPIError) as exc_info:
            client.get_configuration(ROOT_CA)
        root = client.get_configuration(
            ROOT_CA, x_sm_accept_configuration_type=ROOT_CA_TYPE
        ).get_result()

        assert exc_info.value.status_code == 400
        assert isinstance(root, PrivateCertificateConfigurationRootCA)
        assert root.common_name == "ibm.com"

    def test_private_ca_workflow(
        self, client: SecretsManagerClient, fake_service: FakeSecretsManager
    ) -> None:
        """Build a CA chain and issue a private certificate from it.

        Parameters
        ----------
        client : SecretsManagerClient
            Client bound to the fake service.
        fake_service : FakeSecretsManager
            Fake service.

        Returns
        -------
        None
            Asserts every step of the chain.
        """
        _create_ca_chain(client)
        intermediate = client.get_configuration(
            INTERMEDIATE_CA, x_sm_accept_configuration_type=INTERMEDIATE_CA_TYPE
        ).get_result()
        assert isinstance(intermediate, PrivateCertificateConfigurationIntermediateCA)
        assert intermediate.signing_state is SigningState.UNSIGNED

        signed = client.sign_intermediate_ca(
            ROOT_CA, INTERMEDIATE_CA, common_name="ibm.com"
        )
        sign_request = fake_service.requests[-1]
        template = client.create_configuration(
            PrivateCertificateConfigurationTemplatePrototype(
                name=TEMPLATE,
                certificate_authority=INTERMEDIATE_CA,
                allowed_domains=["example.com"],
                allow_subdomains=True,
                max_ttl="2160h",
            )
        )
        certificate = client.create_secret(
            PrivateCertificatePrototype(
                name="example-private-certificate",
                certificate_template=TEMPLATE,
                common_name="example.com",
            )
        )

        assert signed.status_code == 201
        assert isinstance(
            signed.get_result(), PrivateCertificateConfigurationActionSignIntermediate
        )
        assert sign_request.url.path == f"/api/v2/configurations/{ROOT_CA}/actions"
        assert sign_request.headers["X-Sm-Accept-Configuration-Type"] == ROOT_CA_TYPE
        assert json.loads(sign_request.content) == {
            "action_type": "private_cert_configuration_action_sign_intermediate",
            "intermediate_certificate_authority": INTERMEDIATE_CA,
            "common_name": "ibm.com",
        }
        assert template.status_code == 201
        assert isinstance(template.get_result(), PrivateCertificateConfigurationTemplate)
        assert certificate.status_code == 201
        assert isinstance(certificate.get_result(), PrivateCertificate)
        assert certificate.get_result().issuer == INTERMEDIATE_CA

    def test_signed_ca_is_not_signed_again(
        self, client: SecretsManagerClient, fake_service: FakeSecretsManager
    ) -> None:
        """Stop before sending a sign action for a signed CA.

        Parameters
        ----------
        client : SecretsManagerClient
            Client bound to the fake service.
        fake_service : FakeSecretsManager
            Fake service.

        Returns
        -------
        None
            Asserts the precondition error and the absent action.
        """
        _create_ca_chain(client)
        client.sign_intermediate_ca(ROOT_CA, INTERMEDIATE_CA, common_name="ibm.com")
        sent = len(fake_service.requests)

        with pytest.raises(SecretsManagerPreconditionError):
            client.sign_intermediate_ca(ROOT_CA, INTERMEDIATE_CA, common_name="ibm.com")

        assert [request.method for request in fake_service.requests[sent:]] == ["GET"]

    def test_rotate_crl_action(self, client: SecretsManagerClient) -> None:
        """Run a CA action without parameters.

        Parameters
        ----------
        client : SecretsManagerClient
            Client bound to the fake service.

        Returns
        -------
        None
            Asserts the action result.
        """
        _create_ca_chain(client)

        result = client.create_configuration_action(
            ROOT_CA,
            PrivateCertificateConfigurationActionRotateCRLPrototype(),
            x_sm_accept_configuration_type=ROOT_CA_TYPE,
        ).get_result()

        assert result.success is True

    def test_delete_configuration(
        self, client: SecretsManagerClient, fake_service: FakeSecretsManager
    ) -> None:
        """Delete a configuration addressed by name and type.

        Parameters
        ----------
        client : SecretsManagerClient
            Client bound to the fake service.
        fake_service : FakeSecretsManager
            Fake service.

        Returns
        -------
        None
            Asserts the deletion.
        """
        _create_ca_chain(client)

        response = client.delete_configuration(
            INTERMEDIATE_CA, x_sm_accept_configuration_type=INTERMEDIATE_CA_TYPE
        )

        assert response.status_code == 204
        assert INTERMEDIATE_CA not in fake_service.configurations


class TestNotifications:
    """Event Notifications registration."""

    def test_registration_lifecycle(self, client: SecretsManagerClient) -> None:
        """Register, send a test event and unregister.

        Parameters
        ----------
        client : SecretsManagerClient
            Client bound to the fake service.

        Returns
        -------
        None
            Asserts each step.
        """
        crn = "crn:v1:bluemix:public:event-notifications:us-south:a/123::"

        created = client.create_notifications_registration(
            NotificationsRegistrationPrototype(
                event_notifications_instance_crn=crn,
                event_notifications_source_name="Example Secrets Manager",
            )
        )
        fetched = client.get_notifications_registration().get_result()
        tested = client.get_notifications_registration_test()
        deleted = client.delete_notifications_registration()

        assert created.status_code == 201
        assert isinstance(fetched, NotificationsRegistration)
        assert fetched.event_notifications_instance_crn == crn
        assert tested.status_code == 204
        assert deleted.status_code == 204
        with pytest.raises(SecretsManagerNotFoundError):
            client.get_notifications_registration()


class TestClientConstruction:
    """Client configuration and lifecycle."""

    def test_from_env_uses_service_variables(
        self, monkeypatch: pytest.MonkeyPatch, fake_service: FakeSecretsManager
    ) -> None:
        """Build a client from ``SECRETS_MANAGER_*`` variables.

        Parameters
        ----------
        monkeypatch : pytest.MonkeyPatch
            Environment monkeypatch helper.
        fake_service : FakeSecretsManager
            Fake service.

        Returns
        -------
        None
            Asserts the configured client.
        """
        monkeypatch.setenv("SECRETS_MANAGER_URL", FAKE_URL)
        monkeypatch.setenv("SECRETS_MANAGER_AUTH_TYPE", "noauth")

        with SecretsManagerClient.from_env(transport=fake_service.transport()) as client:
            client.list_secret_groups()

        assert "Authorization" not in fake_service.requests[0].headers

    def test_from_env_requires_url(self) -> None:
        """Fail fast when the service URL is not configured.

        Returns
        -------
        None
            Asserts the validation error.
        """
        with pytest.raises(SecretsManagerValidationError, match="SECRETS_MANAGER_URL"):
            SecretsManagerClient.from_env()

    def test_context_manager_closes_client(
        self, fake_service: FakeSecretsManager
    ) -> None:
        """Close the HTTP client on context exit.

        Parameters
        ----------
        fake_service : FakeSecretsManager
            Fake service.

        Returns
        -------
        None
            Asserts the closed client.
        """
        with SecretsManagerClient(
            url=FAKE_URL,
            authenticator=NoAuthAuthenticator(),
            transport=fake_service.transport(),
        ) as client:
            client.list_secret_groups()

        assert client._client.is_closed

    @pytest.mark.parametrize(
        "name",
        sorted(
            name
            for name, member in vars(SecretsManagerClient).items()
            if not name.startswith("_") and callable(member)
        ),
    )
    def test_public_methods_are_documented(self, name: str) -> None:
        """Document every public client method.

        Parameters
        ----------
        name : str
            Method name.

        Returns
        -------
        None
            Asserts a non-empty docstring.
        """
        assert getattr(SecretsManagerClient, name).__doc__
