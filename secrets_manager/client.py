"""Synchronous Python SDK client."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import httpx
from pydantic import BaseModel

from secrets_manager import operations as ops
from secrets_manager.auth import Authenticator
from secrets_manager.config import (
    DEFAULT_SERVICE_NAME,
    build_authenticator,
    load_service_properties,
)
from secrets_manager.pagination import Pager
from secrets_manager.pipeline import Operation, RequestPipeline
from secrets_manager.pki import SIGN_INTERMEDIATE, check_transition
from secrets_manager.retry import RetryPolicy
from secrets_manager.schemas.actions import (
    PrivateCertificateConfigurationActionSignIntermediatePrototype,
)
from secrets_manager.schemas.common import PatchModel, SecretLockPrototype
from secrets_manager.types import DetailedResponse
from secrets_manager.version import __version__

ROOT_CA_CONFIG_TYPE = "private_cert_configuration_root_ca"
INTERMEDIATE_CA_CONFIG_TYPE = "private_cert_configuration_intermediate_ca"

LockInput = SecretLockPrototype | Mapping[str, Any]
PatchInput = PatchModel | Mapping[str, Any]
RecordInput = BaseModel | Mapping[str, Any]


class SecretsManagerClient:
    """Client for the Secrets Manager v2 API.

    Every operation returns a :class:`DetailedResponse` holding the decoded
    result, the HTTP status and the response headers.

    Parameters
    ----------
    url : str
        Service instance base URL.
    authenticator : Authenticator
        Source of bearer tokens.
    timeout : float, default=60.0
        Per-call deadline in seconds.
    retry_policy : RetryPolicy | None, default=None
        Retry bounds. Defaults to :class:`RetryPolicy`.
    transport : httpx.BaseTransport | None, default=None
        Optional transport for tests or advanced usage.
    headers : Mapping[str, str] | None, default=None
        Extra headers sent with every request.
    """

    def __init__(
        self,
        *,
        url: str,
        authenticator: Authenticator,
        timeout: float = 60.0,
        retry_policy: RetryPolicy | None = None,
        transport: httpx.BaseTransport | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self.url = url.rstrip("/")
        self.authenticator = authenticator
        self.timeout = timeout
        default_headers = {
            "User-Agent": f"secrets-manager-sdk/{__version__}",
            "Accept": "application/json",
        }
        default_headers.update(headers or {})
        self._client = httpx.Client(
            base_url=self.url,
            headers=default_headers,
            timeout=self.timeout,
            transport=transport,
        )
        self._pipeline = RequestPipeline(
            self._client,
            authenticator,
            retry_policy=retry_policy,
            timeout=timeout,
        )

    @classmethod
    def from_env(
        cls, service_name: str = DEFAULT_SERVICE_NAME, **kwargs: Any
    ) -> "SecretsManagerClient":
        """Build a client from environment variables or a credentials file.

        Expected variables
        ------------------
        SECRETS_MANAGER_URL
            Required service URL.
        SECRETS_MANAGER_AUTH_TYPE
            ``iam`` (default), ``bearertoken`` or ``noauth``.
        SECRETS_MANAGER_APIKEY
            IAM API key, required for ``iam``.
        SECRETS_MANAGER_AUTH_URL
            Optional IAM endpoint.
        SECRETS_MANAGER_BEARER_TOKEN
            Token, required for ``bearertoken``.

        Parameters
        ----------
        service_name : str, default="secrets_manager"
            Service name; its upper-cased form prefixes the variables.
        **kwargs : Any
            Extra constructor arguments.

        Returns
        -------
        SecretsManagerClient
            Configured SDK client.
        """
        properties = load_service_properties(service_name)
        return cls(
            url=properties["URL"],
            authenticator=build_authenticator(properties),
            **kwargs,
        )

    @property
    def retry_policy(self) -> RetryPolicy:
        """Retry bounds applied to every operation.

        Returns
        -------
        RetryPolicy
            Policy in effect.
        """
        return self._pipeline.retry_policy

    def close(self) -> None:
        """Close the underlying HTTP client.

        Returns
        -------
        None
            Releases HTTP resources.
        """
        self._client.close()
        self.authenticator.close()

    def _call(self, operation: Operation, **options: Any) -> DetailedResponse[Any]:
        return self._pipeline.execute(operation, options)

    # secret groups

    def create_secret_group(
        self, name: str, *, description: str | None = None
    ) -> DetailedResponse[Any]:
        """Create a secret group.

        Parameters
        ----------
        name : str
            Group name, unique within the instance.
        description : str | None, default=None
            Optional description.

        Returns
        -------
        DetailedResponse[SecretGroup]
            Created group.
        """
        return self._call(ops.CREATE_SECRET_GROUP, name=name, description=description)

    def list_secret_groups(self) -> DetailedResponse[Any]:
        """List all secret groups of the instance.

        Returns
        -------
        DetailedResponse[SecretGroupCollection]
            Every group, including ``default``.
        """
        return self._call(ops.LIST_SECRET_GROUPS)

    def get_secret_group(self, id: str) -> DetailedResponse[Any]:
        """Get a secret group.

        Parameters
        ----------
        id : str
            Group identifier.

        Returns
        -------
        DetailedResponse[SecretGroup]
            Group record.
        """
        return self._call(ops.GET_SECRET_GROUP, id=id)

    def update_secret_group(
        self, id: str, secret_group_patch: PatchInput
    ) -> DetailedResponse[Any]:
        """Update a secret group.

        Parameters
        ----------
        id : str
            Group identifier.
        secret_group_patch : SecretGroupPatch | Mapping[str, Any]
            Typed partial record or a ready merge-patch document.

        Returns
        -------
        DetailedResponse[SecretGroup]
            Updated group.
        """
        return self._call(
            ops.UPDATE_SECRET_GROUP, id=id, secret_group_patch=secret_group_patch
        )

    def delete_secret_group(self, id: str) -> DetailedResponse[Any]:
        """Delete an empty secret group.

        Parameters
        ----------
        id : str
            Group identifier.

        Returns
        -------
        DetailedResponse[None]
            Empty result with status 204.
        """
        return self._call(ops.DELETE_SECRET_GROUP, id=id)

    # secrets

    def create_secret(self, secret_prototype: RecordInput) -> DetailedResponse[Any]:
        """Create a secret of any type.

        Parameters
        ----------
        secret_prototype : BaseModel | Mapping[str, Any]
            A registered ``SecretPrototype`` variant, or a mapping carrying
            ``secret_type``.

        Returns
        -------
        DetailedResponse[Secret]
            Created secret, decoded into the variant of its ``secret_type``.
        """
        return self._call(ops.CREATE_SECRET, secret_prototype=secret_prototype)

    def list_secrets(
        self,
        *,
        offset: int | None = None,
        limit: int | None = None,
        sort: str | None = None,
        search: str | None = None,
        groups: Sequence[str] | None = None,
        secret_types: Sequence[str] | None = None,
        match_all_labels: Sequence[str] | None = None,
    ) -> DetailedResponse[Any]:
        """List secret metadata, one page at a time.

        Parameters
        ----------
        offset : int | None, default=None
            Items to skip.
        limit : int | None, default=None
            Page size; the service enforces its own bounds.
        sort : str | None, default=None
            Sort field, prefixed with ``-`` for descending order.
        search : str | None, default=None
            Substring filter.
        groups : Sequence[str] | None, default=None
            Secret group ids.
        secret_types : Sequence[str] | None, default=None
            Secret type discriminators.
        match_all_labels : Sequence[str] | None, default=None
            Labels every returned secret must carry.

        Returns
        -------
        DetailedResponse[SecretMetadataPaginatedCollection]
            Page of mixed-type secret metadata.
        """
        return self._call(
            ops.LIST_SECRETS,
            offset=offset,
            limit=limit,
            sort=sort,
            search=search,
            groups=groups,
            secret_types=secret_types,
            match_all_labels=match_all_labels,
        )

    def get_secret(self, id: str) -> DetailedResponse[Any]:
        """Get a secret with its payload.

        Parameters
        ----------
        id : str
            Secret identifier.

        Returns
        -------
        DetailedResponse[Secret]
            Secret decoded into the variant of its ``secret_type``.
        """
        return self._call(ops.GET_SECRET, id=id)

    def get_secret_by_name_type(
        self, secret_type: str, name: str, secret_group_name: str
    ) -> DetailedResponse[Any]:
        """Get a secret by its name, type and group name.

        Parameters
        ----------
        secret_type : str
            Secret type discriminator, e.g. ``arbitrary``.
        name : str
            Secret name.
        secret_group_name : str
            Name of the group holding the secret.

        Returns
        -------
        DetailedResponse[Secret]
            Matching secret.
        """
        return self._call(
            ops.GET_SECRET_BY_NAME_TYPE,
            secret_type=secret_type,
            name=name,
            secret_group_name=secret_group_name,
        )

    def delete_secret(self, id: str) -> DetailedResponse[Any]:
        """Delete a secret and all of its versions.

        Parameters
        ----------
        id : str
            Secret identifier.

        Returns
        -------
        DetailedResponse[None]
            Empty result with status 204.
        """
        return self._call(ops.DELETE_SECRET, id=id)

    def get_secret_metadata(self, id: str) -> DetailedResponse[Any]:
        """Get the metadata of a secret without its payload.

        Parameters
        ----------
        id : str
            Secret identifier.

        Returns
        -------
        DetailedResponse[SecretMetadata]
            Metadata decoded into the variant of its ``secret_type``.
        """
        return self._call(ops.GET_SECRET_METADATA, id=id)

    def update_secret_metadata(
        self, id: str, secret_metadata_patch: PatchInput
    ) -> DetailedResponse[Any]:
        """Update secret metadata with a merge-patch.

        Parameters
        ----------
        id : str
            Secret identifier.
        secret_metadata_patch : PatchModel | Mapping[str, Any]
            Typed partial record, sent as the fields that were set, or a
            ready merge-patch document sent as is.

        Returns
        -------
        DetailedResponse[SecretMetadata]
            Updated metadata.
        """
        return self._call(
            ops.UPDATE_SECRET_METADATA,
            id=id,
            secret_metadata_patch=secret_metadata_patch,
        )

    def create_secret_action(
        self, id: str, secret_action_prototype: RecordInput
    ) -> DetailedResponse[Any]:
        """Run an action on a secret, such as revoking a private certificate.

        Parameters
        ----------
        id : str
            Secret identifier.
        secret_action_prototype : BaseModel | Mapping[str, Any]
            A registered ``SecretActionPrototype`` variant, or a mapping
            carrying ``action_type``.

        Returns
        -------
        DetailedResponse[SecretAction]
            Action result.
        """
        return self._call(
            ops.CREATE_SECRET_ACTION,
            id=id,
            secret_action_prototype=secret_action_prototype,
        )

    # secret versions

    def create_secret_version(
        self, secret_id: str, secret_version_prototype: RecordInput
    ) -> DetailedResponse[Any]:
        """Create a new version of a secret.

        Parameters
        ----------
        secret_id : str
            Secret identifier.
        secret_version_prototype : BaseModel | Mapping[str, Any]
            Version prototype matching the secret's type.

        Returns
        -------
        DetailedResponse[SecretVersion]
            Created version.
        """
        return self._call(
            ops.CREATE_SECRET_VERSION,
            secret_id=secret_id,
            secret_version_prototype=secret_version_prototype,
        )

    def list_secret_versions(self, secret_id: str) -> DetailedResponse[Any]:
        """List the versions of a secret.

        Parameters
        ----------
        secret_id : str
            Secret identifier.

        Returns
        -------
        DetailedResponse[SecretVersionMetadataCollection]
            Version metadata, newest first.
        """
        return self._call(ops.LIST_SECRET_VERSIONS, secret_id=secret_id)

    def get_secret_version(self, secret_id: str, id: str) -> DetailedResponse[Any]:
        """Get a version; ``id`` may be a version id, ``current`` or ``previous``."""
        return self._call(ops.GET_SECRET_VERSION, secret_id=secret_id, id=id)

    def delete_secret_version_data(
        self, secret_id: str, id: str
    ) -> DetailedResponse[Any]:
        """Erase the payload of a version while keeping its metadata.

        Parameters
        ----------
        secret_id : str
            Secret identifier.
        id : str
            Version id or alias.

        Returns
        -------
        DetailedResponse[None]
            Empty result with status 204.
        """
        return self._call(ops.DELETE_SECRET_VERSION_DATA, secret_id=secret_id, id=id)

    def get_secret_version_metadata(
        self, secret_id: str, id: str
    ) -> DetailedResponse[Any]:
        """Get the metadata of a version.

        Parameters
        ----------
        secret_id : str
            Secret identifier.
        id : str
            Version id or alias.

        Returns
        -------
        DetailedResponse[SecretVersionMetadata]
            Version metadata.
        """
        return self._call(ops.GET_SECRET_VERSION_METADATA, secret_id=secret_id, id=id)

    def update_secret_version_metadata(
        self, secret_id: str, id: str, secret_version_metadata_patch: PatchInput
    ) -> DetailedResponse[Any]:
        """Update version metadata with a merge-patch.

        Parameters
        ----------
        secret_id : str
            Secret identifier.
        id : str
            Version id or alias.
        secret_version_metadata_patch : PatchModel | Mapping[str, Any]
            Typed partial record or a ready merge-patch document.

        Returns
        -------
        DetailedResponse[SecretVersionMetadata]
            Updated version metadata.
        """
        return self._call(
            ops.UPDATE_SECRET_VERSION_METADATA,
            secret_id=secret_id,
            id=id,
            secret_version_metadata_patch=secret_version_metadata_patch,
        )

    def create_secret_version_action(
        self, secret_id: str, id: str, secret_version_action_prototype: RecordInput
    ) -> DetailedResponse[Any]:
        """Run an action on a version, such as revoking its certificate.

        Parameters
        ----------
        secret_id : str
            Secret identifier.
        id : str
            Version id or alias.
        secret_version_action_prototype : BaseModel | Mapping[str, Any]
            Version action prototype.

        Returns
        -------
        DetailedResponse[SecretVersionAction]
            Action result.
        """
        return self._call(
            ops.CREATE_SECRET_VERSION_ACTION,
            secret_id=secret_id,
            id=id,
            secret_version_action_prototype=secret_version_action_prototype,
        )

    # locks

    def list_secrets_locks(
        self,
        *,
        offset: int | None = None,
        limit: int | None = None,
        search: str | None = None,
        groups: Sequence[str] | None = None,
    ) -> DetailedResponse[Any]:
        """List lock summaries across all secrets, one page at a time.

        Parameters
        ----------
        offset : int | None, default=None
            Items to skip.
        limit : int | None, default=None
            Page size.
        search : str | None, default=None
            Substring filter on lock names.
        groups : Sequence[str] | None, default=None
            Secret group ids.

        Returns
        -------
        DetailedResponse[SecretLocksPaginatedCollection]
            Page of per-secret lock summaries.
        """
        return self._call(
            ops.LIST_SECRETS_LOCKS,
            offset=offset,
            limit=limit,
            search=search,
            groups=groups,
        )

    def list_secret_locks(
        self,
        id: str,
        *,
        offset: int | None = None,
        limit: int | None = None,
        sort: str | None = None,
        search: str | None = None,
    ) -> DetailedResponse[Any]:
        """List the locks of a secret, one page at a time.

        Parameters
        ----------
        id : str
            Secret identifier.
        offset : int | None, default=None
            Items to skip.
        limit : int | None, default=None
            Page size.
        sort : str | None, default=None
            Sort field, prefixed with ``-`` for descending order.
        search : str | None, default=None
            Substring filter on lock names.

        Returns
        -------
        DetailedResponse[SecretLockPaginatedCollection]
            Page of locks across the secret's versions.
        """
        return self._call(
            ops.LIST_SECRET_LOCKS,
            id=id,
            offset=offset,
            limit=limit,
            sort=sort,
            search=search,
        )

    def list_secret_version_locks(
        self,
        secret_id: str,
        id: str,
        *,
        offset: int | None = None,
        limit: int | None = None,
        sort: str | None = None,
        search: str | None = None,
    ) -> DetailedResponse[Any]:
        """List the locks of one version.

        Takes the paging and filter options of :meth:`list_secret_locks`.

        Returns
        -------
        DetailedResponse[SecretLockPaginatedCollection]
            Page of locks on the version.
        """
        return self._call(
            ops.LIST_SECRET_VERSION_LOCKS,
            secret_id=secret_id,
            id=id,
            offset=offset,
            limit=limit,
            sort=sort,
            search=search,
        )

    def create_secret_locks_bulk(
        self, id: str, locks: Sequence[LockInput], *, mode: str | None = None
    ) -> DetailedResponse[Any]:
        """Create locks on the current version of a secret.

        Parameters
        ----------
        id : str
            Secret identifier.
        locks : Sequence[SecretLockPrototype | Mapping[str, Any]]
            Locks to create.
        mode : str | None, default=None
            Lock mode, see :class:`~secrets_manager.types.LockMode`. Any
            string is sent unchanged.

        Returns
        -------
        DetailedResponse[SecretLocks]
            Lock summary of the secret.
        """
        return self._call(
            ops.CREATE_SECRET_LOCKS_BULK, id=id, locks=list(locks), mode=mode
        )

    def create_secret_version_locks_bulk(
        self,
        secret_id: str,
        id: str,
        locks: Sequence[LockInput],
        *,
        mode: str | None = None,
    ) -> DetailedResponse[Any]:
        """Create locks on one version of a secret.

        Parameters
        ----------
        secret_id : str
            Secret identifier.
        id : str
            Version id or alias.
        locks : Sequence[SecretLockPrototype | Mapping[str, Any]]
            Locks to create.
        mode : str | None, default=None
            Lock mode, sent unchanged.

        Returns
        -------
        DetailedResponse[SecretLocks]
            Lock summary of the secret.
        """
        return self._call(
            ops.CREATE_SECRET_VERSION_LOCKS_BULK,
            secret_id=secret_id,
            id=id,
            locks=list(locks),
            mode=mode,
        )

    def delete_secret_locks_bulk(
        self, id: str, *, name: Sequence[str] | None = None
    ) -> DetailedResponse[Any]:
        """Delete locks of a secret by name; all of them when ``name`` is omitted."""
        return self._call(ops.DELETE_SECRET_LOCKS_BULK, id=id, name=name)

    def delete_secret_version_locks_bulk(
        self, secret_id: str, id: str, *, name: Sequence[str] | None = None
    ) -> DetailedResponse[Any]:
        """Delete locks of one version by name; all of them when ``name`` is omitted."""
        return self._call(
            ops.DELETE_SECRET_VERSION_LOCKS_BULK,
            secret_id=secret_id,
            id=id,
            name=name,
        )

    # configurations

    def create_configuration(
        self, configuration_prototype: RecordInput
    ) -> DetailedResponse[Any]:
        """Create a configuration such as a CA, template or IAM setting.

        Parameters
        ----------
        configuration_prototype : BaseModel | Mapping[str, Any]
            A registered ``ConfigurationPrototype`` variant, or a mapping
            carrying ``config_type``.

        Returns
        -------
        DetailedResponse[Configuration]
            Created configuration.
        """
        return self._call(
            ops.CREATE_CONFIGURATION, configuration_prototype=configuration_prototype
        )

    def list_configurations(
        self,
        *,
        offset: int | None = None,
        limit: int | None = None,
        sort: str | None = None,
        search: str | None = None,
        secret_types: Sequence[str] | None = None,
    ) -> DetailedResponse[Any]:
        """List configuration metadata, one page at a time.

        Parameters
        ----------
        offset : int | None, default=None
            Items to skip.
        limit : int | None, default=None
            Page size.
        sort : str | None, default=None
            Sort field, prefixed with ``-`` for descending order.
        search : str | None, default=None
            Substring filter.
        secret_types : Sequence[str] | None, default=None
            Secret types the configurations apply to.

        Returns
        -------
        DetailedResponse[ConfigurationMetadataPaginatedCollection]
            Page of mixed-type configuration metadata.
        """
        return self._call(
            ops.LIST_CONFIGURATIONS,
            offset=offset,
            limit=limit,
            sort=sort,
            search=search,
            secret_types=secret_types,
        )

    def get_configuration(
        self, name: str, *, x_sm_accept_configuration_type: str | None = None
    ) -> DetailedResponse[Any]:
        """Get a configuration by name.

        Parameters
        ----------
        name : str
            Configuration name.
        x_sm_accept_configuration_type : str | None, default=None
            ``config_type`` of the configuration. The service requires it to
            resolve the name.

        Returns
        -------
        DetailedResponse[Configuration]
            Configuration decoded into the variant of its ``config_type``.
        """
        return self._call(
            ops.GET_CONFIGURATION,
            name=name,
            x_sm_accept_configuration_type=x_sm_accept_configuration_type,
        )

    def update_configuration(
        self,
        name: str,
        configuration_patch: PatchInput,
        *,
        x_sm_accept_configuration_type: str | None = None,
    ) -> DetailedResponse[Any]:
        """Update a configuration with a merge-patch.

        Parameters
        ----------
        name : str
            Configuration name.
        configuration_patch : PatchModel | Mapping[str, Any]
            Typed partial record or a ready merge-patch document.
        x_sm_accept_configuration_type : str | None, default=None
            ``config_type`` of the configuration.

        Returns
        -------
        DetailedResponse[Configuration]
            Updated configuration.
        """
        return self._call(
            ops.UPDATE_CONFIGURATION,
            name=name,
            configuration_patch=configuration_patch,
            x_sm_accept_configuration_type=x_sm_accept_configuration_type,
        )

    def delete_configuration(
        self, name: str, *, x_sm_accept_configuration_type: str | None = None
    ) -> DetailedResponse[Any]:
        """Delete a configuration.

        Parameters
        ----------
        name : str
            Configuration name.
        x_sm_accept_configuration_type : str | None, default=None
            ``config_type`` of the configuration.

        Returns
        -------
        DetailedResponse[None]
            Empty result with status 204.
        """
        return self._call(
            ops.DELETE_CONFIGURATION,
            name=name,
            x_sm_accept_configuration_type=x_sm_accept_configuration_type,
        )

    def create_configuration_action(
        self,
        name: str,
        config_action_prototype: RecordInput,
        *,
        x_sm_accept_configuration_type: str | None = None,
    ) -> DetailedResponse[Any]:
        """Run an action on a configuration, such as signing a CSR.

        No signing-state check is made here; :meth:`sign_intermediate_ca`
        adds one for the most common CA action.

        Parameters
        ----------
        name : str
            Configuration name.
        config_action_prototype : BaseModel | Mapping[str, Any]
            A registered ``ConfigurationActionPrototype`` variant, or a
            mapping carrying ``action_type``.
        x_sm_accept_configuration_type : str | None, default=None
            ``config_type`` of the configuration.

        Returns
        -------
        DetailedResponse[ConfigurationAction]
            Action result.
        """
        return self._call(
            ops.CREATE_CONFIGURATION_ACTION,
            name=name,
            config_action_prototype=config_action_prototype,
            x_sm_accept_configuration_type=x_sm_accept_configuration_type,
        )

    def sign_intermediate_ca(
        self,
        name: str,
        intermediate_certificate_authority: str,
        *,
        x_sm_accept_configuration_type: str = ROOT_CA_CONFIG_TYPE,
        **signing_parameters: Any,
    ) -> DetailedResponse[Any]:
        """Sign an intermediate CA with the CA called ``name``.

        The intermediate CA is fetched first and must still be unsigned.

        Parameters
        ----------
        name : str
            Signing CA, usually the root CA.
        intermediate_certificate_authority : str
            Intermediate CA to sign.
        x_sm_accept_configuration_type : str, default="private_cert_configuration_root_ca"
            ``config_type`` of the signing CA.
        **signing_parameters : Any
            Certificate parameters such as ``common_name`` or ``ttl``.

        Returns
        -------
        DetailedResponse[ConfigurationAction]
            Sign-intermediate action result.
        """
        intermediate = self.get_configuration(
            intermediate_certificate_authority,
            x_sm_accept_configuration_type=INTERMEDIATE_CA_CONFIG_TYPE,
        ).get_result()
        check_transition(
            getattr(intermediate, "signing_state", None),
            SIGN_INTERMEDIATE,
            name=intermediate_certificate_authority,
        )
        prototype = PrivateCertificateConfigurationActionSignIntermediatePrototype(
            intermediate_certificate_authority=intermediate_certificate_authority,
            **signing_parameters,
        )
        return self.create_configuration_action(
            name,
            prototype,
            x_sm_accept_configuration_type=x_sm_accept_configuration_type,
        )

    # notifications

    def create_notifications_registration(
        self, notifications_registration_prototype: RecordInput
    ) -> DetailedResponse[Any]:
        """Register an Event Notifications instance for this service.

        Parameters
        ----------
        notifications_registration_prototype : BaseModel | Mapping[str, Any]
            Instance CRN with its source name and description.

        Returns
        -------
        DetailedResponse[NotificationsRegistration]
            Stored registration.
        """
        return self._call(
            ops.CREATE_NOTIFICATIONS_REGISTRATION,
            notifications_registration_prototype=notifications_registration_prototype,
        )

    def get_notifications_registration(self) -> DetailedResponse[Any]:
        """Get the current Event Notifications registration.

        Returns
        -------
        DetailedResponse[NotificationsRegistration]
            Stored registration.
        """
        return self._call(ops.GET_NOTIFICATIONS_REGISTRATION)

    def delete_notifications_registration(self) -> DetailedResponse[Any]:
        """Remove the Event Notifications registration.

        Returns
        -------
        DetailedResponse[None]
            Empty result with status 204.
        """
        return self._call(ops.DELETE_NOTIFICATIONS_REGISTRATION)

    def get_notifications_registration_test(self) -> DetailedResponse[Any]:
        """Ask the service to send a test event to the registered instance."""
        return self._call(ops.GET_NOTIFICATIONS_REGISTRATION_TEST)

    # pagers

    def secrets_pager(
        self,
        *,
        limit: int | None = None,
        sort: str | None = None,
        search: str | None = None,
        groups: Sequence[str] | None = None,
        secret_types: Sequence[str] | None = None,
        match_all_labels: Sequence[str] | None = None,
        start_offset: int | None = None,
    ) -> Pager[Any]:
        """Return a pager over secret metadata.

        Parameters
        ----------
        limit : int | None, default=None
            Page size.
        start_offset : int | None, default=None
            Offset of the first request, to resume an earlier iteration.

        Returns
        -------
        Pager
            Pager yielding ``SecretMetadata`` variants.
        """

        def fetch(offset: int | None) -> Any:
            return self.list_secrets(
                offset=offset,
                limit=limit,
                sort=sort,
                search=search,
                groups=groups,
                secret_types=secret_types,
                match_all_labels=match_all_labels,
            ).get_result()

        return Pager(fetch, "secrets", start_offset=start_offset, name="secrets_pager")

    def secrets_locks_pager(
        self,
        *,
        limit: int | None = None,
        search: str | None = None,
        groups: Sequence[str] | None = None,
        start_offset: int | None = None,
    ) -> Pager[Any]:
        """Return a pager over lock summaries of all secrets.

        Returns
        -------
        Pager
            Pager yielding ``SecretLocks`` records.
        """

        def fetch(offset: int | None) -> Any:
            return self.list_secrets_locks(
                offset=offset, limit=limit, search=search, groups=groups
            ).get_result()

        return Pager(
            fetch, "secrets_locks", start_offset=start_offset, name="secrets_locks_pager"
        )

    def secret_locks_pager(
        self,
        id: str,
        *,
        limit: int | None = None,
        sort: str | None = None,
        search: str | None = None,
        start_offset: int | None = None,
    ) -> Pager[Any]:
        """Return a pager over the locks of a secret.

        Parameters
        ----------
        id : str
            Secret identifier.
        limit : int | None, default=None
            Page size.
        start_offset : int | None, default=None
            Offset of the first request.

        Returns
        -------
        Pager
            Pager yielding ``SecretLock`` records.
        """

        def fetch(offset: int | None) -> Any:
            return self.list_secret_locks(
                id, offset=offset, limit=limit, sort=sort, search=search
            ).get_result()

        return Pager(fetch, "locks", start_offset=start_offset, name="secret_locks_pager")

    def secret_version_locks_pager(
        self,
        secret_id: str,
        id: str,
        *,
        limit: int | None = None,
        sort: str | None = None,
        search: str | None = None,
        start_offset: int | None = None,
    ) -> Pager[Any]:
        """Return a pager over the locks of one version.

        Returns
        -------
        Pager
            Pager yielding ``SecretLock`` records.
        """

        def fetch(offset: int | None) -> Any:
            return self.list_secret_version_locks(
                secret_id, id, offset=offset, limit=limit, sort=sort, search=search
            ).get_result()

        return Pager(
            fetch,
            "locks",
            start_offset=start_offset,
            name="secret_version_locks_pager",
        )

    def configurations_pager(
        self,
        *,
        limit: int | None = None,
        sort: str | None = None,
        search: str | None = None,
        secret_types: Sequence[str] | None = None,
        start_offset: int | None = None,
    ) -> Pager[Any]:
        """Return a pager over configuration metadata.

        Parameters
        ----------
        limit : int | None, default=None
            Page size.
        start_offset : int | None, default=None
            Offset of the first request.

        Returns
        -------
        Pager
            Pager yielding ``ConfigurationMetadata`` variants.
        """

        def fetch(offset: int | None) -> Any:
            return self.list_configurations(
                offset=offset,
                limit=limit,
                sort=sort,
                search=search,
                secret_types=secret_types,
            ).get_result()

        return Pager(
            fetch,
            "configurations",
            start_offset=start_offset,
            name="configurations_pager",
        )

    def __enter__(self) -> "SecretsManagerClient":
        """Enter the client context.

        Returns
        -------
        SecretsManagerClient
            This client.
        """
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        """Close the client on context exit.

        Parameters
        ----------
        exc_type : type[BaseException] | None
            Exception type if raised.
        exc_value : BaseException | None
            Exception instance if raised.
        traceback : object | None
            Exception traceback if raised.

        Returns
        -------
        None
            Closes the underlying HTTP client.
        """
        _ = (exc_type, exc_value, traceback)
        self.close()
