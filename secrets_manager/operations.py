"""Endpoint table of the Secrets Manager v2 API."""

from secrets_manager.pipeline import BodyKind, Operation
from secrets_manager.schemas.common import (
    NotificationsRegistration,
    SecretGroup,
    SecretGroupCollection,
    SecretLockPaginatedCollection,
    SecretLocks,
    SecretLocksPaginatedCollection,
)
from secrets_manager.schemas.configurations import (
    ConfigurationMetadataPaginatedCollection,
)
from secrets_manager.schemas.secrets import SecretMetadataPaginatedCollection
from secrets_manager.schemas.versions import SecretVersionMetadataCollection

CONFIGURATION_TYPE_HEADER = "X-Sm-Accept-Configuration-Type"
_CONFIGURATION_HINT = (("x_sm_accept_configuration_type", CONFIGURATION_TYPE_HEADER),)

_SECRET = "/api/v2/secrets/{id}"
_VERSION = "/api/v2/secrets/{secret_id}/versions/{id}"
_CONFIGURATION = "/api/v2/configurations/{name}"
_NOTIFICATIONS = "/api/v2/notifications_registration"

# secret groups

CREATE_SECRET_GROUP = Operation(
    name="create_secret_group",
    method="POST",
    path="/api/v2/secret_groups",
    success_status=201,
    body=BodyKind.ENVELOPE,
    envelope=("name", "description"),
    required=("name",),
    response_model=SecretGroup,
)
LIST_SECRET_GROUPS = Operation(
    name="list_secret_groups",
    method="GET",
    path="/api/v2/secret_groups",
    response_model=SecretGroupCollection,
)
GET_SECRET_GROUP = Operation(
    name="get_secret_group",
    method="GET",
    path="/api/v2/secret_groups/{id}",
    response_model=SecretGroup,
)
UPDATE_SECRET_GROUP = Operation(
    name="update_secret_group",
    method="PATCH",
    path="/api/v2/secret_groups/{id}",
    body=BodyKind.PATCH,
    body_param="secret_group_patch",
    required=("secret_group_patch",),
    response_model=SecretGroup,
)
DELETE_SECRET_GROUP = Operation(
    name="delete_secret_group",
    method="DELETE",
    path="/api/v2/secret_groups/{id}",
    success_status=204,
)

# secrets

CREATE_SECRET = Operation(
    name="create_secret",
    method="POST",
    path="/api/v2/secrets",
    success_status=201,
    body=BodyKind.MODEL,
    body_param="secret_prototype",
    body_family="SecretPrototype",
    required=("secret_prototype",),
    response_family="Secret",
)
LIST_SECRETS = Operation(
    name="list_secrets",
    method="GET",
    path="/api/v2/secrets",
    query=(
        "offset",
        "limit",
        "sort",
        "search",
        "groups",
        "secret_types",
        "match_all_labels",
    ),
    response_model=SecretMetadataPaginatedCollection,
)
GET_SECRET = Operation(
    name="get_secret",
    method="GET",
    path=_SECRET,
    response_family="Secret",
)
GET_SECRET_BY_NAME_TYPE = Operation(
    name="get_secret_by_name_type",
    method="GET",
    path=(
        "/api/v2/secret_groups/{secret_group_name}"
        "/secret_types/{secret_type}/secrets/{name}"
    ),
    response_family="Secret",
)
DELETE_SECRET = Operation(
    name="delete_secret",
    method="DELETE",
    path=_SECRET,
    success_status=204,
)
GET_SECRET_METADATA = Operation(
    name="get_secret_metadata",
    method="GET",
    path=f"{_SECRET}/metadata",
    response_family="SecretMetadata",
)
UPDATE_SECRET_METADATA = Operation(
    name="update_secret_metadata",
    method="PATCH",
    path=f"{_SECRET}/metadata",
    body=BodyKind.PATCH,
    body_param="secret_metadata_patch",
    required=("secret_metadata_patch",),
    response_family="SecretMetadata",
)
CREATE_SECRET_ACTION = Operation(
    name="create_secret_action",
    method="POST",
    path=f"{_SECRET}/actions",
    success_status=201,
    body=BodyKind.MODEL,
    body_param="secret_action_prototype",
    body_family="SecretActionPrototype",
    required=("secret_action_prototype",),
    response_family="SecretAction",
)

# secret versions

CREATE_SECRET_VERSION = Operation(
    name="create_secret_version",
    method="POST",
    path="/api/v2/secrets/{secret_id}/versions",
    success_status=201,
    body=BodyKind.MODEL,
    body_param="secret_version_prototype",
    body_family="SecretVersionPrototype",
    required=("secret_version_prototype",),
    response_family="SecretVersion",
)
LIST_SECRET_VERSIONS = Operation(
    name="list_secret_versions",
    method="GET",
    path="/api/v2/secrets/{secret_id}/versions",
    response_model=SecretVersionMetadataCollection,
)
GET_SECRET_VERSION = Operation(
    name="get_secret_version",
    method="GET",
    path=_VERSION,
    response_family="SecretVersion",
)
DELETE_SECRET_VERSION_DATA = Operation(
    name="delete_secret_version_data",
    method="DELETE",
    path=f"{_VERSION}/secret_data",
    success_status=204,
)
GET_SECRET_VERSION_METADATA = Operation(
    name="get_secret_version_metadata",
    method="GET",
    path=f"{_VERSION}/metadata",
    response_family="SecretVersionMetadata",
)
UPDATE_SECRET_VERSION_METADATA = Operation(
    name="update_secret_version_metadata",
    method="PATCH",
    path=f"{_VERSION}/metadata",
    body=BodyKind.PATCH,
    body_param="secret_version_metadata_patch",
    required=("secret_version_metadata_patch",),
    response_family="SecretVersionMetadata",
)
CREATE_SECRET_VERSION_ACTION = Operation(
    name="create_secret_version_action",
    method="POST",
    path=f"{_VERSION}/actions",
    success_status=201,
    body=BodyKind.MODEL,
    body_param="secret_version_action_prototype",
    body_family="SecretVersionActionPrototype",
    required=("secret_version_action_prototype",),
    response_family="SecretVersionAction",
)

# locks

LIST_SECRETS_LOCKS = Operation(
    name="list_secrets_locks",
    method="GET",
    path="/api/v2/secrets_locks",
    query=("offset", "limit", "search", "groups"),
    response_model=SecretLocksPaginatedCollection,
)
LIST_SECRET_LOCKS = Operation(
    name="list_secret_locks",
    method="GET",
    path=f"{_SECRET}/locks",
    query=("offset", "limit", "sort", "search"),
    response_model=SecretLockPaginatedCollection,
)
LIST_SECRET_VERSION_LOCKS = Operation(
    name="list_secret_version_locks",
    method="GET",
    path=f"{_VERSION}/locks",
    query=("offset", "limit", "sort", "search"),
    response_model=SecretLockPaginatedCollection,
)
CREATE_SECRET_LOCKS_BULK = Operation(
    name="create_secret_locks_bulk",
    method="POST",
    path=f"{_SECRET}/locks_bulk",
    success_status=201,
    query=("mode",),
    body=BodyKind.ENVELOPE,
    envelope=("locks",),
    required=("locks",),
    response_model=SecretLocks,
)
CREATE_SECRET_VERSION_LOCKS_BULK = Operation(
    name="create_secret_version_locks_bulk",
    method="POST",
    path=f"{_VERSION}/locks_bulk",
    success_status=201,
    query=("mode",),
    body=BodyKind.ENVELOPE,
    envelope=("locks",),
    required=("locks",),
    response_model=SecretLocks,
)
DELETE_SECRET_LOCKS_BULK = Operation(
    name="delete_secret_locks_bulk",
    method="DELETE",
    path=f"{_SECRET}/locks_bulk",
    query=("name",),
    response_model=SecretLocks,
)
DELETE_SECRET_VERSION_LOCKS_BULK = Operation(
    name="delete_secret_version_locks_bulk",
    method="DELETE",
    path=f"{_VERSION}/locks_bulk",
    query=("name",),
    response_model=SecretLocks,
)

# configurations

CREATE_CONFIGURATION = Operation(
    name="create_configuration",
    method="POST",
    path="/api/v2/configurations",
    success_status=201,
    body=BodyKind.MODEL,
    body_param="configuration_prototype",
    body_family="ConfigurationPrototype",
    required=("configuration_prototype",),
    response_family="Configuration",
)
LIST_CONFIGURATIONS = Operation(
    name="list_configurations",
    method="GET",
    path="/api/v2/configurations",
    query=("offset", "limit", "sort", "search", "secret_types"),
    response_model=ConfigurationMetadataPaginatedCollection,
)
GET_CONFIGURATION = Operation(
    name="get_configuration",
    method="GET",
    path=_CONFIGURATION,
    headers=_CONFIGURATION_HINT,
    response_family="Configuration",
)
UPDATE_CONFIGURATION = Operation(
    name="update_configuration",
    method="PATCH",
    path=_CONFIGURATION,
    headers=_CONFIGURATION_HINT,
    body=BodyKind.PATCH,
    body_param="configuration_patch",
    required=("configuration_patch",),
    response_family="Configuration",
)
DELETE_CONFIGURATION = Operation(
    name="delete_configuration",
    method="DELETE",
    path=_CONFIGURATION,
    success_status=204,
    headers=_CONFIGURATION_HINT,
)
CREATE_CONFIGURATION_ACTION = Operation(
    name="create_configuration_action",
    method="POST",
    path=f"{_CONFIGURATION}/actions",
    success_status=201,
    headers=_CONFIGURATION_HINT,
    body=BodyKind.MODEL,
    body_param="config_action_prototype",
    body_family="ConfigurationActionPrototype",
    required=("config_action_prototype",),
    response_family="ConfigurationAction",
)

# notifications

CREATE_NOTIFICATIONS_REGISTRATION = Operation(
    name="create_notifications_registration",
    method="POST",
    path=_NOTIFICATIONS,
    success_status=201,
    body=BodyKind.MODEL,
    body_param="notifications_registration_prototype",
    required=("notifications_registration_prototype",),
    response_model=NotificationsRegistration,
)
GET_NOTIFICATIONS_REGISTRATION = Operation(
    name="get_notifications_registration",
    method="GET",
    path=_NOTIFICATIONS,
    response_model=NotificationsRegistration,
)
DELETE_NOTIFICATIONS_REGISTRATION = Operation(
    name="delete_notifications_registration",
    method="DELETE",
    path=_NOTIFICATIONS,
    success_status=204,
)
GET_NOTIFICATIONS_REGISTRATION_TEST = Operation(
    name="get_notifications_registration_test",
    method="GET",
    path=f"{_NOTIFICATIONS}/test",
    success_status=204,
)

OPERATIONS: dict[str, Operation] = {
    operation.name: operation
    for operation in (
        CREATE_SECRET_GROUP,
        LIST_SECRET_GROUPS,
        GET_SECRET_GROUP,
        UPDATE_SECRET_GROUP,
        DELETE_SECRET_GROUP,
        CREATE_SECRET,
        LIST_SECRETS,
        GET_SECRET,
        GET_SECRET_BY_NAME_TYPE,
        DELETE_SECRET,
        GET_SECRET_METADATA,
        UPDATE_SECRET_METADATA,
        CREATE_SECRET_ACTION,
        CREATE_SECRET_VERSION,
        LIST_SECRET_VERSIONS,
        GET_SECRET_VERSION,
        DELETE_SECRET_VERSION_DATA,
        GET_SECRET_VERSION_METADATA,
        UPDATE_SECRET_VERSION_METADATA,
        CREATE_SECRET_VERSION_ACTION,
        LIST_SECRETS_LOCKS,
        LIST_SECRET_LOCKS,
        LIST_SECRET_VERSION_LOCKS,
        CREATE_SECRET_LOCKS_BULK,
        CREATE_SECRET_VERSION_LOCKS_BULK,
        DELETE_SECRET_LOCKS_BULK,
        DELETE_SECRET_VERSION_LOCKS_BULK,
        CREATE_CONFIGURATION,
        LIST_CONFIGURATIONS,
        GET_CONFIGURATION,
        UPDATE_CONFIGURATION,
        DELETE_CONFIGURATION,
        CREATE_CONFIGURATION_ACTION,
        CREATE_NOTIFICATIONS_REGISTRATION,
        GET_NOTIFICATIONS_REGISTRATION,
        DELETE_NOTIFICATIONS_REGISTRATION,
        GET_NOTIFICATIONS_REGISTRATION_TEST,
    )
}
