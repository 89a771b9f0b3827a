"""Wire record catalogue.

Importing this package registers every variant and freezes the registry.
"""

from secrets_manager.registry import REGISTRY
from secrets_manager.schemas import actions, common, configurations, secrets, versions
from secrets_manager.schemas.actions import (
    PrivateCertificateActionRevokePrototype,
    PrivateCertificateConfigurationActionRevokePrototype,
    PrivateCertificateConfigurationActionRotateCRLPrototype,
    PrivateCertificateConfigurationActionSetSignedPrototype,
    PrivateCertificateConfigurationActionSignCSRPrototype,
    PrivateCertificateConfigurationActionSignIntermediatePrototype,
    PrivateCertificateVersionActionRevokePrototype,
    PublicCertificateActionValidateManualDNSPrototype,
)
from secrets_manager.schemas.common import (
    APIModel,
    ErrorResponse,
    NotificationsRegistration,
    NotificationsRegistrationPrototype,
    PaginatedCollection,
    PatchModel,
    RotationPolicy,
    SecretGroup,
    SecretGroupCollection,
    SecretGroupPatch,
    SecretGroupPrototype,
    SecretLock,
    SecretLockPaginatedCollection,
    SecretLockPrototype,
    SecretLocks,
    SecretLocksPaginatedCollection,
    ServiceErrorDetail,
)
from secrets_manager.schemas.configurations import (
    ConfigurationMetadataPaginatedCollection,
    PrivateCertificateConfigurationIntermediateCAPrototype,
    PrivateCertificateConfigurationRootCAPrototype,
    PrivateCertificateConfigurationTemplatePrototype,
)
from secrets_manager.schemas.secrets import (
    ArbitrarySecretMetadataPatch,
    ArbitrarySecretPrototype,
    KVSecretPrototype,
    PrivateCertificatePrototype,
    SecretMetadataPaginatedCollection,
    UsernamePasswordSecretPrototype,
)
from secrets_manager.schemas.versions import (
    SecretVersionMetadataCollection,
    SecretVersionMetadataPatch,
)

REGISTRY.freeze()

__all__ = [
    "APIModel",
    "ArbitrarySecretMetadataPatch",
    "ArbitrarySecretPrototype",
    "ConfigurationMetadataPaginatedCollection",
    "ErrorResponse",
    "KVSecretPrototype",
    "NotificationsRegistration",
    "NotificationsRegistrationPrototype",
    "PaginatedCollection",
    "PatchModel",
    "PrivateCertificateActionRevokePrototype",
    "PrivateCertificateConfigurationActionRevokePrototype",
    "PrivateCertificateConfigurationActionRotateCRLPrototype",
    "PrivateCertificateConfigurationActionSetSignedPrototype",
    "PrivateCertificateConfigurationActionSignCSRPrototype",
    "PrivateCertificateConfigurationActionSignIntermediatePrototype",
    "PrivateCertificateConfigurationIntermediateCAPrototype",
    "PrivateCertificateConfigurationRootCAPrototype",
    "PrivateCertificateConfigurationTemplatePrototype",
    "PrivateCertificatePrototype",
    "PrivateCertificateVersionActionRevokePrototype",
    "PublicCertificateActionValidateManualDNSPrototype",
    "RotationPolicy",
    "SecretGroup",
    "SecretGroupCollection",
    "SecretGroupPatch",
    "SecretGroupPrototype",
    "SecretLock",
    "SecretLockPaginatedCollection",
    "SecretLockPrototype",
    "SecretLocks",
    "SecretLocksPaginatedCollection",
    "SecretMetadataPaginatedCollection",
    "SecretVersionMetadataCollection",
    "SecretVersionMetadataPatch",
    "ServiceErrorDetail",
    "UsernamePasswordSecretPrototype",
    "actions",
    "common",
    "configurations",
    "secrets",
    "versions",
]
