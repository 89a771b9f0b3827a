"""Secret version schemas."""

from typing import Any, Literal

from pydantic import Field

from secrets_manager.codec import Polymorphic, Timestamp
from secrets_manager.registry import REGISTRY
from secrets_manager.schemas.common import (
    APIModel,
    CertificateValidity,
    PatchModel,
    RotationPolicy,
)
from secrets_manager.schemas.secrets import (
    ArbitraryPayload,
    CertificatePayload,
    CredentialsPayload,
    IAMCredentialsPayload,
    KVPayload,
    PrivateCertificatePayload,
    UsernamePasswordPayload,
)

SecretVersionMetadataItem = Polymorphic("SecretVersionMetadata")


class SecretVersionMetadataBase(APIModel):
    """Fields shared by every version.

    Attributes
    ----------
    id : str | None
        Version identifier.
    secret_id : str | None
        Owning secret.
    alias : str | None
        ``current`` or ``previous`` when the version holds that role.
    payload_available : bool | None
        Whether the version still holds its material.
    """

    id: str | None = None
    secret_id: str | None = None
    secret_name: str | None = None
    secret_group_id: str | None = None
    alias: str | None = None
    auto_rotated: bool | None = None
    created_by: str | None = None
    created_at: Timestamp | None = None
    downloaded: bool | None = None
    payload_available: bool | None = None
    version_custom_metadata: dict[str, Any] | None = None
    expiration_date: Timestamp | None = None


class CertificateVersionFields(APIModel):
    serial_number: str | None = None
    validity: CertificateValidity | None = None


@REGISTRY.variant("SecretVersionMetadata")
class ArbitrarySecretVersionMetadata(SecretVersionMetadataBase):
    secret_type: Literal["arbitrary"] = "arbitrary"


@REGISTRY.variant("SecretVersionMetadata")
class ImportedCertificateVersionMetadata(
    SecretVersionMetadataBase, CertificateVersionFields
):
    secret_type: Literal["imported_cert"] = "imported_cert"


@REGISTRY.variant("SecretVersionMetadata")
class PublicCertificateVersionMetadata(
    SecretVersionMetadataBase, CertificateVersionFields
):
    secret_type: Literal["public_cert"] = "public_cert"


@REGISTRY.variant("SecretVersionMetadata")
class PrivateCertificateVersionMetadata(
    SecretVersionMetadataBase, CertificateVersionFields
):
    secret_type: Literal["private_cert"] = "private_cert"


@REGISTRY.variant("SecretVersionMetadata")
class IAMCredentialsSecretVersionMetadata(SecretVersionMetadataBase):
    secret_type: Literal["iam_credentials"] = "iam_credentials"
    service_id: str | None = None
    service_id_is_static: bool | None = None
    api_key_id: str | None = None


@REGISTRY.variant("SecretVersionMetadata")
class KVSecretVersionMetadata(SecretVersionMetadataBase):
    secret_type: Literal["kv"] = "kv"


@REGISTRY.variant("SecretVersionMetadata")
class UsernamePasswordSecretVersionMetadata(SecretVersionMetadataBase):
    secret_type: Literal["username_password"] = "username_password"


@REGISTRY.variant("SecretVersionMetadata")
class ServiceCredentialsSecretVersionMetadata(SecretVersionMetadataBase):
    secret_type: Literal["service_credentials"] = "service_credentials"
    resource_key: dict[str, Any] | None = None


@REGISTRY.variant("SecretVersionMetadata")
class CustomCredentialsSecretVersionMetadata(SecretVersionMetadataBase):
    secret_type: Literal["custom_credentials"] = "custom_credentials"


@REGISTRY.variant("SecretVersion")
class ArbitrarySecretVersion(ArbitrarySecretVersionMetadata, ArbitraryPayload):
    secret_type: Literal["arbitrary"] = "arbitrary"


@REGISTRY.variant("SecretVersion")
class ImportedCertificateVersion(
    ImportedCertificateVersionMetadata, CertificatePayload
):
    secret_type: Literal["imported_cert"] = "imported_cert"


@REGISTRY.variant("SecretVersion")
class PublicCertificateVersion(PublicCertificateVersionMetadata, CertificatePayload):
    secret_type: Literal["public_cert"] = "public_cert"


@REGISTRY.variant("SecretVersion")
class PrivateCertificateVersion(
    PrivateCertificateVersionMetadata, PrivateCertificatePayload
):
    secret_type: Literal["private_cert"] = "private_cert"


@REGISTRY.variant("SecretVersion")
class IAMCredentialsSecretVersion(
    IAMCredentialsSecretVersionMetadata, IAMCredentialsPayload
):
    secret_type: Literal["iam_credentials"] = "iam_credentials"


@REGISTRY.variant("SecretVersion")
class KVSecretVersion(KVSecretVersionMetadata, KVPayload):
    secret_type: Literal["kv"] = "kv"


@REGISTRY.variant("SecretVersion")
class UsernamePasswordSecretVersion(
    UsernamePasswordSecretVersionMetadata, UsernamePasswordPayload
):
    secret_type: Literal["username_password"] = "username_password"


@REGISTRY.variant("SecretVersion")
class ServiceCredentialsSecretVersion(
    ServiceCredentialsSecretVersionMetadata, CredentialsPayload
):
    secret_type: Literal["service_credentials"] = "service_credentials"


@REGISTRY.variant("SecretVersion")
class CustomCredentialsSecretVersion(
    CustomCredentialsSecretVersionMetadata, CredentialsPayload
):
    secret_type: Literal["custom_credentials"] = "custom_credentials"


# The service infers the type of a new version from its secret, so these
# prototypes never carry ``secret_type``.


class SecretVersionPrototypeBase(APIModel):
    custom_metadata: dict[str, Any] | None = None
    version_custom_metadata: dict[str, Any] | None = None


@REGISTRY.variant("SecretVersionPrototype", "arbitrary")
class ArbitrarySecretVersionPrototype(SecretVersionPrototypeBase):
    payload: str


@REGISTRY.variant("SecretVersionPrototype", "imported_cert")
class ImportedCertificateVersionPrototype(SecretVersionPrototypeBase):
    certificate: str
    intermediate: str | None = None
    private_key: str | None = None


@REGISTRY.variant("SecretVersionPrototype", "public_cert")
class PublicCertificateVersionPrototype(SecretVersionPrototypeBase):
    rotation: RotationPolicy


@REGISTRY.variant("SecretVersionPrototype", "private_cert")
class PrivateCertificateVersionPrototype(SecretVersionPrototypeBase):
    csr: str | None = None


@REGISTRY.variant("SecretVersionPrototype", "iam_credentials")
class IAMCredentialsSecretVersionPrototype(SecretVersionPrototypeBase):
    restore_from_version: str | None = None


@REGISTRY.variant("SecretVersionPrototype", "kv")
class KVSecretVersionPrototype(SecretVersionPrototypeBase):
    data: dict[str, Any]


@REGISTRY.variant("SecretVersionPrototype", "username_password")
class UsernamePasswordSecretVersionPrototype(SecretVersionPrototypeBase):
    password: str | None = None


@REGISTRY.variant("SecretVersionPrototype", "service_credentials")
class ServiceCredentialsSecretVersionPrototype(SecretVersionPrototypeBase):
    pass


@REGISTRY.variant("SecretVersionPrototype", "custom_credentials")
class CustomCredentialsSecretVersionPrototype(SecretVersionPrototypeBase):
    parameters: dict[str, Any] | None = None


class SecretVersionMetadataPatch(PatchModel):
    version_custom_metadata: dict[str, Any] | None = None


class SecretVersionMetadataCollection(APIModel):
    """All versions of a secret, newest first."""

    versions: list[SecretVersionMetadataItem] = Field(default_factory=list)
    total_count: int | None = None
