"""Secret schemas.

Each secret type is one variant in four families: ``SecretMetadata`` (list and
metadata responses), ``Secret`` (metadata plus material), ``SecretPrototype``
(create requests) and ``SecretMetadataPatch`` (metadata updates, whose
discriminator is not serialized).
"""

from typing import Any, Literal

from pydantic import Field

from secrets_manager.codec import Polymorphic, Timestamp
from secrets_manager.registry import REGISTRY
from secrets_manager.schemas.common import (
    APIModel,
    CertificateValidity,
    PaginatedCollection,
    PatchModel,
    RotationPolicy,
    SecretState,
)

SecretMetadataItem = Polymorphic("SecretMetadata")


class PasswordGenerationPolicy(APIModel):
    """Rules for generated passwords."""

    length: int | None = None
    include_digits: bool | None = None
    include_symbols: bool | None = None
    include_uppercase: bool | None = None


class ServiceCredentialsResourceReference(APIModel):
    crn: str | None = None
    name: str | None = None


class ServiceCredentialsSourceService(APIModel):
    """Cloud service whose credentials the secret wraps."""

    instance: ServiceCredentialsResourceReference
    role: ServiceCredentialsResourceReference | None = None
    parameters: dict[str, Any] | None = None
    iam: dict[str, Any] | None = None
    resource_key: ServiceCredentialsResourceReference | None = None


# material carried by secrets and versions


class ArbitraryPayload(APIModel):
    payload: str | None = None


class CertificatePayload(APIModel):
    certificate: str | None = None
    intermediate: str | None = None
    private_key: str | None = None


class PrivateCertificatePayload(APIModel):
    certificate: str | None = None
    private_key: str | None = None
    issuing_ca: str | None = None
    ca_chain: list[str] | None = None


class IAMCredentialsPayload(APIModel):
    api_key: str | None = None


class KVPayload(APIModel):
    data: dict[str, Any] | None = None


class UsernamePasswordPayload(APIModel):
    username: str | None = None
    password: str | None = None


class CredentialsPayload(APIModel):
    credentials: dict[str, Any] | None = None


# metadata


class SecretMetadataBase(APIModel):
    """Fields shared by every secret type.

    Attributes
    ----------
    id : str | None
        Secret identifier.
    name : str | None
        Human-readable name, unique per type within a group.
    secret_group_id : str | None
        Group the secret belongs to; ``default`` for the default group.
    labels : list[str] | None
        Ordered labels for search and filtering.
    state : SecretState | int | None
        Lifecycle state, as a name or the numeric code the service sent.
    """

    id: str | None = None
    name: str | None = None
    description: str | None = None
    secret_group_id: str | None = None
    labels: list[str] | None = None
    custom_metadata: dict[str, Any] | None = None
    crn: str | None = None
    created_by: str | None = None
    created_at: Timestamp | None = None
    updated_at: Timestamp | None = None
    retrieved_at: Timestamp | None = None
    downloaded: bool | None = None
    locks_total: int | None = None
    versions_total: int | None = None
    state: SecretState | int | None = None
    state_description: str | None = None


class CertificateMetadataFields(APIModel):
    common_name: str | None = None
    alt_names: list[str] | None = None
    expiration_date: Timestamp | None = None
    issuer: str | None = None
    key_algorithm: str | None = None
    serial_number: str | None = None
    signing_algorithm: str | None = None
    validity: CertificateValidity | None = None


class RotatingMetadataFields(APIModel):
    rotation: RotationPolicy | None = None
    next_rotation_date: Timestamp | None = None


@REGISTRY.variant("SecretMetadata")
class ArbitrarySecretMetadata(SecretMetadataBase):
    secret_type: Literal["arbitrary"] = "arbitrary"
    expiration_date: Timestamp | None = None


@REGISTRY.variant("SecretMetadata")
class ImportedCertificateMetadata(SecretMetadataBase, CertificateMetadataFields):
    secret_type: Literal["imported_cert"] = "imported_cert"
    intermediate_included: bool | None = None
    private_key_included: bool | None = None


@REGISTRY.variant("SecretMetadata")
class PublicCertificateMetadata(
    SecretMetadataBase, CertificateMetadataFields, RotatingMetadataFields
):
    """Let's Encrypt style certificate ordered through a CA configuration."""

    secret_type: Literal["public_cert"] = "public_cert"
    ca: str | None = None
    dns: str | None = None
    bundle_certs: bool | None = None
    issuance_info: dict[str, Any] | None = None


@REGISTRY.variant("SecretMetadata")
class PrivateCertificateMetadata(
    SecretMetadataBase, CertificateMetadataFields, RotatingMetadataFields
):
    """Certificate issued from a private CA through a certificate template."""

    secret_type: Literal["private_cert"] = "private_cert"
    certificate_template: str | None = None
    certificate_authority: str | None = None
    revocation_time_seconds: int | None = None
    revocation_time_rfc3339: Timestamp | None = None


@REGISTRY.variant("SecretMetadata")
class IAMCredentialsSecretMetadata(SecretMetadataBase, RotatingMetadataFields):
    secret_type: Literal["iam_credentials"] = "iam_credentials"
    ttl: str | None = None
    access_groups: list[str] | None = None
    api_key_id: str | None = None
    service_id: str | None = None
    service_id_is_static: bool | None = None
    reuse_api_key: bool | None = None
    account_id: str | None = None
    expiration_date: Timestamp | None = None


@REGISTRY.variant("SecretMetadata")
class KVSecretMetadata(SecretMetadataBase):
    secret_type: Literal["kv"] = "kv"


@REGISTRY.variant("SecretMetadata")
class UsernamePasswordSecretMetadata(SecretMetadataBase, RotatingMetadataFields):
    secret_type: Literal["username_password"] = "username_password"
    expiration_date: Timestamp | None = None
    password_generation_policy: PasswordGenerationPolicy | None = None


@REGISTRY.variant("SecretMetadata")
class ServiceCredentialsSecretMetadata(SecretMetadataBase, RotatingMetadataFields):
    secret_type: Literal["service_credentials"] = "service_credentials"
    ttl: str | None = None
    source_service: ServiceCredentialsSourceService | None = None
    expiration_date: Timestamp | None = None


@REGISTRY.variant("SecretMetadata")
class CustomCredentialsSecretMetadata(SecretMetadataBase, RotatingMetadataFields):
    secret_type: Literal["custom_credentials"] = "custom_credentials"
    configuration: str | None = None
    parameters: dict[str, Any] | None = None
    ttl: str | None = None
    expiration_date: Timestamp | None = None


# secrets with material


@REGISTRY.variant("Secret")
class ArbitrarySecret(ArbitrarySecretMetadata, ArbitraryPayload):
    secret_type: Literal["arbitrary"] = "arbitrary"


@REGISTRY.variant("Secret")
class ImportedCertificate(ImportedCertificateMetadata, CertificatePayload):
    secret_type: Literal["imported_cert"] = "imported_cert"


@REGISTRY.variant("Secret")
class PublicCertificate(PublicCertificateMetadata, CertificatePayload):
    secret_type: Literal["public_cert"] = "public_cert"


@REGISTRY.variant("Secret")
class PrivateCertificate(PrivateCertificateMetadata, PrivateCertificatePayload):
    secret_type: Literal["private_cert"] = "private_cert"


@REGISTRY.variant("Secret")
class IAMCredentialsSecret(IAMCredentialsSecretMetadata, IAMCredentialsPayload):
    secret_type: Literal["iam_credentials"] = "iam_credentials"


@REGISTRY.variant("Secret")
class KVSecret(KVSecretMetadata, KVPayload):
    secret_type: Literal["kv"] = "kv"


@REGISTRY.variant("Secret")
class UsernamePasswordSecret(UsernamePasswordSecretMetadata, UsernamePasswordPayload):
    secret_type: Literal["username_password"] = "username_password"


@REGISTRY.variant("Secret")
class ServiceCredentialsSecret(ServiceCredentialsSecretMetadata, CredentialsPayload):
    secret_type: Literal["service_credentials"] = "service_credentials"


@REGISTRY.variant("Secret")
class CustomCredentialsSecret(CustomCredentialsSecretMetadata, CredentialsPayload):
    secret_type: Literal["custom_credentials"] = "custom_credentials"


# create requests


class SecretPrototypeBase(APIModel):
    """Fields accepted when creating any secret."""

    name: str = Field(min_length=2, max_length=256)
    description: str | None = None
    secret_group_id: str | None = None
    labels: list[str] | None = None
    custom_metadata: dict[str, Any] | None = None
    version_custom_metadata: dict[str, Any] | None = None


@REGISTRY.variant("SecretPrototype")
class ArbitrarySecretPrototype(SecretPrototypeBase):
    secret_type: Literal["arbitrary"] = "arbitrary"
    payload: str
    expiration_date: Timestamp | None = None


@REGISTRY.variant("SecretPrototype")
class ImportedCertificatePrototype(SecretPrototypeBase):
    secret_type: Literal["imported_cert"] = "imported_cert"
    certificate: str
    intermediate: str | None = None
    private_key: str | None = None


@REGISTRY.variant("SecretPrototype")
class PublicCertificatePrototype(SecretPrototypeBase):
    """Order a public certificate.

    ``ca`` and ``dns`` name the CA and DNS provider configurations used for
    the order.
    """

    secret_type: Literal["public_cert"] = "public_cert"
    common_name: str
    ca: str
    dns: str
    alt_names: list[str] | None = None
    key_algorithm: str | None = None
    bundle_certs: bool | None = None
    rotation: RotationPolicy | None = None


@REGISTRY.variant("SecretPrototype")
class PrivateCertificatePrototype(SecretPrototypeBase):
    """Issue a private certificate from ``certificate_template``."""

    secret_type: Literal["private_cert"] = "private_cert"
    certificate_template: str
    common_name: str
    alt_names: list[str] | None = None
    ip_sans: str | None = None
    uri_sans: str | None = None
    other_sans: list[str] | None = None
    csr: str | None = None
    format: str | None = None
    private_key_format: str | None = None
    exclude_cn_from_sans: bool | None = None
    ttl: str | None = None
    rotation: RotationPolicy | None = None


@REGISTRY.variant("SecretPrototype")
class IAMCredentialsSecretPrototype(SecretPrototypeBase):
    secret_type: Literal["iam_credentials"] = "iam_credentials"
    ttl: str
    access_groups: list[str] | None = None
    service_id: str | None = None
    account_id: str | None = None
    reuse_api_key: bool | None = None
    rotation: RotationPolicy | None = None


@REGISTRY.variant("SecretPrototype")
class KVSecretPrototype(SecretPrototypeBase):
    secret_type: Literal["kv"] = "kv"
    data: dict[str, Any]


@REGISTRY.variant("SecretPrototype")
class UsernamePasswordSecretPrototype(SecretPrototypeBase):
    secret_type: Literal["username_password"] = "username_password"
    username: str
    password: str | None = None
    expiration_date: Timestamp | None = None
    rotation: RotationPolicy | None = None
    password_generation_policy: PasswordGenerationPolicy | None = None


@REGISTRY.variant("SecretPrototype")
class ServiceCredentialsSecretPrototype(SecretPrototypeBase):
    secret_type: Literal["service_credentials"] = "service_credentials"
    source_service: ServiceCredentialsSourceService
    ttl: str | None = None
    rotation: RotationPolicy | None = None


@REGISTRY.variant("SecretPrototype")
class CustomCredentialsSecretPrototype(SecretPrototypeBase):
    secret_type: Literal["custom_credentials"] = "custom_credentials"
    configuration: str
    parameters: dict[str, Any] | None = None
    ttl: str | None = None
    rotation: RotationPolicy | None = None


# metadata updates


class SecretMetadataPatchBase(PatchModel):
    name: str | None = None
    description: str | None = None
    labels: list[str] | None = None
    custom_metadata: dict[str, Any] | None = None


@REGISTRY.variant("SecretMetadataPatch", "arbitrary")
class ArbitrarySecretMetadataPatch(SecretMetadataPatchBase):
    expiration_date: Timestamp | None = None


@REGISTRY.variant("SecretMetadataPatch", "imported_cert")
class ImportedCertificateMetadataPatch(SecretMetadataPatchBase):
    pass


@REGISTRY.variant("SecretMetadataPatch", "public_cert")
class PublicCertificateMetadataPatch(SecretMetadataPatchBase):
    rotation: RotationPolicy | None = None


@REGISTRY.variant("SecretMetadataPatch", "private_cert")
class PrivateCertificateMetadataPatch(SecretMetadataPatchBase):
    rotation: RotationPolicy | None = None


@REGISTRY.variant("SecretMetadataPatch", "iam_credentials")
class IAMCredentialsSecretMetadataPatch(SecretMetadataPatchBase):
    ttl: str | None = None
    rotation: RotationPolicy | None = None


@REGISTRY.variant("SecretMetadataPatch", "kv")
class KVSecretMetadataPatch(SecretMetadataPatchBase):
    pass


@REGISTRY.variant("SecretMetadataPatch", "username_password")
class UsernamePasswordSecretMetadataPatch(SecretMetadataPatchBase):
    expiration_date: Timestamp | None = None
    rotation: RotationPolicy | None = None
    password_generation_policy: PasswordGenerationPolicy | None = None


@REGISTRY.variant("SecretMetadataPatch", "service_credentials")
class ServiceCredentialsSecretMetadataPatch(SecretMetadataPatchBase):
    ttl: str | None = None
    rotation: RotationPolicy | None = None


@REGISTRY.variant("SecretMetadataPatch", "custom_credentials")
class CustomCredentialsSecretMetadataPatch(SecretMetadataPatchBase):
    ttl: str | None = None
    rotation: RotationPolicy | None = None


class SecretMetadataPaginatedCollection(PaginatedCollection):
    """Page of secret metadata of mixed types."""

    secrets: list[SecretMetadataItem] = Field(default_factory=list)
