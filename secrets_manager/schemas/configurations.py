"""Configuration schemas.

Configurations are addressed by name. Each ``config_type`` is one variant in
``ConfigurationMetadata`` (list responses), ``Configuration`` (full record),
``ConfigurationPrototype`` (create requests) and ``ConfigurationPatch``
(updates, discriminator not serialized).
"""

from typing import Any, Literal

from pydantic import Field

from secrets_manager.codec import Polymorphic, Timestamp
from secrets_manager.pki import SigningState, signing_state_for_status
from secrets_manager.registry import REGISTRY
from secrets_manager.schemas.common import APIModel, PaginatedCollection, PatchModel

ConfigurationMetadataItem = Polymorphic("ConfigurationMetadata")


class ConfigurationMetadataBase(APIModel):
    name: str | None = None
    secret_type: str | None = None
    created_by: str | None = None
    created_at: Timestamp | None = None
    updated_at: Timestamp | None = None


# field groups shared between records, prototypes and patches


class IAMCredentialsFields(APIModel):
    api_key: str | None = None
    disabled: bool | None = None


class LetsEncryptFields(APIModel):
    lets_encrypt_environment: Literal["production", "staging"] | None = None
    lets_encrypt_private_key: str | None = None
    lets_encrypt_preferred_chain: str | None = None


class ClassicInfrastructureFields(APIModel):
    classic_infrastructure_username: str | None = None
    classic_infrastructure_password: str | None = None


class CloudInternetServicesFields(APIModel):
    cloud_internet_services_apikey: str | None = None
    cloud_internet_services_crn: str | None = None


class CertificateAuthorityPolicyFields(APIModel):
    """Lifetime and revocation-list settings of a CA."""

    max_ttl: str | None = None
    crl_expiry: str | None = None
    crl_disable: bool | None = None
    crl_distribution_points_encoded: bool | None = None
    issuing_certificates_urls_encoded: bool | None = None


class CertificateAuthoritySubjectFields(APIModel):
    """Subject and key parameters of a CA certificate."""

    common_name: str | None = None
    alt_names: list[str] | None = None
    ip_sans: str | None = None
    uri_sans: str | None = None
    other_sans: list[str] | None = None
    ttl: str | None = None
    format: str | None = None
    private_key_format: str | None = None
    key_type: str | None = None
    key_bits: int | None = None
    max_path_length: int | None = None
    exclude_cn_from_sans: bool | None = None
    permitted_dns_domains: list[str] | None = None
    ou: list[str] | None = None
    organization: list[str] | None = None
    country: list[str] | None = None
    locality: list[str] | None = None
    province: list[str] | None = None
    street_address: list[str] | None = None
    postal_code: list[str] | None = None
    serial_number: str | None = None


class CertificateAuthorityStatusFields(APIModel):
    status: str | None = None
    expiration_date: Timestamp | None = None

    @property
    def signing_state(self) -> SigningState | None:
        """Signing state derived from ``status``."""
        return signing_state_for_status(self.status)


class CertificateTemplateFields(APIModel):
    allowed_secret_groups: str | None = None
    max_ttl: str | None = None
    ttl: str | None = None
    allow_localhost: bool | None = None
    allowed_domains: list[str] | None = None
    allowed_domains_template: bool | None = None
    allow_bare_domains: bool | None = None
    allow_subdomains: bool | None = None
    allow_glob_domains: bool | None = None
    allow_any_name: bool | None = None
    enforce_hostnames: bool | None = None
    allow_ip_sans: bool | None = None
    allowed_uri_sans: list[str] | None = None
    allowed_other_sans: list[str] | None = None
    server_flag: bool | None = None
    client_flag: bool | None = None
    code_signing_flag: bool | None = None
    email_protection_flag: bool | None = None
    key_type: str | None = None
    key_bits: int | None = None
    key_usage: list[str] | None = None
    ext_key_usage: list[str] | None = None
    use_csr_common_name: bool | None = None
    use_csr_sans: bool | None = None
    require_cn: bool | None = None
    ou: list[str] | None = None
    organization: list[str] | None = None
    country: list[str] | None = None
    not_before_duration: str | None = None


# list entries


@REGISTRY.variant("ConfigurationMetadata")
class IAMCredentialsConfigurationMetadata(ConfigurationMetadataBase):
    config_type: Literal["iam_credentials_configuration"] = "iam_credentials_configuration"
    disabled: bool | None = None


@REGISTRY.variant("ConfigurationMetadata")
class PublicCertificateConfigurationCALetsEncryptMetadata(ConfigurationMetadataBase):
    config_type: Literal["public_cert_configuration_ca_lets_encrypt"] = (
        "public_cert_configuration_ca_lets_encrypt"
    )
    lets_encrypt_environment: Literal["production", "staging"] | None = None
    lets_encrypt_preferred_chain: str | None = None


@REGISTRY.variant("ConfigurationMetadata")
class PublicCertificateConfigurationDNSClassicInfrastructureMetadata(
    ConfigurationMetadataBase
):
    config_type: Literal["public_cert_configuration_dns_classic_infrastructure"] = (
        "public_cert_configuration_dns_classic_infrastructure"
    )


@REGISTRY.variant("ConfigurationMetadata")
class PublicCertificateConfigurationDNSCloudInternetServicesMetadata(
    ConfigurationMetadataBase
):
    config_type: Literal["public_cert_configuration_dns_cloud_internet_services"] = (
        "public_cert_configuration_dns_cloud_internet_services"
    )


class CertificateAuthorityMetadataBase(
    ConfigurationMetadataBase, CertificateAuthorityStatusFields
):
    common_name: str | None = None
    crl_distribution_points_encoded: bool | None = None
    key_type: str | None = None
    key_bits: int | None = None


@REGISTRY.variant("ConfigurationMetadata")
class PrivateCertificateConfigurationRootCAMetadata(CertificateAuthorityMetadataBase):
    config_type: Literal["private_cert_configuration_root_ca"] = (
        "private_cert_configuration_root_ca"
    )


@REGISTRY.variant("ConfigurationMetadata")
class PrivateCertificateConfigurationIntermediateCAMetadata(
    CertificateAuthorityMetadataBase
):
    config_type: Literal["private_cert_configuration_intermediate_ca"] = (
        "private_cert_configuration_intermediate_ca"
    )
    issuer: str | None = None
    signing_method: Literal["internal", "external"] | None = None


@REGISTRY.variant("ConfigurationMetadata")
class PrivateCertificateConfigurationTemplateMetadata(ConfigurationMetadataBase):
    config_type: Literal["private_cert_configuration_template"] = (
        "private_cert_configuration_template"
    )
    certificate_authority: str | None = None


# full records


@REGISTRY.variant("Configuration")
class IAMCredentialsConfiguration(IAMCredentialsConfigurationMetadata, IAMCredentialsFields):
    config_type: Literal["iam_credentials_configuration"] = "iam_credentials_configuration"


@REGISTRY.variant("Configuration")
class PublicCertificateConfigurationCALetsEncrypt(
    PublicCertificateConfigurationCALetsEncryptMetadata, LetsEncryptFields
):
    config_type: Literal["public_cert_configuration_ca_lets_encrypt"] = (
        "public_cert_configuration_ca_lets_encrypt"
    )


@REGISTRY.variant("Configuration")
class PublicCertificateConfigurationDNSClassicInfrastructure(
    PublicCertificateConfigurationDNSClassicInfrastructureMetadata,
    ClassicInfrastructureFields,
):
    config_type: Literal["public_cert_configuration_dns_classic_infrastructure"] = (
        "public_cert_configuration_dns_classic_infrastructure"
    )


@REGISTRY.variant("Configuration")
class PublicCertificateConfigurationDNSCloudInternetServices(
    PublicCertificateConfigurationDNSCloudInternetServicesMetadata,
    CloudInternetServicesFields,
):
    config_type: Literal["public_cert_configuration_dns_cloud_internet_services"] = (
        "public_cert_configuration_dns_cloud_internet_services"
    )


@REGISTRY.variant("Configuration")
class PrivateCertificateConfigurationRootCA(
    PrivateCertificateConfigurationRootCAMetadata,
    CertificateAuthorityPolicyFields,
    CertificateAuthoritySubjectFields,
):
    """Self-signed root of a private PKI."""

    config_type: Literal["private_cert_configuration_root_ca"] = (
        "private_cert_configuration_root_ca"
    )
    data: dict[str, Any] | None = None


@REGISTRY.variant("Configuration")
class PrivateCertificateConfigurationIntermediateCA(
    PrivateCertificateConfigurationIntermediateCAMetadata,
    CertificateAuthorityPolicyFields,
    CertificateAuthoritySubjectFields,
):
    """Intermediate CA; ``issuer`` names the root CA that signs it."""

    config_type: Literal["private_cert_configuration_intermediate_ca"] = (
        "private_cert_configuration_intermediate_ca"
    )
    data: dict[str, Any] | None = None


@REGISTRY.variant("Configuration")
class PrivateCertificateConfigurationTemplate(
    PrivateCertificateConfigurationTemplateMetadata, CertificateTemplateFields
):
    config_type: Literal["private_cert_configuration_template"] = (
        "private_cert_configuration_template"
    )


# create requests


class ConfigurationPrototypeBase(APIModel):
    name: str = Field(min_length=2, max_length=128)


@REGISTRY.variant("ConfigurationPrototype")
class IAMCredentialsConfigurationPrototype(ConfigurationPrototypeBase):
    config_type: Literal["iam_credentials_configuration"] = "iam_credentials_configuration"
    api_key: str
    disabled: bool | None = None


@REGISTRY.variant("ConfigurationPrototype")
class PublicCertificateConfigurationCALetsEncryptPrototype(
    ConfigurationPrototypeBase, LetsEncryptFields
):
    config_type: Literal["public_cert_configuration_ca_lets_encrypt"] = (
        "public_cert_configuration_ca_lets_encrypt"
    )
    lets_encrypt_environment: Literal["production", "staging"]
    lets_encrypt_private_key: str


@REGISTRY.variant("ConfigurationPrototype")
class PublicCertificateConfigurationDNSClassicInfrastructurePrototype(
    ConfigurationPrototypeBase
):
    config_type: Literal["public_cert_configuration_dns_classic_infrastructure"] = (
        "public_cert_configuration_dns_classic_infrastructure"
    )
    classic_infrastructure_username: str
    classic_infrastructure_password: str


@REGISTRY.variant("ConfigurationPrototype")
class PublicCertificateConfigurationDNSCloudInternetServicesPrototype(
    ConfigurationPrototypeBase
):
    config_type: Literal["public_cert_configuration_dns_cloud_internet_services"] = (
        "public_cert_configuration_dns_cloud_internet_services"
    )
    cloud_internet_services_crn: str
    cloud_internet_services_apikey: str | None = None


@REGISTRY.variant("ConfigurationPrototype")
class PrivateCertificateConfigurationRootCAPrototype(
    ConfigurationPrototypeBase,
    CertificateAuthorityPolicyFields,
    CertificateAuthoritySubjectFields,
):
    config_type: Literal["private_cert_configuration_root_ca"] = (
        "private_cert_configuration_root_ca"
    )
    common_name: str
    max_ttl: str


@REGISTRY.variant("ConfigurationPrototype")
class PrivateCertificateConfigurationIntermediateCAPrototype(
    ConfigurationPrototypeBase,
    CertificateAuthorityPolicyFields,
    CertificateAuthoritySubjectFields,
):
    """Create an intermediate CA.

    With ``signing_method="internal"`` the CA named by ``issuer`` signs it
    through the ``sign_intermediate`` action; with ``external`` the caller
    signs the CSR elsewhere and uploads it with ``set_signed``.
    """

    config_type: Literal["private_cert_configuration_intermediate_ca"] = (
        "private_cert_configuration_intermediate_ca"
    )
    common_name: str
    max_ttl: str
    signing_method: Literal["internal", "external"]
    issuer: str | None = None


@REGISTRY.variant("ConfigurationPrototype")
class PrivateCertificateConfigurationTemplatePrototype(
    ConfigurationPrototypeBase, CertificateTemplateFields
):
    config_type: Literal["private_cert_configuration_template"] = (
        "private_cert_configuration_template"
    )
    certificate_authority: str


# updates


@REGISTRY.variant("ConfigurationPatch", "iam_credentials_configuration")
class IAMCredentialsConfigurationPatch(PatchModel, IAMCredentialsFields):
    pass


@REGISTRY.variant("ConfigurationPatch", "public_cert_configuration_ca_lets_encrypt")
class PublicCertificateConfigurationCALetsEncryptPatch(PatchModel, LetsEncryptFields):
    pass


@REGISTRY.variant(
    "ConfigurationPatch", "public_cert_configuration_dns_classic_infrastructure"
)
class PublicCertificateConfigurationDNSClassicInfrastructurePatch(
    PatchModel, ClassicInfrastructureFields
):
    pass


@REGISTRY.variant(
    "ConfigurationPatch", "public_cert_configuration_dns_cloud_internet_services"
)
class PublicCertificateConfigurationDNSCloudInternetServicesPatch(
    PatchModel, CloudInternetServicesFields
):
    pass


@REGISTRY.variant("ConfigurationPatch", "private_cert_configuration_root_ca")
class PrivateCertificateConfigurationRootCAPatch(
    PatchModel, CertificateAuthorityPolicyFields
):
    pass


@REGISTRY.variant("ConfigurationPatch", "private_cert_configuration_intermediate_ca")
class PrivateCertificateConfigurationIntermediateCAPatch(
    PatchModel, CertificateAuthorityPolicyFields
):
    pass


@REGISTRY.variant("ConfigurationPatch", "private_cert_configuration_template")
class PrivateCertificateConfigurationTemplatePatch(
    PatchModel, CertificateTemplateFields
):
    pass


class ConfigurationMetadataPaginatedCollection(PaginatedCollection):
    """Page of configuration metadata of mixed types."""

    configurations: list[ConfigurationMetadataItem] = Field(default_factory=list)
