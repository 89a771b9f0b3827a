"""Action schemas.

Actions are commands, not stored records: a prototype is posted to an
``/actions`` endpoint and the service answers with the matching result
variant, both keyed by ``action_type``.
"""

from typing import Literal

from secrets_manager.codec import Timestamp
from secrets_manager.pki import (
    REVOKE_CA_CERTIFICATE,
    ROTATE_CRL,
    SET_SIGNED,
    SIGN_CSR,
    SIGN_INTERMEDIATE,
)
from secrets_manager.registry import REGISTRY
from secrets_manager.schemas.common import APIModel

REVOKE_CERTIFICATE = "private_cert_action_revoke_certificate"
VALIDATE_DNS_CHALLENGE = "public_cert_action_validate_dns_challenge"


# secret actions


@REGISTRY.variant("SecretActionPrototype")
class PrivateCertificateActionRevokePrototype(APIModel):
    action_type: Literal["private_cert_action_revoke_certificate"] = REVOKE_CERTIFICATE


@REGISTRY.variant("SecretActionPrototype")
class PublicCertificateActionValidateManualDNSPrototype(APIModel):
    action_type: Literal["public_cert_action_validate_dns_challenge"] = (
        VALIDATE_DNS_CHALLENGE
    )


@REGISTRY.variant("SecretAction")
class PrivateCertificateActionRevoke(APIModel):
    action_type: Literal["private_cert_action_revoke_certificate"] = REVOKE_CERTIFICATE
    revocation_time_seconds: int | None = None


@REGISTRY.variant("SecretAction")
class PublicCertificateActionValidateManualDNS(APIModel):
    action_type: Literal["public_cert_action_validate_dns_challenge"] = (
        VALIDATE_DNS_CHALLENGE
    )


# version actions


@REGISTRY.variant("SecretVersionActionPrototype")
class PrivateCertificateVersionActionRevokePrototype(APIModel):
    action_type: Literal["private_cert_action_revoke_certificate"] = REVOKE_CERTIFICATE


@REGISTRY.variant("SecretVersionAction")
class PrivateCertificateVersionActionRevoke(APIModel):
    action_type: Literal["private_cert_action_revoke_certificate"] = REVOKE_CERTIFICATE
    revocation_time_seconds: int | None = None


# configuration actions


class SigningParameters(APIModel):
    """Certificate parameters accepted by the signing actions."""

    common_name: str | None = None
    alt_names: list[str] | None = None
    ip_sans: str | None = None
    uri_sans: str | None = None
    other_sans: list[str] | None = None
    ttl: str | None = None
    format: str | None = None
    max_path_length: int | None = None
    exclude_cn_from_sans: bool | None = None
    permitted_dns_domains: list[str] | None = None
    use_csr_values: bool | None = None
    ou: list[str] | None = None
    organization: list[str] | None = None
    country: list[str] | None = None


class PrivateCertificateCAData(APIModel):
    """Certificate material produced by a signing action."""

    certificate: str | None = None
    issuing_ca: str | None = None
    ca_chain: list[str] | None = None
    expiration: int | None = None


@REGISTRY.variant("ConfigurationActionPrototype")
class PrivateCertificateConfigurationActionRevokePrototype(APIModel):
    action_type: Literal["private_cert_configuration_action_revoke_ca_certificate"] = (
        REVOKE_CA_CERTIFICATE
    )


@REGISTRY.variant("ConfigurationActionPrototype")
class PrivateCertificateConfigurationActionSignCSRPrototype(SigningParameters):
    action_type: Literal["private_cert_configuration_action_sign_csr"] = SIGN_CSR
    csr: str


@REGISTRY.variant("ConfigurationActionPrototype")
class PrivateCertificateConfigurationActionSignIntermediatePrototype(SigningParameters):
    """Sign the named intermediate CA with the CA the action is posted to."""

    action_type: Literal["private_cert_configuration_action_sign_intermediate"] = (
        SIGN_INTERMEDIATE
    )
    intermediate_certificate_authority: str


@REGISTRY.variant("ConfigurationActionPrototype")
class PrivateCertificateConfigurationActionSetSignedPrototype(APIModel):
    action_type: Literal["private_cert_configuration_action_set_signed"] = SET_SIGNED
    certificate: str


@REGISTRY.variant("ConfigurationActionPrototype")
class PrivateCertificateConfigurationActionRotateCRLPrototype(APIModel):
    action_type: Literal["private_cert_configuration_action_rotate_crl"] = ROTATE_CRL


@REGISTRY.variant("ConfigurationAction")
class PrivateCertificateConfigurationActionRevoke(APIModel):
    action_type: Literal["private_cert_configuration_action_revoke_ca_certificate"] = (
        REVOKE_CA_CERTIFICATE
    )
    revocation_time_seconds: int | None = None


@REGISTRY.variant("ConfigurationAction")
class PrivateCertificateConfigurationActionSignCSR(SigningParameters):
    action_type: Literal["private_cert_configuration_action_sign_csr"] = SIGN_CSR
    csr: str | None = None
    data: PrivateCertificateCAData | None = None


@REGISTRY.variant("ConfigurationAction")
class PrivateCertificateConfigurationActionSignIntermediate(SigningParameters):
    action_type: Literal["private_cert_configuration_action_sign_intermediate"] = (
        SIGN_INTERMEDIATE
    )
    intermediate_certificate_authority: str | None = None


@REGISTRY.variant("ConfigurationAction")
class PrivateCertificateConfigurationActionSetSigned(APIModel):
    action_type: Literal["private_cert_configuration_action_set_signed"] = SET_SIGNED
    config_type: str | None = None
    data: PrivateCertificateCAData | None = None


@REGISTRY.variant("ConfigurationAction")
class PrivateCertificateConfigurationActionRotateCRL(APIModel):
    action_type: Literal["private_cert_configuration_action_rotate_crl"] = ROTATE_CRL
    success: bool | None = None
    rotated_at: Timestamp | None = None
