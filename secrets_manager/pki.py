"""Private certificate authority signing states.

The hierarchy is root CA -> intermediate CA (signed by the root or
externally) -> certificate template -> issued ``private_cert`` secrets. The
service reports a CA's progress through its ``status`` field; this module
folds that into a :class:`SigningState` and guards the CA actions.
"""

from __future__ import annotations

from enum import Enum

from secrets_manager.exceptions import SecretsManagerPreconditionError


class SigningState(str, Enum):
    """Signing state of a certificate authority."""

    UNSIGNED = "unsigned"
    SIGNED = "signed"
    REVOKED = "revoked"
    EXPIRED = "expired"


_STATUS_TO_STATE: dict[str, SigningState] = {
    "signing_required": SigningState.UNSIGNED,
    "signing_pending": SigningState.UNSIGNED,
    "signed_certificate": SigningState.SIGNED,
    "certificate_template_required": SigningState.SIGNED,
    "configured": SigningState.SIGNED,
    "revoked": SigningState.REVOKED,
    "expired": SigningState.EXPIRED,
}

SIGN_INTERMEDIATE = "private_cert_configuration_action_sign_intermediate"
SIGN_CSR = "private_cert_configuration_action_sign_csr"
SET_SIGNED = "private_cert_configuration_action_set_signed"
REVOKE_CA_CERTIFICATE = "private_cert_configuration_action_revoke_ca_certificate"
ROTATE_CRL = "private_cert_configuration_action_rotate_crl"

# action -> (states the target CA may be in, state afterwards or None if unchanged)
_TRANSITIONS: dict[str, tuple[frozenset[SigningState], SigningState | None]] = {
    SIGN_INTERMEDIATE: (frozenset({SigningState.UNSIGNED}), SigningState.SIGNED),
    SET_SIGNED: (frozenset({SigningState.UNSIGNED}), SigningState.SIGNED),
    SIGN_CSR: (frozenset({SigningState.SIGNED}), None),
    REVOKE_CA_CERTIFICATE: (frozenset({SigningState.SIGNED}), SigningState.REVOKED),
    ROTATE_CRL: (
        frozenset({SigningState.SIGNED, SigningState.REVOKED, SigningState.EXPIRED}),
        None,
    ),
}


def signing_state_for_status(status: str | None) -> SigningState | None:
    """Map a CA ``status`` reported by the service to a signing state.

    Parameters
    ----------
    status : str | None
        Raw status string.

    Returns
    -------
    SigningState | None
        Matching state, ``None`` when the status is absent or unrecognized.
    """
    if status is None:
        return None
    return _STATUS_TO_STATE.get(status)


def check_transition(
    state: SigningState | None, action_type: str, *, name: str = "certificate authority"
) -> SigningState | None:
    """Validate that ``action_type`` may run against a CA in ``state``.

    Parameters
    ----------
    state : SigningState | None
        Current signing state of the target CA. ``None`` (unknown) is let
        through for the service to decide.
    action_type : str
        Configuration action discriminator.
    name : str, default="certificate authority"
        CA name used in the error message.

    Returns
    -------
    SigningState | None
        State after the action, or the current state when it is unchanged.
    """
    transition = _TRANSITIONS.get(action_type)
    if transition is None or state is None:
        return state
    allowed, after = transition
    if state not in allowed:
        raise SecretsManagerPreconditionError(
            f"cannot run {action_type} on {name}: it is {state.value}"
        )
    return after if after is not None else state
