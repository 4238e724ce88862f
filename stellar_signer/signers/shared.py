"""Shared helpers for the SEP-10 and SEP-45 signers."""

from stellar_sdk import Address, Keypair
from stellar_sdk.xdr import SCAddress

from ..errors import SigningError


def require_non_empty(value: str, name: str) -> None:
    """Reject an empty signer argument with an INVALID_INPUT error."""
    if not value:
        raise SigningError.invalid_input(f"{name} cannot be empty")


def parse_signing_keypair(secret_key: str) -> Keypair:
    """Derive a keypair that can sign from a secret seed.

    A public key (G...) is rejected the same way as any other malformed seed.
    """
    try:
        keypair = Keypair.from_secret(secret_key)
    except Exception as e:
        raise SigningError.invalid_input(f"failed to parse secret key: {e}") from e

    if not keypair.can_sign():
        raise SigningError.invalid_input("secret key is not a full keypair")

    return keypair


def stellar_address_from_sc_address(sc_address: SCAddress) -> str:
    """Convert an SCAddress XDR object to a Stellar address string."""
    return Address.from_xdr_sc_address(sc_address).address
