"""SEP-45 authorization entry signer for Web Authentication for Contract Accounts.

See https://github.com/stellar/stellar-protocol/blob/master/ecosystem/sep-0045.md
"""

import base64
import logging

from stellar_sdk import Network, scval
from stellar_sdk.utils import sha256
from stellar_sdk.xdr import (
    EnvelopeType,
    Hash,
    HashIDPreimage,
    HashIDPreimageSorobanAuthorization,
    SCVal,
    SorobanAuthorizationEntry,
    SorobanCredentialsType,
    Uint32,
)

from ..errors import SigningError
from .constants import (
    SIGNATURE_EXPIRATION_LEDGER_WINDOW,
    SIGNATURE_FIELD,
    SIGNATURE_PUBLIC_KEY_FIELD,
)
from .shared import (
    parse_signing_keypair,
    require_non_empty,
    stellar_address_from_sc_address,
)
from .signer import LatestLedgerSource
from .utils import SorobanLedgerClient

logger = logging.getLogger(__name__)


def decode_authorization_entry(entry_xdr: str) -> SorobanAuthorizationEntry:
    """Decode base64 XDR holding exactly one SorobanAuthorizationEntry."""
    try:
        raw = base64.b64decode(entry_xdr, validate=True)
        entry = SorobanAuthorizationEntry.from_xdr_bytes(raw)
    except Exception as e:
        raise SigningError.invalid_input(
            f"failed to decode authorization entry: {e}"
        ) from e

    # XDR is canonical, so anything left over means more than one value.
    if entry.to_xdr_bytes() != raw:
        raise SigningError.invalid_input(
            "failed to decode authorization entry: unexpected data after entry"
        )
    return entry


def build_authorization_preimage(
    entry: SorobanAuthorizationEntry,
    network_passphrase: str,
) -> HashIDPreimage:
    """Build the Soroban authorization preimage for an address-credentials entry.

    The preimage commits to the network ID, the credential nonce, the
    signature expiration ledger and the root invocation.
    """
    address_credentials = entry.credentials.address
    return HashIDPreimage(
        type=EnvelopeType.ENVELOPE_TYPE_SOROBAN_AUTHORIZATION,
        soroban_authorization=HashIDPreimageSorobanAuthorization(
            network_id=Hash(Network(network_passphrase).network_id()),
            nonce=address_credentials.nonce,
            signature_expiration_ledger=address_credentials.signature_expiration_ledger,
            invocation=entry.root_invocation,
        ),
    )


def build_signature_value(public_key: bytes, signature: bytes) -> SCVal:
    """Wrap a signature in the Vec[Map{public_key, signature}] shape accounts expect."""
    return scval.to_vec(
        [
            scval.to_map(
                {
                    scval.to_symbol(SIGNATURE_PUBLIC_KEY_FIELD): scval.to_bytes(public_key),
                    scval.to_symbol(SIGNATURE_FIELD): scval.to_bytes(signature),
                }
            )
        ]
    )


class Sep45Signer:
    """Co-signs SEP-45 authorization entries with the server key.

    Only entries with address credentials whose address is the server's own
    account are signed. The expiration ledger is set from the latest ledger
    reported by Soroban RPC.
    """

    def __init__(self, ledger_client: LatestLedgerSource | None = None):
        self._ledger_client = ledger_client or SorobanLedgerClient()

    def sign(
        self,
        entry_xdr: str,
        network_passphrase: str,
        secret_key: str,
        rpc_url: str,
    ) -> str:
        """Sign a single SEP-45 authorization entry.

        Args:
            entry_xdr: Base64 XDR of one SorobanAuthorizationEntry.
            network_passphrase: Network passphrase for the signature preimage.
            secret_key: Secret seed (S...) of the signing key.
            rpc_url: Soroban RPC endpoint used to read the latest ledger.

        Returns:
            Base64 XDR of the signed authorization entry.

        Raises:
            SigningError: INVALID_INPUT for bad arguments or an entry this key
                may not sign, RPC_FAILURE if the latest ledger cannot be read,
                INTERNAL if signing or encoding fails.
        """
        require_non_empty(entry_xdr, "authorization_entry XDR")
        require_non_empty(network_passphrase, "network passphrase")
        require_non_empty(secret_key, "secret key")
        require_non_empty(rpc_url, "soroban RPC URL")

        keypair = parse_signing_keypair(secret_key)
        entry = decode_authorization_entry(entry_xdr)

        credentials = entry.credentials
        if (
            credentials.type != SorobanCredentialsType.SOROBAN_CREDENTIALS_ADDRESS
            or credentials.address is None
        ):
            raise SigningError.invalid_input("entry must use address credentials")

        address_credentials = credentials.address
        try:
            entry_account = stellar_address_from_sc_address(address_credentials.address)
        except Exception as e:
            raise SigningError.invalid_input(f"failed to get entry address: {e}") from e

        if entry_account != keypair.public_key:
            raise SigningError.invalid_input("entry address does not match signing key")

        current_ledger = self._ledger_client.get_latest_ledger(rpc_url)
        expiration_ledger = current_ledger + SIGNATURE_EXPIRATION_LEDGER_WINDOW

        try:
            address_credentials.signature_expiration_ledger = Uint32(expiration_ledger)
            preimage = build_authorization_preimage(entry, network_passphrase)
            signature = keypair.sign(sha256(preimage.to_xdr_bytes()))
            address_credentials.signature = build_signature_value(
                keypair.raw_public_key(), signature
            )
            signed_xdr = entry.to_xdr()
        except Exception as e:
            raise SigningError.internal(f"failed to sign entry: {e}") from e

        logger.info(
            "Signed SEP-45 authorization entry for %s, valid until ledger %d",
            entry_account,
            expiration_ledger,
        )
        return signed_xdr
