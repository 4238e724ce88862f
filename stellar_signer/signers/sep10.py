"""SEP-10 transaction signer for Stellar Web Authentication.

See https://github.com/stellar/stellar-protocol/blob/master/ecosystem/sep-0010.md
"""

import logging

from stellar_sdk import TransactionBuilder, TransactionEnvelope

from ..errors import SigningError
from .shared import parse_signing_keypair, require_non_empty

logger = logging.getLogger(__name__)


class Sep10Signer:
    """Co-signs SEP-10 challenge transactions with the server key.

    The envelope is returned exactly as received apart from one extra
    decorated signature. Fee bump envelopes are never signed.
    """

    def sign(
        self,
        transaction_xdr: str,
        network_passphrase: str,
        secret_key: str,
    ) -> str:
        """Sign a SEP-10 transaction envelope.

        Args:
            transaction_xdr: Base64 XDR of the transaction envelope.
            network_passphrase: Passphrase of the network the transaction targets.
            secret_key: Secret seed (S...) of the signing key.

        Returns:
            Base64 XDR of the envelope with the new signature appended.

        Raises:
            SigningError: INVALID_INPUT for bad arguments or a fee bump
                envelope, INTERNAL if signing or encoding fails.
        """
        require_non_empty(transaction_xdr, "transaction XDR")
        require_non_empty(network_passphrase, "network passphrase")
        require_non_empty(secret_key, "secret key")

        keypair = parse_signing_keypair(secret_key)

        try:
            envelope = TransactionBuilder.from_xdr(
                transaction_xdr, network_passphrase
            )
        except Exception as e:
            raise SigningError.invalid_input(
                f"failed to parse transaction XDR: {e}"
            ) from e

        if not isinstance(envelope, TransactionEnvelope):
            raise SigningError.invalid_input(
                "expected a regular transaction, not a fee bump transaction"
            )

        # Append unconditionally; TransactionEnvelope.sign() would drop a
        # signature identical to one already present.
        try:
            tx_hash = envelope.hash()
            envelope.signatures.append(keypair.sign_decorated(tx_hash))
        except Exception as e:
            raise SigningError.internal(f"failed to sign transaction: {e}") from e

        try:
            signed_xdr = envelope.to_xdr()
        except Exception as e:
            raise SigningError.internal(
                f"failed to encode signed transaction: {e}"
            ) from e

        logger.info(
            "Signed SEP-10 transaction %s (%d signatures)",
            tx_hash.hex(),
            len(envelope.signatures),
        )
        return signed_xdr
