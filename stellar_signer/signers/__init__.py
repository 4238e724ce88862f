"""SEP-10 and SEP-45 signers.

Both signers take the artifact as base64 XDR, validate it, add a signature
made with the server key and return base64 XDR again.

Usage:
    from stellar_signer.signers import Sep10Signer, Sep45Signer

    signed_tx = Sep10Signer().sign(tx_xdr, network_passphrase, secret)
    signed_entry = Sep45Signer().sign(entry_xdr, network_passphrase, secret, rpc_url)
"""

from .constants import SIGNATURE_EXPIRATION_LEDGER_WINDOW
from .sep10 import Sep10Signer
from .sep45 import (
    Sep45Signer,
    build_authorization_preimage,
    decode_authorization_entry,
)
from .signer import AuthorizationEntrySigner, LatestLedgerSource, TransactionSigner
from .utils import SorobanLedgerClient

__all__ = [
    "SIGNATURE_EXPIRATION_LEDGER_WINDOW",
    "AuthorizationEntrySigner",
    "LatestLedgerSource",
    "Sep10Signer",
    "Sep45Signer",
    "SorobanLedgerClient",
    "TransactionSigner",
    "build_authorization_preimage",
    "decode_authorization_entry",
]
