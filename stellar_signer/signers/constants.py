"""Constants for the SEP-10 and SEP-45 signers."""

from stellar_sdk import Network

# Ledgers an SEP-45 signature stays valid for, counted from the latest ledger.
SIGNATURE_EXPIRATION_LEDGER_WINDOW = 10

TESTNET_NETWORK_PASSPHRASE = Network.TESTNET_NETWORK_PASSPHRASE

DEFAULT_TESTNET_RPC_URL = "https://soroban-testnet.stellar.org"

# Keys of the map embedded in a signed SEP-45 credential.
SIGNATURE_PUBLIC_KEY_FIELD = "public_key"
SIGNATURE_FIELD = "signature"
