"""Signer protocols for the remote signing service."""

from typing import Protocol


class LatestLedgerSource(Protocol):
    """Protocol for anything that can report the network's latest ledger."""

    def get_latest_ledger(self, rpc_url: str) -> int:
        """Return the current ledger sequence number.

        Args:
            rpc_url: Soroban RPC endpoint to query.

        Raises:
            SigningError: with kind RPC_FAILURE when the query fails.
        """
        ...


class TransactionSigner(Protocol):
    """Protocol for SEP-10 transaction signing."""

    def sign(
        self,
        transaction_xdr: str,
        network_passphrase: str,
        secret_key: str,
    ) -> str:
        """Sign a transaction envelope.

        Args:
            transaction_xdr: Base64 XDR of the transaction envelope.
            network_passphrase: Network passphrase for signing context.
            secret_key: Secret seed (S...) of the signing key.

        Returns:
            Base64 XDR of the envelope with the new signature appended.
        """
        ...


class AuthorizationEntrySigner(Protocol):
    """Protocol for SEP-45 authorization entry signing."""

    def sign(
        self,
        entry_xdr: str,
        network_passphrase: str,
        secret_key: str,
        rpc_url: str,
    ) -> str:
        """Sign a single Soroban authorization entry.

        Args:
            entry_xdr: Base64 XDR of one SorobanAuthorizationEntry.
            network_passphrase: Network passphrase for signing context.
            secret_key: Secret seed (S...) of the signing key.
            rpc_url: Soroban RPC endpoint used to read the latest ledger.

        Returns:
            Base64 XDR of the signed authorization entry.
        """
        ...
