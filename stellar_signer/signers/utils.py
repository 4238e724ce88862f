"""Soroban RPC helpers for the signers."""

import logging

from stellar_sdk import SorobanServer
from stellar_sdk.exceptions import SorobanRpcErrorResponse

from ..errors import SigningError

logger = logging.getLogger(__name__)


def get_rpc_client(rpc_url: str) -> SorobanServer:
    """Create a SorobanServer RPC client for the given endpoint."""
    return SorobanServer(rpc_url)


class SorobanLedgerClient:
    """Reads the latest ledger sequence from Soroban RPC.

    Every failure is reported as an RPC_FAILURE SigningError. There is no
    retry or timeout policy here; callers that need one wrap this client.
    """

    def get_latest_ledger(self, rpc_url: str) -> int:
        server = get_rpc_client(rpc_url)
        try:
            response = server.get_latest_ledger()
        except SorobanRpcErrorResponse as e:
            raise SigningError.rpc_failure(f"RPC error: {e}") from e
        except Exception as e:
            raise SigningError.rpc_failure(f"failed to call Soroban RPC: {e}") from e
        finally:
            server.close()

        sequence = getattr(response, "sequence", None)
        if sequence is None:
            raise SigningError.rpc_failure("RPC response missing sequence field")

        logger.debug("Latest ledger from %s is %d", rpc_url, sequence)
        return int(sequence)
