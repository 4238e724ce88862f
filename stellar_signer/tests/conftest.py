import pytest
from stellar_sdk import Keypair

from stellar_signer.config import ServerConfig
from stellar_signer.errors import SigningError
from stellar_signer.tests.helpers import TEST_BEARER_TOKEN, TEST_NETWORK, TEST_RPC_URL, FakeLedgerClient


@pytest.fixture
def keypair() -> Keypair:
    return Keypair.random()


@pytest.fixture
def other_keypair() -> Keypair:
    return Keypair.random()


@pytest.fixture
def ledger_client() -> FakeLedgerClient:
    return FakeLedgerClient()


@pytest.fixture
def failing_ledger_client() -> FakeLedgerClient:
    return FakeLedgerClient(error=SigningError.rpc_failure("failed to call Soroban RPC: timed out"))


@pytest.fixture
def server_config(keypair: Keypair) -> ServerConfig:
    return ServerConfig(
        host="127.0.0.1",
        port=5003,
        account_id=keypair.public_key,
        secret=keypair.secret,
        network_passphrase=TEST_NETWORK,
        soroban_rpc_url=TEST_RPC_URL,
        bearer_token=TEST_BEARER_TOKEN,
    )


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {TEST_BEARER_TOKEN}"}
