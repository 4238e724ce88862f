"""Tests for the Soroban RPC ledger client."""

from types import SimpleNamespace

import pytest
from stellar_sdk.exceptions import SorobanRpcErrorResponse

from stellar_signer.errors import ErrorKind, SigningError
from stellar_signer.signers import utils
from stellar_signer.signers.utils import SorobanLedgerClient

RPC_URL = "https://rpc.example.org"


class FakeSorobanServer:
    """Records construction and replays a canned get_latest_ledger result."""

    instances: list["FakeSorobanServer"] = []
    result: object = None

    def __init__(self, server_url: str):
        self.server_url = server_url
        self.closed = False
        FakeSorobanServer.instances.append(self)

    def get_latest_ledger(self):
        if isinstance(self.result, Exception):
            raise self.result
        return self.result

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_server(monkeypatch):
    FakeSorobanServer.instances = []
    FakeSorobanServer.result = None
    monkeypatch.setattr(utils, "SorobanServer", FakeSorobanServer)
    return FakeSorobanServer


class TestSorobanLedgerClient:
    def test_returns_latest_sequence(self, fake_server):
        fake_server.result = SimpleNamespace(id="abc", protocol_version=22, sequence=51234)

        assert SorobanLedgerClient().get_latest_ledger(RPC_URL) == 51234

        server = fake_server.instances[0]
        assert server.server_url == RPC_URL
        assert server.closed

    def test_wraps_transport_errors(self, fake_server):
        fake_server.result = ConnectionError("connection refused")

        with pytest.raises(SigningError, match="failed to call Soroban RPC: connection refused") as exc_info:
            SorobanLedgerClient().get_latest_ledger(RPC_URL)

        assert exc_info.value.kind == ErrorKind.RPC_FAILURE
        assert fake_server.instances[0].closed

    def test_wraps_rpc_error_responses(self, fake_server):
        fake_server.result = SorobanRpcErrorResponse(-32601, "method not found")

        with pytest.raises(SigningError, match="RPC error:") as exc_info:
            SorobanLedgerClient().get_latest_ledger(RPC_URL)

        assert exc_info.value.kind == ErrorKind.RPC_FAILURE
        assert exc_info.value.status_code == 500
        assert fake_server.instances[0].closed

    def test_rejects_missing_sequence(self, fake_server):
        fake_server.result = SimpleNamespace(id="abc", protocol_version=22, sequence=None)

        with pytest.raises(SigningError, match="RPC response missing sequence field") as exc_info:
            SorobanLedgerClient().get_latest_ledger(RPC_URL)

        assert exc_info.value.kind == ErrorKind.RPC_FAILURE

    def test_creates_a_client_per_call(self, fake_server):
        fake_server.result = SimpleNamespace(sequence=7)
        client = SorobanLedgerClient()

        client.get_latest_ledger(RPC_URL)
        client.get_latest_ledger("https://other.example.org")

        assert [s.server_url for s in fake_server.instances] == [
            RPC_URL,
            "https://other.example.org",
        ]
