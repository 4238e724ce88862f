"""Artifact builders and fakes shared by the signer tests."""

from stellar_sdk import (
    Account,
    Address,
    Keypair,
    Network,
    StrKey,
    TransactionBuilder,
    scval,
)
from stellar_sdk.xdr import (
    Int64,
    InvokeContractArgs,
    SCSymbol,
    SCVal,
    SCValType,
    SorobanAddressCredentials,
    SorobanAuthorizationEntry,
    SorobanAuthorizedFunction,
    SorobanAuthorizedFunctionType,
    SorobanAuthorizedInvocation,
    SorobanCredentials,
    SorobanCredentialsType,
    Uint32,
)

TEST_NETWORK = Network.TESTNET_NETWORK_PASSPHRASE
TEST_RPC_URL = "https://soroban-testnet.stellar.org"
TEST_BEARER_TOKEN = "test-token-12345"
WEB_AUTH_CONTRACT = StrKey.encode_contract(bytes(range(32)))


class FakeLedgerClient:
    """In-memory stand-in for SorobanLedgerClient."""

    def __init__(self, sequence: int = 1_000_000, error: Exception | None = None):
        self.sequence = sequence
        self.error = error
        self.calls: list[str] = []

    def get_latest_ledger(self, rpc_url: str) -> int:
        self.calls.append(rpc_url)
        if self.error is not None:
            raise self.error
        return self.sequence


def build_transaction_xdr(
    source: Keypair,
    signers: tuple[Keypair, ...] = (),
    network_passphrase: str = TEST_NETWORK,
) -> str:
    """Build a SEP-10 style challenge (sequence 0, one manage_data op)."""
    envelope = (
        TransactionBuilder(
            source_account=Account(source.public_key, 0),
            network_passphrase=network_passphrase,
            base_fee=100,
        )
        .append_manage_data_op(data_name="example.com auth", data_value=b"challenge")
        .add_time_bounds(1_000_000_000, 1_000_000_300)
        .build()
    )
    for signer in signers:
        envelope.sign(signer)
    return envelope.to_xdr()


def build_fee_bump_xdr(inner_source: Keypair, fee_source: Keypair) -> str:
    inner = (
        TransactionBuilder(
            source_account=Account(inner_source.public_key, 1),
            network_passphrase=TEST_NETWORK,
            base_fee=100,
        )
        .append_manage_data_op(data_name="inner", data_value=b"value")
        .add_time_bounds(0, 0)
        .build()
    )
    inner.sign(inner_source)
    fee_bump = TransactionBuilder.build_fee_bump_transaction(
        fee_source=fee_source.public_key,
        base_fee=200,
        inner_transaction_envelope=inner,
        network_passphrase=TEST_NETWORK,
    )
    return fee_bump.to_xdr()


def build_root_invocation(account_id: str) -> SorobanAuthorizedInvocation:
    return SorobanAuthorizedInvocation(
        function=SorobanAuthorizedFunction(
            type=SorobanAuthorizedFunctionType.SOROBAN_AUTHORIZED_FUNCTION_TYPE_CONTRACT_FN,
            contract_fn=InvokeContractArgs(
                contract_address=Address(WEB_AUTH_CONTRACT).to_xdr_sc_address(),
                function_name=SCSymbol(b"web_auth_verify"),
                args=[scval.to_address(account_id)],
            ),
        ),
        sub_invocations=[],
    )


def build_address_entry(address: str, nonce: int = 123456789) -> SorobanAuthorizationEntry:
    """Build an unsigned authorization entry with address credentials."""
    credentials = SorobanCredentials(
        type=SorobanCredentialsType.SOROBAN_CREDENTIALS_ADDRESS,
        address=SorobanAddressCredentials(
            address=Address(address).to_xdr_sc_address(),
            nonce=Int64(nonce),
            signature_expiration_ledger=Uint32(0),
            signature=SCVal(SCValType.SCV_VOID),
        ),
    )
    return SorobanAuthorizationEntry(
        credentials=credentials,
        root_invocation=build_root_invocation(address),
    )


def build_source_account_entry(account_id: str) -> SorobanAuthorizationEntry:
    return SorobanAuthorizationEntry(
        credentials=SorobanCredentials(
            type=SorobanCredentialsType.SOROBAN_CREDENTIALS_SOURCE_ACCOUNT,
        ),
        root_invocation=build_root_invocation(account_id),
    )


def signature_fields(signature: SCVal) -> dict[str, bytes]:
    """Flatten the Vec[Map{public_key, signature}] signature value."""
    items = scval.from_vec(signature)
    assert len(items) == 1
    return {
        scval.from_symbol(key): scval.from_bytes(value)
        for key, value in scval.from_map(items[0]).items()
    }

