"""Registration helpers wiring the signers into a dispatcher."""

from ..config import ServerConfig
from ..signers.sep10 import Sep10Signer
from ..signers.sep45 import Sep45Signer
from ..signers.signer import (
    AuthorizationEntrySigner,
    LatestLedgerSource,
    TransactionSigner,
)
from .dispatcher import Dispatcher, RouteTable
from .routes import health, make_sep10_handler, make_sep45_handler, make_stellar_toml_handler

HEALTH_PATH = "/health"
STELLAR_TOML_PATH = "/.well-known/stellar.toml"
SEP10_PATH = "/sign-sep-10"
SEP45_PATH = "/sign-sep-45"


def register_public_routes(table: RouteTable, config: ServerConfig) -> RouteTable:
    """Register the unauthenticated health and stellar.toml routes."""
    table.get(HEALTH_PATH, health)
    table.get(STELLAR_TOML_PATH, make_stellar_toml_handler(config))
    return table


def register_signing_routes(
    table: RouteTable,
    config: ServerConfig,
    sep10_signer: TransactionSigner,
    sep45_signer: AuthorizationEntrySigner,
) -> RouteTable:
    """Register the two signing routes, both behind bearer auth."""
    table.post(SEP10_PATH, make_sep10_handler(config, sep10_signer))
    table.require_auth(SEP10_PATH)

    table.post(SEP45_PATH, make_sep45_handler(config, sep45_signer))
    table.require_auth(SEP45_PATH)
    return table


def build_dispatcher(
    config: ServerConfig,
    ledger_client: LatestLedgerSource | None = None,
    sep10_signer: TransactionSigner | None = None,
    sep45_signer: AuthorizationEntrySigner | None = None,
) -> Dispatcher:
    """Create the dispatcher for a fully configured signing server."""
    table = RouteTable()
    register_public_routes(table, config)
    register_signing_routes(
        table,
        config,
        sep10_signer or Sep10Signer(),
        sep45_signer or Sep45Signer(ledger_client=ledger_client),
    )
    return table.build(config.bearer_token)
