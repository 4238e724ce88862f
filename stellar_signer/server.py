"""Entry point for the remote signing server.

Usage:
    stellar-signer -c config.json
    python -m stellar_signer

Without -c, ./config.json is used if present, otherwise the environment
(HOST, PORT, ACCOUNT_ID, SECRET, NETWORK_PASSPHRASE, SOROBAN_RPC_URL,
BEARER_TOKEN), optionally from a .env file.
"""

import argparse
import logging

from dotenv import load_dotenv
from starlette.applications import Starlette
from stellar_sdk import Keypair

from .config import ServerConfig, load_config
from .signers.signer import LatestLedgerSource
from .web.register import (
    HEALTH_PATH,
    SEP10_PATH,
    SEP45_PATH,
    STELLAR_TOML_PATH,
    build_dispatcher,
)

logger = logging.getLogger(__name__)


def create_app(
    config: ServerConfig,
    ledger_client: LatestLedgerSource | None = None,
) -> Starlette:
    """Create the ASGI application for ``config``."""
    dispatcher = build_dispatcher(config, ledger_client=ledger_client)
    app = dispatcher.as_app()
    app.state.config = config
    app.state.dispatcher = dispatcher
    return app


def log_startup(config: ServerConfig) -> None:
    logger.info("Starting server on %s:%d", config.host, config.port)
    logger.info("Account ID: %s", config.account_id)
    logger.info("Network Passphrase: %s", config.network_passphrase)
    logger.info("Endpoints:")
    logger.info("  POST   %s", SEP10_PATH)
    logger.info("  POST   %s", SEP45_PATH)
    logger.info("  GET    %s", STELLAR_TOML_PATH)
    logger.info("  GET    %s", HEALTH_PATH)

    try:
        signing_account = Keypair.from_secret(config.secret).public_key
    except Exception:
        logger.warning("Configured secret is not a valid Stellar secret seed")
    else:
        if signing_account != config.account_id:
            logger.warning(
                "account_id %s does not match the configured secret (%s)",
                config.account_id,
                signing_account,
            )

    if config.uses_default_bearer_token:
        logger.warning("BEARER_TOKEN is not set; using the built-in default token")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stellar-signer",
        description="Remote signer for SEP-10 transactions and SEP-45 authorization entries.",
    )
    parser.add_argument("-c", "--config", help="path to a JSON config file")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s  %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    load_dotenv()

    try:
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        logger.error("Configuration error: %s", e)
        return 1

    log_startup(config)

    import uvicorn

    uvicorn.run(create_app(config), host=config.host, port=config.port, log_level="info")
    return 0
