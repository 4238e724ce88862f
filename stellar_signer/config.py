"""Server configuration loaded from a JSON file or the environment."""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .signers.constants import DEFAULT_TESTNET_RPC_URL, TESTNET_NETWORK_PASSPHRASE

logger = logging.getLogger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 5003
DEFAULT_CONFIG_PATH = "config.json"

# Token used when BEARER_TOKEN is unset; only applies to environment loading.
DEFAULT_ENV_BEARER_TOKEN = "987654321"


@dataclass(frozen=True)
class ServerConfig:
    """Immutable configuration for one server process.

    The secret seed and bearer token are excluded from repr so the config
    can be logged safely.
    """

    host: str
    port: int
    account_id: str
    secret: str = field(repr=False)
    network_passphrase: str
    soroban_rpc_url: str
    bearer_token: str = field(repr=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ServerConfig":
        """Build a config from a mapping, applying defaults and validation.

        Raises:
            ValueError: If a required field is missing or the port is invalid.
        """
        host = str(data.get("host") or DEFAULT_HOST)
        # A port that is not a number counts as unset, like 0.
        try:
            port = int(data.get("port") or DEFAULT_PORT)
        except (TypeError, ValueError):
            port = DEFAULT_PORT
        account_id = str(data.get("account_id") or "")
        secret = str(data.get("secret") or "")
        network_passphrase = str(data.get("network_passphrase") or TESTNET_NETWORK_PASSPHRASE)
        soroban_rpc_url = str(data.get("soroban_rpc_url") or DEFAULT_TESTNET_RPC_URL)
        bearer_token = str(data.get("bearer_token") or "")

        if not account_id:
            raise ValueError("account_id is required")
        if not secret:
            raise ValueError("secret is required")
        if not bearer_token:
            raise ValueError("bearer_token is required")
        if port < 1 or port > 65535:
            raise ValueError(f"Invalid port number: {port}")

        return cls(
            host=host,
            port=port,
            account_id=account_id,
            secret=secret,
            network_passphrase=network_passphrase,
            soroban_rpc_url=soroban_rpc_url,
            bearer_token=bearer_token,
        )

    @classmethod
    def from_file(cls, path: str | os.PathLike) -> "ServerConfig":
        """Load configuration from a JSON file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file is not a JSON object or fails validation.
        """
        config_path = Path(path)
        if not config_path.is_file():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        try:
            data = json.loads(config_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ValueError(f"Failed to parse config file: {config_path}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Failed to parse config file: {config_path}")

        return cls.from_dict(data)

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "ServerConfig":
        """Load configuration from environment variables.

        Empty variables count as unset. An unparseable PORT falls back to
        the default port.
        """
        env = os.environ if environ is None else environ
        return cls.from_dict(
            {
                "host": env.get("HOST") or DEFAULT_HOST,
                "port": _env_int(env, "PORT", DEFAULT_PORT),
                "account_id": env.get("ACCOUNT_ID", ""),
                "secret": env.get("SECRET", ""),
                "network_passphrase": env.get("NETWORK_PASSPHRASE") or TESTNET_NETWORK_PASSPHRASE,
                "soroban_rpc_url": env.get("SOROBAN_RPC_URL") or DEFAULT_TESTNET_RPC_URL,
                "bearer_token": env.get("BEARER_TOKEN") or DEFAULT_ENV_BEARER_TOKEN,
            }
        )

    @property
    def uses_default_bearer_token(self) -> bool:
        return self.bearer_token == DEFAULT_ENV_BEARER_TOKEN


def _env_int(env: Any, key: str, default: int) -> int:
    value = env.get(key)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def load_config(path: str | None = None) -> ServerConfig:
    """Load configuration from ``path``, ./config.json, or the environment.

    An explicit path always wins. Without one, ./config.json is used when it
    exists; otherwise the environment is read.
    """
    if path is None and Path(DEFAULT_CONFIG_PATH).is_file():
        path = DEFAULT_CONFIG_PATH

    if path is not None:
        config = ServerConfig.from_file(path)
        logger.info("Loaded configuration from file: %s", path)
        return config

    config = ServerConfig.from_env()
    logger.info("Loaded configuration from environment variables")
    return config
