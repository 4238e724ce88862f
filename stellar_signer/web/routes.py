"""Route handlers for the signing service."""

import json
import logging

from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response

from ..config import ServerConfig
from ..errors import INTERNAL_ERROR_MESSAGE, SigningError
from ..signers.signer import AuthorizationEntrySigner, TransactionSigner
from .dispatcher import Handler, error_response, json_response, read_json_body
from .types import (
    Sep10SignRequest,
    Sep10SignResponse,
    Sep45SignRequest,
    Sep45SignResponse,
    parse_signing_request,
)

logger = logging.getLogger(__name__)


def render_stellar_toml(config: ServerConfig) -> str:
    """Render the stellar.toml advertising the server's signing key."""
    # JSON string quoting is valid TOML basic-string quoting.
    account = json.dumps(config.account_id)
    passphrase = json.dumps(config.network_passphrase)
    return (
        f"ACCOUNTS = [{account}]\n"
        f"SIGNING_KEY = {account}\n"
        f"NETWORK_PASSPHRASE = {passphrase}\n"
    )


def _signing_error_response(protocol: str, error: SigningError) -> Response:
    if error.is_client_error:
        logger.info("%s request rejected: %s", protocol, error.message)
    else:
        logger.error("%s signing error (%s): %s", protocol, error.kind.value, error.message)
    return error_response(error.status_code, error.public_message)


async def health(request: Request) -> Response:
    return json_response(200, {"status": "ok"})


def make_stellar_toml_handler(config: ServerConfig) -> Handler:
    toml = render_stellar_toml(config)

    async def stellar_toml(request: Request) -> Response:
        return PlainTextResponse(toml, status_code=200)

    return stellar_toml


def make_sep10_handler(config: ServerConfig, signer: TransactionSigner) -> Handler:
    """Build the POST /sign-sep-10 handler.

    The signer runs in a worker thread so a slow request never holds up
    the event loop.
    """

    async def sign_sep10(request: Request) -> Response:
        try:
            body = await read_json_body(request)
            payload = parse_signing_request(Sep10SignRequest, body)
            signed = await run_in_threadpool(
                signer.sign,
                payload.transaction,
                payload.network_passphrase,
                config.secret,
            )
        except SigningError as e:
            return _signing_error_response("SEP-10", e)
        except Exception:
            logger.exception("SEP-10 signing error")
            return error_response(500, INTERNAL_ERROR_MESSAGE)

        response = Sep10SignResponse(
            transaction=signed,
            network_passphrase=payload.network_passphrase,
        )
        return json_response(200, response.model_dump())

    return sign_sep10


def make_sep45_handler(config: ServerConfig, signer: AuthorizationEntrySigner) -> Handler:
    """Build the POST /sign-sep-45 handler.

    The secret key and RPC URL always come from the server config.
    """

    async def sign_sep45(request: Request) -> Response:
        try:
            body = await read_json_body(request)
            payload = parse_signing_request(Sep45SignRequest, body)
            signed = await run_in_threadpool(
                signer.sign,
                payload.authorization_entry,
                payload.network_passphrase,
                config.secret,
                config.soroban_rpc_url,
            )
        except SigningError as e:
            return _signing_error_response("SEP-45", e)
        except Exception:
            logger.exception("SEP-45 signing error")
            return error_response(500, INTERNAL_ERROR_MESSAGE)

        response = Sep45SignResponse(
            authorization_entry=signed,
            network_passphrase=payload.network_passphrase,
        )
        return json_response(200, response.model_dump())

    return sign_sep45
