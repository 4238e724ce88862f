"""Error taxonomy shared by the signers and the HTTP layer."""

from enum import Enum

INTERNAL_ERROR_MESSAGE = "Internal server error"


class ErrorKind(str, Enum):
    """Discriminant carried by every SigningError."""

    INVALID_INPUT = "invalid_input"
    UNAUTHENTICATED = "unauthenticated"
    RPC_FAILURE = "rpc_failure"
    INTERNAL = "internal"


HTTP_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.RPC_FAILURE: 500,
    ErrorKind.INTERNAL: 500,
}

# Kinds whose message is safe to return to the caller verbatim.
_CLIENT_FACING_KINDS = frozenset({ErrorKind.INVALID_INPUT, ErrorKind.UNAUTHENTICATED})


def status_code_for(kind: ErrorKind) -> int:
    """Map an error kind to its HTTP status code."""
    return HTTP_STATUS_BY_KIND[kind]


class SigningError(Exception):
    """A classified failure raised by a signer or by request validation."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __repr__(self) -> str:
        return f"SigningError(kind={self.kind.value!r}, message={self.message!r})"

    @classmethod
    def invalid_input(cls, message: str) -> "SigningError":
        return cls(ErrorKind.INVALID_INPUT, message)

    @classmethod
    def unauthenticated(cls, message: str = "Unauthenticated") -> "SigningError":
        return cls(ErrorKind.UNAUTHENTICATED, message)

    @classmethod
    def rpc_failure(cls, message: str) -> "SigningError":
        return cls(ErrorKind.RPC_FAILURE, message)

    @classmethod
    def internal(cls, message: str) -> "SigningError":
        return cls(ErrorKind.INTERNAL, message)

    @property
    def status_code(self) -> int:
        return status_code_for(self.kind)

    @property
    def is_client_error(self) -> bool:
        return self.kind in _CLIENT_FACING_KINDS

    @property
    def public_message(self) -> str:
        """Message suitable for the response body.

        Internal and RPC failures collapse to a generic message; their detail
        only goes to the server log.
        """
        if self.is_client_error:
            return self.message
        return INTERNAL_ERROR_MESSAGE
