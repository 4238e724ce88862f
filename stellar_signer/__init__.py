"""Remote signer for Stellar SEP-10 transactions and SEP-45 authorization entries."""

from .config import ServerConfig, load_config
from .errors import ErrorKind, SigningError
from .signers import Sep10Signer, Sep45Signer, SorobanLedgerClient

__version__ = "0.1.0"

__all__ = [
    "ErrorKind",
    "Sep10Signer",
    "Sep45Signer",
    "ServerConfig",
    "SigningError",
    "SorobanLedgerClient",
    "load_config",
]
