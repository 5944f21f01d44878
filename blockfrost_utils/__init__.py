"""
blockfrost-utils
Helpers for Blockfrost API clients: webhook signature verification and
Cardano address derivation

Example:
    ```python
    from blockfrost_utils import verify_webhook_signature, SignatureVerificationError

    try:
        if verify_webhook_signature(raw_body, request.headers["Blockfrost-Signature"], auth_token):
            process(json.loads(raw_body))
    except SignatureVerificationError as err:
        print(f"Bad signature header: {err}")
    ```
"""

__version__ = "1.0.0"

# Types
from .types import (
    HexDigest,
    DerivationPath,
    SignatureErrorReason,
    RejectionReason,
    SignatureHeader,
    SignatureCheckResult,
    NetworkInfo,
    MAINNET,
    TESTNET,
    DerivationRequest,
    DerivedAddress,
    DEFAULT_TIMESTAMP_TOLERANCE_SECONDS,
)

# Errors
from .errors import (
    BlockfrostUtilsError,
    SignatureVerificationError,
)

# Configuration
from .config import (
    BlockfrostUtilsConfig,
    get_config,
    set_config,
    clear_config,
)

# Webhook signatures
from .crypto.webhook import (
    tokenize_signature_header,
    parse_signature_header,
    compute_webhook_signature,
    generate_signature_header,
    check_webhook_signature,
    verify_webhook_signature,
)

# Address derivation
from .crypto.address import (
    derive_address,
    derive_address_from_request,
    derive_addresses,
    account_public_key_from_mnemonic,
)

__all__ = [
    "__version__",
    # Types
    "HexDigest",
    "DerivationPath",
    "SignatureErrorReason",
    "RejectionReason",
    "SignatureHeader",
    "SignatureCheckResult",
    "NetworkInfo",
    "MAINNET",
    "TESTNET",
    "DerivationRequest",
    "DerivedAddress",
    "DEFAULT_TIMESTAMP_TOLERANCE_SECONDS",
    # Errors
    "BlockfrostUtilsError",
    "SignatureVerificationError",
    # Configuration
    "BlockfrostUtilsConfig",
    "get_config",
    "set_config",
    "clear_config",
    # Webhook signatures
    "tokenize_signature_header",
    "parse_signature_header",
    "compute_webhook_signature",
    "generate_signature_header",
    "check_webhook_signature",
    "verify_webhook_signature",
    # Address derivation
    "derive_address",
    "derive_address_from_request",
    "derive_addresses",
    "account_public_key_from_mnemonic",
]
