"""Crypto utilities"""

from .webhook import (
    tokenize_signature_header,
    parse_signature_header,
    compute_webhook_signature,
    generate_signature_header,
    check_webhook_signature,
    verify_webhook_signature,
)

from .address import (
    decode_account_public_key,
    derive_address,
    derive_address_from_request,
    derive_addresses,
    account_public_key_from_mnemonic,
)

from .byron import encode_byron_icarus_address

__all__ = [
    # Webhook signatures
    "tokenize_signature_header",
    "parse_signature_header",
    "compute_webhook_signature",
    "generate_signature_header",
    "check_webhook_signature",
    "verify_webhook_signature",
    # Address derivation
    "decode_account_public_key",
    "derive_address",
    "derive_address_from_request",
    "derive_addresses",
    "account_public_key_from_mnemonic",
    "encode_byron_icarus_address",
]
