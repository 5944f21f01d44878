"""
Webhook signature verification
Header format: t=<unix seconds>,v1=<hex HMAC-SHA256>
Signed message: "<t>.<raw request body>"

IMPORTANT: the payload must be the raw request body exactly as received.
Re-serializing parsed JSON changes whitespace/key order and breaks the HMAC.
"""

import hashlib
import hmac
import logging
import time
from typing import Dict, Optional, Union

from ..config import get_config, is_debug_enabled
from ..errors import SignatureVerificationError
from ..types import (
    SIGNATURE_V1_KEY,
    TIMESTAMP_KEY,
    HexDigest,
    SignatureCheckResult,
    SignatureHeader,
)

logger = logging.getLogger(__name__)

Payload = Union[str, bytes, bytearray]


def _to_bytes(value: Payload, what: str) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode("utf-8")
    raise TypeError(f"{what} must be str or bytes, got {type(value).__name__}")


def tokenize_signature_header(signature_header: str) -> Dict[str, str]:
    """
    Split a signature header into its raw key/value pairs.

    Each comma separated token is split on the first '='. Later duplicates
    override earlier ones. No validation happens here.
    """
    fields: Dict[str, str] = {}
    for token in signature_header.split(","):
        key, _, value = token.strip().partition("=")
        fields[key] = value
    return fields


def parse_signature_header(
    signature_header: Union[str, bytes, bytearray],
    webhook_payload: Optional[Payload] = None,
) -> SignatureHeader:
    """
    Parse a Blockfrost-Signature header into its typed fields.

    Args:
        signature_header: Header value (e.g. t=1648550558,v1=1623...)
        webhook_payload: Only attached to the error for diagnostics

    Returns:
        SignatureHeader

    Raises:
        SignatureVerificationError: If ``t`` or ``v1`` is missing or unusable
    """
    if isinstance(signature_header, (list, tuple)):
        raise SignatureVerificationError(
            "Unexpected: An array was passed as a header",
            reason="multiple_headers",
            signature_header=signature_header,
            webhook_payload=webhook_payload,
        )

    if isinstance(signature_header, str):
        decoded_header = signature_header
    else:
        try:
            decoded_header = _to_bytes(signature_header, "signature_header").decode("utf-8")
        except UnicodeDecodeError:
            raise SignatureVerificationError(
                "Signature header is not valid UTF-8",
                reason="malformed_header",
                signature_header=signature_header,
                webhook_payload=webhook_payload,
            )
    fields = tokenize_signature_header(decoded_header)

    timestamp: Optional[int] = None
    signature: Optional[str] = None
    for key, value in fields.items():
        if key == TIMESTAMP_KEY:
            # plain ASCII digits only, no sign, spaces or underscores
            timestamp = int(value) if value.isascii() and value.isdigit() else None
        elif key == SIGNATURE_V1_KEY:
            signature = value
        else:
            logger.warning(
                'Cannot parse part of the signature header, key "%s" is not supported '
                "by this version of blockfrost-utils.",
                key,
            )

    if not timestamp or not signature:
        raise SignatureVerificationError(
            "Invalid signature header format",
            reason="malformed_header",
            signature_header=decoded_header,
            webhook_payload=webhook_payload,
        )

    return SignatureHeader(timestamp=timestamp, signature=signature)


def compute_webhook_signature(webhook_payload: Payload, timestamp: int, secret: str) -> HexDigest:
    """
    Compute the v1 digest: hex(HMAC-SHA256(secret, "<timestamp>.<payload>"))

    Bytes payloads are signed as received, without decoding.
    """
    message = f"{timestamp}.".encode("utf-8") + _to_bytes(webhook_payload, "webhook_payload")
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


def generate_signature_header(
    webhook_payload: Payload,
    secret: str,
    timestamp: Optional[int] = None,
) -> str:
    """
    Build a signature header the way the sender does.

    Useful for replaying captured events against a local receiver.
    """
    ts = int(time.time()) if timestamp is None else timestamp
    digest = compute_webhook_signature(webhook_payload, ts, secret)
    return f"{TIMESTAMP_KEY}={ts},{SIGNATURE_V1_KEY}={digest}"


def _log_rejection(message: str, *args) -> None:
    if is_debug_enabled():
        logger.info(message, *args)
    else:
        logger.debug(message, *args)


def check_webhook_signature(
    webhook_payload: Payload,
    signature_header: Union[str, bytes, bytearray],
    secret: str,
    timestamp_tolerance_seconds: Optional[int] = None,
    current_time: Optional[int] = None,
) -> SignatureCheckResult:
    """
    Check a webhook signature and report why it was rejected.

    Args:
        webhook_payload: Raw request body (str or bytes)
        signature_header: Blockfrost-Signature header value
        secret: Webhook auth token
        timestamp_tolerance_seconds: Maximum signature age, config default (600s) when None
        current_time: Unix seconds used as "now", defaults to time.time()

    Returns:
        SignatureCheckResult with reason "digest_mismatch" or "stale" when invalid

    Raises:
        SignatureVerificationError: If the header is malformed or multi-valued
    """
    header = parse_signature_header(signature_header, webhook_payload)
    expected = compute_webhook_signature(webhook_payload, header.timestamp, secret)

    if not hmac.compare_digest(expected.encode("utf-8"), header.signature.encode("utf-8", "surrogatepass")):
        _log_rejection("Invalid signature. Digest does not match (t=%d)", header.timestamp)
        return SignatureCheckResult(valid=False, timestamp=header.timestamp, reason="digest_mismatch")

    tolerance = (
        timestamp_tolerance_seconds
        if timestamp_tolerance_seconds is not None
        else get_config().timestamp_tolerance_seconds
    )
    now = int(time.time()) if current_time is None else current_time
    if now - header.timestamp > tolerance:
        _log_rejection(
            "Invalid signature. Blockfrost signature timestamp is out of range! (age %ds, tolerance %ds)",
            now - header.timestamp,
            tolerance,
        )
        return SignatureCheckResult(valid=False, timestamp=header.timestamp, reason="stale")

    return SignatureCheckResult(valid=True, timestamp=header.timestamp)


def verify_webhook_signature(
    webhook_payload: Payload,
    signature_header: Union[str, bytes, bytearray],
    secret: str,
    timestamp_tolerance_seconds: Optional[int] = None,
    current_time: Optional[int] = None,
) -> bool:
    """
    Verify a webhook signature.

    A wrong digest or a signature older than the tolerance returns False.
    A header that cannot be parsed raises SignatureVerificationError.

    Example:
        >>> header = generate_signature_header('{"type":"block"}', "whsec_test", 1000000000)
        >>> verify_webhook_signature('{"type":"block"}', header, "whsec_test", current_time=1000000000)
        True
    """
    return check_webhook_signature(
        webhook_payload,
        signature_header,
        secret,
        timestamp_tolerance_seconds,
        current_time,
    ).valid
