"""
Custom exception classes for blockfrost-utils
"""

from typing import Optional, Dict, Any, Union

from .types import SignatureErrorReason


class BlockfrostUtilsError(Exception):
    """Base blockfrost-utils error class"""

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class SignatureVerificationError(BlockfrostUtilsError):
    """
    Webhook signature header could not be verified at all.

    Raised when the header is structurally unusable (missing ``t``/``v1``,
    non-integer timestamp) or was delivered as several header values.
    A well-formed header with a wrong or stale digest is not an error;
    the verifier returns False for those.
    """

    def __init__(
        self,
        message: str,
        reason: SignatureErrorReason,
        signature_header: Optional[Union[str, bytes, list, tuple]] = None,
        webhook_payload: Optional[Union[str, bytes]] = None,
    ):
        details: Dict[str, Any] = {}
        if signature_header is not None:
            details["signature_header"] = signature_header
        if webhook_payload is not None:
            details["webhook_payload"] = webhook_payload
        super().__init__("SIGNATURE_VERIFICATION", message, details)
        self.reason = reason
        self.signature_header = signature_header
        self.webhook_payload = webhook_payload

    def __str__(self) -> str:
        return f"[{self.code}:{self.reason}] {self.message}"
