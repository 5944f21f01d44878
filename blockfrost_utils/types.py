"""
Type definitions for blockfrost-utils
Value objects shared by the webhook verifier and the address deriver
"""

from dataclasses import dataclass
from typing import Literal, Optional, Tuple


# Type aliases
HexDigest = str  # lowercase hex HMAC-SHA256 output
DerivationPath = Tuple[int, int]  # (role, address_index)
SignatureErrorReason = Literal["malformed_header", "multiple_headers"]
RejectionReason = Literal["digest_mismatch", "stale"]

# Blockfrost-Signature header keys
TIMESTAMP_KEY = "t"
SIGNATURE_V1_KEY = "v1"

DEFAULT_TIMESTAMP_TOLERANCE_SECONDS = 600

# CIP-1852 staking role
ROLE_STAKING = 2


@dataclass(frozen=True)
class SignatureHeader:
    """Parsed Blockfrost-Signature header"""
    timestamp: int  # Unix timestamp in seconds
    signature: HexDigest  # v1 digest, taken verbatim


@dataclass(frozen=True)
class SignatureCheckResult:
    """Outcome of checking a well-formed signature header"""
    valid: bool
    timestamp: int
    reason: Optional[RejectionReason] = None

    def __bool__(self) -> bool:
        return self.valid


@dataclass(frozen=True)
class NetworkInfo:
    """Network parameters affecting address encoding"""
    name: str
    network_id: int
    protocol_magic: int


MAINNET = NetworkInfo(name="mainnet", network_id=1, protocol_magic=764824073)
TESTNET = NetworkInfo(name="testnet", network_id=0, protocol_magic=1097911063)


@dataclass(frozen=True)
class DerivationRequest:
    """Address derivation request"""
    account_public_key: str  # hex, 32-byte public key + 32-byte chain code
    role: int
    address_index: int
    is_testnet: bool = False
    is_byron: bool = False


@dataclass(frozen=True)
class DerivedAddress:
    """Derived address shaped as {address, path: (role, address_index)}"""
    address: str  # Bech32 (Shelley) or Base58 (Byron)
    path: DerivationPath
