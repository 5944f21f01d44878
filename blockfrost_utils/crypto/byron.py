"""
Byron-era (Icarus style) legacy address encoding

Address = base58(cbor([tag24(cbor([root, attrs, 0])), crc32]))
root    = blake2b224(sha3_256(cbor([0, [0, xpub], attrs])))

Mainnet addresses carry no attributes. Other networks carry the protocol
magic under attribute key 2, itself CBOR encoded.
"""

import hashlib
import zlib
from typing import Dict, Optional

import base58
import cbor2

from ..types import MAINNET

ADDR_TYPE_PUBLIC_KEY = 0
SPENDING_DATA_PUBLIC_KEY = 0
ATTR_PROTOCOL_MAGIC = 2
CBOR_TAG_ENCODED = 24


def _address_attributes(protocol_magic: Optional[int]) -> Dict[int, bytes]:
    if protocol_magic is None or protocol_magic == MAINNET.protocol_magic:
        return {}
    return {ATTR_PROTOCOL_MAGIC: cbor2.dumps(protocol_magic)}


def _address_root(xpub: bytes, attributes: Dict[int, bytes]) -> bytes:
    spending = cbor2.dumps([ADDR_TYPE_PUBLIC_KEY, [SPENDING_DATA_PUBLIC_KEY, xpub], attributes])
    return hashlib.blake2b(hashlib.sha3_256(spending).digest(), digest_size=28).digest()


def encode_byron_icarus_address(
    public_key: bytes,
    chain_code: bytes,
    protocol_magic: Optional[int] = None,
) -> str:
    """
    Encode a Byron Icarus address for a derived payment key

    Args:
        public_key: 32-byte Ed25519 public key
        chain_code: 32-byte BIP32 chain code
        protocol_magic: Network protocol magic, None or mainnet magic for mainnet

    Returns:
        Base58 encoded address
    """
    if len(public_key) != 32:
        raise ValueError(f"Invalid public key length: expected 32 bytes, got {len(public_key)}")
    if len(chain_code) != 32:
        raise ValueError(f"Invalid chain code length: expected 32 bytes, got {len(chain_code)}")

    attributes = _address_attributes(protocol_magic)
    root = _address_root(public_key + chain_code, attributes)
    payload = cbor2.dumps([root, attributes, ADDR_TYPE_PUBLIC_KEY])
    address = cbor2.dumps([cbor2.CBORTag(CBOR_TAG_ENCODED, payload), zlib.crc32(payload)])
    return base58.b58encode(address).decode("ascii")
