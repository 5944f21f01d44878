"""
Cardano address derivation from an account-level extended public key
Derivation path m/1852'/1815'/account'/role/address_index (CIP-1852)

Only the two non-hardened levels (role, address_index) are derived here,
so a public key is enough.
"""

import logging
from typing import Iterable, List

from bip_utils import (
    AdaShelleyAddrEncoder,
    AdaShelleyAddrNetworkTags,
    AdaShelleyStakingAddrEncoder,
    Bip32KeyData,
    CardanoIcarusBip32,
    CardanoIcarusSeedGenerator,
    Cip1852,
    Cip1852Coins,
)
from mnemonic import Mnemonic

from ..types import (
    MAINNET,
    ROLE_STAKING,
    TESTNET,
    DerivationRequest,
    DerivedAddress,
    NetworkInfo,
)
from .byron import encode_byron_icarus_address

logger = logging.getLogger(__name__)

ACCOUNT_PUBLIC_KEY_SIZE = 64  # 32-byte public key + 32-byte chain code
HARDENED_OFFSET = 0x80000000
DEFAULT_STAKING_INDEX = 0


def _validate_index(name: str, value: int) -> None:
    if value < 0 or value >= HARDENED_OFFSET:
        raise ValueError(f"Invalid {name}: {value} (must be a non-hardened index)")


def decode_account_public_key(account_public_key: str) -> CardanoIcarusBip32:
    """
    Decode an account extended public key from hex

    Raises:
        ValueError: If the key is not valid hex or not 64 bytes long
    """
    key_bytes = bytes.fromhex(account_public_key)
    if len(key_bytes) != ACCOUNT_PUBLIC_KEY_SIZE:
        raise ValueError(
            f"Invalid account public key length: expected {ACCOUNT_PUBLIC_KEY_SIZE} bytes, got {len(key_bytes)}"
        )
    return CardanoIcarusBip32.FromPublicKey(
        key_bytes[:32],
        Bip32KeyData(chain_code=key_bytes[32:]),
    )


def _network_tag(network: NetworkInfo) -> AdaShelleyAddrNetworkTags:
    if network.network_id == MAINNET.network_id:
        return AdaShelleyAddrNetworkTags.MAINNET
    return AdaShelleyAddrNetworkTags.TESTNET


def derive_address(
    account_public_key: str,
    role: int,
    address_index: int,
    is_testnet: bool,
    is_byron: bool = False,
) -> DerivedAddress:
    """
    Derive an address with derivation path m/1852'/1815'/account'/role/address_index

    If role == 2 (and not Byron) a stake address is returned, derived from
    m/1852'/1815'/account'/2/address_index rather than the default 2/0 key.

    Args:
        account_public_key: Account extended public key (hex)
        role: 0 external, 1 internal (change), 2 staking
        address_index: Address index within the role
        is_testnet: Encode for testnet instead of mainnet
        is_byron: Return a legacy Byron (Icarus) address

    Returns:
        DerivedAddress with path (role, address_index)

    Example:
        >>> derive_address(account_xpub_hex, 0, 0, False).address
        'addr1q...'
    """
    _validate_index("role", role)
    _validate_index("address index", address_index)

    account_key = decode_account_public_key(account_public_key)
    utxo_key = account_key.ChildKey(role).ChildKey(address_index)
    main_stake_key = account_key.ChildKey(ROLE_STAKING).ChildKey(DEFAULT_STAKING_INDEX)

    network = TESTNET if is_testnet else MAINNET
    path = (role, address_index)

    if role == ROLE_STAKING and not is_byron:
        address_stake_key = account_key.ChildKey(ROLE_STAKING).ChildKey(address_index)
        reward_address = AdaShelleyStakingAddrEncoder.EncodeKey(
            address_stake_key.PublicKey().KeyObject(),
            net_tag=_network_tag(network),
        )
        logger.debug("Derived %s reward address for path %s", network.name, path)
        return DerivedAddress(address=reward_address, path=path)

    if is_byron:
        utxo_pub = utxo_key.PublicKey()
        byron_address = encode_byron_icarus_address(
            utxo_pub.RawCompressed().ToBytes()[-32:],
            utxo_pub.Data().ChainCode().ToBytes(),
            network.protocol_magic,
        )
        logger.debug("Derived %s Byron address for path %s", network.name, path)
        return DerivedAddress(address=byron_address, path=path)

    base_address = AdaShelleyAddrEncoder.EncodeKey(
        utxo_key.PublicKey().KeyObject(),
        pub_skey=main_stake_key.PublicKey().KeyObject(),
        net_tag=_network_tag(network),
    )
    logger.debug("Derived %s base address for path %s", network.name, path)
    return DerivedAddress(address=base_address, path=path)


def derive_address_from_request(request: DerivationRequest) -> DerivedAddress:
    return derive_address(
        request.account_public_key,
        request.role,
        request.address_index,
        request.is_testnet,
        request.is_byron,
    )


def derive_addresses(
    account_public_key: str,
    role: int,
    address_indexes: Iterable[int],
    is_testnet: bool,
    is_byron: bool = False,
) -> List[DerivedAddress]:
    """Derive one address per index, in order"""
    return [
        derive_address(account_public_key, role, index, is_testnet, is_byron)
        for index in address_indexes
    ]


def account_public_key_from_mnemonic(mnemonic: str, account_index: int = 0) -> str:
    """
    Derive the account extended public key (hex) from a BIP-39 mnemonic

    Uses Icarus master key generation and path m/1852'/1815'/account_index'.

    Raises:
        ValueError: If mnemonic is invalid
    """
    mnemo = Mnemonic("english")
    if not mnemo.check(mnemonic):
        raise ValueError("Invalid mnemonic phrase")
    _validate_index("account index", account_index)

    seed = CardanoIcarusSeedGenerator(mnemonic).Generate()
    account = Cip1852.FromSeed(seed, Cip1852Coins.CARDANO_ICARUS).Purpose().Coin().Account(account_index)
    account_pub = account.Bip32Object().PublicKey()

    key_bytes = account_pub.RawCompressed().ToBytes()[-32:] + account_pub.Data().ChainCode().ToBytes()
    return key_bytes.hex()
