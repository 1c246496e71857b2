"""
Mnemonic and extended key derivation for TRON wallets.

Every derivation goes through get_derivation_path so that a given index
always maps to the same path string, and therefore the same address.
"""
import secrets
from typing import Dict

from bip_utils import Base58ChecksumError, Bip32KeyError, Bip32PathError, Bip32Slip10Secp256k1
from eth_account import Account
from mnemonic import Mnemonic

from tron_utils.config import TRX_DERIVATION_PATH_TEMPLATE
from tron_wallet.utils import wallet_from_private_key

# Import BIP functionality
Account.enable_unaudited_hdwallet_features()

def get_derivation_path(index: int) -> str:
    """
    Derivation path of the account at `index`.

    Args:
        index (int): Account index (non-negative)

    Returns:
        str: e.g. "m/49'/194'/0'/0/0"
    """
    if index < 0:
        raise ValueError(f"Account index must be non-negative, got {index}")
    return TRX_DERIVATION_PATH_TEMPLATE.format(index)

def create_mnemonic(strength: int = 128) -> str:
    """
    Generate a new mnemonic phrase (seed phrase).
    
    Args:
        strength (int): Bit strength of the mnemonic (128, 160, 192, 224, 256)
                        128 bits = 12 words, 256 bits = 24 words
    
    Returns:
        str: A space-separated mnemonic phrase
    """
    entropy = secrets.token_bytes(strength // 8)
    mnemo = Mnemonic("english")
    return mnemo.to_mnemonic(entropy)

def import_wallet_from_mnemonic(mnemonic: str, index: int = 0) -> Dict[str, str]:
    """
    Derive the wallet at `index` from a mnemonic phrase.
    
    Args:
        mnemonic (str): Space-separated BIP39 mnemonic phrase
        index (int): Account index (default: 0)
    
    Returns:
        Dict[str, str]: {'address': 'T...', 'private_key': '64 hex chars'}

    Raises:
        ValueError: If the mnemonic is not a valid English BIP39 phrase
    """
    mnemo = Mnemonic("english")
    if not mnemo.check(mnemonic):
        raise ValueError("Invalid mnemonic phrase")

    # TRON keys live on secp256k1, the same curve eth_account derives on
    account = Account.from_mnemonic(
        mnemonic=mnemonic,
        account_path=get_derivation_path(index)
    )
    return wallet_from_private_key(bytes(account.key).hex())

def import_wallet_from_extended_key(extended_key: str, index: int = 0) -> Dict[str, str]:
    """
    Derive the wallet at `index` from a BIP32 extended private key (xprv).

    The full derivation path is applied to the given key, so it must be a
    master (depth 0) key.

    Args:
        extended_key (str): Serialized BIP32 extended private key
        index (int): Account index (default: 0)

    Returns:
        Dict[str, str]: {'address': 'T...', 'private_key': '64 hex chars'}

    Raises:
        ValueError: If the key is invalid, public-only, or not a master key
    """
    path = get_derivation_path(index)
    try:
        root = Bip32Slip10Secp256k1.FromExtendedKey(extended_key)
        if root.IsPublicOnly():
            raise ValueError("Extended key must be a private key")
        child = root.DerivePath(path)
    except (Base58ChecksumError, Bip32KeyError, Bip32PathError, ValueError) as e:
        raise ValueError(f"Invalid extended key: {str(e)}") from e

    return wallet_from_private_key(child.PrivateKey().Raw().ToHex())
