"""
Wallet creation and private key import.
"""
from typing import Dict

from tron_wallet.mnemonic import create_mnemonic, import_wallet_from_mnemonic
from tron_wallet.utils import wallet_from_private_key

def create_wallet() -> Dict[str, str]:
    """
    Generate a new wallet from a fresh mnemonic, derived at index 0.
    
    Returns:
        Dict[str, str]: A dictionary containing the wallet address and private key
            {
                'address': 'T...',
                'private_key': '64 hex chars'
            }
    """
    mnemonic = create_mnemonic()
    return import_wallet_from_mnemonic(mnemonic, 0)

def import_wallet(private_key: str) -> Dict[str, str]:
    """
    Materialise the wallet behind an existing private key.

    Args:
        private_key (str): Hex private key, optionally 0x-prefixed

    Returns:
        Dict[str, str]: {'address': 'T...', 'private_key': '64 hex chars'}
    """
    return wallet_from_private_key(private_key)
