"""
TRON wallet module.
Provides functionality for creating wallets, checking balances, and sending TRX and TRC20 tokens through TronGrid.
"""

from tron_wallet.create import create_wallet, import_wallet
from tron_wallet.mnemonic import (
    create_mnemonic,
    get_derivation_path,
    import_wallet_from_mnemonic,
    import_wallet_from_extended_key
)
from tron_wallet.balance import get_trx_balance, get_trc20_balance
from tron_wallet.history import get_trx_transactions, get_trc20_transactions
from tron_wallet.send import send_trx, send_trc20
from tron_wallet.drain import drain_trx, drain_trc20
from tron_wallet.utils import validate_address, to_hex_address
from tron_utils.units import trx_to_sun, sun_to_trx

# Export all functions
__all__ = [
    'create_wallet',
    'import_wallet',
    'create_mnemonic',
    'get_derivation_path',
    'import_wallet_from_mnemonic',
    'import_wallet_from_extended_key',
    'get_trx_balance',
    'get_trc20_balance',
    'get_trx_transactions',
    'get_trc20_transactions',
    'send_trx',
    'send_trc20',
    'drain_trx',
    'drain_trc20',
    'validate_address',
    'to_hex_address',
    'trx_to_sun',
    'sun_to_trx'
]
