"""
Balance checking module for TRX and TRC20 tokens.
"""
from decimal import Decimal
from typing import Awaitable, Callable, Dict, Optional, Union

from tron_utils.config import MAINNET, TRX_DECIMALS
from tron_utils.trongrid import TronGridGateway
from tron_utils.units import format_amount, to_display_units
from tron_wallet.utils import get_gateway

async def get_trx_balance(
    address: str,
    network: str = MAINNET,
    gateway: Optional[TronGridGateway] = None,
    status_callback: Optional[Callable[[str], Awaitable[None]]] = None
) -> Dict[str, Union[str, int, Decimal]]:
    """
    Get TRX balance.
    
    Args:
        address (str): The wallet address to check
        network (str): Network selector ('mainnet', 'shasta' or a TronGrid subdomain)
        gateway (Optional[TronGridGateway]): Gateway to use (built from the environment if omitted)
        status_callback (Optional[Callable[[str], Awaitable[None]]]): Function to call with status updates
        
    Returns:
        Dict[str, Union[str, int, Decimal]]: Balance information
            {
                'balance': Decimal,  # Human-readable balance
                'symbol': str,     # 'TRX'
                'raw_balance': int, # Balance in sun
                'decimals': int    # 6
            }
    """
    gateway = get_gateway(gateway)

    if status_callback:
        await status_callback("Fetching TRX balance...")

    raw_balance = await gateway.get_account_balance(address, network)
    balance = to_display_units(raw_balance, TRX_DECIMALS)

    if status_callback:
        await status_callback(f"Balance retrieved: {format_amount(balance)} TRX")

    return {
        'balance': balance,
        'symbol': 'TRX',
        'raw_balance': raw_balance,
        'decimals': TRX_DECIMALS
    }

async def get_trc20_balance(
    address: str,
    contract_address: str,
    decimals: int,
    network: str = MAINNET,
    gateway: Optional[TronGridGateway] = None,
    status_callback: Optional[Callable[[str], Awaitable[None]]] = None
) -> Dict[str, Union[str, int, Decimal]]:
    """
    Get TRC20 token balance.
    
    Args:
        address (str): The wallet address to check
        contract_address (str): The token contract address (matched exactly)
        decimals (int): The token decimals
        network (str): Network selector
        gateway (Optional[TronGridGateway]): Gateway to use (built from the environment if omitted)
        status_callback (Optional[Callable[[str], Awaitable[None]]]): Function to call with status updates
        
    Returns:
        Dict[str, Union[str, int, Decimal]]: Token balance information, same shape as get_trx_balance
    """
    gateway = get_gateway(gateway)

    if status_callback:
        await status_callback(f"Fetching balance of {contract_address}...")

    raw_balance = await gateway.get_token_balance(address, contract_address, network)
    balance = to_display_units(raw_balance, decimals)

    if status_callback:
        await status_callback(f"Balance retrieved: {format_amount(balance)}")

    return {
        'balance': balance,
        'symbol': 'TRC20',
        'raw_balance': raw_balance,
        'decimals': decimals
    }
