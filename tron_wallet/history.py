"""
Transaction history lookups.
"""
from typing import Any, List, Optional

from tron_utils.config import MAINNET
from tron_utils.trongrid import TronGridGateway
from tron_wallet.utils import get_gateway

async def get_trx_transactions(
    address: str,
    network: str = MAINNET,
    gateway: Optional[TronGridGateway] = None
) -> List[Any]:
    """
    List the transactions of an address as returned by TronGrid.

    Raises:
        RemoteAPIError: If TronGrid reports success: false
    """
    return await get_gateway(gateway).get_account_transactions(address, network)

async def get_trc20_transactions(
    address: str,
    network: str = MAINNET,
    gateway: Optional[TronGridGateway] = None
) -> List[Any]:
    """
    List the TRC20 transfers of an address as returned by TronGrid.

    Raises:
        RemoteAPIError: If TronGrid reports success: false
    """
    return await get_gateway(gateway).get_token_transactions(address, network)
