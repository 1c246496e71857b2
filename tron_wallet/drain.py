"""
Drain (send almost everything) for TRX and TRC20 balances.
"""
import logging
from typing import Any, Awaitable, Callable, Dict, Optional

from tron_utils.config import BACKER_FUNDING_TRX, MAINNET, TRX_DRAIN_RESERVE_SUN
from tron_utils.exceptions import InsufficientBalanceError, RemoteAPIError
from tron_utils.trongrid import TronGridGateway, broadcast_error_message
from tron_utils.units import format_amount, sun_to_trx, to_display_units
from tron_wallet.create import import_wallet
from tron_wallet.send import send_trx
from tron_wallet.transactions import build_trc20_transfer, build_trx_transfer
from tron_wallet.utils import get_gateway, validate_address

logger = logging.getLogger(__name__)

async def drain_trx(
    private_key: str,
    to_address: str,
    network: str = MAINNET,
    gateway: Optional[TronGridGateway] = None,
    status_callback: Optional[Callable[[str], Awaitable[None]]] = None
) -> Dict[str, Any]:
    """
    Send the whole TRX balance minus a 1 TRX reserve.

    Args:
        private_key (str): Private key of the account to drain
        to_address (str): Address receiving the funds
        network (str): Network selector
        gateway (Optional[TronGridGateway]): Gateway to use (built from the environment if omitted)
        status_callback (Optional[Callable[[str], Awaitable[None]]]): Function to call with status updates

    Returns:
        Dict[str, Any]: TronGrid broadcast receipt plus 'amount' (sun sent)

    Raises:
        InsufficientBalanceError: If the balance does not exceed the reserve
    """
    gateway = get_gateway(gateway)
    validate_address(to_address)
    sender = import_wallet(private_key)

    if status_callback:
        await status_callback("Fetching latest block...")

    latest_block = await gateway.get_latest_block(network)

    if status_callback:
        await status_callback("Checking TRX balance...")

    balance_sun = await gateway.get_account_balance(sender['address'], network)
    amount_sun = balance_sun - TRX_DRAIN_RESERVE_SUN

    if amount_sun <= 0:
        error_msg = (
            f"Insufficient TRX balance to drain. You have {format_amount(sun_to_trx(balance_sun))} TRX "
            f"and {format_amount(sun_to_trx(TRX_DRAIN_RESERVE_SUN))} TRX must stay in the account."
        )
        logger.warning(error_msg)
        if status_callback:
            await status_callback(f"Error: {error_msg}")
        raise InsufficientBalanceError(error_msg, balance=balance_sun, amount=amount_sun)

    if status_callback:
        await status_callback(f"Draining {format_amount(sun_to_trx(amount_sun))} TRX...")

    transaction = await build_trx_transfer(
        gateway,
        sender['private_key'],
        to_address,
        amount_sun,
        latest_block,
        network,
    )

    logger.info(f"Draining {amount_sun} sun from {sender['address']} to {to_address} on {network}")
    receipt = await gateway.broadcast_transaction(transaction, network)
    return {**receipt, 'amount': amount_sun}

async def drain_trc20(
    private_key: str,
    to_address: str,
    contract_address: str,
    decimals: int,
    network: str = MAINNET,
    backer: Optional[str] = None,
    gateway: Optional[TronGridGateway] = None,
    status_callback: Optional[Callable[[str], Awaitable[None]]] = None
) -> Dict[str, Any]:
    """
    Send the whole balance of a TRC20 token.

    Fees are paid in TRX, so no token reserve is kept. If `backer` is given,
    the backer first sends 1 TRX to the draining account to cover those fees;
    the token transfer is only built once that transfer was accepted.

    Args:
        private_key (str): Private key of the account to drain
        to_address (str): Address receiving the tokens
        contract_address (str): TRC20 contract address
        decimals (int): Token decimals
        network (str): Network selector
        backer (Optional[str]): Private key of an account paying the sender's fees
        gateway (Optional[TronGridGateway]): Gateway to use (built from the environment if omitted)
        status_callback (Optional[Callable[[str], Awaitable[None]]]): Function to call with status updates

    Returns:
        Dict[str, Any]: TronGrid broadcast receipt plus 'amount' (raw token units sent)

    Raises:
        InsufficientBalanceError: If the token balance is zero
        RemoteAPIError: If the backer transfer was rejected
    """
    gateway = get_gateway(gateway)
    validate_address(to_address)
    validate_address(contract_address)
    sender = import_wallet(private_key)

    if status_callback:
        await status_callback("Fetching latest block...")

    latest_block = await gateway.get_latest_block(network)

    if status_callback:
        await status_callback("Checking token balance...")

    amount = await gateway.get_token_balance(sender['address'], contract_address, network)

    if amount <= 0:
        error_msg = f"Nothing to drain: {sender['address']} holds no {contract_address} tokens."
        logger.warning(error_msg)
        if status_callback:
            await status_callback(f"Error: {error_msg}")
        raise InsufficientBalanceError(error_msg, balance=amount, amount=amount)

    if backer:
        if status_callback:
            await status_callback(f"Funding fees with {BACKER_FUNDING_TRX} TRX from backer...")

        backer_receipt = await send_trx(
            backer,
            sender['address'],
            BACKER_FUNDING_TRX,
            network=network,
            gateway=gateway,
            status_callback=status_callback,
        )
        if not backer_receipt.get('result'):
            error_msg = f"Backer transfer was rejected: {broadcast_error_message(backer_receipt)}"
            logger.error(error_msg)
            raise RemoteAPIError(error_msg, backer_receipt)

    if status_callback:
        await status_callback(f"Draining {format_amount(to_display_units(amount, decimals))} tokens...")

    transaction = await build_trc20_transfer(
        gateway,
        sender['private_key'],
        contract_address,
        to_address,
        amount,
        latest_block,
        network,
    )

    logger.info(
        f"Draining {amount} units of {contract_address} "
        f"from {sender['address']} to {to_address} on {network}"
    )
    receipt = await gateway.broadcast_transaction(transaction, network)
    return {**receipt, 'amount': amount}
