"""
Transaction sending module for TRX and TRC20 tokens.

Each transfer runs strictly in order: derive the sender, fetch the latest
block, fetch the balance, check it, build the transaction against that block,
broadcast. Nothing is retried; any failure propagates to the caller and
nothing is broadcast unless the balance check passed.
"""
import logging
from typing import Any, Awaitable, Callable, Dict, Optional

from tron_utils.config import MAINNET, TRX_DECIMALS
from tron_utils.exceptions import InsufficientBalanceError
from tron_utils.trongrid import TronGridGateway
from tron_utils.units import AmountInput, format_amount, to_base_units, to_display_units, trx_to_sun
from tron_wallet.create import import_wallet
from tron_wallet.transactions import build_trc20_transfer, build_trx_transfer
from tron_wallet.utils import get_gateway, validate_address

logger = logging.getLogger(__name__)

async def ensure_sufficient_balance(
    amount: int,
    balance: int,
    symbol: str,
    decimals: int,
    status_callback: Optional[Callable[[str], Awaitable[None]]] = None
) -> None:
    """
    Reject a transfer unless `amount` is strictly below `balance`.

    Sending exactly the full balance is rejected as well.

    Raises:
        InsufficientBalanceError: If amount >= balance
    """
    if amount < balance:
        return

    have = format_amount(to_display_units(balance, decimals))
    want = format_amount(to_display_units(amount, decimals))
    error_msg = f"Insufficient {symbol} balance. You have {have} {symbol} but trying to send {want} {symbol}."
    logger.warning(error_msg)
    if status_callback:
        await status_callback(f"Error: {error_msg}")
    raise InsufficientBalanceError(error_msg, balance=balance, amount=amount)

def _positive_amount(amount: int, original: AmountInput) -> int:
    if amount <= 0:
        raise ValueError(f"Amount must be positive, got {original}")
    return amount

async def send_trx(
    private_key: str,
    to_address: str,
    amount: AmountInput,
    network: str = MAINNET,
    gateway: Optional[TronGridGateway] = None,
    status_callback: Optional[Callable[[str], Awaitable[None]]] = None
) -> Dict[str, Any]:
    """
    Send TRX from one address to another.

    Args:
        private_key (str): Private key of the sender
        to_address (str): Address of the recipient
        amount (AmountInput): Amount of TRX to send (human-readable, truncated to whole sun)
        network (str): Network selector
        gateway (Optional[TronGridGateway]): Gateway to use (built from the environment if omitted)
        status_callback (Optional[Callable[[str], Awaitable[None]]]): Function to call with status updates

    Returns:
        Dict[str, Any]: TronGrid broadcast receipt plus 'amount' (sun actually sent)

    Raises:
        InsufficientBalanceError: If the amount is not strictly below the balance
    """
    gateway = get_gateway(gateway)
    validate_address(to_address)
    amount_sun = _positive_amount(trx_to_sun(amount), amount)

    if status_callback:
        await status_callback("Deriving sender address from private key...")

    sender = import_wallet(private_key)

    if status_callback:
        await status_callback("Fetching latest block...")

    latest_block = await gateway.get_latest_block(network)

    if status_callback:
        await status_callback("Checking TRX balance...")

    balance_sun = await gateway.get_account_balance(sender['address'], network)
    await ensure_sufficient_balance(amount_sun, balance_sun, 'TRX', TRX_DECIMALS, status_callback)

    if status_callback:
        await status_callback("Building transaction...")

    transaction = await build_trx_transfer(
        gateway,
        sender['private_key'],
        to_address,
        amount_sun,
        latest_block,
        network,
    )

    if status_callback:
        await status_callback("Sending transaction...")

    logger.info(f"Sending {amount_sun} sun from {sender['address']} to {to_address} on {network}")
    receipt = await gateway.broadcast_transaction(transaction, network)
    return {**receipt, 'amount': amount_sun}

async def send_trc20(
    private_key: str,
    to_address: str,
    contract_address: str,
    amount: AmountInput,
    decimals: int,
    network: str = MAINNET,
    gateway: Optional[TronGridGateway] = None,
    status_callback: Optional[Callable[[str], Awaitable[None]]] = None
) -> Dict[str, Any]:
    """
    Send TRC20 tokens from one address to another.

    Args:
        private_key (str): Private key of the sender
        to_address (str): Address of the recipient
        contract_address (str): Address of the token contract
        amount (AmountInput): Amount of tokens to send (in human-readable form)
        decimals (int): Token decimals
        network (str): Network selector
        gateway (Optional[TronGridGateway]): Gateway to use (built from the environment if omitted)
        status_callback (Optional[Callable[[str], Awaitable[None]]]): Function to call with status updates

    Returns:
        Dict[str, Any]: TronGrid broadcast receipt plus 'amount' (raw token units sent)

    Raises:
        InsufficientBalanceError: If the amount is not strictly below the token balance
    """
    gateway = get_gateway(gateway)
    validate_address(to_address)
    validate_address(contract_address)
    amount_raw = _positive_amount(to_base_units(amount, decimals), amount)

    if status_callback:
        await status_callback("Deriving sender address from private key...")

    sender = import_wallet(private_key)

    if status_callback:
        await status_callback("Fetching latest block...")

    latest_block = await gateway.get_latest_block(network)

    if status_callback:
        await status_callback("Checking token balance...")

    token_balance = await gateway.get_token_balance(sender['address'], contract_address, network)
    await ensure_sufficient_balance(amount_raw, token_balance, 'TRC20', decimals, status_callback)

    if status_callback:
        await status_callback("Building transaction...")

    transaction = await build_trc20_transfer(
        gateway,
        sender['private_key'],
        contract_address,
        to_address,
        amount_raw,
        latest_block,
        network,
    )

    if status_callback:
        await status_callback("Sending transaction to network...")

    logger.info(
        f"Sending {amount_raw} units of {contract_address} from {sender['address']} to {to_address} on {network}"
    )
    receipt = await gateway.broadcast_transaction(transaction, network)
    return {**receipt, 'amount': amount_raw}
