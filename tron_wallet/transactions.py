"""
Transaction construction and signing for TRX and TRC20 transfers.

Encoding and signing are left to tronpy, built offline: the reference block is
the BlockReference the caller fetched before checking balances, and no node is
contacted while building. Broadcasting goes through TronGridGateway.
"""
import logging
from typing import Any, Dict

from tronpy import AsyncTron
from tronpy.async_contract import AsyncContract
from tronpy.providers.async_http import AsyncHTTPProvider

from tron_utils.config import MAINNET
from tron_utils.trongrid import BlockReference, TronGridGateway
from tron_wallet.utils import load_private_key

logger = logging.getLogger(__name__)

# Only transfer(address,uint256) is called, so the contract ABI is not fetched
TRC20_TRANSFER_ABI = [
    {
        'type': 'Function',
        'name': 'transfer',
        'stateMutability': 'Nonpayable',
        'inputs': [
            {'name': '_to', 'type': 'address'},
            {'name': '_value', 'type': 'uint256'},
        ],
        'outputs': [{'name': '', 'type': 'bool'}],
    }
]

def _tron_client(gateway: TronGridGateway, network: str) -> AsyncTron:
    provider = AsyncHTTPProvider(
        gateway.get_base_url(network),
        timeout=gateway.config.timeout,
        api_key=gateway.config.api_key,
    )
    return AsyncTron(provider)

async def build_trx_transfer(
    gateway: TronGridGateway,
    private_key: str,
    to_address: str,
    amount: int,
    block: BlockReference,
    network: str = MAINNET
) -> Dict[str, Any]:
    """
    Build and sign a TRX transfer.

    Args:
        gateway (TronGridGateway): Gateway providing the endpoint and API key
        private_key (str): Sender private key (hex)
        to_address (str): Recipient address
        amount (int): Amount in sun
        block (BlockReference): Reference block for the transaction
        network (str): Network selector

    Returns:
        Dict[str, Any]: Signed transaction in JSON form, ready for broadcast
    """
    key = load_private_key(private_key)
    owner = key.public_key.to_base58check_address()
    logger.debug(f"Building TRX transfer of {amount} sun from {owner} to {to_address} at block {block.number}")

    async with _tron_client(gateway, network) as client:
        txn = await client.trx.transfer(owner, to_address, amount).build(offline=True, ref_block_id=block.hash)
        txn.sign(key)
        return txn.to_json()

async def build_trc20_transfer(
    gateway: TronGridGateway,
    private_key: str,
    contract_address: str,
    to_address: str,
    amount: int,
    block: BlockReference,
    network: str = MAINNET
) -> Dict[str, Any]:
    """
    Build and sign a TRC20 `transfer(to, amount)` call.

    Args:
        gateway (TronGridGateway): Gateway providing the endpoint, API key and fee limit
        private_key (str): Sender private key (hex)
        contract_address (str): TRC20 contract address
        to_address (str): Recipient address
        amount (int): Amount in raw token units
        block (BlockReference): Reference block for the transaction
        network (str): Network selector

    Returns:
        Dict[str, Any]: Signed transaction in JSON form, ready for broadcast
    """
    key = load_private_key(private_key)
    owner = key.public_key.to_base58check_address()
    logger.debug(
        f"Building TRC20 transfer of {amount} units of {contract_address} "
        f"from {owner} to {to_address} at block {block.number}"
    )

    async with _tron_client(gateway, network) as client:
        contract = AsyncContract(addr=contract_address, abi=TRC20_TRANSFER_ABI, client=client)
        txb = await contract.functions.transfer(to_address, amount)
        txb = txb.with_owner(owner).fee_limit(gateway.config.trc20_fee_limit)
        txn = await txb.build(offline=True, ref_block_id=block.hash)
        txn.sign(key)
        return txn.to_json()
