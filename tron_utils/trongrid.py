"""
TronGrid HTTP gateway.

Builds authenticated requests against the TronGrid indexing/broadcast API and
shapes its responses. Every call goes straight to the network; nothing is
cached between calls.
"""
import logging
import string
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

import httpx

from tron_utils.config import (
    MAINNET,
    NETWORK_SUBDOMAINS,
    TRONGRID_API_KEY_HEADER,
    TronGridConfig,
)
from tron_utils.exceptions import RemoteAPIError, TransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BlockReference:
    """Snapshot of the latest block, used to anchor a new transaction."""
    hash: str
    timestamp: int
    number: int


@dataclass
class ApiSuccess:
    """A `{success: true, data: [...]}` envelope."""
    data: List[Any]


@dataclass
class ApiFailure:
    """A `{success: false, error: "..."}` envelope."""
    error: str


ApiResult = Union[ApiSuccess, ApiFailure]


def parse_envelope(payload: Any) -> ApiResult:
    """
    Turn a TronGrid v1 envelope into a tagged result.

    Args:
        payload (Any): Decoded JSON body

    Returns:
        ApiResult: ApiSuccess with the data list, or ApiFailure with the error message

    Raises:
        RemoteAPIError: If the payload is not an envelope at all
    """
    if not isinstance(payload, dict):
        raise RemoteAPIError(f"Unexpected TronGrid response: {payload!r}", payload)

    if not payload.get('success', False):
        return ApiFailure(error=str(payload.get('error') or 'TronGrid request failed'))

    data = payload.get('data', [])
    if not isinstance(data, list):
        raise RemoteAPIError(f"Unexpected TronGrid data field: {data!r}", payload)
    return ApiSuccess(data=data)


class TronGridGateway:
    """Thin client for the TronGrid endpoints used by the wallet."""

    def __init__(self, config: TronGridConfig):
        self.config = config

    def get_base_url(self, network: str = MAINNET) -> str:
        """
        Resolve the TronGrid base URL for a network selector.

        'mainnet' and 'shasta' map to their public endpoints; any other value
        is used as the subdomain as-is (e.g. 'api.nile').
        """
        subdomain = NETWORK_SUBDOMAINS.get(network, network)
        return f"https://{subdomain}.{self.config.domain}"

    def _headers(self) -> Dict[str, str]:
        return {
            'content-type': 'application/json',
            TRONGRID_API_KEY_HEADER: self.config.api_key,
        }

    async def request(
        self,
        url: str,
        network: str = MAINNET,
        method: str = 'get',
        body: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        Perform one request against TronGrid and decode the JSON body.

        Args:
            url (str): Path relative to the network base URL
            network (str): Network selector
            method (str): 'get' or 'post'
            body (Optional[Dict[str, Any]]): JSON body for POST requests

        Returns:
            Any: Decoded JSON response

        Raises:
            TransportError: If the request could not be completed
            RemoteAPIError: If the response body is not JSON
        """
        link = f"{self.get_base_url(network)}/{url}"
        logger.debug(f"TronGrid {method.upper()} {link}")

        try:
            async with httpx.AsyncClient(timeout=self.config.timeout) as client:
                if method == 'post':
                    response = await client.post(link, headers=self._headers(), json=body)
                else:
                    response = await client.get(link, headers=self._headers())
        except httpx.HTTPError as e:
            logger.error(f"TronGrid request to {link} failed: {str(e)}")
            raise TransportError(f"Request to {link} failed: {str(e)}") from e

        try:
            return response.json()
        except ValueError as e:
            if response.status_code >= 400:
                raise TransportError(f"HTTP {response.status_code} from {link}") from e
            raise RemoteAPIError(f"Malformed response from {link}") from e

    async def get_latest_block(self, network: str = MAINNET) -> BlockReference:
        """Fetch the current head block."""
        payload = await self.request('wallet/getnowblock', network)
        try:
            raw_data = payload['block_header']['raw_data']
            return BlockReference(
                hash=payload['blockID'],
                timestamp=int(raw_data['timestamp']),
                number=int(raw_data['number']),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise RemoteAPIError(f"Malformed block response: {payload!r}", payload) from e

    async def get_account(self, address: str, network: str = MAINNET) -> Optional[Dict[str, Any]]:
        """
        Fetch the account record for an address.

        Returns:
            Optional[Dict[str, Any]]: The account record, or None if TronGrid has none
        """
        payload = await self.request(f"v1/accounts/{address}", network)
        result = parse_envelope(payload)
        if isinstance(result, ApiFailure):
            raise RemoteAPIError(result.error, payload)
        if not result.data:
            return None
        return result.data[0]

    async def get_account_balance(self, address: str, network: str = MAINNET) -> int:
        """Balance in sun; an address TronGrid has never seen holds 0."""
        account = await self.get_account(address, network)
        if account is None:
            return 0
        return int(account.get('balance', 0))

    async def get_token_balance(
        self,
        address: str,
        contract_address: str,
        network: str = MAINNET
    ) -> int:
        """
        Raw TRC20 balance of an address for one contract.

        TronGrid lists token balances as single-key maps, e.g.
        `[{"TR7NHqjeKQxGTCi8q8ZY4pL8otSzgjLj6t": "1000000"}]`. Contract
        addresses are compared exactly (case-sensitive).
        """
        account = await self.get_account(address, network)
        if account is None:
            return 0

        for token in account.get('trc20') or []:
            if contract_address in token:
                return int(token[contract_address])
        return 0

    async def _get_history(self, url: str, network: str) -> List[Any]:
        payload = await self.request(url, network)
        result = parse_envelope(payload)
        if isinstance(result, ApiFailure):
            logger.error(f"TronGrid reported failure for {url}: {result.error}")
            raise RemoteAPIError(result.error, payload)
        return result.data

    async def get_account_transactions(self, address: str, network: str = MAINNET) -> List[Any]:
        """TRX (and other native contract) transactions of an address."""
        return await self._get_history(f"v1/accounts/{address}/transactions", network)

    async def get_token_transactions(self, address: str, network: str = MAINNET) -> List[Any]:
        """TRC20 transfers of an address."""
        return await self._get_history(f"v1/accounts/{address}/transactions/trc20", network)

    async def broadcast_hex(self, raw_transaction_hex: str, network: str = MAINNET) -> Dict[str, Any]:
        """Broadcast a protobuf-encoded signed transaction."""
        return await self.request(
            'wallet/broadcasthex',
            network,
            method='post',
            body={'transaction': raw_transaction_hex},
        )

    async def broadcast_transaction(self, transaction: Dict[str, Any], network: str = MAINNET) -> Dict[str, Any]:
        """Broadcast a signed transaction in its JSON form."""
        receipt = await self.request(
            'wallet/broadcasttransaction',
            network,
            method='post',
            body=transaction,
        )
        result = receipt.get('result') if isinstance(receipt, dict) else receipt
        logger.info(f"Broadcast {transaction.get('txID')} on {network}: result={result}")
        return receipt


def broadcast_error_message(receipt: Any) -> str:
    """
    Human-readable reason for a rejected broadcast.

    TronGrid returns e.g. `{"code": "CONTRACT_VALIDATE_ERROR", "message": "<hex>"}`
    where the message is hex-encoded UTF-8.
    """
    if not isinstance(receipt, dict):
        return f"Unexpected broadcast response: {receipt!r}"

    code = receipt.get('code', 'UNKNOWN')
    message = str(receipt.get('message', ''))
    if message and len(message) % 2 == 0 and all(c in string.hexdigits for c in message):
        message = bytes.fromhex(message).decode('utf-8', errors='replace')
    return f"{code}: {message}" if message else str(code)
