"""
Tests for the public balance and history lookups.
"""
from decimal import Decimal
from unittest.mock import patch

import pytest

from tron_utils.exceptions import ConfigurationError, RemoteAPIError
from tron_wallet import get_trc20_balance, get_trc20_transactions, get_trx_balance, get_trx_transactions
from tests.mocks.mock_trongrid import MockHttpxClient, create_test_gateway

ADDRESS = "TJRabPrwbZy45sbavfcjinPJC18kjpRTv8"
USDT = "TR7NHqjeKQxGTCi8q8ZY4pL8otSzgjLj6t"


@pytest.mark.asyncio
async def test_trx_balance_shape() -> None:
    payload = {"data": [{"balance": 12_345_678}], "success": True}
    mock_client = MockHttpxClient(routes={f"v1/accounts/{ADDRESS}": (payload, 200)})
    
    with patch('httpx.AsyncClient', return_value=mock_client):
        balance = await get_trx_balance(ADDRESS, gateway=create_test_gateway())
    
    assert balance == {
        'balance': Decimal("12.345678"),
        'symbol': 'TRX',
        'raw_balance': 12_345_678,
        'decimals': 6
    }


@pytest.mark.asyncio
async def test_trx_balance_of_unknown_account_is_zero() -> None:
    mock_client = MockHttpxClient(routes={f"v1/accounts/{ADDRESS}": ({"data": [], "success": True}, 200)})
    with patch('httpx.AsyncClient', return_value=mock_client):
        balance = await get_trx_balance(ADDRESS, gateway=create_test_gateway())
    assert balance['raw_balance'] == 0
    assert balance['balance'] == 0


@pytest.mark.asyncio
async def test_trc20_balance_uses_token_decimals() -> None:
    payload = {"data": [{"balance": 1, "trc20": [{USDT: "1500000000000000000"}]}], "success": True}
    mock_client = MockHttpxClient(routes={f"v1/accounts/{ADDRESS}": (payload, 200)})
    
    with patch('httpx.AsyncClient', return_value=mock_client):
        balance = await get_trc20_balance(ADDRESS, USDT, 18, gateway=create_test_gateway())
    
    assert balance['raw_balance'] == 1_500_000_000_000_000_000
    assert balance['balance'] == Decimal("1.5")
    assert balance['decimals'] == 18


@pytest.mark.asyncio
async def test_trc20_balance_missing_contract_is_zero() -> None:
    payload = {"data": [{"balance": 1, "trc20": []}], "success": True}
    mock_client = MockHttpxClient(routes={f"v1/accounts/{ADDRESS}": (payload, 200)})
    with patch('httpx.AsyncClient', return_value=mock_client):
        balance = await get_trc20_balance(ADDRESS, USDT, 6, gateway=create_test_gateway())
    assert balance['raw_balance'] == 0


@pytest.mark.asyncio
async def test_history_lookups() -> None:
    mock_client = MockHttpxClient(routes={
        f"v1/accounts/{ADDRESS}/transactions": ({"data": [{"txID": "a"}], "success": True}, 200),
        f"v1/accounts/{ADDRESS}/transactions/trc20": ({"success": False, "error": "x"}, 200),
    })
    with patch('httpx.AsyncClient', return_value=mock_client):
        gateway = create_test_gateway()
        assert await get_trx_transactions(ADDRESS, gateway=gateway) == [{"txID": "a"}]
        with pytest.raises(RemoteAPIError, match="x"):
            await get_trc20_transactions(ADDRESS, gateway=gateway)


@pytest.mark.asyncio
async def test_gateway_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Without an explicit gateway the API key comes from TRONGRID_API_KEY."""
    monkeypatch.setenv("TRONGRID_API_KEY", "env-key")
    mock_client = MockHttpxClient(routes={f"v1/accounts/{ADDRESS}": ({"data": [], "success": True}, 200)})
    
    with patch('httpx.AsyncClient', return_value=mock_client):
        await get_trx_balance(ADDRESS, network="shasta")
    
    assert mock_client.requests[0]["headers"]["TRON-PRO-API-KEY"] == "env-key"
    assert mock_client.requests[0]["url"].startswith("https://api.shasta.trongrid.io/")


@pytest.mark.asyncio
async def test_missing_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TRONGRID_API_KEY", raising=False)
    with pytest.raises(ConfigurationError):
        await get_trx_transactions(ADDRESS)
