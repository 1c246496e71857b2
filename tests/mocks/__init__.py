"""
Mock objects for testing the TRON wallet.
"""
from tests.mocks.mock_trongrid import (
    TEST_API_KEY,
    TEST_BLOCK,
    MockHttpxClient,
    MockTronGridResponse,
    create_mock_gateway,
    create_test_gateway,
)

__all__ = [
    'TEST_API_KEY',
    'TEST_BLOCK',
    'MockHttpxClient',
    'MockTronGridResponse',
    'create_mock_gateway',
    'create_test_gateway',
]
