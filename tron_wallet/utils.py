"""
Utility functions for the wallet module.
"""
from typing import Dict, Optional

from tronpy.exceptions import BadKey
from tronpy.keys import PrivateKey, is_base58check_address
from tronpy.keys import to_hex_address as _tronpy_to_hex_address

from tron_utils.config import load_config
from tron_utils.trongrid import TronGridGateway

def validate_address(address: str) -> str:
    """
    Validate a TRON address in its base58check ("T...") form.
    
    Args:
        address (str): The address to validate
        
    Returns:
        str: The address unchanged
        
    Raises:
        ValueError: If the address is not a valid base58check TRON address
    """
    if not address or not isinstance(address, str):
        raise ValueError("Address must be a non-empty string")

    try:
        valid = is_base58check_address(address)
    except ValueError as e:
        # Bad base58 characters or checksum
        raise ValueError(f"Invalid TRON address: {address}") from e

    if not valid:
        raise ValueError(f"Invalid TRON address: {address}")

    return address

def to_hex_address(address: str) -> str:
    """
    Convert a base58check address to its hex form ("41" + 20 bytes).

    Args:
        address (str): Base58check or hex TRON address

    Returns:
        str: Hex address, e.g. '41a614f803b6fd780986a42c78ec9c7f77e6ded13c'
    """
    try:
        return _tronpy_to_hex_address(address)
    except ValueError as e:
        raise ValueError(f"Invalid TRON address: {address}") from e

def load_private_key(private_key: str) -> PrivateKey:
    """
    Parse a hex private key (with or without 0x prefix).

    Raises:
        ValueError: If the key is not 32 bytes of hex
    """
    if not private_key or not isinstance(private_key, str):
        raise ValueError("Private key must be a non-empty string")

    clean_key = private_key[2:] if private_key.lower().startswith('0x') else private_key
    try:
        key_bytes = bytes.fromhex(clean_key)
        return PrivateKey(key_bytes)
    except (ValueError, BadKey) as e:
        # Never echo the key itself
        raise ValueError("Invalid private key") from e

def wallet_from_private_key(private_key: str) -> Dict[str, str]:
    """Return the address and normalised key for a hex private key."""
    key = load_private_key(private_key)
    return {
        'address': key.public_key.to_base58check_address(),
        'private_key': key.hex()
    }

def get_gateway(gateway: Optional[TronGridGateway] = None) -> TronGridGateway:
    """Return the given gateway, or one configured from the environment."""
    if gateway is not None:
        return gateway
    return TronGridGateway(load_config())
