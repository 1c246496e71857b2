"""
Configuration module to handle environment variables.
"""
import os
from dataclasses import dataclass
from typing import Any

from dotenv import load_dotenv

from tron_utils.exceptions import ConfigurationError

# Load environment variables
load_dotenv()

def get_env_var(name: str, default: Any = None) -> Any:
    """
    Get an environment variable or return a default value if not found.
    
    Args:
        name (str): The name of the environment variable
        default: The default value to return if the variable is not found
        
    Returns:
        The value of the environment variable or the default value

    Raises:
        ConfigurationError: If the variable is unset and no default is given
    """
    value = os.getenv(name, default)
    if value is None or value == "":
        raise ConfigurationError(f"Please provide {name}")
    return value

# Network selectors understood by TronGrid
MAINNET: str = 'mainnet'
SHASTA: str = 'shasta'
NETWORK_SUBDOMAINS = {
    MAINNET: 'api',
    SHASTA: 'api.shasta',
}

# TronGrid API settings
TRONGRID_API_KEY_HEADER: str = 'TRON-PRO-API-KEY'
DEFAULT_TRONGRID_DOMAIN: str = 'trongrid.io'
DEFAULT_TRONGRID_TIMEOUT: float = 30.0

# TRX amounts (in sun unless stated otherwise)
TRX_DECIMALS: int = 6
TRX_DRAIN_RESERVE_SUN: int = 10 ** TRX_DECIMALS  # Leave 1 TRX behind on drain
BACKER_FUNDING_TRX: int = 1  # Sent by a backer to pay the sender's TRC20 fees
DEFAULT_TRC20_FEE_LIMIT: int = 30_000_000  # 30 TRX

# Wallet derivation path settings. Existing wallets were derived with coin type 194
# under purpose 49; any other path yields different addresses for the same mnemonic.
TRX_DERIVATION_PATH_TEMPLATE: str = "m/49'/194'/0'/0/{}"


@dataclass(frozen=True)
class TronGridConfig:
    """Settings needed to talk to TronGrid."""
    api_key: str
    domain: str = DEFAULT_TRONGRID_DOMAIN
    timeout: float = DEFAULT_TRONGRID_TIMEOUT
    trc20_fee_limit: int = DEFAULT_TRC20_FEE_LIMIT

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ConfigurationError("Please provide TRONGRID_API_KEY")


def load_config() -> TronGridConfig:
    """
    Build a TronGridConfig from the current environment.

    The environment is read on every call so that a key rotated at runtime is
    picked up by the next request.

    Raises:
        ConfigurationError: If TRONGRID_API_KEY is missing or a numeric setting is malformed
    """
    api_key: str = get_env_var('TRONGRID_API_KEY')
    domain: str = get_env_var('TRONGRID_DOMAIN', DEFAULT_TRONGRID_DOMAIN)
    try:
        timeout = float(get_env_var('TRONGRID_TIMEOUT', DEFAULT_TRONGRID_TIMEOUT))
        fee_limit = int(get_env_var('TRC20_FEE_LIMIT', DEFAULT_TRC20_FEE_LIMIT))
    except ValueError as e:
        raise ConfigurationError(f"Invalid numeric setting: {str(e)}") from e

    return TronGridConfig(
        api_key=api_key,
        domain=domain,
        timeout=timeout,
        trc20_fee_limit=fee_limit,
    )
