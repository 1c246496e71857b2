# Shared configuration, errors, unit conversion and TronGrid access for the TRON wallet
from tron_utils.config import TronGridConfig, get_env_var, load_config
from tron_utils.exceptions import (
    ConfigurationError,
    InsufficientBalanceError,
    RemoteAPIError,
    TransportError,
    TronWalletError
)
from tron_utils.trongrid import BlockReference, TronGridGateway
from tron_utils.units import to_base_units, to_display_units, trx_to_sun, sun_to_trx
