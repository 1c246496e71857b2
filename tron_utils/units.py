"""
Conversion between human-readable amounts and raw (base unit) amounts.

TRX uses a fixed scale of 6 (1 TRX = 1,000,000 sun). TRC20 tokens use
whatever decimals the caller supplies. All arithmetic is done with Decimal so
large raw balances never pick up binary floating point error.
"""
from decimal import Decimal, InvalidOperation, ROUND_DOWN, localcontext
from typing import Union

from tron_utils.config import TRX_DECIMALS

AmountInput = Union[int, float, str, Decimal]

# Enough digits for any uint256 raw amount plus its scale
_PRECISION = 120


def _to_decimal(amount: AmountInput) -> Decimal:
    """Parse an amount without going through binary floating point."""
    if isinstance(amount, bool):
        raise ValueError(f"Invalid amount: {amount!r}")
    if isinstance(amount, float):
        amount = str(amount)
    try:
        value = Decimal(amount)
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"Invalid amount: {amount!r}") from e
    if not value.is_finite():
        raise ValueError(f"Invalid amount: {amount!r}")
    return value


def to_base_units(amount: AmountInput, scale: int) -> int:
    """
    Convert a human-readable amount to raw units.

    The result is truncated toward zero, so any precision below one raw unit
    is dropped rather than rounded.

    Args:
        amount (AmountInput): Human-readable amount (e.g. "1.5", Decimal("0.000001"))
        scale (int): Number of decimals of the asset

    Returns:
        int: Amount in raw units

    Raises:
        ValueError: If the amount cannot be parsed or scale is negative
    """
    if scale < 0:
        raise ValueError(f"Scale must be non-negative, got {scale}")
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        value = _to_decimal(amount).scaleb(scale)
        return int(value.to_integral_value(rounding=ROUND_DOWN))


def to_display_units(raw_amount: int, scale: int) -> Decimal:
    """
    Convert a raw amount to its human-readable Decimal value.

    Args:
        raw_amount (int): Amount in raw units
        scale (int): Number of decimals of the asset

    Returns:
        Decimal: Exact value, normalised to its shortest representation
    """
    if scale < 0:
        raise ValueError(f"Scale must be non-negative, got {scale}")
    if raw_amount == 0:
        return Decimal(0)
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        return Decimal(int(raw_amount)).scaleb(-scale).normalize()


def trx_to_sun(trx: AmountInput) -> int:
    """Convert TRX to sun."""
    return to_base_units(trx, TRX_DECIMALS)


def sun_to_trx(sun: int) -> Decimal:
    """Convert sun to TRX."""
    return to_display_units(sun, TRX_DECIMALS)


def format_amount(value: Decimal) -> str:
    """Render a Decimal without scientific notation, e.g. Decimal('1E+1') -> '10'."""
    return format(value, 'f')
