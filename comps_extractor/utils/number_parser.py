"""Parse numeric table cells (areas, prices, percentages)."""
import re
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

logger = logging.getLogger(__name__)

SQUARE_FEET_PATTERN = re.compile(r'^[\d,]+$', re.ASCII)
PRICE_PATTERN = re.compile(r'^\$?[\d,]+$', re.ASCII)
PRICE_PER_SF_PATTERN = re.compile(r'^\d{2,3}$', re.ASCII)
PERCENT_PATTERN = re.compile(r'^[\d.]+%?$', re.ASCII)


def parse_integer_amount(amount_string: str) -> int:
    """
    Parse an integer amount printed with thousands separators.

    Handles:
    - 336,350
    - $330,000,000
    - 981

    Args:
        amount_string: Cell text

    Returns:
        Integer value

    Raises:
        ValueError: If no digits remain after stripping symbols
    """
    cleaned = re.sub(r'[$,\s]', '', amount_string or '')
    if not (cleaned.isascii() and cleaned.isdigit()):
        raise ValueError(f"Not an integer amount: {amount_string!r}")
    return int(cleaned)


def parse_percentage(value_string: str) -> Optional[float]:
    """
    Parse a percentage cell such as "3.5%" or "4.25".

    Args:
        value_string: Cell text

    Returns:
        Float value (percent units) or None if parsing fails
    """
    if not value_string or not isinstance(value_string, str):
        return None

    cleaned = value_string.strip().replace('%', '')

    try:
        return float(cleaned)
    except ValueError:
        logger.debug(f"Could not parse percentage: {value_string}")
        return None


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(Decimal(str(value)).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def derive_price_per_sf(price: float, square_feet: int) -> int:
    """
    Compute price per square foot.

    Args:
        price: Sale price
        square_feet: Building area

    Returns:
        round(price / square_feet), or 0 unless both inputs are positive
    """
    if price > 0 and square_feet > 0:
        return round_half_up(price / square_feet)
    return 0


def format_currency(amount: float, symbol: str = "$") -> str:
    """
    Format amount as currency string.

    Args:
        amount: Numeric amount
        symbol: Currency symbol

    Returns:
        Formatted currency string without decimals, e.g. "$330,000,000"
    """
    formatted = f"{abs(amount):,.0f}"

    if amount < 0:
        return f"-{symbol}{formatted}"
    else:
        return f"{symbol}{formatted}"
