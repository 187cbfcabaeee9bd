"""Sale month parsing ("Jun-22" style dates)."""
import logging
import re
from datetime import datetime
from typing import Optional

logger = logging.getLogger(__name__)

# Three word characters, a dash, two digits: "Jun-24", "Sep-19"
SALE_DATE_PATTERN = re.compile(r'^\w{3}-\d{2}$', re.ASCII)


def is_sale_date(text: Optional[str]) -> bool:
    """Check whether a cell looks like a sale month anchor."""
    if not text or not isinstance(text, str):
        return False
    return bool(SALE_DATE_PATTERN.match(text.strip()))


def parse_sale_month(date_string: str) -> Optional[datetime]:
    """
    Parse a sale month into the first day of that month.

    Args:
        date_string: Text like "Jun-22"

    Returns:
        datetime for the first of the month, or None if the month
        abbreviation is not a calendar month (the anchor pattern also
        accepts things like "Q12-24")
    """
    if not is_sale_date(date_string):
        return None

    try:
        return datetime.strptime(date_string.strip().title(), "%b-%y")
    except ValueError:
        logger.debug(f"Sale date anchor is not a calendar month: {date_string}")
        return None
