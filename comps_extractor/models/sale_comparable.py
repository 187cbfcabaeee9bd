"""Sale comparable record model."""
from dataclasses import dataclass
from typing import Optional

# Continuation text may only extend these fields
TEXT_FIELDS = ('property_name', 'major_tenant', 'borough_market', 'purchaser', 'seller')
NUMERIC_FIELDS = ('square_feet', 'price', 'price_per_sf', 'cap_rate')

# Output key for each field, in table column order
OUTPUT_KEYS = {
    'date': 'date',
    'property_name': 'propertyName',
    'major_tenant': 'majorTenant',
    'borough_market': 'boroughMarket',
    'square_feet': 'squareFeet',
    'price': 'price',
    'price_per_sf': 'pricePerSF',
    'cap_rate': 'capRate',
    'purchaser': 'purchaser',
    'seller': 'seller',
}


@dataclass
class SaleComparable:
    """
    Represents one reconstructed row of a sale comparables table.

    Attributes:
        date: Sale month as printed, e.g. "Jun-22"
        property_name: Property address or name
        major_tenant: Anchor tenant
        borough_market: Borough or submarket
        square_feet: Building area (0 if not found)
        price: Sale price (0 if not found)
        price_per_sf: Price per square foot (0 if neither printed nor derivable)
        cap_rate: Capitalisation rate in percent (0 if not found)
        purchaser: Buyer
        seller: Seller(s), comma separated
        notes: Continuation text that matched no column
        page_number: Page the row came from
        price_per_sf_derived: True when price_per_sf was computed, not read
    """
    date: str
    property_name: str = ""
    major_tenant: str = ""
    borough_market: str = ""
    square_feet: int = 0
    price: float = 0
    price_per_sf: float = 0
    cap_rate: float = 0
    purchaser: str = ""
    seller: str = ""
    notes: Optional[str] = None
    page_number: Optional[int] = None
    price_per_sf_derived: bool = False

    def __post_init__(self):
        """Validate record data."""
        if self.square_feet < 0:
            raise ValueError("square_feet cannot be negative")
        if self.price < 0:
            raise ValueError("price cannot be negative")
        if self.price_per_sf < 0:
            raise ValueError("price_per_sf cannot be negative")
        if self.cap_rate < 0:
            raise ValueError("cap_rate cannot be negative")

    def to_dict(self) -> dict:
        """Convert record to the output dictionary shape."""
        result = {key: getattr(self, name) for name, key in OUTPUT_KEYS.items()}
        if self.notes:
            result['notes'] = self.notes
        return result
