"""Sales comparables extractor.

Rebuilds sale comparables tables (date, property, tenant, market, area,
price, price/SF, cap rate, purchaser, seller) from positioned PDF text.
"""

__version__ = "0.1.0"
