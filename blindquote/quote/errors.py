"""Domain errors raised by the quote stores, catalog and coordinators."""


class QuoteError(Exception):
    """Base class for quote domain errors."""
    pass


class InvalidArgument(QuoteError, ValueError):
    """Raised for arguments outside the accepted domain (negative counts, unknown fields)."""
    pass


class OutOfRange(InvalidArgument, IndexError):
    """Raised when a row index does not address a current line item."""

    def __init__(self, row_index, length: int):
        self.row_index = row_index
        self.length = length
        super().__init__(f"Row index {row_index} out of range for {length} item(s)")


class UnknownCatalogEntry(QuoteError, LookupError):
    """Raised when the rate table has no entry for a product/accessory/cost key."""

    def __init__(self, product_type: str, accessory: str, cost_key=None):
        self.product_type = product_type
        self.accessory = accessory
        self.cost_key = cost_key
        path = f"{product_type}/{accessory}" + (f"/{cost_key}" if cost_key else "")
        super().__init__(f"No catalog rate for '{path}'")
