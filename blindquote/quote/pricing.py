# blindquote/quote/pricing.py - drive accessory pricing (pure, catalog driven)

from typing import Iterable, Optional

from .catalog import Catalog
from .errors import InvalidArgument, UnknownCatalogEntry
from .models import DriveAccessory, LineItem

_PER_ITEM_ACCESSORIES = (DriveAccessory.WINDER, DriveAccessory.MOTOR)


def count_winders(items: Iterable[LineItem]) -> int:
    return sum(1 for item in items if item.has_winder)


def count_motors(items: Iterable[LineItem]) -> int:
    return sum(1 for item in items if item.has_motor)


class PricingEngine:
    """
    Stateless price calculator over a read-only Catalog.

    Winder/motor prices come from the line items (rate x flagged rows);
    remote/charger/cord prices come from a counter (rate x count). For
    remotes a cost key switches the rate to that cost tier, giving the
    cost valuation instead of the sale price.
    """

    def __init__(self, catalog: Catalog):
        self.catalog = catalog

    def price_for(self, product_type: str, accessory,
                  *, items: Optional[Iterable[LineItem]] = None,
                  count: Optional[int] = None,
                  cost_key: Optional[str] = None) -> float:
        try:
            kind = DriveAccessory(accessory)
        except ValueError:
            raise UnknownCatalogEntry(product_type, str(accessory)) from None

        if kind in _PER_ITEM_ACCESSORIES:
            if items is None:
                raise InvalidArgument(f"{kind.value} price needs the line items")
            if cost_key is not None:
                raise InvalidArgument(f"{kind.value} has no cost tiers")
            items = tuple(items)
            qty = count_winders(items) if kind is DriveAccessory.WINDER else count_motors(items)
            return round(self.catalog.rate(product_type, kind.value) * qty, 2)

        if count is None:
            raise InvalidArgument(f"{kind.value} price needs a count")
        if count < 0:
            raise InvalidArgument(f"{kind.value} count must be non-negative, got {count}")
        if cost_key is not None and kind is not DriveAccessory.REMOTE:
            raise InvalidArgument(f"Only remotes have cost tiers, not {kind.value}")

        rate = self.catalog.rate(product_type, kind.value, cost_key)
        return round(rate * count, 2)

    def service_fee(self, product_type: str, service: str, qty: Optional[int]) -> Optional[float]:
        """Right-panel fee line: rate x qty, None when no quantity was entered."""
        if qty is None:
            return None
        if qty < 0:
            raise InvalidArgument(f"{service} quantity must be non-negative, got {qty}")
        return round(self.catalog.service_rate(product_type, service) * qty, 2)
