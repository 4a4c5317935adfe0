# blindquote/quote/catalog.py - accessory rate table + loader

import copy
import json
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from loguru import logger

from .errors import UnknownCatalogEntry

# Built-in rate table, used when no catalog file is configured.
#   <productType>.accessories.<kind>.price         sale rate per unit
#   <productType>.accessories.<kind>.costs.<key>   cost-tier rate per unit
#   <productType>.services.<kind>.price            right-panel fee per unit
DEFAULT_CATALOG: Dict[str, Any] = {
    "version": "1.0.0",
    "products": {
        "rollerBlind": {
            "accessories": {
                "winder": {"price": 30},
                "motor": {"price": 250},
                "remote": {
                    "price": 100,
                    "costs": {"1ch": 45, "4ch": 55, "16ch": 70},
                },
                "charger": {"price": 50},
                "cord": {"price": 25},
            },
            "services": {
                "wifi": {"price": 200},
                "delivery": {"price": 50},
                "install": {"price": 20},
                "removal": {"price": 20},
            },
        },
    },
}

# ---------- simple in-process cache ----------
_CATALOG_CACHE: Dict[str, "Catalog"] = {}
_CATALOG_MTIME: Dict[str, Optional[float]] = {}


@dataclass(frozen=True)
class Catalog:
    raw: Dict[str, Any]

    @property
    def version(self) -> str:
        return self.raw.get("version", "0.0.0")

    def product_types(self):
        return tuple(self.raw.get("products", {}).keys())

    def _section(self, product_type: str, section: str, kind: str) -> Dict[str, Any]:
        product = self.raw.get("products", {}).get(product_type)
        if not isinstance(product, dict):
            raise UnknownCatalogEntry(product_type, kind)
        rec = product.get(section, {}).get(kind)
        if not isinstance(rec, dict):
            raise UnknownCatalogEntry(product_type, kind)
        return rec

    def rate(self, product_type: str, accessory: str, cost_key: Optional[str] = None) -> float:
        """
        Resolve a unit rate:
          1) cost tier:  products[p].accessories[a].costs[cost_key]
          2) sale rate:  products[p].accessories[a].price
        Raise UnknownCatalogEntry if the path is missing; never return silent zeros.
        """
        rec = self._section(product_type, "accessories", accessory)

        if cost_key is not None:
            costs = rec.get("costs")
            if not isinstance(costs, dict) or cost_key not in costs:
                raise UnknownCatalogEntry(product_type, accessory, cost_key)
            return float(costs[cost_key])

        if "price" not in rec:
            raise UnknownCatalogEntry(product_type, accessory)
        return float(rec["price"])

    def cost_keys(self, product_type: str, accessory: str):
        rec = self._section(product_type, "accessories", accessory)
        return tuple(rec.get("costs", {}).keys())

    def service_rate(self, product_type: str, service: str) -> float:
        rec = self._section(product_type, "services", service)
        if "price" not in rec:
            raise UnknownCatalogEntry(product_type, service)
        return float(rec["price"])


def _read_catalog_from_disk(path: str) -> Catalog:
    if not os.path.exists(path):
        raise FileNotFoundError(f"Missing catalog at {path}")
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    logger.info(f"Loaded catalog {data.get('version', '0.0.0')} from {path}")
    return Catalog(data)


def load_catalog(path: Optional[str] = None) -> Catalog:
    """
    Return the catalog at `path`, re-reading it when the file changed.
    With no path, return the built-in table.
    """
    if path is None:
        return Catalog(copy.deepcopy(DEFAULT_CATALOG))

    try:
        mtime = os.path.getmtime(path)
    except OSError:
        mtime = None

    if path not in _CATALOG_CACHE or _CATALOG_MTIME.get(path) != mtime:
        _CATALOG_CACHE[path] = _read_catalog_from_disk(path)
        _CATALOG_MTIME[path] = mtime
    return _CATALOG_CACHE[path]


def reload_catalog(path: str) -> Catalog:
    """
    Force cache invalidation + re-read from disk.
    """
    _CATALOG_CACHE.pop(path, None)
    _CATALOG_MTIME.pop(path, None)
    return load_catalog(path)
