"""Entrypoint pricing.

Prices are in the smallest unit of a 6-decimal stablecoin, so 1000 is
$0.001. The core treats price as metadata: collection and verification
belong to the payment collaborator. A price of 0 marks a free capability
that never reaches that collaborator.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from .errors import NotRegisteredError

DEFAULT_PRICES: Mapping[str, int] = MappingProxyType({
    "overview": 0,
    "driver": 1000,
    "standings": 2000,
    "schedule": 2000,
    "results": 3000,
    "report": 5000,
})


class PricingPolicy:
    """Read-only table of entrypoint key -> price."""

    def __init__(self, prices: Mapping[str, int] = DEFAULT_PRICES):
        for key, amount in prices.items():
            if isinstance(amount, bool) or not isinstance(amount, int) or amount < 0:
                raise ValueError(f"Price for '{key}' must be a non-negative integer, got {amount!r}")
        self._prices = MappingProxyType(dict(prices))

    def price_for(self, key: str) -> int:
        try:
            return self._prices[key]
        except KeyError:
            raise NotRegisteredError(key) from None

    def is_free(self, key: str) -> bool:
        return self.price_for(key) == 0

    def requires_payment(self, key: str) -> bool:
        return self.price_for(key) > 0

    def __contains__(self, key: object) -> bool:
        return key in self._prices

    def as_dict(self) -> dict[str, int]:
        return dict(self._prices)
