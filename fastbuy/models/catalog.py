"""
Catalog Models: Fast Buy
CatalogVariant | Upsale | PaymentMethod | CatalogSnapshot
Loaded once from the merchant API and never mutated afterwards.
"""

import math
from dataclasses import dataclass, field
from typing import Any, List, Optional, Union

Attribute = Optional[Union[float, int, str]]


@dataclass(frozen=True)
class CatalogVariant:
    id: str
    product_id: str
    title: str
    platform: str
    tier: str
    capital: float
    base_price: Optional[float] = None
    daily_loss_limit: Attribute = None
    total_loss_limit: Attribute = None
    min_trading_days: Attribute = None
    duration_days: Attribute = None

    def has_data(self):
        """True when the row carries anything worth showing in the plan table."""
        return (
            self.daily_loss_limit is not None
            or self.total_loss_limit is not None
            or self.min_trading_days is not None
            or self.duration_days is not None
            or is_number(self.base_price)
        )

    def to_dict(self):
        return {
            "id":             self.id,
            "productId":      self.product_id,
            "title":          self.title,
            "platform":       self.platform,
            "tier":           self.tier,
            "capital":        self.capital,
            "basePrice":      self.base_price,
            "dailyLossLimit": self.daily_loss_limit,
            "totalLossLimit": self.total_loss_limit,
            "minTradingDays": self.min_trading_days,
            "durationDays":   self.duration_days,
        }


@dataclass(frozen=True)
class ValueOverride:
    value: Any
    product_id: str

    def to_dict(self):
        return {"value": self.value, "productId": self.product_id}


@dataclass(frozen=True)
class Upsale:
    id: str
    product_id: str
    title: str
    condition_key: str
    price: Optional[float] = None
    value_overrides: List[ValueOverride] = field(default_factory=list)

    def is_relevant_to(self, product_id):
        if self.product_id == product_id:
            return True
        return any(v.product_id == product_id for v in self.value_overrides)

    def override_for(self, product_id):
        for override in self.value_overrides:
            if override.product_id == product_id:
                return override
        return None

    @classmethod
    def from_dict(cls, data):
        """Accepts both the service shape and the raw upstream shape."""
        raw_values = data.get("valueOverrides")
        if raw_values is None:
            raw_values = data.get("values") or []
        overrides = [
            ValueOverride(
                value=v.get("value"),
                product_id=str(v.get("productId") or v.get("challengeTypeId") or ""),
            )
            for v in raw_values
        ]
        return cls(
            id=str(data.get("id", "")),
            product_id=str(data.get("productId") or data.get("challengeTypeId") or ""),
            title=data.get("title") or "",
            condition_key=data.get("conditionKey") or data.get("condition") or "",
            price=data.get("price"),
            value_overrides=overrides,
        )

    def to_dict(self):
        return {
            "id":             self.id,
            "productId":      self.product_id,
            "title":          self.title,
            "conditionKey":   self.condition_key,
            "price":          self.price,
            "valueOverrides": [v.to_dict() for v in self.value_overrides],
        }


@dataclass(frozen=True)
class PaymentMethod:
    id: str
    merchant_id: int
    slug: str
    currency: Optional[str]
    integration_id: Optional[int]
    title: str
    image_url: Optional[str] = None
    open_new_tab: bool = False
    external: bool = False

    def to_dict(self):
        return {
            "id":            self.id,
            "merchantId":    self.merchant_id,
            "slug":          self.slug,
            "currency":      self.currency,
            "integrationId": self.integration_id,
            "title":         self.title,
            "imageUrl":      self.image_url,
            "openNewTab":    self.open_new_tab,
            "external":      self.external,
        }

    def to_payment(self):
        """The subset the checkout endpoint needs."""
        return {
            "merchantId":    self.merchant_id,
            "slug":          self.slug,
            "currency":      self.currency,
            "integrationId": self.integration_id,
        }


@dataclass(frozen=True)
class CatalogSnapshot:
    platforms: List[str] = field(default_factory=list)
    tiers: List[str] = field(default_factory=list)
    capitals: List[float] = field(default_factory=list)
    catalog: List[CatalogVariant] = field(default_factory=list)
    upsales: List[Upsale] = field(default_factory=list)

    def to_dict(self):
        return {
            "platforms": self.platforms,
            "tiers":     self.tiers,
            "capitals":  self.capitals,
            "catalog":   [c.to_dict() for c in self.catalog],
            "upsales":   [u.to_dict() for u in self.upsales],
        }


def is_number(value):
    """Real int/float, excluding bools, NaN and infinities."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)
