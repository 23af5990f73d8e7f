"""
Catalog Service: Fast Buy
Turns the upstream chains/merchants payloads into a CatalogSnapshot and a
list of PaymentMethods.
"""

import logging

from fastbuy.field_paths import normalize_platform, pick, to_number_or_none
from fastbuy.models.catalog import (
    CatalogSnapshot,
    CatalogVariant,
    PaymentMethod,
    Upsale,
    is_number,
)

logger = logging.getLogger(__name__)


def build_variant(chain, field_paths=None):
    raw_price = chain.get("price")
    if is_number(raw_price):
        price = raw_price
    else:
        price = to_number_or_none(pick(chain, "basePrice", field_paths))

    min_days = pick(chain, "minTradingDays", field_paths)
    duration = pick(chain, "durationDays", field_paths)

    return CatalogVariant(
        id=str(chain.get("id", "")),
        product_id=str(chain.get("challengeTypeId") or ""),
        title=chain.get("title") or "",
        platform=normalize_platform(pick(chain, "platform", field_paths)),
        tier=chain.get("category") or "",
        capital=chain.get("initialBalance"),
        base_price=price,
        daily_loss_limit=pick(chain, "dailyLossLimit", field_paths),
        total_loss_limit=pick(chain, "totalLossLimit", field_paths),
        min_trading_days=to_number_or_none(min_days),
        duration_days=to_number_or_none(duration),
    )


def _filled(value):
    return value is not None and value != 0 and value != "0"


def build_snapshot(payload, field_paths=None):
    """
    Flatten {"data": [{"chain": [...], "upsales": [...]}, ...}.
    Platforms keep first-seen order; tiers and capitals are sorted.
    """
    blocks = (payload or {}).get("data") or []
    chains = [c for block in blocks for c in (block.get("chain") or [])]
    raw_upsales = [u for block in blocks for u in (block.get("upsales") or [])]

    catalog = []
    filled = {"dailyLoss": 0, "totalLoss": 0, "profitableDays": 0, "duration": 0, "price": 0}
    for idx, chain in enumerate(chains):
        variant = build_variant(chain, field_paths)
        logger.debug(
            "[chains:map] idx=%s productId=%s platform=%s tier=%s capital=%s price=%s",
            idx, variant.product_id, variant.platform, variant.tier, variant.capital, variant.base_price,
        )
        filled["dailyLoss"] += _filled(variant.daily_loss_limit)
        filled["totalLoss"] += _filled(variant.total_loss_limit)
        filled["profitableDays"] += _filled(variant.min_trading_days)
        filled["duration"] += _filled(variant.duration_days)
        filled["price"] += _filled(variant.base_price)
        catalog.append(variant)

    logger.info("[chains:summary] total=%s filled=%s", len(catalog), filled)

    platforms = []
    for variant in catalog:
        if variant.platform and variant.platform not in platforms:
            platforms.append(variant.platform)

    tiers = sorted({v.tier for v in catalog if v.tier})
    capitals = sorted({v.capital for v in catalog if is_number(v.capital)})

    return CatalogSnapshot(
        platforms=platforms,
        tiers=tiers,
        capitals=capitals,
        catalog=catalog,
        upsales=[Upsale.from_dict(u) for u in raw_upsales],
    )


def _method_title(merchant, currency):
    name = merchant.get("name") or merchant.get("slug") or ""
    display = merchant.get("displayName")
    cur = currency.upper() if currency else ""
    if display:
        return f"{name} - {display} ({cur})" if cur else f"{name} - {display}"
    return f"{name} - {cur}" if cur else name


def _image_url(path, image_base_url):
    if not path:
        return None
    if path.startswith("http"):
        return path
    return f"{image_base_url.rstrip('/')}{path}"


def build_payment_methods(payload, image_base_url=""):
    """One method per (merchant, currency), deduplicated on slug:currency."""
    merchants = pick(payload or {}, "merchants") or []

    seen = set()
    methods = []
    for merchant in merchants:
        currencies = merchant.get("currency") or [""]
        if not isinstance(currencies, list):
            currencies = [currencies]
        for currency in currencies:
            key = f"{merchant.get('slug')}:{currency or 'nocur'}"
            if key in seen:
                continue
            seen.add(key)
            methods.append(PaymentMethod(
                id=f"{merchant.get('id')}:{currency or ''}",
                merchant_id=merchant.get("id"),
                slug=merchant.get("slug") or "",
                currency=currency or None,
                integration_id=merchant.get("integrationId"),
                title=_method_title(merchant, currency),
                image_url=_image_url(merchant.get("imagePath"), image_base_url),
                open_new_tab=bool(merchant.get("openNewTab")),
                external=bool(merchant.get("hasExternalRedirect")),
            ))
    return methods


def fetch_snapshot(client):
    return build_snapshot(client.get_chains())


def fetch_payment_methods(client, image_base_url=""):
    return build_payment_methods(client.get_merchants(), image_base_url)
