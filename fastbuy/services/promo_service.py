"""
Promo Service: Fast Buy
Asks the merchant API what a product costs with a given promo code.
"""

import json

from fastbuy.errors import InvalidRequestError, UpstreamError
from fastbuy.field_paths import pick
from fastbuy.models.catalog import is_number


def check_promo(client, product_id, promo_code):
    """
    Returns the discounted price for `product_id`.
    Called by the promo route and by the selection flow when a code is applied.
    """
    promo_code = str(promo_code or "").strip()
    if not product_id or not promo_code:
        raise InvalidRequestError("productId and promoCode are required")

    data = client.check_promo_code(product_id, promo_code)
    price = pick(data or {}, "promoPrice")
    if not is_number(price):
        raw = json.dumps(data) if data is not None else ""
        raise UpstreamError("No price in response", upstream_raw=raw)
    return price
