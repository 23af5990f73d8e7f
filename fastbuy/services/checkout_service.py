"""
Checkout Service: Fast Buy
Validates a checkout request, builds the upstream order body and extracts the
payment redirect from whatever shape the merchant API answers with.
"""

import math

from fastbuy.errors import FastBuyError, InvalidRequestError
from fastbuy.field_paths import pick

REQUIRED_CUSTOMER_FIELDS = ["email", "firstName", "lastName", "password", "confirmPassword", "country"]

# Fallback order when no direct redirectUrl is returned
REDIRECT_KEYS = ("redirectUrl", "successUrl", "pendingUrl", "errorUrl")


def parse_amount(value):
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = value
    else:
        try:
            number = float(str(value).strip())
        except ValueError:
            return None
    if not math.isfinite(number) or not number:
        return None
    return number


def validate_order(payload):
    """Raises InvalidRequestError naming the first thing that is missing."""
    if not isinstance(payload, dict):
        raise InvalidRequestError("Invalid JSON body")

    selection = payload.get("selection") or {}
    customer = payload.get("customer") or {}
    payment = payload.get("payment") or {}
    for name, part in (("selection", selection), ("customer", customer), ("payment", payment)):
        if not isinstance(part, dict):
            raise InvalidRequestError(f"{name} must be an object")

    if not selection.get("productId"):
        raise InvalidRequestError("productId is required")

    missing = [f for f in REQUIRED_CUSTOMER_FIELDS if not customer.get(f)]
    if missing:
        raise InvalidRequestError(f"Missing customer required fields: {', '.join(missing)}")

    if not payment.get("merchantId") or not payment.get("slug"):
        raise InvalidRequestError("Payment merchant is required")

    if parse_amount(payload.get("amount")) is None:
        raise InvalidRequestError("Invalid amount")


def build_order_body(payload, config):
    selection = payload["selection"]
    customer = payload["customer"]
    payment = payload["payment"]

    region_id = config.get("REGION_ID")
    if not region_id:
        raise FastBuyError("REGION_ID is not configured", status_code=500)

    currency = payment.get("currency") or config.get("DEFAULT_CURRENCY") or "USD"

    return {
        "traderData": {
            "firstName": customer["firstName"],
            "lastName": customer["lastName"],
            "email": customer["email"],
            "phone": customer.get("phone") or None,
            "language": customer.get("language") or "en",
            "password": customer["password"],
            "confirmPassword": customer["confirmPassword"],
            "affiliate": None,
            "promoCode": selection.get("promo") or None,
            "country": customer["country"],
        },
        "merchant": payment["slug"],
        "merchantId": payment["merchantId"],
        "integrationId": payment.get("integrationId"),
        "challengeTypeId": selection["productId"],
        "currency": str(currency).upper(),
        "originalCurrency": str(currency).lower(),
        "amount": parse_amount(payload["amount"]),
        "leverage": int(config.get("DEFAULT_LEVERAGE") or 100),
        "regionId": region_id,
    }


def extract_urls(upstream):
    upstream = upstream or {}
    result = {"ok": True}
    redirect_url = pick(upstream, "redirectUrl")
    if redirect_url:
        result["redirectUrl"] = redirect_url
    for key in ("successUrl", "pendingUrl", "errorUrl"):
        result[key] = pick(upstream, key) or None
    return result


def submit_order(client, payload, config):
    validate_order(payload)
    body = build_order_body(payload, config)
    upstream = client.create_challenge_order(body)
    return extract_urls(upstream)


def next_location(result):
    """Where the buyer goes next, or None if the order gave us nowhere to go."""
    for key in REDIRECT_KEYS:
        if result.get(key):
            return result[key]
    return None
