"""
Where to find each logical attribute in upstream JSON.

The merchant API has shipped several shapes for the same data, so every
attribute maps to an ordered list of dotted key paths. The first path that
resolves to a non-null value wins.
"""

import math
import re

_RULE_CONTAINERS = ("settings", "rules", "conditions")


def _variants(key, containers=_RULE_CONTAINERS):
    return [f"{container}.{key}" for container in containers]


FIELD_PATHS = {
    "dailyLossLimit": [
        "permittedDailyLoss",
        *_variants("permittedDailyLoss", _RULE_CONTAINERS + ("metrics",)),
        *_variants("dailyLoss"),
        *_variants("maxDailyLoss"),
    ],
    "totalLossLimit": [
        "permittedTotalLoss",
        *_variants("permittedTotalLoss", _RULE_CONTAINERS + ("metrics",)),
        *_variants("totalLoss"),
        *_variants("maxDrawdown"),
    ],
    "minTradingDays": [
        "profitableDays",
        *_variants("profitableDays"),
        *_variants("minTradingDays"),
        *_variants("minimumTradingDays"),
    ],
    "durationDays": [
        "duration",
        *_variants("duration", _RULE_CONTAINERS + ("metrics",)),
        *_variants("tradingPeriod"),
        *_variants("tradingPeriodDays"),
    ],
    "platform": [
        "accountType.platformInfo.type",
    ],
    "basePrice": [
        "price",
        "oneTimeFee",
    ],
    "redirectUrl": [
        "data.response.outputData.redirectUrl",
        "data.redirectUrl",
        "data.outputData.redirectUrl",
        "redirectUrl",
    ],
    "successUrl": ["data.successUrl"],
    "pendingUrl": ["data.pendingUrl"],
    "errorUrl": ["data.errorUrl"],
    "promoPrice": ["data.price"],
    "merchants": ["data.merchants"],
}


def lookup(obj, path):
    cur = obj
    for segment in path.split("."):
        if not isinstance(cur, dict):
            return None
        cur = cur.get(segment)
        if cur is None:
            return None
    return cur


def first_present(obj, paths):
    """Value of the first path in `paths` that is present and not None."""
    for path in paths:
        value = lookup(obj, path)
        if value is not None:
            return value
    return None


def pick(obj, attribute, field_paths=None):
    table = FIELD_PATHS if field_paths is None else field_paths
    return first_present(obj, table.get(attribute, [attribute]))


_NON_NUMERIC = re.compile(r"[^\d.-]")


def to_number_or_none(value):
    """
    Coerce "1,500 USD" style values to 1500.
    Returns None for missing, empty or unparseable input.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else None
    cleaned = _NON_NUMERIC.sub("", str(value))
    if not cleaned:
        return None
    try:
        number = float(cleaned)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def normalize_platform(raw):
    value = (raw or "").upper()
    if "MT5" in value:
        return "MT5"
    if "MATCH" in value:
        return "MATCHTRADER"
    return value
