"""
Pricing Service: Fast Buy
All sums are done in integer cents. Amounts are rounded half-up on their
decimal text, so 10.005 is 1001 cents rather than 1000.
"""

from decimal import ROUND_HALF_UP, Decimal

from fastbuy.models.catalog import is_number

CURRENCY_SYMBOL = "$"
EMPTY = "-"


def to_cents(amount):
    if not is_number(amount):
        return 0
    cents = Decimal(str(amount)) * 100
    return int(cents.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def cents_to_amount(cents):
    """Numeric amount for JSON bodies: int when whole, else float."""
    if cents % 100 == 0:
        return cents // 100
    return float(Decimal(cents) / 100)


def format_cents(cents, symbol=CURRENCY_SYMBOL):
    """$ prefix, no grouping, 0-2 fraction digits."""
    sign = "-" if cents < 0 else ""
    whole, frac = divmod(abs(cents), 100)
    if frac == 0:
        text = str(whole)
    elif frac % 10 == 0:
        text = f"{whole}.{frac // 10}"
    else:
        text = f"{whole}.{frac:02d}"
    return f"{sign}{symbol}{text}"


def format_amount(amount, symbol=CURRENCY_SYMBOL):
    return format_cents(to_cents(amount), symbol)


def base_price(promo_override_price, variant, fallback_capital):
    if promo_override_price is not None:
        return promo_override_price
    if variant is not None and is_number(variant.base_price):
        return variant.base_price
    return fallback_capital if fallback_capital is not None else 0


def compute_total_cents(promo_override_price, variant, fallback_capital, chosen_upsale_ids, upsales):
    prices = {}
    for upsale in upsales:
        prices.setdefault(upsale.id, upsale.price)

    total = to_cents(base_price(promo_override_price, variant, fallback_capital))
    for upsale_id in chosen_upsale_ids:
        if not upsale_id:
            continue
        price = prices.get(upsale_id)
        if is_number(price):
            total += to_cents(price)
    return total


def compute_total(promo_override_price, variant, fallback_capital, chosen_upsale_ids, upsales):
    return format_cents(
        compute_total_cents(promo_override_price, variant, fallback_capital, chosen_upsale_ids, upsales)
    )


# --- display helpers ----------------------------------------------------

def _fixed(value, digits):
    return f"{value:.{digits}f}"


def format_money_short(n):
    """Compact capital label: 2500 -> 2.5k, 100000 -> 100k, 1500000 -> 1.5m."""
    if n >= 1_000_000_000:
        return f"{_fixed(n / 1_000_000_000, 1 if n % 1_000_000_000 else 0)}b"
    if n >= 1_000_000:
        return f"{_fixed(n / 1_000_000, 1 if n % 1_000_000 else 0)}m"
    if n >= 1_000:
        digits = 1 if (n % 1_000 and n < 10_000) else 0
        return f"{_fixed(n / 1_000, digits)}k"
    return str(int(n)) if float(n).is_integer() else str(n)


def format_usd_short(value):
    if value is None or value == "":
        return EMPTY
    try:
        n = float(value)
    except (TypeError, ValueError):
        return str(value)
    if not is_number(n):
        return str(value)
    return f"{CURRENCY_SYMBOL}{format_money_short(n)}"


def format_days(value):
    if value is None or value == "":
        return EMPTY
    try:
        n = float(value)
    except (TypeError, ValueError):
        return str(value)
    if not is_number(n):
        return str(value)
    shown = int(n) if n.is_integer() else n
    return f"{shown} day{'' if n == 1 else 's'}"


def capital_options(capitals):
    return [{"value": c, "label": format_usd_short(c)} for c in capitals]


PLAN_TABLE_ROWS = (
    ("Max Loss per day", "daily_loss_limit", format_usd_short),
    ("Max Drawdown", "total_loss_limit", format_usd_short),
    ("Min Trading Days", "min_trading_days", format_days),
    ("Trading period", "duration_days", format_days),
    ("One time fee", "base_price", format_usd_short),
)


def plan_table(comparison):
    """
    Display rows for the side-by-side plan table.

    `comparison` maps a column name (one_phase, two_phase, master) to a
    CatalogVariant or None. Missing rows and values render as "-".
    """
    rows = []
    for label, attribute, fmt in PLAN_TABLE_ROWS:
        row = {"condition": label}
        for column, variant in comparison.items():
            row[column] = fmt(getattr(variant, attribute) if variant else None)
        rows.append(row)
    return rows
