"""
Upsale Service: Fast Buy
Builds the per-condition add-on dropdowns for the resolved product.
"""

from fastbuy.models.catalog import is_number
from fastbuy.services.pricing_service import format_amount

UPSALE_LABELS = {
    "profitTarget": "Get Additional Profit Target",
    "minimumDaysWithTradingHistory": "Get Additional Min Days",
    "dailyPercentage": "Get Additional Daily Percentage",
    "totalPercentage": "Get Additional Total Percentage",
    "percentForWithdrawal": "Get Additional Percentage for Withdrawal",
    "firstWithdrawalDays": "Get Additional Days for First Withdrawal",
    "consecutiveWithdrawalDays": "Get Additional Days for Consecutive Withdrawal",
    "consistencyRule": "Consistency Rule",
    "tradingNews": "Get Subscription for Trading News",
    "weekendTradingAllowed": "Allow to Trade on Weekends",
}

NO_SELECTION = {"id": "", "text": "Select"}


def label_for(condition_key, labels=None):
    table = UPSALE_LABELS if labels is None else labels
    return table.get(condition_key) or condition_key


def display_value(value):
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def base_title(upsale, label):
    return (upsale.title or "").strip() or label


def option_text(upsale, product_id, label):
    override = upsale.override_for(product_id)
    value = override.value if override else None

    text = base_title(upsale, label)
    if value is not None and value != "":
        text += f" = {display_value(value)}"
    if is_number(upsale.price):
        text += f" (+{format_amount(upsale.price)})"
    return text


def group_upsales(upsales, product_id, labels=None):
    """
    conditionKey -> {"label": str, "options": [{"id", "text"}, ...]}

    Keys keep first-seen order. Each group starts with the "Select"
    sentinel followed by at least one real option.
    """
    if not product_id:
        return {}

    groups = {}
    seen = set()
    for upsale in upsales:
        if not upsale.is_relevant_to(product_id):
            continue

        label = label_for(upsale.condition_key, labels)
        override = upsale.override_for(product_id)
        override_value = override.value if override else None
        price = upsale.price if is_number(upsale.price) else None

        dedupe_key = (
            upsale.condition_key,
            base_title(upsale, label).lower(),
            "" if override_value is None else display_value(override_value),
            "" if price is None else price,
        )
        if dedupe_key in seen:
            continue
        seen.add(dedupe_key)

        group = groups.setdefault(upsale.condition_key, {"label": label, "options": []})
        group["options"].append({"id": upsale.id, "text": option_text(upsale, product_id, label)})

    for group in groups.values():
        group["options"].sort(key=lambda o: (o["text"].casefold(), o["text"]))
        group["options"].insert(0, dict(NO_SELECTION))

    return groups


def offered_upsale_ids(groups):
    return {o["id"] for g in groups.values() for o in g["options"] if o["id"]}
