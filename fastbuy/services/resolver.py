"""
Variant Resolver: Fast Buy
Picks the single catalog row shown for the current platform/tier/capital.
"""

import re

ALL_PLATFORMS = "ALL"

# Representative row for the "ALL" view comes from the first platform
# in this order that has a candidate.
PLATFORM_PREFERENCE = ("MT5", "MATCHTRADER")

_MASTER_TIER = re.compile(r"MASTER|PHASE\s*3|3\s*PHASE", re.IGNORECASE)


def matches(variant, platform_filter, tier, capital):
    return (
        (not tier or variant.tier == tier)
        and (capital is None or variant.capital == capital)
        and (platform_filter == ALL_PLATFORMS or variant.platform == platform_filter)
    )


def resolve(catalog, platform_filter=ALL_PLATFORMS, tier="", capital=None, preference=PLATFORM_PREFERENCE):
    candidates = [v for v in catalog if matches(v, platform_filter, tier, capital)]
    if not candidates:
        return None
    if platform_filter != ALL_PLATFORMS:
        return candidates[0]

    for platform in preference:
        for candidate in candidates:
            if candidate.platform == platform:
                return candidate
    return candidates[0]


def effective_platform(platform_filter, resolved):
    if platform_filter == ALL_PLATFORMS:
        return resolved.platform if resolved else None
    return platform_filter


def available_capitals(catalog, platform_filter, tier, resolved):
    """Capitals that can be picked without landing on an empty row."""
    platform = effective_platform(platform_filter, resolved)
    return {
        v.capital
        for v in catalog
        if v.platform == platform and (not tier or v.tier == tier) and v.has_data()
    }


def _is_one_phase(tier):
    tier = (tier or "").upper()
    return "1" in tier or "ONE" in tier


def _is_two_phase(tier):
    return "2" in (tier or "")


def _is_master(tier):
    return bool(_MASTER_TIER.search(tier or ""))


def compare_tiers(catalog, platform, capital):
    """
    Same platform and capital across the three challenge families, for the
    side-by-side plan table. Missing families map to None.
    """
    rows = [v for v in catalog if v.platform == platform and v.capital == capital]

    def first(predicate):
        return next((v for v in rows if predicate(v.tier)), None)

    return {
        "one_phase": first(_is_one_phase),
        "two_phase": first(_is_two_phase),
        "master": first(_is_master),
    }
