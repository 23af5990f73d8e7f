"""Shared catalog fixtures for the test suites."""

import json
from unittest.mock import MagicMock

from fastbuy.models.catalog import CatalogSnapshot, CatalogVariant, PaymentMethod, Upsale, ValueOverride


def variant(id, product_id, platform, tier, capital, price, **extra):
    return CatalogVariant(
        id=id,
        product_id=product_id,
        title=f"{tier} {capital}",
        platform=platform,
        tier=tier,
        capital=capital,
        base_price=price,
        **extra,
    )


CATALOG = [
    variant("c1", "ct-mtr-1p-2k", "MATCHTRADER", "1 PHASE", 2000, 120, min_trading_days=3),
    variant("c2", "ct-mt5-1p-2k", "MT5", "1 PHASE", 2000, 100, min_trading_days=3),
    variant("c3", "ct-mt5-2p-2k", "MT5", "2 PHASE", 2000, 80, duration_days=30),
    variant("c4", "ct-mt5-1p-5k", "MT5", "1 PHASE", 5000, 99.99, daily_loss_limit=250),
    variant("c5", "ct-mt5-ms-2k", "MT5", "XFINE MASTER", 2000, 150, total_loss_limit=200),
    variant("c6", "ct-mt5-1p-10k", "MT5", "1 PHASE", 10000, None),
]

UPSALES = [
    Upsale(id="u1", product_id="ct-mt5-1p-2k", title="Profit Target", condition_key="profitTarget", price=15),
    Upsale(id="u2", product_id="ct-mt5-1p-2k", title="News Trading", condition_key="tradingNews", price=10.005),
    Upsale(
        id="u3",
        product_id="other",
        title="Weekend",
        condition_key="weekendTradingAllowed",
        price=20,
        value_overrides=[ValueOverride(value=True, product_id="ct-mt5-1p-2k")],
    ),
    Upsale(id="u4", product_id="ct-mt5-1p-5k", title="Profit Target", condition_key="profitTarget", price=30),
    Upsale(id="u5", product_id="ct-mt5-1p-2k", title="Another target", condition_key="profitTarget", price=5.5),
]

SNAPSHOT = CatalogSnapshot(
    platforms=["MATCHTRADER", "MT5"],
    tiers=["1 PHASE", "2 PHASE", "XFINE MASTER"],
    capitals=[2000, 5000, 10000],
    catalog=CATALOG,
    upsales=UPSALES,
)

METHODS = [
    PaymentMethod(
        id="7:usdt",
        merchant_id=7,
        slug="coinsbuy",
        currency="usdt",
        integration_id=12,
        title="Coinsbuy - USDT",
    ),
]

VALID_CUSTOMER = {
    "firstName": "Ada",
    "lastName": "Lovelace",
    "email": "ada@example.com",
    "phone": "+44 20 7946 0958",
    "country": "GB",
    "password": "Abcdef1!",
    "confirmPassword": "Abcdef1!",
    "paymentMethod": "7:usdt",
    "agreeToTerms": True,
}

CHAINS_PAYLOAD = {
    "success": True,
    "data": [
        {
            "chain": [
                {
                    "id": "ch-1",
                    "title": "Stealth 2k",
                    "category": "1 PHASE",
                    "initialBalance": 2000,
                    "price": 100,
                    "challengeTypeId": "ct-mt5-1p-2k",
                    "accountType": {"platformInfo": {"type": "mt5-live", "name": "MetaTrader 5"}},
                    "settings": {"permittedDailyLoss": 100, "minTradingDays": "5"},
                    "rules": {"maxDrawdown": "10%"},
                    "duration": 30,
                },
                {
                    "id": "ch-2",
                    "title": "Basic 5k",
                    "category": "2 PHASE",
                    "initialBalance": 5000,
                    "oneTimeFee": "$149.50",
                    "challengeTypeId": "ct-mtr-2p-5k",
                    "accountType": {"platformInfo": {"type": "MatchTrader"}},
                },
            ],
            "upsales": [
                {
                    "id": "u1",
                    "challengeTypeId": "ct-mt5-1p-2k",
                    "title": "Profit Target",
                    "condition": "profitTarget",
                    "price": 15,
                    "values": [{"value": 8, "challengeTypeId": "ct-mt5-1p-2k"}],
                },
            ],
        },
        {
            "chain": [
                {
                    "id": "ch-3",
                    "title": "Stealth 2k (dup platform)",
                    "category": "1 PHASE",
                    "initialBalance": 2000,
                    "price": None,
                    "challengeTypeId": "ct-mt5-1p-2k-b",
                    "accountType": {"platformInfo": {"type": "MT5"}},
                },
            ],
        },
    ],
}

MERCHANTS_PAYLOAD = {
    "success": True,
    "data": {
        "cabinetId": "cab-1",
        "merchants": [
            {
                "id": 7,
                "name": "Coinsbuy",
                "slug": "coinsbuy",
                "displayName": "Crypto",
                "imagePath": "/img/coinsbuy.svg",
                "currency": ["usdt", "btc", "usdt"],
                "integrationId": 12,
                "openNewTab": True,
                "hasExternalRedirect": False,
            },
            {
                "id": 9,
                "name": "Yobopay",
                "slug": "yobopay",
                "displayName": None,
                "imagePath": "https://cdn.example.com/yobo.png",
                "currency": [],
                "integrationId": None,
            },
        ],
    },
}


def upstream(status=200, body=None, raw=None):
    """Stand-in for a requests.Response from the merchant API."""
    response = MagicMock()
    response.status_code = status
    response.ok = 200 <= status < 300
    response.reason = "OK" if response.ok else "Error"
    response.text = raw if raw is not None else json.dumps(body)
    return response
