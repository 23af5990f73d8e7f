"""
Selection Flow: Fast Buy
Holds what the buyer picked and recomputes everything derived from it.

    selectors -> resolved variant -> upsale groups / total

Derived values are never stored; `quote()` rebuilds them from the snapshot
and the current SelectionState on every call.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from fastbuy.errors import FastBuyError, InvalidRequestError, UpstreamError
from fastbuy.models.catalog import CatalogSnapshot, CatalogVariant, PaymentMethod, is_number
from fastbuy.services import checkout_service, promo_service
from fastbuy.services.catalog_service import fetch_payment_methods, fetch_snapshot
from fastbuy.services.pricing_service import (
    capital_options,
    cents_to_amount,
    compute_total_cents,
    format_amount,
    format_cents,
    plan_table,
)
from fastbuy.services.resolver import (
    ALL_PLATFORMS,
    available_capitals,
    compare_tiers,
    effective_platform,
    resolve,
)
from fastbuy.services.upsale_service import group_upsales, offered_upsale_ids
from fastbuy.services.validation import FORM_FIELDS, validate

logger = logging.getLogger(__name__)

TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class SelectionState:
    platform_filter: str = ALL_PLATFORMS
    tier: str = ""
    capital: Optional[float] = None
    promo_code: str = ""
    promo_override_price: Optional[float] = None
    promo_hint: str = ""
    promo_error: bool = False
    chosen_upsales: Dict[str, str] = field(default_factory=dict)

    def reset_promo(self):
        self.promo_override_price = None
        self.promo_hint = ""
        self.promo_error = False

    @classmethod
    def from_dict(cls, data):
        data = data or {}
        if not isinstance(data, dict):
            raise InvalidRequestError("selection must be an object")
        capital = data.get("capital")
        promo_price = data.get("promoOverridePrice")
        chosen = data.get("chosenUpsales") or data.get("chosenUpsaleByCondition") or {}
        if not isinstance(chosen, dict):
            raise InvalidRequestError("chosenUpsales must be an object")
        return cls(
            platform_filter=data.get("platformFilter") or data.get("platform") or ALL_PLATFORMS,
            tier=data.get("tier") or data.get("challenge") or "",
            capital=capital if is_number(capital) else None,
            promo_code=data.get("promoCode") or data.get("promo") or "",
            promo_override_price=promo_price if is_number(promo_price) else None,
            chosen_upsales={str(k): str(v or "") for k, v in chosen.items()},
        )

    def to_dict(self):
        return {
            "platformFilter":     self.platform_filter,
            "tier":               self.tier,
            "capital":            self.capital,
            "promoCode":          self.promo_code,
            "promoOverridePrice": self.promo_override_price,
            "promoHint":          self.promo_hint,
            "promoError":         self.promo_error,
            "chosenUpsales":      dict(self.chosen_upsales),
        }


@dataclass
class Quote:
    variant: Optional[CatalogVariant]
    upsale_groups: Dict[str, dict]
    chosen_upsale_ids: List[str]
    total_cents: int
    available_capitals: List[float]
    comparison: Dict[str, Optional[CatalogVariant]]

    @property
    def product_id(self):
        return self.variant.product_id if self.variant else ""

    @property
    def total(self):
        return format_cents(self.total_cents)

    @property
    def amount(self):
        return cents_to_amount(self.total_cents)

    def to_dict(self):
        return {
            "variant": self.variant.to_dict() if self.variant else None,
            "productId": self.product_id,
            "upsaleGroups": [
                {"conditionKey": key, "label": g["label"], "options": g["options"]}
                for key, g in self.upsale_groups.items()
            ],
            "chosenUpsaleIds": self.chosen_upsale_ids,
            "totalCents": self.total_cents,
            "total": self.total,
            "amount": self.amount,
            "availableCapitals": self.available_capitals,
            "capitalOptions": capital_options(self.available_capitals),
            "comparison": {
                name: (row.to_dict() if row else None)
                for name, row in self.comparison.items()
            },
            "planTable": plan_table(self.comparison),
        }


def derive(snapshot, state):
    variant = resolve(snapshot.catalog, state.platform_filter, state.tier, state.capital)
    product_id = variant.product_id if variant else ""
    groups = group_upsales(snapshot.upsales, product_id)

    # A choice is charged only while it is offered in its own condition group;
    # choices left over from a previous product stay in state uncharged
    chosen = [
        upsale_id
        for key, upsale_id in state.chosen_upsales.items()
        if upsale_id and key in groups and upsale_id in offered_upsale_ids({key: groups[key]})
    ]

    total_cents = compute_total_cents(
        state.promo_override_price, variant, state.capital, chosen, snapshot.upsales
    )
    capitals = available_capitals(snapshot.catalog, state.platform_filter, state.tier, variant)
    platform = effective_platform(state.platform_filter, variant)

    return Quote(
        variant=variant,
        upsale_groups=groups,
        chosen_upsale_ids=chosen,
        total_cents=total_cents,
        available_capitals=sorted(capitals),
        comparison=compare_tiers(snapshot.catalog, platform, state.capital),
    )


class MerchantGateway:
    """Collaborators the flow talks to, backed by the merchant API."""

    def __init__(self, client, config):
        self.client = client
        self.config = config

    def fetch_options(self):
        return fetch_snapshot(self.client)

    def fetch_payment_methods(self):
        return fetch_payment_methods(self.client, self.config.get("IMAGE_BASE_URL", ""))

    def validate_promo(self, product_id, promo_code):
        return promo_service.check_promo(self.client, product_id, promo_code)

    def submit_checkout(self, payload):
        return checkout_service.submit_order(self.client, payload, self.config)


# --- flow lifecycle -----------------------------------------------------
LOADING = "LOADING"
READY = "READY"
SUBMITTING = "SUBMITTING"
REDIRECTED = "REDIRECTED"

VALID_TRANSITIONS = {
    LOADING: {READY},
    READY: {SUBMITTING},
    SUBMITTING: {READY, REDIRECTED},
    REDIRECTED: set(),
}

PROMO_APPLIED = "PROMO_APPLIED"
PROMO_UNSET = "PROMO_UNSET"


class FastBuyFlow:
    def __init__(self, gateway):
        self.gateway = gateway
        self.status = LOADING
        self.snapshot = CatalogSnapshot()
        self.methods: List[PaymentMethod] = []
        self.state = SelectionState()
        self.customer = {"language": "en", "agreeToTerms": False}
        self.touched = set()
        self.submit_error = ""
        self.redirect_url = None

    def _transition(self, new_status):
        allowed = VALID_TRANSITIONS.get(self.status, set())
        if new_status not in allowed:
            raise FastBuyError(f"Cannot transition from {self.status} to {new_status}", status_code=409)
        self.status = new_status

    # --- derived --------------------------------------------------------
    def quote(self):
        return derive(self.snapshot, self.state)

    @property
    def current_variant(self):
        return self.quote().variant

    @property
    def product_id(self):
        return self.quote().product_id

    @property
    def total(self):
        return self.quote().total

    @property
    def promo_status(self):
        return PROMO_APPLIED if self.state.promo_override_price is not None else PROMO_UNSET

    @property
    def errors(self):
        return validate(self.customer)

    @property
    def is_form_valid(self):
        return not self.errors

    def visible_errors(self):
        return {k: v for k, v in self.errors.items() if k in self.touched}

    def touch(self, name):
        self.touched.add(name)

    # --- loading --------------------------------------------------------
    def load(self, params=None):
        self.snapshot = self.gateway.fetch_options()

        if not self.state.tier and self.snapshot.tiers:
            self._commit(tier=self.snapshot.tiers[0])
        if self.state.capital is None and self.snapshot.capitals:
            self._commit(capital=self.snapshot.capitals[0])

        try:
            self.methods = self.gateway.fetch_payment_methods()
        except UpstreamError as e:
            logger.warning("payment methods unavailable: %s", e)
            self.methods = []
        if not self.customer.get("paymentMethod") and self.methods:
            self.customer["paymentMethod"] = self.methods[0].id

        if self.status != READY:
            self._transition(READY)
        if params:
            self.apply_params(params)

    def apply_params(self, params):
        """Initial values from the page URL. Unknown values are ignored."""
        promo = params.get("promo")
        if promo:
            self.state.promo_code = promo

        platform = params.get("platform")
        if platform and platform in self.snapshot.platforms:
            self._commit(platform_filter=platform)

        tier = params.get("challenge") or params.get("tier")
        if tier and tier in self.snapshot.tiers:
            self._commit(tier=tier)

        capital = params.get("capital")
        if capital:
            try:
                value = float(capital)
            except (TypeError, ValueError):
                value = None
            match = next((c for c in self.snapshot.capitals if c == value), None)
            if value is not None and match is not None:
                self._commit(capital=match)

        auto_apply = str(params.get("apply") or params.get("autoApply") or "").lower()
        if auto_apply in TRUTHY and self.state.promo_code:
            self.apply_promo()

    # --- selectors ------------------------------------------------------
    def _commit(self, **changes):
        before = self.product_id
        for name, value in changes.items():
            setattr(self.state, name, value)
        if self.product_id != before:
            self.state.reset_promo()

    def select_platform(self, platform):
        if platform != ALL_PLATFORMS and platform not in self.snapshot.platforms:
            return False
        self._commit(platform_filter=platform)
        return True

    def select_tier(self, tier):
        if tier not in self.snapshot.tiers:
            return False
        self._commit(tier=tier)
        return True

    def select_capital(self, capital):
        if capital not in self.snapshot.capitals:
            return False
        self._commit(capital=capital)
        return True

    def choose_upsale(self, condition_key, upsale_id):
        self.state.chosen_upsales[condition_key] = upsale_id or ""

    def set_promo_code(self, code):
        self.state.promo_code = code
        self.state.promo_error = False
        self.state.promo_hint = ""

    def update_customer(self, **fields):
        unknown = set(fields) - set(FORM_FIELDS) - {"language"}
        if unknown:
            raise FastBuyError(f"Unknown form fields: {', '.join(sorted(unknown))}", status_code=400)
        self.customer.update(fields)

    def select_payment_method(self, method_id):
        self.customer["paymentMethod"] = method_id

    # --- promo ----------------------------------------------------------
    def apply_promo(self):
        state = self.state
        state.promo_error = False

        product_id = self.product_id
        if not product_id:
            state.promo_hint = "Select Platform / Challenge / Capital first"
            state.promo_error = True
            return False
        if not state.promo_code.strip():
            state.promo_hint = "Enter promo code"
            state.promo_error = True
            return False

        try:
            price = self.gateway.validate_promo(product_id, state.promo_code.strip())
        except UpstreamError as e:
            rejected = e.upstream_status is not None or e.upstream_raw is not None
            if rejected:
                state.promo_hint = e.message or "Promo code is invalid"
            else:
                state.promo_hint = "Promo check failed. Try again later"
            state.promo_error = True
            state.promo_override_price = None
            return False
        except FastBuyError as e:
            logger.warning("promo check failed: %s", e)
            state.promo_hint = "Promo check failed. Try again later"
            state.promo_error = True
            state.promo_override_price = None
            return False

        state.promo_override_price = price
        state.promo_hint = f"Promo applied. New price: {format_amount(price)}"
        state.promo_error = False
        return True

    # --- checkout -------------------------------------------------------
    def _method(self):
        method_id = self.customer.get("paymentMethod")
        return next((m for m in self.methods if m.id == method_id), None)

    def checkout_payload(self, quote=None):
        quote = quote or self.quote()
        method = self._method()
        c = self.customer
        return {
            "selection": {
                "productId": quote.product_id,
                "promo": self.state.promo_code or None,
            },
            "customer": {
                "firstName": c.get("firstName"),
                "lastName": c.get("lastName"),
                "email": c.get("email"),
                "phone": c.get("phone"),
                "country": c.get("country"),
                "language": c.get("language") or "en",
                "password": c.get("password"),
                "confirmPassword": c.get("confirmPassword"),
            },
            "payment": method.to_payment() if method else None,
            "amount": quote.amount,
        }

    def submit(self):
        """Returns the URL to send the buyer to, or None if submission was blocked."""
        self.submit_error = ""
        if not self.is_form_valid:
            self.touched.update(FORM_FIELDS)
            return None

        quote = self.quote()
        if not quote.product_id:
            self.submit_error = "Select valid Platform/Challenge/Capital"
            return None
        if not quote.total_cents:
            self.submit_error = "Unable to calculate amount"
            return None
        if self._method() is None:
            self.submit_error = "Select a payment method"
            return None

        self._transition(SUBMITTING)
        try:
            result = self.gateway.submit_checkout(self.checkout_payload(quote))
        except FastBuyError as e:
            logger.warning("checkout failed: %s", e.message)
            self.submit_error = e.message or "Checkout failed"
            self._transition(READY)
            return None

        location = checkout_service.next_location(result or {})
        if not location:
            self.submit_error = "Order created, but no redirectUrl returned"
            self._transition(READY)
            return None

        self.redirect_url = location
        self._transition(REDIRECTED)
        return location
