"""
Merchant Client: thin wrapper over the upstream merchant API.
Every call returns parsed JSON or raises UpstreamError.
"""

import json
import logging

import requests

from fastbuy.errors import UpstreamError

logger = logging.getLogger(__name__)

SECRET_FIELDS = ("password", "confirmPassword")


class MerchantClient:
    def __init__(self, base_url, api_key=None, timeout=10.0, debug_payments=False):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.debug_payments = debug_payments

    @classmethod
    def from_config(cls, config):
        return cls(
            base_url=config["BACKEND_URL"],
            api_key=config.get("BACKEND_KEY"),
            timeout=config.get("BACKEND_TIMEOUT", 10.0),
            debug_payments=config.get("DEBUG_PAYMENTS", False),
        )

    def _headers(self):
        headers = {"accept": "application/json", "Content-Type": "application/json"}
        if self.api_key:
            headers["X-API-Key"] = self.api_key
        return headers

    def get_chains(self):
        return self._get("/v3/challenge-types/chains", label="chains")

    def get_merchants(self):
        return self._get("/ninja-merchants", label="merchants")

    def check_promo_code(self, challenge_type_id, promo_code):
        body = {"challengeTypeId": challenge_type_id, "promoCode": promo_code}
        return self._post("/challenge-type/promo-code", body, label="promo-code")

    def create_challenge_order(self, body):
        return self._post("/v3/challenge-promo", body, label="challenge-promo")

    # --- transport ------------------------------------------------------
    def _get(self, path, label):
        try:
            response = requests.get(
                f"{self.base_url}{path}",
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("%s upstream unreachable: %s", label, e)
            raise UpstreamError(f"Failed to fetch {label}") from e

        if not response.ok:
            logger.error("%s upstream error: %s %s", label, response.status_code, response.text)
            raise UpstreamError(
                f"Failed to fetch {label}",
                upstream_status=response.status_code,
            )
        return _parse_json(response.text, label)

    def _post(self, path, body, label):
        if self.debug_payments:
            logger.info("%s request body: %s", label, json.dumps(mask_secrets(body), indent=2))

        try:
            response = requests.post(
                f"{self.base_url}{path}",
                json=body,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("%s upstream unreachable: %s", label, e)
            raise UpstreamError("Upstream unreachable") from e

        raw = response.text
        if self.debug_payments:
            logger.info("%s raw response: HTTP %s %s\n%s", label, response.status_code, response.reason, raw)

        if not response.ok:
            raise UpstreamError("Upstream error", upstream_status=response.status_code, upstream_raw=raw)
        return _parse_json(raw, label, upstream_raw=raw)


def _parse_json(raw, label, upstream_raw=None):
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        # Non-JSON 2xx bodies are passed on as "no data"
        logger.warning("%s upstream returned non-JSON body", label)
        if upstream_raw is None:
            raise UpstreamError(f"Invalid {label} response")
        return None


def mask_secrets(value):
    """Copy of `value` with password fields replaced, for logging."""
    if isinstance(value, dict):
        return {
            k: ("***" if k in SECRET_FIELDS and v else mask_secrets(v))
            for k, v in value.items()
        }
    if isinstance(value, list):
        return [mask_secrets(v) for v in value]
    return value
