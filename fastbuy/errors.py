"""
Error types raised by the fast buy services.
Routes turn them into {"error": ...} JSON bodies with the matching status code.
"""


class FastBuyError(Exception):
    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {"error": self.message}


class InvalidRequestError(FastBuyError):
    status_code = 400


class UpstreamError(FastBuyError):
    """Merchant API unreachable, non-2xx, or missing an expected field."""

    status_code = 502

    def __init__(self, message, upstream_status=None, upstream_raw=None):
        super().__init__(message)
        self.upstream_status = upstream_status
        self.upstream_raw = upstream_raw

    def to_dict(self):
        body = {"error": self.message}
        if self.upstream_status is not None:
            body["status"] = self.upstream_status
        if self.upstream_raw is not None:
            body["upstreamRaw"] = self.upstream_raw
        return body
