from flask import current_app

from fastbuy.services.merchant_client import MerchantClient


class MerchantAPI:
    """Flask extension holding one MerchantClient per app."""

    def __init__(self, app=None):
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        app.extensions["merchant_api"] = MerchantClient.from_config(app.config)

    @property
    def client(self):
        return current_app.extensions["merchant_api"]


merchant_api = MerchantAPI()
