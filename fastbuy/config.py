import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    # Merchant backend
    BACKEND_URL = os.getenv("BACKEND_URL", "https://swagger.kenmorefx.com/api-2")
    BACKEND_KEY = os.getenv("BACKEND_KEY")
    BACKEND_TIMEOUT = float(os.getenv("BACKEND_TIMEOUT", "10"))
    IMAGE_BASE_URL = os.getenv("IMAGE_BASE_URL", "https://swagger.kenmorefx.com")

    # Order defaults
    DEFAULT_CURRENCY = os.getenv("DEFAULT_CURRENCY", "USD")
    DEFAULT_LEVERAGE = int(os.getenv("DEFAULT_LEVERAGE", "100"))
    REGION_ID = os.getenv("REGION_ID")

    # Request/response bodies for promo and checkout are logged unless "0"
    DEBUG_PAYMENTS = os.getenv("DEBUG_PAYMENTS", "1") != "0"

    PORT = int(os.getenv("PORT", "5004"))

