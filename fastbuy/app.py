"""
Fast Buy Service: Flask application
Catalog, promo and checkout endpoints in front of the merchant API.
"""

import logging
from datetime import datetime, timezone

from flask import Flask, jsonify
from flasgger import Swagger
from werkzeug.exceptions import HTTPException

from fastbuy.config import Config
from fastbuy.errors import FastBuyError
from fastbuy.extensions import merchant_api


def create_app(config=None):
    app = Flask(__name__)

    # Configuration
    app.config.from_object(Config)
    if config:
        app.config.update(config)

    logging.basicConfig(
        level=logging.DEBUG if app.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize Extensions
    merchant_api.init_app(app)

    Swagger(app)

    # Register Blueprints
    from fastbuy.routes.options import options_bp
    app.register_blueprint(options_bp, url_prefix='/api')

    from fastbuy.routes.promo import promo_bp
    app.register_blueprint(promo_bp, url_prefix='/api')

    from fastbuy.routes.checkout import checkout_bp
    app.register_blueprint(checkout_bp, url_prefix='/api')

    from fastbuy.routes.quote import quote_bp
    app.register_blueprint(quote_bp, url_prefix='/api')

    @app.errorhandler(FastBuyError)
    def handle_fastbuy_error(e):
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        if isinstance(e, HTTPException):
            return e
        app.logger.exception("unhandled error")
        return jsonify({'error': str(e) or 'Server error'}), 500

    # --- Health check ---------------------------------------------------
    @app.route("/health")
    def health():
        return jsonify({
            "status": "healthy",
            "service": "fastbuy-service",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "checks": {
                "backend": app.config["BACKEND_URL"],
                "region": "configured" if app.config.get("REGION_ID") else "not_configured",
            },
        })

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(host="0.0.0.0", port=app.config["PORT"], debug=True)
