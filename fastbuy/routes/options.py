from flask import Blueprint, current_app, jsonify, request

from fastbuy.errors import UpstreamError
from fastbuy.extensions import merchant_api
from fastbuy.services.catalog_service import fetch_payment_methods, fetch_snapshot

options_bp = Blueprint('options', __name__)


@options_bp.route('/options', methods=['GET'])
def get_options():
    """
    Catalog snapshot or payment methods
    ---
    tags:
      - Options
    parameters:
      - name: type
        in: query
        type: string
        enum: [payment]
        required: false
        description: Pass "payment" to list payment methods instead of the catalog
    responses:
      200:
        description: "{platforms, tiers, capitals, catalog, upsales} or {methods}"
      502:
        description: Catalog upstream failed
    """
    if request.args.get('type') == 'payment':
        return get_payment_methods()

    try:
        snapshot = fetch_snapshot(merchant_api.client)
    except UpstreamError as e:
        current_app.logger.error("chains upstream error: %s", e.upstream_status)
        return jsonify({'error': 'Failed to fetch chains'}), 502

    return jsonify(snapshot.to_dict()), 200


def get_payment_methods():
    # Upstream failures return an empty list
    try:
        methods = fetch_payment_methods(merchant_api.client, current_app.config.get('IMAGE_BASE_URL', ''))
    except UpstreamError as e:
        current_app.logger.warning("merchants upstream error: %s", e.upstream_status)
        return jsonify({'methods': []}), 200

    return jsonify({'methods': [m.to_dict() for m in methods]}), 200
