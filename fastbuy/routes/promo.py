from flask import Blueprint, jsonify, request

from fastbuy.errors import FastBuyError
from fastbuy.extensions import merchant_api
from fastbuy.services.promo_service import check_promo

promo_bp = Blueprint('promo', __name__)


@promo_bp.route('/promo', methods=['POST'])
def apply_promo():
    """
    Validate a promo code for a product
    ---
    tags:
      - Promo
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required:
            - productId
            - promoCode
          properties:
            productId:
              type: string
            promoCode:
              type: string
    responses:
      200:
        description: Promo accepted, returns the discounted price
      400:
        description: Missing productId or promoCode
      502:
        description: Promo rejected upstream or no price returned
    """
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({'error': 'Invalid JSON body'}), 400

    try:
        price = check_promo(merchant_api.client, data.get('productId'), data.get('promoCode'))
    except FastBuyError as e:
        return jsonify(e.to_dict()), e.status_code

    return jsonify({'ok': True, 'price': price}), 200
