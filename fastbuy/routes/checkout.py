from flask import Blueprint, current_app, jsonify, request

from fastbuy.errors import FastBuyError
from fastbuy.extensions import merchant_api
from fastbuy.services.checkout_service import submit_order

checkout_bp = Blueprint('checkout', __name__)


@checkout_bp.route('/checkout', methods=['POST'])
def checkout():
    """
    Create a challenge order and return the payment redirect
    ---
    tags:
      - Checkout
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required:
            - selection
            - customer
            - payment
            - amount
          properties:
            selection:
              type: object
              properties:
                productId:
                  type: string
                promo:
                  type: string
            customer:
              type: object
              properties:
                firstName:
                  type: string
                lastName:
                  type: string
                email:
                  type: string
                phone:
                  type: string
                country:
                  type: string
                language:
                  type: string
                password:
                  type: string
                confirmPassword:
                  type: string
            payment:
              type: object
              properties:
                merchantId:
                  type: integer
                slug:
                  type: string
                currency:
                  type: string
                integrationId:
                  type: integer
            amount:
              type: number
    responses:
      200:
        description: Order created; redirectUrl and/or success/pending/error URLs
      400:
        description: Missing or invalid input
      500:
        description: Service misconfigured
      502:
        description: Merchant API error
    """
    data = request.get_json(silent=True)

    try:
        result = submit_order(merchant_api.client, data, current_app.config)
    except FastBuyError as e:
        if e.status_code >= 500:
            current_app.logger.error("checkout failed: %s", e.message)
        return jsonify(e.to_dict()), e.status_code

    return jsonify(result), 200
