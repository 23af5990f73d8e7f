from flask import Blueprint, jsonify, request

from fastbuy.errors import InvalidRequestError, UpstreamError
from fastbuy.extensions import merchant_api
from fastbuy.services.catalog_service import fetch_snapshot
from fastbuy.services.selection import SelectionState, derive
from fastbuy.services.validation import validate

quote_bp = Blueprint('quote', __name__)


@quote_bp.route('/quote', methods=['POST'])
def quote():
    """
    Resolve the variant, upsale groups and total for a selection
    ---
    tags:
      - Quote
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            selection:
              type: object
              properties:
                platformFilter:
                  type: string
                  default: ALL
                tier:
                  type: string
                capital:
                  type: number
                promoCode:
                  type: string
                promoOverridePrice:
                  type: number
                chosenUpsales:
                  type: object
            customer:
              type: object
              description: Optional form fields to validate
    responses:
      200:
        description: Derived quote (and form errors when customer is given)
      400:
        description: selection or customer is not an object
      502:
        description: Catalog upstream failed
    """
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        raise InvalidRequestError('Invalid JSON body')
    state = SelectionState.from_dict(data.get('selection'))
    customer = data.get('customer')
    if customer is not None and not isinstance(customer, dict):
        raise InvalidRequestError('customer must be an object')

    try:
        snapshot = fetch_snapshot(merchant_api.client)
    except UpstreamError:
        return jsonify({'error': 'Failed to fetch chains'}), 502

    body = derive(snapshot, state).to_dict()
    body['selection'] = state.to_dict()

    if customer is not None:
        errors = validate(customer)
        body['errors'] = errors
        body['isFormValid'] = not errors

    return jsonify(body), 200
