"""
Quotes API
"""

from flask import (
    Blueprint, request, abort, current_app
)
from werkzeug.exceptions import HTTPException

from quotestore.helpers.cors_helper import set_cors
from quotestore.helpers.quote import QuoteHelper


bp = Blueprint('quotes', __name__, url_prefix='/api/v2')
bp.after_request(set_cors)


def validate_json_request():
    """Validate that the request contains valid JSON data"""
    if not request.is_json:
        abort(400, description="Content-Type must be application/json")

    if not request.data:
        abort(400, description="Request body is required")

    data = request.get_json(silent=True)
    if data is None:
        abort(400, description="Invalid JSON in request body")
    return data


@bp.route('/quotes', methods=['GET', 'POST'])
@bp.route('/quotes/<string:name>', methods=['GET', 'PUT'])
def handle_quotes(name=None):
    """Handle reads and upserts of quotes.

    Args:
        name: Optional name of the person for single quote operations

    Returns:
        Response object with appropriate status code and data
    """
    try:
        helper = QuoteHelper()

        if request.method == 'GET':
            if name:
                return helper.get_by_name(name)
            return helper.get_all(query_params=request.args)
        if request.method in ('POST', 'PUT'):
            data = validate_json_request()
            return helper.upsert(data, name=name)
        # This should never happen due to route decorators, but handle it
        abort(405, description="Method not allowed")
    except HTTPException as e:
        abort(e.code, description=e.description)
    except Exception as ex:
        current_app.logger.error(f"Internal server error: {str(ex)}")
        abort(500, description="Internal server error")
