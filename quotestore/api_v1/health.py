"""
Sanity check API for the Flask application
"""

from flask import (
    Blueprint, jsonify
)

from quotestore.helpers.api_helper import (
    make_api_message
)
from quotestore.helpers.cors_helper import (
    set_cors
)
from quotestore.helpers.quote import QuoteHelper


bp = Blueprint('health', __name__, url_prefix='/api/v1')
bp.after_request(set_cors)


@bp.route('/health/flask', methods=('GET',))
def get_health_flask():
    """
    get_health_flask API call to verify the health of the Flask Application

    :return A JSON of a data object with a message
    """

    data = make_api_message("success", "Flask is running")
    return jsonify(data)


@bp.route('/health/store', methods=('GET',))
def get_health_store():
    """
    get_health_store API call to verify the quote store can answer an index query

    :return A JSON of a data object with a message
    """

    return QuoteHelper().store_health()
