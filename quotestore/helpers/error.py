"""
Flask Error Endpoints
"""

from flask import (
    jsonify
)

from quotestore.helpers.api_helper import (
    make_api_message
)
from quotestore.helpers.cors_helper import set_cors


def handle_error(error):
    """
    handle_error Handle HTTP errors raised with abort()

    :return JSON with error message
    """

    # Create the API message
    return_data = make_api_message(error.code, error.description if error.description else "An error occurred")

    return set_cors(jsonify(return_data)), error.code
