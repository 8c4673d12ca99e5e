"""Quote helper module translating API calls into quote store operations."""

from flask import jsonify, abort, current_app
from werkzeug.exceptions import HTTPException

from quotestore.helpers.api_helper import make_list_api_response, make_api_message, get_start_limit
from quotestore.helpers.validation import validate_quote_data
from quotestore.repositories.errors import VersionConflictError


def get_quote_store():
    """Get the QuoteStore created for the current Flask app"""
    return current_app.extensions["quote_store"]


class QuoteHelper:
    """Helper class for the quote endpoints.

    Handles request validation, maps store outcomes onto HTTP status codes
    and formats the responses.
    """

    def __init__(self, store=None):
        self.store = store or get_quote_store()

    def get_all(self, query_params=None):
        """
        Get all quotes, optionally paged with 'start' and 'limit'

        Args:
            query_params: Flask request.args object
        """
        try:
            quotes = self.store.fetch_all_quotes()
            total_count = len(quotes)

            start, limit, filter_str = get_start_limit(
                query_params or {},
                start_default=0,
                limit_default=max(total_count, 1),
                current_filter=""
            )

            values = [quote.to_dict() for quote in quotes[start:start + limit]]
            is_last = (start + limit) >= total_count

            return jsonify(make_list_api_response(
                values,
                start,
                limit,
                is_last,
                filter_str,
                total_count
            )), 200

        except ValueError as e:
            current_app.logger.warning(f"Invalid query parameters: {str(e)}")
            abort(400, description=f"Invalid query parameters: {str(e)}")
        except HTTPException as e:
            abort(e.code, description=e.description)
        except Exception as e:
            current_app.logger.error(f"Error retrieving quotes: {str(e)}")
            abort(500, description="Internal server error while retrieving quotes")

    def get_by_name(self, name):
        """
        Get the quote stored for one person

        Args:
            name: The name of the person who said the quote
        """
        if not name:
            abort(400, description="Name parameter is required")

        try:
            quote = self.store.get_quote(name)
            if quote is None:
                abort(404, description=f"Quote for '{name}' not found")
            return jsonify(quote.to_dict()), 200

        except HTTPException as e:
            abort(e.code, description=e.description)
        except Exception as e:
            current_app.logger.error(f"Error retrieving quote for '{name}': {str(e)}")
            abort(500, description="Internal server error while retrieving quote")

    def upsert(self, data, name=None):
        """
        Create or update a quote

        Args:
            data: The request body, {"name": ..., "quote": ...}
            name: Optional name taken from the URL
        """
        if not data:
            abort(400, description="Request body is required")

        try:
            quote = validate_quote_data(data, name=name)

            if not self.store.upsert_quote(quote):
                current_app.logger.warning(f"Quote for '{quote.name}' was created concurrently")
                abort(409, description=f"Quote for '{quote.name}' was created by another request, retry to update it")

            return jsonify(quote.to_dict()), 200

        except (ValueError, TypeError) as e:
            current_app.logger.warning(f"Validation error during upsert: {str(e)}")
            abort(400, description=f"Validation error: {str(e)}")
        except VersionConflictError as e:
            current_app.logger.warning(f"Version conflict during upsert: {str(e)}")
            abort(409, description=f"Version conflict: {str(e)}")
        except HTTPException as e:
            abort(e.code, description=e.description)
        except Exception as e:
            current_app.logger.error(f"Error storing quote: {str(e)}")
            abort(500, description="Internal server error while storing quote")

    def store_health(self):
        """Check that the quote index can be queried"""
        try:
            count = len(self.store.fetch_all_quotes())
            return jsonify(make_api_message("success", f"Quote store is reachable, {count} quotes")), 200
        except Exception as e:
            current_app.logger.error(f"Quote store health check failed: {str(e)}")
            return jsonify(make_api_message("error", "Quote store is unreachable")), 500
