"""
Helper to add CORS headers to Flask API responses
"""


def set_cors(response):
    """
    set_cors Function called on endpoint leave. Adds the CORS headers so browser
    clients on other origins can read the quotes.

    :return The response object for flask calls
    """

    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Headers"] = 'Content-Type'
    response.headers["Access-Control-Allow-Methods"] = 'GET,PUT,POST,OPTIONS'

    return response
