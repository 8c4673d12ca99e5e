"""Validation of quote payloads received by the API."""

from quotestore.models.quote import Quote


def validate_quote_data(data, name: str = None) -> Quote:
    """
    Validate a request body and build the Quote it describes

    Args:
        data: The decoded JSON body, expected to be {"name": str, "quote": str}
        name: Name taken from the URL, if any. The body may omit "name" or repeat it,
              but may not name someone else.

    Returns:
        The validated Quote

    Raises:
        ValueError: If a field is missing, empty or contradicts the URL
        TypeError: If a field is not a string
    """
    if not isinstance(data, dict):
        raise TypeError("Request body must be a JSON object")

    body_name = data.get("name")
    if name is not None:
        if body_name is not None and body_name != name:
            raise ValueError("Quotes cannot be renamed: body name does not match the URL")
        body_name = name

    if body_name is None:
        raise ValueError("name is required")
    if not isinstance(body_name, str):
        raise TypeError("name must be of type str")
    if not body_name.strip():
        raise ValueError("name cannot be empty")

    if "quote" not in data or data["quote"] is None:
        raise ValueError("quote is required")
    if not isinstance(data["quote"], str):
        raise TypeError("quote must be of type str")

    return Quote(name=body_name, quote=data["quote"])
