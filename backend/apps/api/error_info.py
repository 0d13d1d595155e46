from typing import Any, Dict

EXPECTED_ID = "non-empty string"


def _describe(value: Any) -> str:
    if value is None:
        return "missing"
    if not isinstance(value, str):
        return f"expected string, received {type(value).__name__}"
    return "empty string"


def generate_properties_error(**identifiers: Any) -> Dict[str, Any]:
    """Describe which of the given identifiers are missing or not strings."""
    invalid = {
        name: _describe(value)
        for name, value in identifiers.items()
        if not (isinstance(value, str) and value)
    }
    return {"expected": EXPECTED_ID, "invalidIds": invalid}


def generate_cart_id_error(cart_id: Any) -> Dict[str, Any]:
    return generate_properties_error(cid=cart_id)
