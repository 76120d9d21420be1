"""
Validation utilities for the backend
"""
from fastapi import HTTPException

# Same rule the item schema applies to incoming emails
EMAIL_PATTERN = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"


def validate_integer_id(value: int, min_value: int = 1, max_value: int = 2**63 - 1) -> int:
    """
    Validate an integer ID taken from a request path.

    IDs outside the range can never be stored, so they are reported the same
    way as an ID that does not exist.

    Args:
        value: ID to validate
        min_value: Smallest accepted ID
        max_value: Largest accepted ID (SQLite INTEGER range)

    Returns:
        The ID unchanged

    Raises:
        HTTPException: 404 if the ID is not an int or out of range
    """
    if not isinstance(value, int) or isinstance(value, bool) or value < min_value or value > max_value:
        raise HTTPException(status_code=404, detail="Item not found")
    return value


def format_validation_errors(errors: list) -> dict:
    """
    Turn pydantic validation errors into a ``{field: message}`` map.

    Only the first message per field is kept. Custom ``ValueError`` messages
    from field validators are returned without pydantic's "Value error, " prefix.

    Args:
        errors: Output of ``RequestValidationError.errors()``

    Returns:
        Dict mapping field name to a single error message
    """
    field_errors = {}
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        # Drop the "body"/"path"/"query" prefix FastAPI adds
        field = ".".join(loc[1:]) if len(loc) > 1 else (loc[0] if loc else "request")
        ctx_error = (error.get("ctx") or {}).get("error")
        message = str(ctx_error) if ctx_error is not None else error.get("msg", "Invalid value")
        field_errors.setdefault(field, message)
    return field_errors
