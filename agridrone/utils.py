# =============================================================================
# AgriDrone Backend
# utils.py - Utility Functions
#
# Response helpers and small conversions shared by the route modules.
# =============================================================================

from flask import jsonify


# =============================================================================
# Response Helpers
# =============================================================================

def success_response(data=None, message=None, status_code=200, **extra):
    """
    Create a standardized success response.

    Args:
        data: Response data (dict or list)
        message: Success message
        status_code: HTTP status code (default 200)
        **extra: Additional top-level keys (e.g. token, user)

    Returns:
        tuple: (response, status_code)
    """
    response = {
        'success': True,
        'status': 'success'
    }

    if data is not None:
        response['data'] = data
    if message:
        response['message'] = message
    response.update(extra)

    return jsonify(response), status_code


def error_response(error, message=None, details=None, status_code=400):
    """
    Create a standardized error response.

    Args:
        error: Error category
        message: Human-readable explanation
        details: Additional error details
        status_code: HTTP status code (default 400)

    Returns:
        tuple: (response, status_code)
    """
    response = {
        'success': False,
        'status': 'error',
        'error': error,
        'message': message or error
    }

    if details:
        response['details'] = details

    return jsonify(response), status_code


# =============================================================================
# Validation Helpers
# =============================================================================

def pydantic_errors_to_fields(exc):
    """
    Flatten a pydantic ValidationError into {field: message}.

    Nested locations are joined with dots (e.g. 'boundaries.0').
    Only the first message per field is kept.
    """
    fields = {}
    for err in exc.errors():
        name = '.'.join(str(part) for part in err['loc']) or 'body'
        fields.setdefault(name, err['msg'])
    return fields
