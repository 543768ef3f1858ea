# =============================================================================
# AgriDrone Backend
# errors.py - API Error Taxonomy
#
# Every failure a handler can report is one of these. The error handler
# registered in app.py renders them with the standard JSON envelope.
# =============================================================================


class APIError(Exception):
    """
    Base class for errors that map onto an HTTP response.

    Attributes:
        status_code: HTTP status returned to the client
        error: Short category name shown as the 'error' key
        message: Human-readable explanation
        details: Optional structured details (e.g. offending fields)
    """
    status_code = 500
    error = 'Internal Server Error'
    default_message = 'An unexpected error occurred. Please try again later.'

    def __init__(self, message=None, details=None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ValidationError(APIError):
    """Malformed or missing input. Carries the offending field names."""
    status_code = 400
    error = 'Validation Error'
    default_message = 'Request validation failed'

    def __init__(self, fields, message=None):
        self.fields = dict(fields)
        super().__init__(message, details={'fields': self.fields})


class Unauthenticated(APIError):
    status_code = 401
    error = 'Unauthorized'
    default_message = 'Authentication required'


class InvalidCredentials(APIError):
    status_code = 401
    error = 'Invalid Credentials'
    default_message = 'Invalid username or password'


class Forbidden(APIError):
    status_code = 403
    error = 'Forbidden'
    default_message = 'You do not have permission to access this resource'


class NotFound(APIError):
    status_code = 404
    error = 'Not Found'
    default_message = 'The requested resource was not found'


class Conflict(APIError):
    # Duplicate signups are reported as a client error (400), not 409
    status_code = 400
    error = 'Conflict'
    default_message = 'User already exists'


class InternalError(APIError):
    pass


class InvalidToken(Exception):
    """Raised by the token service; the middleware turns it into Unauthenticated."""
