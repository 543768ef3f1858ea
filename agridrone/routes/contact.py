# =============================================================================
# AgriDrone Backend
# routes/contact.py - Contact Form Route
#
# Public, write-only endpoint for the marketing site's contact form.
# =============================================================================

from flask import Blueprint, current_app

from agridrone import constants
from agridrone.decorators import validate_body, handle_db_errors
from agridrone.extensions import limiter
from agridrone.schemas import ContactMessageCreate
from agridrone.storage import storage
from agridrone.utils import success_response

# Create blueprint
contact_bp = Blueprint('contact', __name__)


@contact_bp.route('', methods=['POST'])
@limiter.limit("5 per minute")
@handle_db_errors
@validate_body(ContactMessageCreate)
def create_contact_message(payload):
    """
    Store a contact message. No authentication required.

    Request Body:
        name (str), email (str), message (str)

    Returns:
        201: Message stored
        400: Validation error
    """
    message = storage.contact_messages.create(payload.model_dump())

    current_app.logger.info(f"Contact message received: ID={message.id}")

    return success_response(message=constants.MESSAGES['CONTACT_SUCCESS'], status_code=201)
