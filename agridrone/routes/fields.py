# =============================================================================
# AgriDrone Backend
# routes/fields.py - Field Routes
#
# Lists and creates the caller's georeferenced fields.
# =============================================================================

from flask import Blueprint, current_app

from agridrone.authorization import get_owned_or_404, require_owned_reference
from agridrone.decorators import auth_required, validate_body, handle_db_errors
from agridrone.extensions import limiter
from agridrone.schemas import FieldCreate
from agridrone.storage import storage
from agridrone.utils import success_response

# Create blueprint
fields_bp = Blueprint('fields', __name__)


@fields_bp.route('', methods=['GET'])
@auth_required
@limiter.limit("60 per minute")
def list_fields(identity):
    """
    Get the current user's fields.

    Returns:
        200: List of fields owned by the caller
    """
    fields = storage.fields.list_by_owner(identity.user_id)
    return success_response(data=[field.to_dict() for field in fields])


@fields_bp.route('', methods=['POST'])
@auth_required
@limiter.limit("30 per minute")
@handle_db_errors
@validate_body(FieldCreate)
def create_field(identity, payload):
    """
    Create a field owned by the caller.

    Request Body:
        name (str), latitude (float), longitude (float), area (float > 0),
        cropId (str, optional - must be one of the caller's crops),
        boundaries (list of [lat, lon] pairs or its JSON text, optional)

    Returns:
        201: Created field
        400: Validation error or unknown cropId
        403: cropId belongs to another user
    """
    if payload.crop_id:
        require_owned_reference(storage.crops, payload.crop_id, identity, 'cropId')

    field = storage.fields.create({**payload.to_record(), 'user_id': identity.user_id})

    current_app.logger.info(f"Field created: ID={field.id}, user={identity.user_id}")

    return success_response(data=field.to_dict(), status_code=201)


@fields_bp.route('/<field_id>', methods=['GET'])
@auth_required
@limiter.limit("60 per minute")
def get_field(identity, field_id):
    """
    Get one of the caller's fields.

    Returns:
        200: Field
        404: Field not found
        403: Field owned by another user
    """
    field = get_owned_or_404(storage.fields, field_id, identity, 'Field')
    return success_response(data=field.to_dict())
