# =============================================================================
# AgriDrone Backend
# routes/pesticides.py - Pesticide Application Routes
#
# Tracks pesticide treatments from recommendation to completion. Like
# health records, applications are owned through their field.
# =============================================================================

from flask import Blueprint, request, current_app

from agridrone.authorization import get_owned_or_404, require_owned_reference
from agridrone.decorators import auth_required, validate_body, handle_db_errors
from agridrone.extensions import limiter
from agridrone.schemas import PesticideApplicationCreate, PesticideApplicationUpdate
from agridrone.storage import storage
from agridrone.utils import success_response

# Create blueprint
pesticides_bp = Blueprint('pesticides', __name__)


@pesticides_bp.route('', methods=['GET'])
@auth_required
@limiter.limit("60 per minute")
def list_applications(identity):
    """
    Get pesticide applications for the caller's fields.

    Query Parameters:
        fieldId (str): Restrict to one of the caller's fields (optional)
    """
    field_id = request.args.get('fieldId', '').strip()
    if field_id:
        get_owned_or_404(storage.fields, field_id, identity, 'Field')

    applications = storage.pesticide_applications.list_by_owner(
        identity.user_id,
        field_id=field_id or None
    )
    return success_response(data=[application.to_dict() for application in applications])


@pesticides_bp.route('', methods=['POST'])
@auth_required
@limiter.limit("30 per minute")
@handle_db_errors
@validate_body(PesticideApplicationCreate)
def create_application(identity, payload):
    """
    Create a pesticide application on one of the caller's fields.

    Request Body:
        fieldId (str), pesticideType (str), volumePerHectare (float),
        totalVolume (float), confidence (0-100),
        healthRecordId, applicationMethod, status, recommendedBy,
        scheduledFor, appliedAt (optional)

    Returns:
        201: Created application
        400: Validation error or unknown fieldId/healthRecordId
        403: fieldId or healthRecordId belongs to another user
    """
    require_owned_reference(storage.fields, payload.field_id, identity, 'fieldId')
    if payload.health_record_id:
        require_owned_reference(
            storage.health_records,
            payload.health_record_id,
            identity,
            'healthRecordId'
        )

    application = storage.pesticide_applications.create(payload.model_dump())

    current_app.logger.info(
        f"Pesticide application created: ID={application.id}, "
        f"field={application.field_id}, status={application.status}"
    )

    return success_response(data=application.to_dict(), status_code=201)


@pesticides_bp.route('/<application_id>', methods=['GET'])
@auth_required
@limiter.limit("60 per minute")
def get_application(identity, application_id):
    application = get_owned_or_404(
        storage.pesticide_applications,
        application_id,
        identity,
        'Pesticide application'
    )
    return success_response(data=application.to_dict())


@pesticides_bp.route('/<application_id>', methods=['PUT', 'PATCH'])
@auth_required
@limiter.limit("30 per minute")
@handle_db_errors
@validate_body(PesticideApplicationUpdate)
def update_application(identity, payload, application_id):
    """
    Update one of the caller's pesticide applications (e.g. status).

    Returns:
        200: Updated application
        400: Validation error
        404: Application not found
        403: Application on another user's field
    """
    get_owned_or_404(
        storage.pesticide_applications,
        application_id,
        identity,
        'Pesticide application'
    )

    application = storage.pesticide_applications.update(application_id, payload.changes())

    current_app.logger.info(
        f"Pesticide application updated: ID={application_id}, status={application.status}"
    )

    return success_response(data=application.to_dict())
