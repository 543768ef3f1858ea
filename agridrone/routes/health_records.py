# =============================================================================
# AgriDrone Backend
# routes/health_records.py - Plant Health Record Routes
#
# Plant health observations belong to a field; the caller sees and writes
# only records on fields they own.
# =============================================================================

from flask import Blueprint, request, current_app

from agridrone.authorization import get_owned_or_404, require_owned_reference
from agridrone.decorators import auth_required, validate_body, handle_db_errors
from agridrone.extensions import limiter
from agridrone.schemas import HealthRecordCreate
from agridrone.storage import storage
from agridrone.utils import success_response

# Create blueprint
health_records_bp = Blueprint('health_records', __name__)


@health_records_bp.route('', methods=['GET'])
@auth_required
@limiter.limit("60 per minute")
def list_health_records(identity):
    """
    Get health records for the caller's fields.

    Query Parameters:
        fieldId (str): Restrict to one of the caller's fields (optional)

    Returns:
        200: List of health records
        404: fieldId not found
        403: fieldId owned by another user
    """
    field_id = request.args.get('fieldId', '').strip()
    if field_id:
        get_owned_or_404(storage.fields, field_id, identity, 'Field')

    records = storage.health_records.list_by_owner(identity.user_id, field_id=field_id or None)
    return success_response(data=[record.to_dict() for record in records])


@health_records_bp.route('', methods=['POST'])
@auth_required
@limiter.limit("60 per minute")
@handle_db_errors
@validate_body(HealthRecordCreate)
def create_health_record(identity, payload):
    """
    Record a plant health observation on one of the caller's fields.

    Request Body:
        fieldId (str), healthScore (0-100), infectionRate (0-100),
        severity ('low' | 'medium' | 'high'), detectionConfidence (0-100),
        droneId, infectionType, latitude, longitude (optional)

    Returns:
        201: Created record
        400: Validation error or unknown fieldId/droneId
        403: fieldId or droneId belongs to another user
    """
    require_owned_reference(storage.fields, payload.field_id, identity, 'fieldId')
    if payload.drone_id:
        require_owned_reference(storage.drones, payload.drone_id, identity, 'droneId')

    record = storage.health_records.create(payload.model_dump())

    current_app.logger.info(
        f"Health record saved: ID={record.id}, field={record.field_id}, "
        f"score={record.health_score}, severity={record.severity}"
    )

    return success_response(data=record.to_dict(), status_code=201)


@health_records_bp.route('/<record_id>', methods=['GET'])
@auth_required
@limiter.limit("60 per minute")
def get_health_record(identity, record_id):
    record = get_owned_or_404(storage.health_records, record_id, identity, 'Health record')
    return success_response(data=record.to_dict())
