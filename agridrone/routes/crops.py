# =============================================================================
# AgriDrone Backend
# routes/crops.py - Crop Routes
#
# Lists, creates, updates and deletes the caller's crops. Single-crop
# operations check existence first (404), then ownership (403).
# =============================================================================

from flask import Blueprint, current_app

from agridrone.authorization import get_owned_or_404
from agridrone.decorators import auth_required, validate_body, handle_db_errors
from agridrone.extensions import limiter
from agridrone.schemas import CropCreate, CropUpdate
from agridrone.storage import storage
from agridrone.utils import success_response

# Create blueprint
crops_bp = Blueprint('crops', __name__)


# =============================================================================
# List / Create Crops
# =============================================================================

@crops_bp.route('', methods=['GET'])
@auth_required
@limiter.limit("60 per minute")
def list_crops(identity):
    """
    Get the current user's crops.

    Returns:
        200: List of crops owned by the caller
        401: Not authenticated
    """
    crops = storage.crops.list_by_owner(identity.user_id)
    return success_response(data=[crop.to_dict() for crop in crops])


@crops_bp.route('', methods=['POST'])
@auth_required
@limiter.limit("30 per minute")
@handle_db_errors
@validate_body(CropCreate)
def create_crop(identity, payload):
    """
    Create a crop owned by the caller.

    Request Body:
        name (str), type (str), plantedDate, expectedHarvestDate (ISO dates),
        area (float, hectares > 0), growthStage (str, default 'seedling'),
        isActive (bool, default true)

    Returns:
        201: Created crop
        400: Validation error
    """
    crop = storage.crops.create({**payload.model_dump(), 'user_id': identity.user_id})

    current_app.logger.info(f"Crop created: ID={crop.id}, user={identity.user_id}")

    return success_response(data=crop.to_dict(), status_code=201)


# =============================================================================
# Single Crop
# =============================================================================

@crops_bp.route('/<crop_id>', methods=['GET'])
@auth_required
@limiter.limit("60 per minute")
def get_crop(identity, crop_id):
    """
    Get one of the caller's crops.

    Returns:
        200: Crop
        404: Crop not found
        403: Crop owned by another user
    """
    crop = get_owned_or_404(storage.crops, crop_id, identity, 'Crop')
    return success_response(data=crop.to_dict())


@crops_bp.route('/<crop_id>', methods=['PUT', 'PATCH'])
@auth_required
@limiter.limit("30 per minute")
@handle_db_errors
@validate_body(CropUpdate)
def update_crop(identity, payload, crop_id):
    """
    Partially update one of the caller's crops.

    Only the supplied fields change; userId cannot be changed.

    Returns:
        200: Updated crop
        400: Validation error
        404: Crop not found
        403: Crop owned by another user
    """
    get_owned_or_404(storage.crops, crop_id, identity, 'Crop')

    crop = storage.crops.update(crop_id, payload.changes())

    current_app.logger.info(f"Crop updated: ID={crop_id}, user={identity.user_id}")

    return success_response(data=crop.to_dict())


@crops_bp.route('/<crop_id>', methods=['DELETE'])
@auth_required
@limiter.limit("30 per minute")
@handle_db_errors
def delete_crop(identity, crop_id):
    """
    Delete one of the caller's crops.

    Returns:
        200: Crop deleted
        404: Crop not found
        403: Crop owned by another user
    """
    get_owned_or_404(storage.crops, crop_id, identity, 'Crop')

    storage.crops.delete(crop_id)

    current_app.logger.info(f"Crop deleted: ID={crop_id}, user={identity.user_id}")

    return success_response(message='Crop deleted successfully')
