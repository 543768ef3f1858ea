# =============================================================================
# AgriDrone Backend
# routes/drones.py - Drone Connection Routes
#
# Pairs drones with the caller's account and updates their status.
# Updates are restricted to the drone's owner and refresh lastSeen.
# =============================================================================

from flask import Blueprint, current_app

from agridrone.authorization import get_owned_or_404
from agridrone.decorators import auth_required, validate_body, handle_db_errors
from agridrone.extensions import limiter
from agridrone.schemas import DroneCreate, DroneUpdate
from agridrone.storage import storage
from agridrone.utils import success_response

# Create blueprint
drones_bp = Blueprint('drones', __name__)


@drones_bp.route('', methods=['GET'])
@auth_required
@limiter.limit("60 per minute")
def list_drones(identity):
    """Get the current user's drone connections."""
    drones = storage.drones.list_by_owner(identity.user_id)
    return success_response(data=[drone.to_dict() for drone in drones])


@drones_bp.route('', methods=['POST'])
@auth_required
@limiter.limit("30 per minute")
@handle_db_errors
@validate_body(DroneCreate)
def create_drone(identity, payload):
    """
    Register a drone connection for the caller.

    Request Body:
        droneName (str), connectionType ('wifi' | 'bluetooth'),
        status (str, default 'connected'), batteryLevel (0-100, default 100)

    Returns:
        201: Created drone connection
        400: Validation error
    """
    drone = storage.drones.create({**payload.model_dump(), 'user_id': identity.user_id})

    current_app.logger.info(
        f"Drone connected: ID={drone.id}, user={identity.user_id}, "
        f"type={drone.connection_type}"
    )

    return success_response(data=drone.to_dict(), status_code=201)


@drones_bp.route('/<drone_id>', methods=['GET'])
@auth_required
@limiter.limit("60 per minute")
def get_drone(identity, drone_id):
    drone = get_owned_or_404(storage.drones, drone_id, identity, 'Drone')
    return success_response(data=drone.to_dict())


@drones_bp.route('/<drone_id>', methods=['PUT', 'PATCH'])
@auth_required
@limiter.limit("60 per minute")
@handle_db_errors
@validate_body(DroneUpdate)
def update_drone(identity, payload, drone_id):
    """
    Update status, battery level or name of one of the caller's drones.

    Returns:
        200: Updated drone connection (lastSeen refreshed)
        400: Validation error
        404: Drone not found
        403: Drone owned by another user
    """
    get_owned_or_404(storage.drones, drone_id, identity, 'Drone')

    drone = storage.drones.update(drone_id, payload.changes())

    current_app.logger.info(
        f"Drone updated: ID={drone_id}, status={drone.status}, "
        f"battery={drone.battery_level}"
    )

    return success_response(data=drone.to_dict())
