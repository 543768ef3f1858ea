# =============================================================================
# AgriDrone Backend
# routes/dashboard.py - Dashboard Routes
#
# Aggregate counters for the caller's dashboard cards.
# =============================================================================

import math

from flask import Blueprint

from agridrone import constants
from agridrone.decorators import auth_required
from agridrone.extensions import limiter
from agridrone.storage import storage
from agridrone.utils import success_response

# Create blueprint
dashboard_bp = Blueprint('dashboard', __name__)


def compute_stats(user_id):
    """
    Summarize a user's fields, health records and pesticide usage.

    healthyPlants is an estimate: each health record stands for a survey of
    PLANTS_PER_HEALTH_RECORD plants, HEALTHY_PLANT_RATIO of them healthy.

    Returns:
        dict: totalFields, healthyPlants, infectionRate, pesticideSaved
    """
    fields = storage.fields.list_by_owner(user_id)
    records = storage.health_records.list_by_owner(user_id)
    applications = storage.pesticide_applications.list_by_owner(user_id)

    total_plants = len(records) * constants.PLANTS_PER_HEALTH_RECORD
    healthy_plants = math.floor(total_plants * constants.HEALTHY_PLANT_RATIO)

    if records:
        infection_rate = sum(r.infection_rate for r in records) / len(records)
    else:
        infection_rate = 0

    pesticide_saved = math.floor(sum(a.total_volume or 0 for a in applications))

    return {
        'totalFields': len(fields),
        'healthyPlants': healthy_plants,
        'infectionRate': infection_rate,
        'pesticideSaved': pesticide_saved
    }


@dashboard_bp.route('/stats', methods=['GET'])
@auth_required
@limiter.limit("60 per minute")
def get_stats(identity):
    """
    Get dashboard statistics for the current user.

    Returns:
        200: {totalFields, healthyPlants, infectionRate, pesticideSaved}
        401: Not authenticated
    """
    return success_response(data=compute_stats(identity.user_id))
