# =============================================================================
# AgriDrone Backend
# routes/__init__.py - Routes Package
#
# This package contains all API route blueprints organized by resource.
# =============================================================================

from .auth import auth_bp
from .crops import crops_bp
from .fields import fields_bp
from .drones import drones_bp
from .health_records import health_records_bp
from .pesticides import pesticides_bp
from .contact import contact_bp
from .dashboard import dashboard_bp

__all__ = [
    'auth_bp',
    'crops_bp',
    'fields_bp',
    'drones_bp',
    'health_records_bp',
    'pesticides_bp',
    'contact_bp',
    'dashboard_bp'
]
