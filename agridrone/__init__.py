# =============================================================================
# AgriDrone Backend
#
# REST API for drone-assisted crop health monitoring: farmers register
# crops, fields and drones, record plant health observations and track
# pesticide applications.
# =============================================================================

__version__ = '1.0.0'
