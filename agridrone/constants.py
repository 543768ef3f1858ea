"""
AgriDrone - Shared Constants
Enumerations and defaults used by the models, schemas and routes
"""

# =============================================================================
# Users
# =============================================================================
DEFAULT_ROLE = 'farmer'

# =============================================================================
# Crops
# =============================================================================
DEFAULT_GROWTH_STAGE = 'seedling'

# =============================================================================
# Drones
# =============================================================================
CONNECTION_TYPES = ('wifi', 'bluetooth')
DRONE_STATUSES = ('connected', 'disconnected', 'scanning')
DEFAULT_DRONE_STATUS = 'connected'
DEFAULT_BATTERY_LEVEL = 100

# =============================================================================
# Plant Health
# =============================================================================
SEVERITY_LEVELS = ('low', 'medium', 'high')

# =============================================================================
# Pesticide Applications
# =============================================================================
APPLICATION_STATUSES = ('recommended', 'scheduled', 'applied', 'completed')
DEFAULT_APPLICATION_STATUS = 'recommended'
DEFAULT_APPLICATION_METHOD = 'drone'
DEFAULT_RECOMMENDED_BY = 'ai_system'

# =============================================================================
# Contact Messages
# =============================================================================
DEFAULT_CONTACT_STATUS = 'new'

# =============================================================================
# Dashboard Estimates
# Each health record stands for a survey of roughly this many plants
# =============================================================================
PLANTS_PER_HEALTH_RECORD = 100
HEALTHY_PLANT_RATIO = 0.87

# =============================================================================
# API Response Messages
# =============================================================================
MESSAGES = {
    'SIGNUP_SUCCESS': 'User created successfully',
    'LOGIN_SUCCESS': 'Login successful',
    'LOGOUT_SUCCESS': 'Logged out successfully',
    'USER_EXISTS': 'User already exists',
    'INVALID_CREDENTIALS': 'Invalid credentials',
    'CONTACT_SUCCESS': 'Message sent successfully'
}
