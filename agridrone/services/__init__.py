# =============================================================================
# AgriDrone Backend
# services/__init__.py - Services Package
#
# This package contains business logic services: token issuance and
# verification, and credential handling for signup and login.
# =============================================================================

from .token_service import Identity, TokenService, get_token_service, init_token_service

__all__ = ['Identity', 'TokenService', 'get_token_service', 'init_token_service']
