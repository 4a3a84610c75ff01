"""Application services that span more than one domain service."""

from byki_admin.application.services.analytics_service import AnalyticsService
from byki_admin.application.services.auth_service import AuthService
from byki_admin.application.services.emergency_alerts import EmergencyAlertWatcher

__all__ = ["AnalyticsService", "AuthService", "EmergencyAlertWatcher"]
