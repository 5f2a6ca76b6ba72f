class DashboardError(Exception):
    """Base class for failures recovered at the dashboard boundary."""

    message = "Something went wrong"

    def __init__(self, message=None):
        self.message = message or self.message
        super().__init__(self.message)


class AuthorizationDenied(DashboardError):
    message = "You are not allowed to view this dashboard"


class ScopeResolutionFailure(DashboardError):
    message = "Department not found"


class LoadFailure(DashboardError):
    message = "Failed to load dashboard data"


class ValidationFailure(DashboardError, ValueError):
    message = "Name and code are required"


class MutationFailure(DashboardError):
    message = "Operation failed"


class ConfirmationRequired(DashboardError):
    message = "Are you sure? This will affect all users and courses in this department."


class ActionUnavailable(DashboardError):
    message = "Coming soon"
