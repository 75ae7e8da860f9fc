"""
Permission classes for role-based access control.

Role is read from request.user (authenticated via JWT).
Role is NEVER read from request body, query parameters, or headers.

ROLE_POLICY is the single source of truth for which role may perform which
action. Views check it through the permission classes below and the
service layer re-checks it before every mutation.
"""

from rest_framework import permissions


class Action:
    VIEW_SEIZURES = "VIEW_SEIZURES"
    CREATE_SEIZURE = "CREATE_SEIZURE"
    EDIT_SEIZURE = "EDIT_SEIZURE"
    EDIT_ANY_SEIZURE = "EDIT_ANY_SEIZURE"
    MANAGE_EXIT = "MANAGE_EXIT"
    VIEW_REPORTS = "VIEW_REPORTS"
    MANAGE_USERS = "MANAGE_USERS"
    VIEW_AUDIT_LOG = "VIEW_AUDIT_LOG"


ALL_ROLES = (
    "ADMIN",
    "BUREAU_CHIEF",
    "BRIGADE_CHIEF",
    "BRIGADE_AGENT",
    "CONSULTATION_AGENT",
)

ROLE_POLICY = {
    Action.VIEW_SEIZURES: frozenset(ALL_ROLES),
    Action.CREATE_SEIZURE: frozenset(
        ["ADMIN", "BUREAU_CHIEF", "BRIGADE_CHIEF", "BRIGADE_AGENT"]
    ),
    # Editing one's own record; ownership is checked by the service layer.
    Action.EDIT_SEIZURE: frozenset(
        ["ADMIN", "BUREAU_CHIEF", "BRIGADE_CHIEF", "BRIGADE_AGENT"]
    ),
    Action.EDIT_ANY_SEIZURE: frozenset(["ADMIN"]),
    Action.MANAGE_EXIT: frozenset(["ADMIN", "BUREAU_CHIEF", "BRIGADE_CHIEF"]),
    Action.VIEW_REPORTS: frozenset(["ADMIN", "BUREAU_CHIEF", "BRIGADE_CHIEF"]),
    Action.MANAGE_USERS: frozenset(["ADMIN"]),
    Action.VIEW_AUDIT_LOG: frozenset(["ADMIN"]),
}


def is_allowed(role, action):
    """Return True if ``role`` may perform ``action``. Unknown roles get nothing."""
    if role not in ALL_ROLES:
        return False
    return role in ROLE_POLICY.get(action, frozenset())


def user_can(user, action):
    """Policy lookup for an authenticated user object."""
    if not user or not getattr(user, "is_authenticated", False):
        return False

    return is_allowed(getattr(user, "role", None), action)


class RolePolicyPermission(permissions.BasePermission):
    """Allow the request when the user's role is granted ``action``."""

    action = None

    def has_permission(self, request, view):
        return user_can(request.user, self.action)


class CanViewSeizures(RolePolicyPermission):
    """Any known role, read-only pages and the dashboard."""

    action = Action.VIEW_SEIZURES


class CanCreateSeizure(RolePolicyPermission):
    action = Action.CREATE_SEIZURE


class CanEditSeizure(RolePolicyPermission):
    action = Action.EDIT_SEIZURE


class CanManageExit(RolePolicyPermission):
    """ADMIN, BUREAU_CHIEF, BRIGADE_CHIEF: validate exit and cancel."""

    action = Action.MANAGE_EXIT


class CanViewReports(RolePolicyPermission):
    action = Action.VIEW_REPORTS


class IsAdmin(RolePolicyPermission):
    """Allow ADMIN role only (user management)."""

    action = Action.MANAGE_USERS


class CanViewAuditLog(RolePolicyPermission):
    action = Action.VIEW_AUDIT_LOG


class IsAuthenticatedWithRole(permissions.BasePermission):
    """Authenticated user carrying one of the known roles."""

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False

        if not hasattr(request.user, "role"):
            return False

        return request.user.role in ALL_ROLES
