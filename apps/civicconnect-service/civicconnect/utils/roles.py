"""
Role and report-status constants with the permission rules attached to them.

Keeps the role names, the report lifecycle labels, and which role may move a
report into which status in one place so endpoints never hard-code them.
"""

from typing import Dict, FrozenSet, Set
from enum import Enum


ROLE_CITIZEN = "CITIZEN"
ROLE_OFFICIAL = "OFFICIAL"
ROLE_ADMIN = "ADMIN"

ALLOWED_ROLES: FrozenSet[str] = frozenset({ROLE_CITIZEN, ROLE_OFFICIAL, ROLE_ADMIN})

# Derived role groups
STAFF_ROLES: FrozenSet[str] = frozenset({ROLE_OFFICIAL, ROLE_ADMIN})
MANAGE_ROLES: FrozenSet[str] = frozenset({ROLE_ADMIN})


class RoleEnum(str, Enum):
    """Enum for user roles used in schemas and validation."""
    CITIZEN = ROLE_CITIZEN
    OFFICIAL = ROLE_OFFICIAL
    ADMIN = ROLE_ADMIN


STATUS_OPEN = "OPEN"
STATUS_IN_PROGRESS = "IN_PROGRESS"
STATUS_APPROVED = "APPROVED"
STATUS_RESOLVED = "RESOLVED"
STATUS_REJECTED = "REJECTED"


class ReportStatus(str, Enum):
    """Lifecycle label on a report."""
    OPEN = STATUS_OPEN
    IN_PROGRESS = STATUS_IN_PROGRESS
    APPROVED = STATUS_APPROVED
    RESOLVED = STATUS_RESOLVED
    REJECTED = STATUS_REJECTED


ALL_STATUSES: FrozenSet[str] = frozenset(s.value for s in ReportStatus)

# Which target statuses each role may set on a report
STATUS_PERMISSIONS: Dict[str, FrozenSet[str]] = {
    ROLE_ADMIN: ALL_STATUSES,
    ROLE_OFFICIAL: frozenset({STATUS_IN_PROGRESS, STATUS_RESOLVED}),
    ROLE_CITIZEN: frozenset(),
}


def validate_role(role: str) -> None:
    """
    Validate that a role is allowed.

    Raises:
        ValueError: If role is not allowed
    """
    if role not in ALLOWED_ROLES:
        raise ValueError(f"Invalid role '{role}'. Allowed roles: {sorted(ALLOWED_ROLES)}")


def get_allowed_roles() -> Set[str]:
    """Get the set of all allowed roles."""
    return set(ALLOWED_ROLES)


def role_is_staff(role: str) -> bool:
    """Return True for roles that triage reports (officials and admins)."""
    return role in STAFF_ROLES


def role_allows_manage(role: str) -> bool:
    """Return True if the role may manage users and destructive report actions."""
    return role in MANAGE_ROLES


def allowed_statuses_for_role(role: str) -> Set[str]:
    """Return the statuses a role may assign to a report."""
    return set(STATUS_PERMISSIONS.get(role, frozenset()))


def role_allows_status(role: str, status: str) -> bool:
    return status in STATUS_PERMISSIONS.get(role, frozenset())
