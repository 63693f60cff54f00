"""
Permission checks for resource access control.

Key helpers:
- can_view_user(target_user_id, current_user)
- can_edit_user(target_user_id, current_user)
- can_change_role(current_user)
- can_set_report_status(status, current_user)
"""
from typing import Optional, Dict, Any
from civicconnect.utils.roles import (
    role_allows_manage as _role_allows_manage,
    role_allows_status as _role_allows_status,
    role_is_staff as _role_is_staff,
)


def _is_self(target_user_id, current_user: Dict[str, Any]) -> bool:
    uid = current_user.get("id")
    if uid is None or target_user_id is None:
        return False
    return str(uid) == str(target_user_id)


def is_admin(current_user: Optional[Dict[str, Any]]) -> bool:
    if not current_user:
        return False
    return _role_allows_manage(current_user.get("role"))


def can_view_user(target_user_id, current_user: Optional[Dict[str, Any]]) -> bool:
    """Users see themselves; officials and admins see everyone."""
    if not current_user:
        return False
    if _role_is_staff(current_user.get("role")):
        return True
    return _is_self(target_user_id, current_user)


def can_edit_user(target_user_id, current_user: Optional[Dict[str, Any]]) -> bool:
    if not current_user:
        return False
    if is_admin(current_user):
        return True
    return _is_self(target_user_id, current_user)


def can_change_role(current_user: Optional[Dict[str, Any]]) -> bool:
    return is_admin(current_user)


def can_set_report_status(status, current_user: Optional[Dict[str, Any]]) -> bool:
    if not current_user:
        return False
    status_value = getattr(status, "value", status)
    return _role_allows_status(current_user.get("role"), status_value)
