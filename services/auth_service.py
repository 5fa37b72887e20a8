# services/auth_service.py
"""
Login authorization.

Sign-in is two steps. The client first authenticates email + password
against Firebase Authentication; this module then checks the claims the user
picked on the login form (department, role) against the stored User record.
No password is seen here.
"""

import logging
from typing import Any, Dict

from db import RealtimeStore
from models import AccountType, UserRecord, UserStatus, parse_record
from utils import is_valid_key

logger = logging.getLogger(__name__)

DASHBOARDS = {
    AccountType.HR: "/hr/dashboard",
    AccountType.EMPLOYEE: "/employee/dashboard",
}

REASON_NOT_FOUND = "User not found in department"
REASON_ROLE_MISMATCH = "Role mismatch"
REASON_INACTIVE = "Account inactive"


def _denied(reason: str) -> Dict[str, Any]:
    return {"authorized": False, "reason": reason}


def verify_login(realtime: RealtimeStore, email: str, department: str, role: str) -> Dict[str, Any]:
    department = department.strip()
    if not is_valid_key(department):
        return _denied(REASON_NOT_FOUND)

    members = realtime.read(f"users/{department}") or {}
    if not isinstance(members, dict):
        members = {}

    wanted = email.strip().lower()
    match = None
    for uid, raw in members.items():
        user = parse_record(UserRecord, raw, f"users/{department}/{uid}")
        if (user.email or "").strip().lower() == wanted:
            match = (uid, user)
            break

    if match is None:
        logger.info(f"Login denied: {email} not in department {department}")
        return _denied(REASON_NOT_FOUND)

    uid, user = match
    if user.account_type is None or user.account_type.value != role.strip().upper():
        logger.warning(f"Login denied: role mismatch for uid={uid} (claimed {role})")
        return _denied(REASON_ROLE_MISMATCH)

    if user.status != UserStatus.ACTIVE:
        logger.info(f"Login denied: uid={uid} is not active")
        return _denied(REASON_INACTIVE)

    return {
        "authorized": True,
        "uid": uid,
        "dashboard": DASHBOARDS[user.account_type],
    }
