# services/employee_service.py
import logging

from db import IdentityProvider, RealtimeStore
from models import AccountType, UserRecord, UserStatus
from utils import is_valid_key, now_ms

logger = logging.getLogger(__name__)

DEFAULT_JOB_ROLE = "EMPLOYEE"


def user_path(department: str, uid: str) -> str:
    return f"users/{department}/{uid}"


def create_employee(
    realtime: RealtimeStore,
    identity: IdentityProvider,
    full_name: str,
    email: str,
    password: str,
    department: str,
    hr_uid: str,
    role: str | None = None,
) -> str:
    """
    Create the identity account, then the User record under its department.

    Returns the new uid. Identity-provider failures (duplicate email, weak
    password) propagate as UpstreamServiceError with the provider's message.
    """
    department = department.strip()
    if not is_valid_key(department):
        raise ValueError("department must be a non-empty key without . $ # [ ] /")

    uid = identity.create_account(email, password, display_name=full_name)

    user = UserRecord(
        full_name=full_name,
        email=email,
        department=department,
        role=(role or DEFAULT_JOB_ROLE).strip().upper(),
        account_type=AccountType.EMPLOYEE,
        status=UserStatus.ACTIVE,
        created_by=hr_uid,
        created_at=now_ms(),
    )
    realtime.write(user_path(department, uid), user.to_store())

    logger.info(f"Employee created: uid={uid} department={department} by={hr_uid}")
    return uid
