"""
Leave Service - Request and HR Decision
=======================================
"""

import logging

from db import RealtimeStore
from models import LeaveRecord, LeaveStatus, parse_record
from utils import is_valid_key, now_ms, parse_iso_date

logger = logging.getLogger(__name__)

DECISION_STATUSES = (LeaveStatus.APPROVED, LeaveStatus.REJECTED)


def leave_path(leave_id: str) -> str:
    if not is_valid_key(leave_id):
        raise ValueError("leaveId must be a non-empty key without . $ # [ ] /")
    return f"leaves/{leave_id}"


def create_leave_request(
    realtime: RealtimeStore,
    uid: str,
    from_date: str,
    to_date: str,
    reason: str,
) -> str:
    """
    Store a PENDING leave request and return its generated id.

    from/to are kept as sent; when both parse as ISO dates the range is checked.
    """
    start, end = parse_iso_date(from_date), parse_iso_date(to_date)
    if start and end and end < start:
        raise ValueError("End date must be >= start date")

    leave = LeaveRecord(
        uid=uid,
        from_date=from_date,
        to_date=to_date,
        reason=reason,
        status=LeaveStatus.PENDING,
        created_at=now_ms(),
    )
    leave_id = realtime.push("leaves", leave.to_store())
    logger.info(f"Leave requested: id={leave_id} uid={uid} {from_date}..{to_date}")
    return leave_id


def apply_leave_action(realtime: RealtimeStore, leave_id: str, status: str) -> LeaveStatus:
    """
    Record HR's decision on a leave request.

    Only the status field is written. The target must be APPROVED or
    REJECTED, the request must exist and must still be PENDING.
    """
    try:
        new_status = LeaveStatus(status.strip().upper())
    except ValueError:
        new_status = None
    if new_status not in DECISION_STATUSES:
        raise ValueError("status must be one of: APPROVED, REJECTED")

    path = leave_path(leave_id)
    raw = realtime.read(path)
    if raw is None:
        raise LookupError("Leave request not found")

    leave = parse_record(LeaveRecord, raw, path)
    if leave.status != LeaveStatus.PENDING:
        raise RuntimeError(f"Leave request already {leave.status.value}")

    # No transaction: two concurrent decisions race, last write wins
    realtime.write(f"{path}/status", new_status.value)
    logger.info(f"Leave {leave_id}: {leave.status.value} -> {new_status.value}")
    return new_status
