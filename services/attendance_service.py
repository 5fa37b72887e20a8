# services/attendance_service.py
import logging
from typing import Tuple

from db import RealtimeStore
from models import AttendanceRecord, AttendanceStatus, parse_record
from utils import is_valid_key, now_ms, today_key

logger = logging.getLogger(__name__)


def attendance_path(uid: str, day: str) -> str:
    if not is_valid_key(uid):
        raise ValueError("uid must be a non-empty key without . $ # [ ] /")
    return f"attendance/{uid}/{day}"


def mark_attendance(realtime: RealtimeStore, uid: str) -> Tuple[str, bool]:
    """
    Check `uid` in for today.

    Only the first mark of the day is written; later calls leave the record
    untouched. Returns (date, already_marked).
    """
    day = today_key()
    path = attendance_path(uid, day)

    if realtime.read(path) is not None:
        logger.debug(f"Attendance already marked: uid={uid} date={day}")
        return day, True

    record = AttendanceRecord(uid=uid, date=day, status=AttendanceStatus.PRESENT, check_in=now_ms())
    realtime.write(path, record.to_store())
    logger.info(f"Attendance marked: uid={uid} date={day}")
    return day, False


def check_out(realtime: RealtimeStore, uid: str) -> AttendanceRecord:
    day = today_key()
    path = attendance_path(uid, day)

    raw = realtime.read(path)
    if raw is None:
        raise LookupError("No check-in found for today")

    record = parse_record(AttendanceRecord, raw, path)
    if record.check_out is not None:
        raise RuntimeError("Already checked out today")

    record.check_out = now_ms()
    realtime.update(path, {"checkOut": record.check_out})
    logger.info(f"Attendance check-out: uid={uid} date={day}")
    return record
