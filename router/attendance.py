from fastapi import APIRouter, Depends, HTTPException
import logging

from db import RealtimeStore, UpstreamServiceError
from dependencies import get_realtime_store
from schemas import AttendanceMark, AttendanceMarkOut, CheckOutOut
from services.attendance_service import check_out, mark_attendance

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/attendance", tags=["Attendance"])


@router.post("/mark", response_model=AttendanceMarkOut)
def mark_attendance_endpoint(body: AttendanceMark, realtime: RealtimeStore = Depends(get_realtime_store)):
    # First mark of the day wins, repeats are reported as alreadyMarked
    try:
        day, already = mark_attendance(realtime, body.uid)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except UpstreamServiceError as e:
        logger.error(f"Attendance mark failed for {body.uid}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    return {"success": True, "date": day, "alreadyMarked": already}


@router.post("/check-out", response_model=CheckOutOut)
def check_out_endpoint(body: AttendanceMark, realtime: RealtimeStore = Depends(get_realtime_store)):
    try:
        record = check_out(realtime, body.uid)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except RuntimeError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except UpstreamServiceError as e:
        logger.error(f"Attendance check-out failed for {body.uid}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    return {
        "success": True,
        "date": record.date,
        "checkIn": record.check_in,
        "checkOut": record.check_out,
    }
