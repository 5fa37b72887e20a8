"""
Leave Router - Request and HR Action
====================================
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from db import RealtimeStore, UpstreamServiceError
from dependencies import get_realtime_store
from schemas import LeaveAction, LeaveActionOut, LeaveRequestCreate, LeaveRequestOut
from services.leave_service import apply_leave_action, create_leave_request

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/leave", tags=["Leaves"])


@router.post("/request", response_model=LeaveRequestOut)
def request_leave(leave: LeaveRequestCreate, realtime: RealtimeStore = Depends(get_realtime_store)):
    """
    Employee applies for leave. Stored as PENDING under a generated id.
    """
    try:
        leave_id = create_leave_request(
            realtime,
            uid=leave.uid,
            from_date=leave.from_date,
            to_date=leave.to_date,
            reason=leave.reason,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except UpstreamServiceError as e:
        logger.error(f"Leave request failed for {leave.uid}: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return {"success": True, "leaveId": leave_id}


@router.post("/action", response_model=LeaveActionOut)
def leave_action(action: LeaveAction, realtime: RealtimeStore = Depends(get_realtime_store)):
    """
    HR approves or rejects a PENDING leave request.

    - 400: status is not APPROVED / REJECTED
    - 404: unknown leaveId
    - 409: the request was already decided
    """
    try:
        new_status = apply_leave_action(realtime, action.leave_id, action.status)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except RuntimeError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except UpstreamServiceError as e:
        logger.error(f"Leave action failed for {action.leave_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return {"success": True, "status": new_status.value}
