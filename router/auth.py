import logging

from fastapi import APIRouter, Depends, HTTPException

from db import RealtimeStore, UpstreamServiceError
from dependencies import get_realtime_store
from schemas import VerifyLoginOut, VerifyLoginRequest
from services.auth_service import verify_login

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/verify-login", response_model=VerifyLoginOut, response_model_exclude_none=True)
def verify_login_endpoint(body: VerifyLoginRequest, realtime: RealtimeStore = Depends(get_realtime_store)):
    """
    Second login step: authorize the department / role picked on the login form.

    The password was already checked by Firebase Authentication on the client.
    """
    try:
        return verify_login(realtime, body.email, body.department, body.role)
    except UpstreamServiceError as e:
        logger.error(f"Login verification failed for {body.email}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
