# employees.py
import logging

from fastapi import APIRouter, Depends, HTTPException

from db import IdentityProvider, RealtimeStore, UpstreamServiceError
from dependencies import get_identity_provider, get_realtime_store
from schemas import EmployeeCreate, EmployeeCreateOut
from services.employee_service import create_employee

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Employees"])


@router.post("/create-employee", response_model=EmployeeCreateOut)
def create_employee_endpoint(
    employee: EmployeeCreate,
    realtime: RealtimeStore = Depends(get_realtime_store),
    identity: IdentityProvider = Depends(get_identity_provider),
):
    """
    HR creates an employee.

    Creates the Firebase Authentication account, then writes the User record
    under users/{department}/{uid} with accountType EMPLOYEE.
    """
    try:
        uid = create_employee(
            realtime,
            identity,
            full_name=employee.full_name,
            email=employee.email,
            password=employee.password,
            department=employee.department,
            hr_uid=employee.hr_uid,
            role=employee.role,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except UpstreamServiceError as e:
        logger.error(f"Employee creation failed for {employee.email}: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return {"success": True, "uid": uid}
