from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import Annotated, Any, Dict, Optional

from models import AIMode, Intent


def _not_blank(v: str) -> str:
    if not v.strip():
        raise ValueError("must not be empty")
    return v.strip()


RequiredStr = Annotated[str, AfterValidator(_not_blank)]


# Employee schemas
class EmployeeCreate(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "fullName": "Asha Rao",
                "email": "asha@company.com",
                "password": "secret1",
                "department": "Engineering",
                "role": "ENGINEER",
                "hrUid": "H1",
            }
        },
    )

    full_name: RequiredStr = Field(alias="fullName")
    email: EmailStr
    password: RequiredStr
    department: RequiredStr
    hr_uid: RequiredStr = Field(alias="hrUid")
    role: Optional[str] = None  # job title, account type is always EMPLOYEE


class EmployeeCreateOut(BaseModel):
    success: bool
    uid: str


# Attendance schemas
class AttendanceMark(BaseModel):
    uid: RequiredStr


class AttendanceMarkOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    date: str
    already_marked: bool = Field(alias="alreadyMarked")


class CheckOutOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    date: str
    check_in: Optional[int] = Field(default=None, alias="checkIn")
    check_out: int = Field(alias="checkOut")


# Leave schemas
class LeaveRequestCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    uid: RequiredStr
    from_date: RequiredStr = Field(alias="from")
    to_date: RequiredStr = Field(alias="to")
    reason: RequiredStr


class LeaveRequestOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    leave_id: str = Field(alias="leaveId")


class LeaveAction(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    leave_id: RequiredStr = Field(alias="leaveId")
    status: RequiredStr


class LeaveActionOut(BaseModel):
    success: bool
    status: str


# AI schemas
class AIQuery(BaseModel):
    prompt: str = ""
    mode: AIMode = AIMode.BOTH

    @field_validator("mode", mode="before")
    @classmethod
    def _upper_mode(cls, v):
        return v.upper() if isinstance(v, str) else v


class AIQueryOut(BaseModel):
    reply: str
    intent: Intent


class AutoRunOut(BaseModel):
    success: bool
    alert: Dict[str, Any]


# Auth schemas
class VerifyLoginRequest(BaseModel):
    email: RequiredStr
    department: RequiredStr
    role: RequiredStr


class VerifyLoginOut(BaseModel):
    authorized: bool
    uid: Optional[str] = None
    dashboard: Optional[str] = None
    reason: Optional[str] = None
