"""
Store records
=============
Typed views of the JSON trees kept in the Realtime Database and Firestore.

Records are validated at the store boundary: unknown extra fields are kept
(they still reach the AI prompt), but known fields with the wrong shape fail
fast with MalformedRecordError.
"""

from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from db import UpstreamServiceError


# ===== Enums =====

class AccountType(str, Enum):
    HR = "HR"
    EMPLOYEE = "EMPLOYEE"


class UserStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class AttendanceStatus(str, Enum):
    PRESENT = "PRESENT"


class LeaveStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class Intent(str, Enum):
    ATTENDANCE = "ATTENDANCE"
    LEAVE = "LEAVE"
    EMPLOYEE = "EMPLOYEE"
    PERFORMANCE = "PERFORMANCE"
    SALES = "SALES"
    PROJECT = "PROJECT"
    RISK = "RISK"
    GROWTH = "GROWTH"
    GENERAL = "GENERAL"


class AIMode(str, Enum):
    BOTH = "BOTH"      # hybrid: company data first, general knowledge otherwise
    JARVIS = "JARVIS"  # company data only
    GEMI = "GEMI"      # general knowledge only


class MalformedRecordError(UpstreamServiceError):
    """A record read from a store does not match its expected shape."""


# ===== Records =====

class StoreRecord(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def to_store(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class UserRecord(StoreRecord):
    full_name: Optional[str] = Field(default=None, alias="fullName")
    email: Optional[str] = None
    department: Optional[str] = None
    role: Optional[str] = None  # job title, e.g. ENGINEER
    account_type: Optional[AccountType] = Field(default=None, alias="accountType")
    status: Optional[UserStatus] = None
    created_by: Optional[str] = Field(default=None, alias="createdBy")
    created_at: Optional[int] = Field(default=None, alias="createdAt")

    @model_validator(mode="before")
    @classmethod
    def _account_type_from_legacy_role(cls, values):
        # Older records used role=HR|EMPLOYEE and had no accountType
        if isinstance(values, dict) and not (values.get("accountType") or values.get("account_type")):
            role = values.get("role")
            if role in (AccountType.HR.value, AccountType.EMPLOYEE.value):
                values = {**values, "accountType": role}
        return values


class AttendanceRecord(StoreRecord):
    uid: Optional[str] = None
    date: Optional[str] = None
    status: AttendanceStatus = AttendanceStatus.PRESENT
    check_in: Optional[int] = Field(default=None, alias="checkIn")
    check_out: Optional[int] = Field(default=None, alias="checkOut")


class LeaveRecord(StoreRecord):
    uid: Optional[str] = None
    from_date: Optional[str] = Field(default=None, alias="from")
    to_date: Optional[str] = Field(default=None, alias="to")
    reason: Optional[str] = None
    status: LeaveStatus = LeaveStatus.PENDING
    created_at: Optional[int] = Field(default=None, alias="createdAt")


class AlertRecord(StoreRecord):
    message: Optional[str] = None
    metrics: Optional[Dict[str, Any]] = None
    created_at: Optional[int] = Field(default=None, alias="createdAt")


class InsightRecord(StoreRecord):
    prompt: str
    intent: Intent
    mode: AIMode
    reply: str
    metrics: Optional[Dict[str, Any]] = None
    created_at: int = Field(alias="createdAt")


class SalesRecord(StoreRecord):
    amount: float = 0

    @field_validator("amount", mode="before")
    @classmethod
    def _missing_amount_is_zero(cls, v):
        return 0 if v is None else v


class PerformanceRecord(StoreRecord):
    pass


class ProjectRecord(StoreRecord):
    pass


class MetricsSnapshot(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_employees: int = Field(alias="totalEmployees")
    department_wise: Dict[str, int] = Field(alias="departmentWise")
    attendance_count: int = Field(alias="attendanceCount")
    leave_requests: int = Field(alias="leaveRequests")
    total_sales: float = Field(alias="totalSales")
    project_count: int = Field(alias="projectCount")

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


# ===== Aggregate =====

# payload key -> attribute name
AGGREGATE_FIELDS = {
    "users": "users",
    "attendance": "attendance",
    "leaves": "leaves",
    "alerts": "alerts",
    "aiConfig": "ai_config",
    "performance": "performance",
    "sales": "sales",
    "projects": "projects",
}


class CompanyData(BaseModel):
    """Snapshot of every company record fetched for one AI query."""

    users: Dict[str, UserRecord] = Field(default_factory=dict)
    attendance: Dict[str, Dict[str, AttendanceRecord]] = Field(default_factory=dict)
    leaves: Dict[str, LeaveRecord] = Field(default_factory=dict)
    alerts: Dict[str, AlertRecord] = Field(default_factory=dict)
    ai_config: Dict[str, Any] = Field(default_factory=dict)
    performance: List[PerformanceRecord] = Field(default_factory=list)
    sales: List[SalesRecord] = Field(default_factory=list)
    projects: List[ProjectRecord] = Field(default_factory=list)

    def to_payload(self, fields: Optional[Iterable[str]] = None) -> Dict[str, Any]:
        """Dict keyed like the stores; restricted to `fields` when given."""
        keys = list(fields) if fields is not None else list(AGGREGATE_FIELDS)
        payload = {}
        for key in keys:
            value = getattr(self, AGGREGATE_FIELDS[key])
            if isinstance(value, dict):
                payload[key] = {k: _dump(v) for k, v in value.items()}
            else:
                payload[key] = [_dump(v) for v in value]
        return payload


def _dump(value):
    if isinstance(value, StoreRecord):
        # python mode: extra values the JSON encoder cannot handle are left to the caller
        return value.model_dump(by_alias=True, exclude_none=True)
    if isinstance(value, dict):
        return {k: _dump(v) for k, v in value.items()}
    return value


R = TypeVar("R", bound=BaseModel)


def parse_record(model: Type[R], raw: Any, where: str) -> R:
    """Validate one raw store value, raising MalformedRecordError on bad data."""
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        raise MalformedRecordError(f"Malformed record at {where}: {e.errors()[0]['msg']}") from e
