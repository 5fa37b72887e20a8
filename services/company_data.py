# services/company_data.py
import asyncio
import logging
from typing import Any, Dict

from db import DocumentStore, RealtimeStore
from models import (
    AlertRecord,
    AttendanceRecord,
    CompanyData,
    LeaveRecord,
    MalformedRecordError,
    PerformanceRecord,
    ProjectRecord,
    SalesRecord,
    UserRecord,
    parse_record,
)

logger = logging.getLogger(__name__)

REALTIME_PATHS = ("users", "attendance", "leaves", "alerts", "aiConfig")
DOCUMENT_COLLECTIONS = ("performance", "sales", "projects")


async def fetch_company_data(realtime: RealtimeStore, documents: DocumentStore) -> CompanyData:
    """
    Read every company subtree and collection concurrently and join them.

    The Firebase Admin SDK is blocking, so each read runs on a worker thread.
    Missing subtrees come back empty; a failing read fails the whole fetch.
    """
    reads = [asyncio.to_thread(realtime.read, path) for path in REALTIME_PATHS]
    reads += [asyncio.to_thread(documents.list_collection, name) for name in DOCUMENT_COLLECTIONS]
    results = await asyncio.gather(*reads)

    raw = dict(zip(REALTIME_PATHS + DOCUMENT_COLLECTIONS, results))
    data = parse_company_data(raw)
    logger.debug(
        f"Company data fetched: users={len(data.users)} leaves={len(data.leaves)} "
        f"sales={len(data.sales)} projects={len(data.projects)}"
    )
    return data


def parse_company_data(raw: Dict[str, Any]) -> CompanyData:
    return CompanyData(
        users=_flatten_users(raw.get("users") or {}),
        attendance={
            uid: {
                day: parse_record(AttendanceRecord, rec, f"attendance/{uid}/{day}")
                for day, rec in _mapping(days, f"attendance/{uid}").items()
            }
            for uid, days in _mapping(raw.get("attendance"), "attendance").items()
        },
        leaves={
            key: parse_record(LeaveRecord, rec, f"leaves/{key}")
            for key, rec in _mapping(raw.get("leaves"), "leaves").items()
        },
        alerts={
            key: parse_record(AlertRecord, rec, f"alerts/{key}")
            for key, rec in _mapping(raw.get("alerts"), "alerts").items()
        },
        ai_config=_config(raw.get("aiConfig")),
        performance=[parse_record(PerformanceRecord, d, "performance") for d in raw.get("performance") or []],
        sales=[parse_record(SalesRecord, d, "sales") for d in raw.get("sales") or []],
        projects=[parse_record(ProjectRecord, d, "projects") for d in raw.get("projects") or []],
    )


def _flatten_users(tree) -> Dict[str, UserRecord]:
    # users/{department}/{uid} -> {uid: UserRecord}
    users = {}
    for department, members in _mapping(tree, "users").items():
        for uid, rec in _mapping(members, f"users/{department}").items():
            user = parse_record(UserRecord, rec, f"users/{department}/{uid}")
            if user.department is None:
                user.department = department
            users[uid] = user
    return users


def _mapping(value, where: str) -> Dict[str, Any]:
    if value is None:
        return {}
    # The Realtime Database returns a list for trees keyed 0..n
    if isinstance(value, list):
        return {str(i): v for i, v in enumerate(value) if v is not None}
    if not isinstance(value, dict):
        raise MalformedRecordError(f"Malformed record at {where}: expected an object")
    return value


def _config(value) -> Dict[str, Any]:
    # aiConfig is free-form; a bare scalar is kept under "value"
    if value is None:
        return {}
    if isinstance(value, (dict, list)):
        return _mapping(value, "aiConfig")
    return {"value": value}
