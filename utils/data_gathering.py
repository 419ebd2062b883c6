"""Data gathering utilities for the ai-diagnose patient context"""
import asyncio
import logging
from datetime import datetime, timezone, timedelta
from typing import Optional, List, Type, TypeVar

from core.exceptions import UpstreamReadFailure
from models.records import (
    Profile,
    HealthTrackingEntry,
    MedicationRecord,
    SymptomAssessment,
    MentalHealthAssessment,
    EmergencyCheckin,
    PatientHistory,
)
from utils.async_supabase import AsyncSupabase

logger = logging.getLogger(__name__)

T = TypeVar("T")

HEALTH_TRACKING_WINDOW_DAYS = 30
ASSESSMENT_WINDOW_DAYS = 180
ASSESSMENT_LIMIT = 10
MENTAL_HEALTH_LIMIT = 5
EMERGENCY_WINDOW_DAYS = 90
EMERGENCY_LIMIT = 5


def date_cutoff(now: datetime, days: int) -> str:
    """Calendar-date boundary, compared with >= against a date column"""
    return (now - timedelta(days=days)).date().isoformat()


def timestamp_cutoff(now: datetime, days: int) -> str:
    """Timestamp boundary, compared with >= against created_at"""
    return (now - timedelta(days=days)).isoformat()


async def _read(collection: str, query, model: Type[T], limit: Optional[int] = None) -> List[T]:
    """Await one scoped select and load its rows; a bad row fails the read"""
    try:
        rows = await query
        # Store ordering is trusted; only guard against over-returning
        return [model(**row) for row in rows[:limit]]
    except Exception as e:
        logger.error(f"Error reading {collection}: {e}")
        raise UpstreamReadFailure(collection, e) from e


async def get_profile(db: AsyncSupabase, user_id: str) -> Optional[Profile]:
    rows = await _read("profiles", db.select(
        "profiles",
        filters={"eq": {"id": user_id}},
        limit=1
    ), Profile, limit=1)
    return rows[0] if rows else None


async def get_recent_health_tracking(
    db: AsyncSupabase,
    user_id: str,
    since_date: str
) -> List[HealthTrackingEntry]:
    return await _read("health_tracking", db.select(
        "health_tracking",
        filters={"eq": {"user_id": user_id}, "gte": {"date": since_date}},
        order_by="date",
        order_desc=True
    ), HealthTrackingEntry)


async def get_active_medications(db: AsyncSupabase, user_id: str) -> List[MedicationRecord]:
    return await _read("medications", db.select(
        "medications",
        filters={"eq": {"user_id": user_id}, "is_": {"end_date": None}}
    ), MedicationRecord)


async def get_recent_assessments(
    db: AsyncSupabase,
    user_id: str,
    since: Optional[str] = None,
    limit: int = ASSESSMENT_LIMIT
) -> List[SymptomAssessment]:
    filters = {"eq": {"user_id": user_id}}
    if since:
        filters["gte"] = {"created_at": since}
    return await _read("symptom_assessments", db.select(
        "symptom_assessments",
        filters=filters,
        order_by="created_at",
        order_desc=True,
        limit=limit
    ), SymptomAssessment, limit)


async def get_recent_mental_health(
    db: AsyncSupabase,
    user_id: str,
    limit: int = MENTAL_HEALTH_LIMIT
) -> List[MentalHealthAssessment]:
    return await _read("mental_health_assessments", db.select(
        "mental_health_assessments",
        filters={"eq": {"user_id": user_id}},
        order_by="created_at",
        order_desc=True,
        limit=limit
    ), MentalHealthAssessment, limit)


async def get_recent_emergency_checkins(
    db: AsyncSupabase,
    user_id: str,
    since: str,
    limit: int = EMERGENCY_LIMIT
) -> List[EmergencyCheckin]:
    return await _read("emergency_checkins", db.select(
        "emergency_checkins",
        filters={"eq": {"user_id": user_id}, "gte": {"created_at": since}},
        order_by="created_at",
        order_desc=True,
        limit=limit
    ), EmergencyCheckin, limit)


async def gather_patient_history(
    db: AsyncSupabase,
    user_id: str,
    now: Optional[datetime] = None
) -> PatientHistory:
    """Run the six history reads concurrently and wait for all of them.

    An empty table yields an empty value; any read error aborts the gather
    with UpstreamReadFailure.
    """
    now = now or datetime.now(timezone.utc)

    (
        profile,
        health_tracking,
        medications,
        previous_assessments,
        mental_health,
        emergency_checkins,
    ) = await asyncio.gather(
        get_profile(db, user_id),
        get_recent_health_tracking(db, user_id, date_cutoff(now, HEALTH_TRACKING_WINDOW_DAYS)),
        get_active_medications(db, user_id),
        get_recent_assessments(db, user_id, timestamp_cutoff(now, ASSESSMENT_WINDOW_DAYS)),
        get_recent_mental_health(db, user_id),
        get_recent_emergency_checkins(db, user_id, timestamp_cutoff(now, EMERGENCY_WINDOW_DAYS)),
    )

    return PatientHistory(
        profile=profile,
        health_tracking=health_tracking,
        medications=medications,
        previous_assessments=previous_assessments,
        mental_health=mental_health,
        emergency_checkins=emergency_checkins,
    )
