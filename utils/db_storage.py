"""
Database Storage Helper
Stores a completed symptom assessment in Supabase
"""

import logging

from core.exceptions import PersistenceFailure
from models.records import ModelDiagnosis, SymptomAssessment
from utils.async_supabase import AsyncSupabase

logger = logging.getLogger(__name__)

ASSESSMENTS_TABLE = "symptom_assessments"


def build_assessment_row(user_id: str, symptoms: str, diagnosis: ModelDiagnosis) -> dict:
    """Columns persisted for a new assessment; reasoning and red flags are not stored"""
    return {
        "user_id": user_id,
        "symptoms": symptoms,
        "ai_diagnosis": diagnosis.primary_diagnosis,
        "suspected_conditions": diagnosis.suspected_conditions,
        "recommendations": diagnosis.recommendations,
        "confidence_score": diagnosis.confidence_score,
        "urgency_level": diagnosis.urgency_level,
        "doctor_reviewed": False,
    }


async def insert_assessment(
    db: AsyncSupabase,
    user_id: str,
    symptoms: str,
    diagnosis: ModelDiagnosis
) -> SymptomAssessment:
    """
    Insert exactly one assessment row.

    Returns:
        The row as stored (with its generated id and created_at)

    Raises:
        PersistenceFailure: the insert errored or returned nothing
    """
    try:
        rows = await db.insert(ASSESSMENTS_TABLE, build_assessment_row(user_id, symptoms, diagnosis))
    except Exception as e:
        logger.error(f"Error saving assessment: {e}")
        raise PersistenceFailure("Failed to save assessment") from e

    if not rows:
        logger.error("Error saving assessment: insert returned no row")
        raise PersistenceFailure("Failed to save assessment")

    return SymptomAssessment(**rows[0])
