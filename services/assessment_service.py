"""
Symptom assessment pipeline.

gather history -> assemble context -> build prompt -> call model once ->
persist one record -> return it with the non-persisted model fields.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Protocol

from core.auth import Identity
from models.records import AssessmentResult, ModelDiagnosis, SymptomAssessment
from utils.async_supabase import AsyncSupabase
from utils.context_builder import build_diagnosis_messages, build_patient_context
from utils.data_gathering import gather_patient_history, get_recent_assessments
from utils.db_storage import insert_assessment

logger = logging.getLogger(__name__)

HISTORY_PAGE_LIMIT = 20


class DiagnosticModel(Protocol):
    async def diagnose(self, messages: List[Dict[str, str]]) -> ModelDiagnosis:
        ...


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AssessmentService:
    """Turns a symptom description plus a user's history into a persisted diagnostic suggestion.

    Holds no per-request state; concurrent calls are independent.
    """

    def __init__(
        self,
        db: AsyncSupabase,
        model: DiagnosticModel,
        clock: Callable[[], datetime] = _utcnow
    ):
        self.db = db
        self.model = model
        self.clock = clock

    async def assess(self, identity: Identity, symptoms: str) -> AssessmentResult:
        logger.info(f"Starting AI diagnosis for user: {identity.user_id}")

        history = await gather_patient_history(self.db, identity.user_id, now=self.clock())
        context = build_patient_context(history, symptoms)
        messages = build_diagnosis_messages(context)

        diagnosis = await self.model.diagnose(messages)
        logger.info(
            f"AI diagnosis received for user {identity.user_id}: "
            f"urgency={diagnosis.urgency_level} confidence={diagnosis.confidence_score}"
        )

        saved = await insert_assessment(self.db, identity.user_id, symptoms, diagnosis)
        logger.info(f"Assessment {saved.id} saved successfully")

        return AssessmentResult(
            id=saved.id,
            symptoms=symptoms,
            ai_diagnosis=diagnosis.primary_diagnosis,
            suspected_conditions=diagnosis.suspected_conditions,
            recommendations=diagnosis.recommendations,
            confidence_score=diagnosis.confidence_score,
            urgency_level=diagnosis.urgency_level,
            reasoning=diagnosis.reasoning,
            red_flags=diagnosis.red_flags,
            follow_up_timeline=diagnosis.follow_up_timeline,
            doctor_reviewed=saved.doctor_reviewed,
            created_at=saved.created_at,
        )

    async def list_assessments(
        self,
        identity: Identity,
        limit: Optional[int] = HISTORY_PAGE_LIMIT
    ) -> List[SymptomAssessment]:
        """The identity's assessment history, most recent first"""
        if limit is None:
            limit = HISTORY_PAGE_LIMIT
        limit = max(1, min(limit, 100))
        return await get_recent_assessments(self.db, identity.user_id, limit=limit)
