"""AI diagnosis API endpoints"""
from typing import Optional
import logging

from fastapi import APIRouter, Depends, Header, Query, Request

from core.auth import Identity
from core.exceptions import CurableError
from models.requests import AIDiagnoseRequest
from services.assessment_service import AssessmentService

router = APIRouter(prefix="/api", tags=["ai_diagnose"])
logger = logging.getLogger(__name__)


def get_assessment_service(request: Request) -> AssessmentService:
    return request.app.state.assessment_service


async def get_identity(
    request: Request,
    authorization: Optional[str] = Header(default=None)
) -> Identity:
    """Resolve the caller before the body is read or any table is touched"""
    return await request.app.state.authenticator.authenticate(authorization)


async def read_diagnose_body(request: Request) -> AIDiagnoseRequest:
    try:
        data = await request.json()
        return AIDiagnoseRequest(**data)
    except (ValueError, TypeError) as e:
        logger.error(f"Invalid ai-diagnose request body: {e}")
        raise CurableError("Invalid request body") from e


@router.post("/ai-diagnose")
async def ai_diagnose(
    request: Request,
    identity: Identity = Depends(get_identity),
    service: AssessmentService = Depends(get_assessment_service)
):
    """Preliminary diagnosis from free-text symptoms and the user's recent history"""
    body = await read_diagnose_body(request)
    assessment = await service.assess(identity, body.symptoms)
    return {
        "success": True,
        "assessment": assessment.model_dump(exclude={"doctor_reviewed"})
    }


@router.get("/assessments")
async def list_assessments(
    limit: int = Query(default=20),
    identity: Identity = Depends(get_identity),
    service: AssessmentService = Depends(get_assessment_service)
):
    """Previous assessments for the signed-in user, newest first"""
    assessments = await service.list_assessments(identity, limit=limit)
    return {
        "success": True,
        "assessments": [a.model_dump() for a in assessments]
    }
