from contextlib import asynccontextmanager
from typing import Optional
import logging

from fastapi import FastAPI

from api.ai_diagnose import router as ai_diagnose_router
from business_logic import LLMDiagnosticModel
from core.auth import SupabaseAuthenticator
from core.config import Settings, load_settings
from core.middleware import setup_cors, setup_error_handlers
from services.assessment_service import AssessmentService
from supabase_client import create_auth_client, create_service_client
from utils.async_http import create_http_client
from utils.async_supabase import AsyncSupabase

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    assessment_service: Optional[AssessmentService] = None,
    authenticator=None
) -> FastAPI:
    """Build the API. Collaborators passed in are used as-is; missing ones are built from settings."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        http_client = None
        db = None
        if assessment_service is None or authenticator is None:
            app_settings = settings or load_settings()

        if authenticator is None:
            app.state.authenticator = SupabaseAuthenticator(create_auth_client(app_settings))
        else:
            app.state.authenticator = authenticator

        if assessment_service is None:
            http_client = create_http_client(app_settings)
            db = AsyncSupabase(create_service_client(app_settings))
            app.state.assessment_service = AssessmentService(
                db=db,
                model=LLMDiagnosticModel(app_settings, http_client)
            )
            logger.info(f"Diagnostic model: {app_settings.llm_model}")
        else:
            app.state.assessment_service = assessment_service

        try:
            yield
        finally:
            if http_client is not None:
                await http_client.aclose()
            if db is not None:
                db.close()

    api = FastAPI(title="Curable AI Diagnose API", lifespan=lifespan)
    setup_cors(api)
    setup_error_handlers(api)
    api.include_router(ai_diagnose_router)

    @api.get("/api/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "service": "Curable AI Diagnose API"}

    return api
