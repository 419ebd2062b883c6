"""Request models for all API endpoints"""
from pydantic import BaseModel


class AIDiagnoseRequest(BaseModel):
    symptoms: str = ""  # Free text, no validation (empty is accepted)
