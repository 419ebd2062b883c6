"""Typed records read from and written to Supabase, plus the diagnosis context"""
from typing import List, Literal, Optional, Any, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

UrgencyLevel = Literal["low", "medium", "high"]


class _Row(BaseModel):
    # Tables carry more columns than the pipeline uses
    model_config = ConfigDict(extra="ignore")


# Stored rows

class Profile(_Row):
    id: str
    full_name: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    bmi: Optional[float] = None
    blood_group: Optional[str] = None
    height_cm: Optional[float] = None
    weight_kg: Optional[float] = None


class HealthTrackingEntry(_Row):
    date: str
    sleep_hours: Optional[float] = None
    stress_level: Optional[str] = None
    water_intake_cups: Optional[float] = None
    exercise_done: Optional[bool] = None
    exercise_intensity: Optional[str] = None
    appetite: Optional[str] = None
    pain_experienced: Optional[bool] = None
    pain_location: Optional[str] = None
    new_symptoms: List[str] = Field(default_factory=list)
    mood: Optional[str] = None
    medications_taken: Optional[bool] = None
    bowel_movement: Optional[str] = None
    urine_changes: Optional[str] = None

    @field_validator("new_symptoms", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return v or []


class MedicationRecord(_Row):
    medication_name: str
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    is_prescribed: Optional[bool] = None
    end_date: Optional[str] = None


class SymptomAssessment(_Row):
    id: str
    user_id: str
    symptoms: Optional[str] = None
    ai_diagnosis: Optional[str] = None
    suspected_conditions: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    confidence_score: Optional[int] = None
    urgency_level: Optional[str] = None
    doctor_reviewed: bool = False
    created_at: str

    @field_validator("suspected_conditions", "recommendations", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return v or []


class MentalHealthAssessment(_Row):
    mood_score: Optional[int] = None
    stress_anxiety_overwhelm: Optional[bool] = None
    sleep_changes: Optional[bool] = None
    is_flagged_urgent: Optional[bool] = None
    created_at: Optional[str] = None


class EmergencyCheckin(_Row):
    symptom_description: Optional[str] = None
    severity_level: Optional[Union[str, float]] = None
    urgency_score: Optional[float] = None
    created_at: Optional[str] = None


class PatientHistory(BaseModel):
    """Result of the six concurrent history reads"""
    profile: Optional[Profile] = None
    health_tracking: List[HealthTrackingEntry] = Field(default_factory=list)
    medications: List[MedicationRecord] = Field(default_factory=list)
    previous_assessments: List[SymptomAssessment] = Field(default_factory=list)
    mental_health: List[MentalHealthAssessment] = Field(default_factory=list)
    emergency_checkins: List[EmergencyCheckin] = Field(default_factory=list)


# Context sent to the diagnostic model

class Demographics(BaseModel):
    age: Optional[int] = None
    gender: Optional[str] = None
    bmi: Optional[float] = None
    blood_group: Optional[str] = None


class MedicationSummary(BaseModel):
    name: str
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    is_prescribed: Optional[bool] = None


class PreviousDiagnosis(BaseModel):
    symptoms: Optional[str] = None
    diagnosis: Optional[str] = None
    conditions: List[str] = Field(default_factory=list)
    urgency: Optional[str] = None
    date: str


class MentalHealthStatus(BaseModel):
    latest_mood_score: Optional[int] = None
    stress_anxiety: Optional[bool] = None
    sleep_changes: Optional[bool] = None
    is_urgent: Optional[bool] = None


class EmergencyEvent(BaseModel):
    symptoms: Optional[str] = None
    severity: Optional[Union[str, float]] = None
    urgency_score: Optional[float] = None
    date: Optional[str] = None


class MedicalHistory(BaseModel):
    previous_diagnoses: List[PreviousDiagnosis] = Field(default_factory=list)
    # None means no mental-health questionnaire on record
    mental_health_status: Optional[MentalHealthStatus] = None
    emergency_events: List[EmergencyEvent] = Field(default_factory=list)


class PatientContext(BaseModel):
    demographics: Demographics
    current_symptoms: str
    recent_health_data: List[HealthTrackingEntry] = Field(default_factory=list)
    current_medications: List[MedicationSummary] = Field(default_factory=list)
    medical_history: MedicalHistory = Field(default_factory=MedicalHistory)


# Diagnostic model output and the API result

class ModelDiagnosis(BaseModel):
    """JSON shape the diagnostic model must answer with"""
    model_config = ConfigDict(extra="ignore")

    suspected_conditions: List[str]
    primary_diagnosis: str
    confidence_score: int = Field(ge=0, le=100)
    urgency_level: UrgencyLevel
    recommendations: List[str]
    reasoning: str = ""
    red_flags: List[str] = Field(default_factory=list)
    follow_up_timeline: str = ""

    @field_validator("urgency_level", mode="before")
    @classmethod
    def _normalise_urgency(cls, v: Any):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("red_flags", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return v or []


class AssessmentResult(BaseModel):
    """Persisted assessment plus the fields that are only returned, never stored"""
    id: str
    symptoms: str
    ai_diagnosis: str
    suspected_conditions: List[str]
    recommendations: List[str]
    confidence_score: int
    urgency_level: UrgencyLevel
    reasoning: str
    red_flags: List[str]
    follow_up_timeline: str
    doctor_reviewed: bool = False
    created_at: str
