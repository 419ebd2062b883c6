"""Context building utilities for the ai-diagnose prompt"""
from typing import List, Dict

from models.records import (
    PatientHistory,
    PatientContext,
    Demographics,
    MedicationSummary,
    PreviousDiagnosis,
    MentalHealthStatus,
    EmergencyEvent,
    MedicalHistory,
)

RECENT_HEALTH_DAYS = 7

SYSTEM_PROMPT = (
    "You are a medical AI assistant that provides structured preliminary health assessments. "
    "Always respond in valid JSON format and include appropriate medical disclaimers."
)

DIAGNOSIS_PROMPT = """You are an AI medical assistant providing preliminary health assessment. Analyze the following patient data and current symptoms to provide a structured diagnosis.

PATIENT CONTEXT:
{patient_context}

INSTRUCTIONS:
1. Analyze all available patient data including medical history, current medications, recent health patterns, and mental health status
2. Consider the current symptoms in context of the patient's complete health profile
3. Provide differential diagnosis with confidence scores
4. Assess urgency level based on symptoms and patient history
5. Give specific, actionable recommendations
6. Always include disclaimer about seeking professional medical care

IMPORTANT: This is for preliminary assessment only. Always recommend professional medical consultation for serious symptoms.

Please respond in the following JSON format:
{{
  "suspected_conditions": ["condition1", "condition2", "condition3"],
  "primary_diagnosis": "Most likely condition based on symptoms and history",
  "confidence_score": 85,
  "urgency_level": "low|medium|high",
  "recommendations": [
    "Specific recommendation 1",
    "Specific recommendation 2",
    "When to seek immediate care"
  ],
  "reasoning": "Brief explanation of diagnosis reasoning",
  "red_flags": ["Any concerning symptoms that need immediate attention"],
  "follow_up_timeline": "When patient should follow up or seek care"
}}"""


def build_patient_context(history: PatientHistory, symptoms: str) -> PatientContext:
    """Assemble the typed context from the gathered history"""
    profile = history.profile
    demographics = Demographics(
        age=profile.age if profile else None,
        gender=profile.gender if profile else None,
        bmi=profile.bmi if profile else None,
        blood_group=profile.blood_group if profile else None,
    )

    mental_health_status = None
    if history.mental_health:
        latest = history.mental_health[0]
        mental_health_status = MentalHealthStatus(
            latest_mood_score=latest.mood_score,
            stress_anxiety=latest.stress_anxiety_overwhelm,
            sleep_changes=latest.sleep_changes,
            is_urgent=latest.is_flagged_urgent,
        )

    return PatientContext(
        demographics=demographics,
        current_symptoms=symptoms,
        recent_health_data=history.health_tracking[:RECENT_HEALTH_DAYS],
        current_medications=[
            MedicationSummary(
                name=med.medication_name,
                dosage=med.dosage,
                frequency=med.frequency,
                is_prescribed=med.is_prescribed,
            )
            for med in history.medications
        ],
        medical_history=MedicalHistory(
            previous_diagnoses=[
                PreviousDiagnosis(
                    symptoms=a.symptoms,
                    diagnosis=a.ai_diagnosis,
                    conditions=a.suspected_conditions,
                    urgency=a.urgency_level,
                    date=a.created_at,
                )
                for a in history.previous_assessments
            ],
            mental_health_status=mental_health_status,
            emergency_events=[
                EmergencyEvent(
                    symptoms=ec.symptom_description,
                    severity=ec.severity_level,
                    urgency_score=ec.urgency_score,
                    date=ec.created_at,
                )
                for ec in history.emergency_checkins
            ],
        ),
    )


def build_diagnosis_messages(context: PatientContext) -> List[Dict[str, str]]:
    """Chat messages for the diagnostic model"""
    prompt = DIAGNOSIS_PROMPT.format(patient_context=context.model_dump_json(indent=2))
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": prompt},
    ]
