"""
AI doctor note drafting
"""

import logging
from datetime import date
from typing import Optional

from langchain_core.messages import HumanMessage, SystemMessage

from agents.utils.initializer import get_llm, get_summary_llm
from agents.utils.prompts import (
    appointment_section_prompt,
    doctor_note_prompt,
    note_summary_prompt,
    note_system_prompt,
)
from schemas.doctor_note import AppointmentContext, GeneratedNote, NotePatientContext
from utils.exceptions import NoteGenerationError

logger = logging.getLogger(__name__)


def age_on(date_of_birth: Optional[date], today: Optional[date] = None) -> str:
    if date_of_birth is None:
        return "Unknown"
    today = today or date.today()
    years = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        years -= 1
    return str(years)


def build_note_prompt(
    patient: NotePatientContext, appointment: Optional[AppointmentContext] = None
) -> str:
    appointment_section = ""
    if appointment:
        appointment_section = appointment_section_prompt.format(
            date=appointment.date or "Not specified",
            type=appointment.type or "Not specified",
            reason=appointment.reason or "Routine visit",
        )

    return doctor_note_prompt.format(
        first_name=patient.first_name,
        last_name=patient.last_name,
        age=age_on(patient.date_of_birth),
        gender=patient.gender or "Not specified",
        date_of_birth=(
            patient.date_of_birth.isoformat() if patient.date_of_birth else "Unknown"
        ),
        phone_number=patient.phone_number or "Not provided",
        medical_history=", ".join(patient.medical_history) or "None reported",
        allergies=", ".join(patient.allergies) or "No known allergies",
        medications=", ".join(patient.prescriptions) or "None reported",
        family_history=", ".join(patient.family_history) or "Non-contributory",
        appointment_section=appointment_section,
    )


def summarize_note(content: str, fallback: str) -> str:
    try:
        response = get_summary_llm().invoke(
            [HumanMessage(content=note_summary_prompt.format(content=content))]
        )
    except Exception as e:
        logger.warning(f"Note summary failed, using fallback: {e}")
        return fallback
    return (response.content or "").strip() or fallback


def generate_doctor_note(
    patient: NotePatientContext, appointment: Optional[AppointmentContext] = None
) -> GeneratedNote:
    """Draft a structured note for the patient, then a short summary of it"""
    prompt = build_note_prompt(patient, appointment)

    try:
        response = get_llm().invoke(
            [SystemMessage(content=note_system_prompt), HumanMessage(content=prompt)]
        )
    except Exception as e:
        logger.error(f"Doctor note generation failed: {e}")
        raise NoteGenerationError("Failed to generate note with AI")

    content = (response.content or "").strip()
    if not content:
        raise NoteGenerationError("No content generated")

    fallback = f"Visit summary for {patient.first_name} {patient.last_name}"
    return GeneratedNote(content=content, summary=summarize_note(content, fallback))
