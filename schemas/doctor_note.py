"""
Doctor note Pydantic schemas
"""

from pydantic import Field
from typing import Optional, List
from datetime import date

from schemas.common import CamelModel, Timestamp


class DoctorNotePatient(CamelModel):
    id: str
    first_name: str = ""
    last_name: str = ""
    phone_number: str = ""
    email: str = ""
    address: str = ""
    address_line_two: Optional[str] = None
    city: str = ""
    state: str = ""
    zip_code: str = ""
    country: str = ""
    date_of_birth: Optional[date] = None
    gender: str = ""


class DoctorNote(CamelModel):
    id: str
    event_id: Optional[str] = None
    parent_note_id: Optional[str] = None
    note_transcript_id: Optional[str] = None
    duration: Optional[int] = None
    version: int = 1
    current_version: int = 1
    content: str
    summary: str = ""
    ai_generated: bool = False
    template: Optional[str] = None
    patient: DoctorNotePatient
    created_date: Optional[Timestamp] = None
    provider_names: List[str] = []


class DoctorNoteUpdate(CamelModel):
    event_id: Optional[str] = None
    duration: Optional[int] = None
    version: Optional[int] = None
    current_version: Optional[int] = None
    content: Optional[str] = None
    summary: Optional[str] = None
    template: Optional[str] = None
    provider_names: Optional[List[str]] = None


class AppointmentContext(CamelModel):
    date: Optional[str] = None
    type: Optional[str] = None
    reason: Optional[str] = None


class NotePatientContext(CamelModel):
    """Clinical details the note generator draws on"""

    id: Optional[str] = None
    first_name: str
    last_name: str
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    phone_number: Optional[str] = None
    medical_history: List[str] = []
    allergies: List[str] = []
    prescriptions: List[str] = []
    family_history: List[str] = []


class GenerateNoteRequest(CamelModel):
    patient: NotePatientContext
    appointment_data: Optional[AppointmentContext] = None


class GeneratedNote(CamelModel):
    content: str = Field(..., min_length=1)
    summary: str
