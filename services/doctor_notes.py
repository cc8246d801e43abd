"""
Doctor notes
"""

from typing import List

from database.store import DocumentStore
from schemas.common import utcnow
from schemas.doctor_note import DoctorNote
from services.collection import Collection, require_key


class DoctorNoteService(Collection[DoctorNote]):
    required_fields = ("id", "content", "patient.id")
    immutable_fields = ("id", "patient", "ai_generated", "created_date")

    def __init__(self, store: DocumentStore):
        super().__init__(store, "doctor_notes", DoctorNote, "Doctor note")

    def prepare_new(self, note, items):
        if note.created_date is None:
            note.created_date = utcnow()
        return note

    async def get_by_patient_id(self, patient_id: str) -> List[DoctorNote]:
        return await self.filter_by("patient.id", patient_id, "Patient ID")

    async def get_by_event_id(self, event_id: str) -> List[DoctorNote]:
        return await self.filter_by("event_id", event_id, "Event ID")

    async def get_by_provider(self, provider_name: str) -> List[DoctorNote]:
        require_key(provider_name, "Provider name")
        return await self.filter(lambda n: provider_name in n.provider_names)
