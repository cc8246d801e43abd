"""
Patient records
"""

from database.store import DocumentStore
from schemas.common import utcnow
from schemas.patient import Patient
from services.collection import Collection


class PatientService(Collection[Patient]):
    required_fields = ("id", "first_name", "last_name")

    def __init__(self, store: DocumentStore):
        super().__init__(store, "patients", Patient, "Patient")

    def prepare_new(self, patient, items):
        if patient.created_date is None:
            patient.created_date = utcnow()
        return patient
