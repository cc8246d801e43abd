"""
Stored payment instruments per patient
"""

from typing import List, Optional

from database.store import DocumentStore
from schemas.payment_method import PaymentMethod
from services.default_registry import DefaultFlaggedRegistry
from services.collection import require_key


class PaymentMethodRegistry(DefaultFlaggedRegistry[PaymentMethod]):
    required_fields = ("id", "patient_id", "type", "description")
    immutable_fields = ("id", "patient_id")
    owner_field = "patient_id"
    flag_field = "is_default"

    def __init__(self, store: DocumentStore):
        super().__init__(store, "payment_methods", PaymentMethod, "Payment method")

    async def get_by_patient_id(self, patient_id: str) -> List[PaymentMethod]:
        return await self.filter_by("patient_id", patient_id, "Patient ID")

    async def get_default(self, patient_id: str) -> Optional[PaymentMethod]:
        require_key(patient_id, "Patient ID")
        return await super().get_default(patient_id)
