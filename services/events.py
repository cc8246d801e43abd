"""
Calendar events and the appointments attached to them
"""

from datetime import datetime
from typing import List

from database.store import DocumentStore
from schemas.common import as_utc
from schemas.event import Event
from services.collection import Collection
from utils.exceptions import ValidationError


class EventService(Collection[Event]):
    required_fields = ("id", "title", "start", "end")

    def __init__(self, store: DocumentStore):
        super().__init__(store, "events", Event, "Event")

    async def get_by_patient_id(self, patient_id: str) -> List[Event]:
        return await self.filter_by("appointment.patient_id", patient_id, "Patient ID")

    async def get_by_provider_id(self, provider_id: str) -> List[Event]:
        return await self.filter_by(
            "appointment.provider_id", provider_id, "Provider ID"
        )

    async def get_by_date_range(self, start: datetime, end: datetime) -> List[Event]:
        """Events whose start falls within [start, end]"""
        if start is None or end is None:
            raise ValidationError("Start date and end date are required")
        start, end = as_utc(start), as_utc(end)
        return await self.filter(lambda e: start <= e.start <= end)
