"""
Clinical memos
"""

from datetime import datetime
from typing import List

from database.store import DocumentStore
from schemas.common import as_utc, utcnow
from schemas.memo import Memo
from services.collection import Collection
from utils.exceptions import ValidationError


class MemoService(Collection[Memo]):
    required_fields = ("id", "note", "patient", "creator")
    immutable_fields = ("id", "patient", "creator", "created_date")

    def __init__(self, store: DocumentStore):
        super().__init__(store, "memos", Memo, "Memo")

    def prepare_new(self, memo, items):
        now = utcnow()
        memo.created_date = now
        memo.updated_date = now
        return memo

    def prepare_update(self, current, updates, items):
        return self.merge(current, {**updates, "updated_date": utcnow()})

    async def get_by_patient_id(self, patient_id: str) -> List[Memo]:
        return await self.filter_by("patient.id", patient_id, "Patient ID")

    async def get_by_creator_id(self, creator_id: str) -> List[Memo]:
        return await self.filter_by("creator.id", creator_id, "Creator ID")

    async def get_by_date_range(self, start: datetime, end: datetime) -> List[Memo]:
        if start is None or end is None:
            raise ValidationError("Start date and end date are required")
        start, end = as_utc(start), as_utc(end)
        return await self.filter(
            lambda m: m.created_date is not None and start <= m.created_date <= end
        )

    async def get_recent(self, limit: int = 10) -> List[Memo]:
        """Newest memos first"""
        memos = [m for m in await self.load() if m.created_date is not None]
        memos.sort(key=lambda m: m.created_date, reverse=True)
        return memos[:limit]
