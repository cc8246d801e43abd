"""
Clinical memo Pydantic schemas
"""

from typing import Optional

from schemas.common import CamelModel, PersonRef, Timestamp


class MemoPatient(CamelModel):
    id: str
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone_number: str = ""


class Memo(CamelModel):
    id: str
    patient: MemoPatient
    note: str
    creator: PersonRef
    created_date: Optional[Timestamp] = None
    updated_date: Optional[Timestamp] = None


class MemoUpdate(CamelModel):
    note: Optional[str] = None
