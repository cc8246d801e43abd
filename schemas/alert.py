"""
Alert Pydantic schemas
"""

from typing import Optional, List, Dict, Any
from enum import Enum

from schemas.common import CamelModel, PersonRef, Timestamp


class AlertType(str, Enum):
    FORM_SUBMITTED = "FORM_SUBMITTED"
    APPOINTMENT_SCHEDULED = "APPOINTMENT_SCHEDULED"
    MESSAGE_RECEIVED = "MESSAGE_RECEIVED"


class AlertTag(CamelModel):
    id: str
    name: str


class AlertPatient(CamelModel):
    id: str
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone_number: str = ""


class Alert(CamelModel):
    id: str
    type: AlertType
    # Shape depends on `type`; stored as received
    data: Dict[str, Any] = {}
    created_date: Optional[Timestamp] = None
    action_required: bool = True
    resolved_date: Optional[Timestamp] = None
    tags: List[AlertTag] = []
    assigned_provider: Optional[PersonRef] = None
    resolving_provider: Optional[PersonRef] = None
    occurrences: int = 1
    patient: AlertPatient


class AlertUpdate(CamelModel):
    data: Optional[Dict[str, Any]] = None
    action_required: Optional[bool] = None
    tags: Optional[List[AlertTag]] = None
    assigned_provider: Optional[PersonRef] = None
    occurrences: Optional[int] = None


class ResolveAlertRequest(CamelModel):
    resolving_provider_id: str
