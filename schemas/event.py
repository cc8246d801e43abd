"""
Event (appointment) Pydantic schemas
"""

from typing import Optional, List
from enum import Enum

from schemas.common import CamelModel, PersonRef, Timestamp


class EventType(str, Enum):
    APPOINTMENT = "APPOINTMENT"
    MEETING = "MEETING"
    CONSULTATION = "CONSULTATION"


class EventStatus(str, Enum):
    SCHEDULED = "SCHEDULED"
    CONFIRMED = "CONFIRMED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    NO_SHOW = "NO_SHOW"


class InviteStatus(str, Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    DECLINED = "DECLINED"


class ConfirmationStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"


class AppointmentType(str, Enum):
    NEW_PATIENT = "NEW_PATIENT"
    FOLLOW_UP = "FOLLOW_UP"
    ANNUAL_PHYSICAL = "ANNUAL_PHYSICAL"
    URGENT_CARE = "URGENT_CARE"
    CONSULTATION = "CONSULTATION"


class Attendee(CamelModel):
    user: PersonRef
    invite_status: InviteStatus = InviteStatus.PENDING


class Location(CamelModel):
    id: str
    name: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    country: str = ""
    is_virtual: bool = False
    meeting_link: Optional[str] = None


class Appointment(CamelModel):
    id: str
    event_id: Optional[str] = None
    patient_id: Optional[str] = None
    provider_id: Optional[str] = None
    reason: str = ""
    confirmation_status: ConfirmationStatus = ConfirmationStatus.PENDING
    confirmation_date: Optional[Timestamp] = None
    checked_in_date: Optional[Timestamp] = None
    appointment_type: Optional[AppointmentType] = None


class Event(CamelModel):
    id: str
    title: str
    organizer: Optional[PersonRef] = None
    start: Timestamp
    end: Timestamp
    type: EventType = EventType.APPOINTMENT
    status: EventStatus = EventStatus.SCHEDULED
    meeting_link: Optional[str] = None
    attendees: List[Attendee] = []
    location: Optional[Location] = None
    form_completed: bool = False
    appointment: Optional[Appointment] = None


class EventUpdate(CamelModel):
    title: Optional[str] = None
    organizer: Optional[PersonRef] = None
    start: Optional[Timestamp] = None
    end: Optional[Timestamp] = None
    type: Optional[EventType] = None
    status: Optional[EventStatus] = None
    meeting_link: Optional[str] = None
    attendees: Optional[List[Attendee]] = None
    location: Optional[Location] = None
    form_completed: Optional[bool] = None
    appointment: Optional[Appointment] = None
