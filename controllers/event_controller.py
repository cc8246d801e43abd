"""
Event (appointment) controller
"""

from fastapi import APIRouter, Depends, Query
from typing import List, Optional
from datetime import datetime

from database.store import DocumentStore, get_store
from schemas.event import Event, EventUpdate
from services.events import EventService
from utils.exceptions import NotFoundError, ValidationError

router = APIRouter()


def get_events(store: DocumentStore = Depends(get_store)) -> EventService:
    return EventService(store)


@router.post("/", response_model=Event, status_code=201)
async def create_event(event: Event, events: EventService = Depends(get_events)):
    return await events.create(event)


@router.get("/", response_model=List[Event])
async def list_events(
    patient_id: Optional[str] = Query(None, description="Filter by patient ID"),
    provider_id: Optional[str] = Query(None, description="Filter by provider ID"),
    start: Optional[datetime] = Query(None, description="Range start (inclusive)"),
    end: Optional[datetime] = Query(None, description="Range end (inclusive)"),
    events: EventService = Depends(get_events),
):
    """
    List events by patient, provider or start-time range
    """
    if patient_id is not None:
        return await events.get_by_patient_id(patient_id)
    if provider_id is not None:
        return await events.get_by_provider_id(provider_id)
    if start is not None or end is not None:
        if start is None or end is None:
            raise ValidationError("Start date and end date are required")
        return await events.get_by_date_range(start, end)
    return await events.get_all()


@router.get("/{event_id}", response_model=Event)
async def get_event(event_id: str, events: EventService = Depends(get_events)):
    event = await events.get_by_id(event_id)
    if not event:
        raise NotFoundError("Event not found")
    return event


@router.put("/{event_id}", response_model=Event)
async def update_event(
    event_id: str, event_data: EventUpdate, events: EventService = Depends(get_events)
):
    return await events.update(event_id, event_data.model_dump(exclude_unset=True))


@router.delete("/{event_id}")
async def delete_event(event_id: str, events: EventService = Depends(get_events)):
    await events.delete(event_id)
    return {"message": "Event deleted successfully", "event_id": event_id}
