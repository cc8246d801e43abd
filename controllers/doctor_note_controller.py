"""
Doctor note controller, including AI drafting
"""

from fastapi import APIRouter, Depends, Query
from fastapi.concurrency import run_in_threadpool
from typing import List, Optional

from agents.note_writer import generate_doctor_note
from database.store import DocumentStore, get_store
from schemas.doctor_note import (
    DoctorNote,
    DoctorNoteUpdate,
    GeneratedNote,
    GenerateNoteRequest,
)
from services.doctor_notes import DoctorNoteService
from utils.exceptions import NotFoundError

router = APIRouter()


def get_notes(store: DocumentStore = Depends(get_store)) -> DoctorNoteService:
    return DoctorNoteService(store)


@router.post("/", response_model=DoctorNote, status_code=201)
async def create_doctor_note(
    note: DoctorNote, notes: DoctorNoteService = Depends(get_notes)
):
    return await notes.create(note)


@router.post("/generate", response_model=GeneratedNote)
async def generate_note(request: GenerateNoteRequest):
    """
    Draft a note and summary from patient and appointment details.
    Nothing is stored; the client saves the note once reviewed.
    """
    return await run_in_threadpool(
        generate_doctor_note, request.patient, request.appointment_data
    )


@router.get("/", response_model=List[DoctorNote])
async def list_doctor_notes(
    patient_id: Optional[str] = Query(None, description="Filter by patient ID"),
    event_id: Optional[str] = Query(None, description="Filter by event ID"),
    provider: Optional[str] = Query(None, description="Filter by provider name"),
    notes: DoctorNoteService = Depends(get_notes),
):
    if patient_id is not None:
        return await notes.get_by_patient_id(patient_id)
    if event_id is not None:
        return await notes.get_by_event_id(event_id)
    if provider is not None:
        return await notes.get_by_provider(provider)
    return await notes.get_all()


@router.get("/{note_id}", response_model=DoctorNote)
async def get_doctor_note(note_id: str, notes: DoctorNoteService = Depends(get_notes)):
    note = await notes.get_by_id(note_id)
    if not note:
        raise NotFoundError("Doctor note not found")
    return note


@router.put("/{note_id}", response_model=DoctorNote)
async def update_doctor_note(
    note_id: str,
    note_data: DoctorNoteUpdate,
    notes: DoctorNoteService = Depends(get_notes),
):
    return await notes.update(note_id, note_data.model_dump(exclude_unset=True))


@router.delete("/{note_id}")
async def delete_doctor_note(
    note_id: str, notes: DoctorNoteService = Depends(get_notes)
):
    await notes.delete(note_id)
    return {"message": "Doctor note deleted successfully", "note_id": note_id}
