"""
Patient management controller
"""

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from database.store import DocumentStore, get_store
from schemas.patient import Patient, PatientUpdate
from services.patients import PatientService
from utils.exceptions import NotFoundError

router = APIRouter()


def get_patients(store: DocumentStore = Depends(get_store)) -> PatientService:
    return PatientService(store)


@router.post("/", response_model=Patient, status_code=201)
async def create_patient(
    patient: Patient, patients: PatientService = Depends(get_patients)
):
    """
    Create a new patient record
    """
    return await patients.create(patient)


@router.get("/", response_model=List[Patient])
async def list_patients(
    search: Optional[str] = Query(None, description="Search by name"),
    patients: PatientService = Depends(get_patients),
):
    """
    List patients with optional name search
    """
    if search:
        needle = search.lower()
        return await patients.filter(
            lambda p: needle in f"{p.first_name} {p.last_name}".lower()
        )
    return await patients.get_all()


@router.get("/{patient_id}", response_model=Patient)
async def get_patient(patient_id: str, patients: PatientService = Depends(get_patients)):
    """
    Get patient details by ID
    """
    patient = await patients.get_by_id(patient_id)
    if not patient:
        raise NotFoundError("Patient not found")
    return patient


@router.put("/{patient_id}", response_model=Patient)
async def update_patient(
    patient_id: str,
    patient_data: PatientUpdate,
    patients: PatientService = Depends(get_patients),
):
    """
    Update patient information
    """
    return await patients.update(patient_id, patient_data.model_dump(exclude_unset=True))


@router.delete("/{patient_id}")
async def delete_patient(
    patient_id: str, patients: PatientService = Depends(get_patients)
):
    await patients.delete(patient_id)
    return {"message": "Patient deleted successfully", "patient_id": patient_id}
