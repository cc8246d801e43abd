"""
Charge ledger controller
"""

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from database.store import DocumentStore, get_store
from schemas.charge import (
    Adjustment,
    Charge,
    ChargeStatus,
    ChargeStatusChange,
    ChargeUpdate,
    Payment,
)
from services.charge_ledger import ChargeLedger
from utils.exceptions import NotFoundError

router = APIRouter()


def get_ledger(store: DocumentStore = Depends(get_store)) -> ChargeLedger:
    return ChargeLedger(store)


@router.post("/", response_model=Charge, status_code=201)
async def create_charge(charge: Charge, ledger: ChargeLedger = Depends(get_ledger)):
    """
    Create a new charge
    """
    return await ledger.create_charge(charge)


@router.get("/", response_model=List[Charge])
async def list_charges(
    patient_id: Optional[str] = Query(None, description="Filter by patient ID"),
    status: Optional[ChargeStatus] = Query(None, description="Filter by status"),
    creator_id: Optional[str] = Query(None, description="Filter by creator"),
    location_id: Optional[str] = Query(None, description="Filter by location"),
    ledger: ChargeLedger = Depends(get_ledger),
):
    """
    List charges, optionally narrowed by one filter
    """
    if patient_id is not None:
        return await ledger.get_by_patient_id(patient_id)
    if status is not None:
        return await ledger.get_by_status(status)
    if creator_id is not None:
        return await ledger.get_by_creator(creator_id)
    if location_id is not None:
        return await ledger.get_by_location(location_id)
    return await ledger.get_all()


@router.get("/outstanding", response_model=List[Charge])
async def list_outstanding_charges(ledger: ChargeLedger = Depends(get_ledger)):
    """
    Charges with a balance still to collect
    """
    return await ledger.get_outstanding()


@router.get("/{charge_id}", response_model=Charge)
async def get_charge(charge_id: str, ledger: ChargeLedger = Depends(get_ledger)):
    charge = await ledger.get_charge_by_id(charge_id)
    if not charge:
        raise NotFoundError("Charge not found")
    return charge


@router.put("/{charge_id}", response_model=Charge)
async def update_charge(
    charge_id: str,
    charge_data: ChargeUpdate,
    ledger: ChargeLedger = Depends(get_ledger),
):
    """
    Update charge details; the outstanding balance is recomputed
    """
    return await ledger.update_charge(
        charge_id, charge_data.model_dump(exclude_unset=True)
    )


@router.post("/{charge_id}/payments", response_model=Charge)
async def add_payment(
    charge_id: str, payment: Payment, ledger: ChargeLedger = Depends(get_ledger)
):
    """
    Record a payment and recompute balance and status
    """
    return await ledger.apply_payment(charge_id, payment)


@router.post("/{charge_id}/adjustments", response_model=Charge)
async def add_adjustment(
    charge_id: str, adjustment: Adjustment, ledger: ChargeLedger = Depends(get_ledger)
):
    return await ledger.apply_adjustment(charge_id, adjustment)


@router.post("/{charge_id}/status", response_model=Charge)
async def change_charge_status(
    charge_id: str,
    change: ChargeStatusChange,
    ledger: ChargeLedger = Depends(get_ledger),
):
    """
    Cancel or refund a charge
    """
    return await ledger.set_status(charge_id, change.status)


@router.delete("/{charge_id}")
async def delete_charge(charge_id: str, ledger: ChargeLedger = Depends(get_ledger)):
    await ledger.delete_charge(charge_id)
    return {"message": "Charge deleted successfully", "charge_id": charge_id}
