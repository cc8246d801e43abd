"""
Payment method controller
"""

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from database.store import DocumentStore, get_store
from schemas.payment_method import PaymentMethod, PaymentMethodUpdate
from services.payment_methods import PaymentMethodRegistry
from utils.exceptions import NotFoundError

router = APIRouter()


def get_registry(store: DocumentStore = Depends(get_store)) -> PaymentMethodRegistry:
    return PaymentMethodRegistry(store)


@router.post("/", response_model=PaymentMethod, status_code=201)
async def create_payment_method(
    method: PaymentMethod, registry: PaymentMethodRegistry = Depends(get_registry)
):
    """
    Store a payment method; a new default replaces the patient's old one
    """
    return await registry.create(method)


@router.get("/", response_model=List[PaymentMethod])
async def list_payment_methods(
    patient_id: Optional[str] = Query(None, description="Filter by patient ID"),
    registry: PaymentMethodRegistry = Depends(get_registry),
):
    if patient_id is not None:
        return await registry.get_by_patient_id(patient_id)
    return await registry.get_all()


@router.get("/default/{patient_id}", response_model=Optional[PaymentMethod])
async def get_default_payment_method(
    patient_id: str, registry: PaymentMethodRegistry = Depends(get_registry)
):
    """
    The patient's default method, or null when none is set
    """
    return await registry.get_default(patient_id)


@router.get("/{method_id}", response_model=PaymentMethod)
async def get_payment_method(
    method_id: str, registry: PaymentMethodRegistry = Depends(get_registry)
):
    method = await registry.get_by_id(method_id)
    if not method:
        raise NotFoundError("Payment method not found")
    return method


@router.put("/{method_id}", response_model=PaymentMethod)
async def update_payment_method(
    method_id: str,
    method_data: PaymentMethodUpdate,
    registry: PaymentMethodRegistry = Depends(get_registry),
):
    return await registry.update(method_id, method_data.model_dump(exclude_unset=True))


@router.post("/{method_id}/default", response_model=PaymentMethod)
async def set_default_payment_method(
    method_id: str, registry: PaymentMethodRegistry = Depends(get_registry)
):
    return await registry.set_default(method_id)


@router.delete("/{method_id}")
async def delete_payment_method(
    method_id: str, registry: PaymentMethodRegistry = Depends(get_registry)
):
    await registry.delete(method_id)
    return {
        "message": "Payment method deleted successfully",
        "payment_method_id": method_id,
    }
