"""
Charge ledger: payments, adjustments and outstanding balance

The outstanding balance of a charge is always
    max(0, total - sum(adjustments.amount) - sum(payments.amount))
and is recomputed whenever any of its inputs change. Planned payments are
not counted until something records them as real payments.
"""

import logging
from typing import Any, Dict, List, Optional

from database.store import DocumentStore
from schemas.charge import Adjustment, Charge, ChargeStatus, Payment
from schemas.common import ZERO, utcnow
from services.collection import Collection, require_key
from utils.exceptions import DuplicateError, ValidationError

logger = logging.getLogger(__name__)

MANUAL_STATUSES = (ChargeStatus.CANCELLED, ChargeStatus.REFUNDED)


def outstanding_balance(charge: Charge):
    total_paid = sum((p.amount for p in charge.payments), ZERO)
    total_adjustments = sum((a.amount for a in charge.adjustments), ZERO)
    return max(ZERO, charge.total - total_adjustments - total_paid)


def recompute(charge: Charge) -> Charge:
    """
    Refresh the derived balance and the payment-driven status.
    Status only moves when the balance is cleared or something has been paid.
    """
    total_paid = sum((p.amount for p in charge.payments), ZERO)
    charge.total_outstanding = outstanding_balance(charge)

    if charge.total_outstanding == ZERO:
        charge.status = ChargeStatus.PAID
    elif total_paid > ZERO:
        charge.status = ChargeStatus.PARTIALLY_PAID
    return charge


class ChargeLedger(Collection[Charge]):
    required_fields = ("id", "description", "patient.id")
    immutable_fields = ("id", "total", "total_outstanding", "payments", "status")

    def __init__(self, store: DocumentStore):
        super().__init__(store, "charges", Charge, "Charge")

    # --- creation / generic updates -----------------------------------------

    def prepare_new(self, charge: Charge, items: List[Charge]) -> Charge:
        if charge.created_date is None:
            charge.created_date = utcnow()
        charge.total_outstanding = outstanding_balance(charge)
        return charge

    async def create_charge(self, charge: Charge) -> Charge:
        return await self.create(charge)

    def prepare_update(
        self, current: Charge, updates: Dict[str, Any], items: List[Charge]
    ) -> Charge:
        updated = self.merge(current, updates)
        if "adjustments" in updates:
            return recompute(updated)
        updated.total_outstanding = outstanding_balance(updated)
        return updated

    async def update_charge(self, charge_id: str, updates: Dict[str, Any]) -> Charge:
        return await self.update(charge_id, updates)

    async def delete_charge(self, charge_id: str) -> Charge:
        return await self.delete(charge_id)

    # --- ledger operations ---------------------------------------------------

    async def apply_payment(self, charge_id: str, payment: Payment) -> Charge:
        """
        Record a payment against a charge and recompute balance and status.
        Replaying a payment id that is already recorded changes nothing.
        """
        require_key(charge_id, "Charge ID")
        payment = payment.model_copy(deep=True)
        async with self.mutate() as items:
            index = self.index_of(items, charge_id)
            charge = items[index]

            if any(p.id == payment.id for p in charge.payments):
                logger.warning(
                    f"Payment {payment.id} already applied to charge {charge_id}"
                )
                return charge

            if payment.created_date is None:
                payment.created_date = utcnow()
            charge.payments.append(payment)
            items[index] = recompute(charge)

        logger.info(
            f"Applied payment {payment.id} ({payment.amount}) to charge {charge_id}; "
            f"outstanding {charge.total_outstanding}, status {charge.status.value}"
        )
        return charge

    async def apply_adjustment(self, charge_id: str, adjustment: Adjustment) -> Charge:
        require_key(charge_id, "Charge ID")
        adjustment = adjustment.model_copy(deep=True)
        async with self.mutate() as items:
            index = self.index_of(items, charge_id)
            charge = items[index]

            if any(a.id == adjustment.id for a in charge.adjustments):
                raise DuplicateError("Adjustment with this ID already exists")

            adjustment.charge_id = charge_id
            if adjustment.created_date is None:
                adjustment.created_date = utcnow()
            charge.adjustments.append(adjustment)
            items[index] = recompute(charge)

        logger.info(
            f"Applied {adjustment.type.value} adjustment {adjustment.id} to charge "
            f"{charge_id}; outstanding {charge.total_outstanding}"
        )
        return charge

    async def set_status(self, charge_id: str, status: ChargeStatus) -> Charge:
        """Administrative transition to CANCELLED or REFUNDED"""
        if status not in MANUAL_STATUSES:
            raise ValidationError(
                f"Status {status.value} is derived from payments and cannot be set"
            )
        require_key(charge_id, "Charge ID")
        async with self.mutate() as items:
            index = self.index_of(items, charge_id)
            items[index].status = status
            charge = items[index]
        logger.info(f"Charge {charge_id} marked {status.value}")
        return charge

    # --- queries -------------------------------------------------------------

    async def get_charge_by_id(self, charge_id: str) -> Optional[Charge]:
        return await self.get_by_id(charge_id)

    async def get_by_patient_id(self, patient_id: str) -> List[Charge]:
        return await self.filter_by("patient.id", patient_id, "Patient ID")

    async def get_by_status(self, status: Optional[ChargeStatus]) -> List[Charge]:
        require_key(status, "Status")
        return await self.filter(lambda c: c.status == status)

    async def get_by_creator(self, creator_id: str) -> List[Charge]:
        return await self.filter_by("creator.id", creator_id, "Creator ID")

    async def get_by_location(self, location_id: str) -> List[Charge]:
        return await self.filter_by("location_id", location_id, "Location ID")

    async def get_outstanding(self) -> List[Charge]:
        return await self.filter(lambda c: c.total_outstanding > ZERO)
