"""
Charge Pydantic schemas for request/response validation
"""

from pydantic import Field, field_validator
from typing import Optional, List
from enum import Enum

from schemas.common import CamelModel, PersonRef, Money, SignedMoney, Timestamp, ZERO


class ChargeStatus(str, Enum):
    PAID = "PAID"
    UNPAID = "UNPAID"
    PARTIALLY_PAID = "PARTIALLY_PAID"
    CANCELLED = "CANCELLED"
    REFUNDED = "REFUNDED"


class AdjustmentType(str, Enum):
    DISCOUNT = "DISCOUNT"
    SURCHARGE = "SURCHARGE"
    INSURANCE_ADJUSTMENT = "INSURANCE_ADJUSTMENT"
    WRITE_OFF = "WRITE_OFF"


class PaymentMedium(str, Enum):
    CARD = "CARD"
    CASH = "CASH"
    CHECK = "CHECK"
    BANK_TRANSFER = "BANK_TRANSFER"
    INSURANCE = "INSURANCE"


class PlannedPaymentStatus(str, Enum):
    SCHEDULED = "SCHEDULED"
    PROCESSED = "PROCESSED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"


class ChargePatient(CamelModel):
    id: str
    first_name: str = ""
    last_name: str = ""
    phone_number: str = ""
    email: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""


class CardSnapshot(CamelModel):
    """Card details copied onto a payment at the time it was taken"""

    id: str
    brand: Optional[str] = None
    last4: Optional[str] = None
    exp_month: Optional[int] = None
    exp_year: Optional[int] = None


class Refund(CamelModel):
    id: str
    amount: Money
    reason: str = ""
    created_date: Optional[Timestamp] = None


class Payment(CamelModel):
    id: str = Field(..., min_length=1)
    amount: Money
    created_date: Optional[Timestamp] = None
    payment_method: Optional[CardSnapshot] = None
    payment_medium: PaymentMedium = PaymentMedium.CARD
    refunds: List[Refund] = []

    @field_validator("amount")
    def _positive_amount(cls, v):
        if v <= ZERO:
            raise ValueError("payment amount must be > 0")
        return v


class Adjustment(CamelModel):
    """
    Signed adjustment. Every amount is subtracted from the charge total, so
    reductions (discounts, write-offs) are positive and surcharges negative.
    """

    id: str = Field(..., min_length=1)
    charge_id: Optional[str] = None
    amount: SignedMoney
    type: AdjustmentType
    description: str = ""
    created_date: Optional[Timestamp] = None


class PlannedPayment(CamelModel):
    id: str
    amount: Money
    payment_date: Timestamp
    status: PlannedPaymentStatus = PlannedPaymentStatus.SCHEDULED


class ChargeItem(CamelModel):
    id: str
    name: str
    description: str = ""
    price: Money
    active: bool = True
    created_date: Optional[Timestamp] = None
    category: str = ""


class ChargeItemEntry(CamelModel):
    item_id: str
    charge_id: Optional[str] = None
    quantity: int = Field(1, ge=1)
    item: Optional[ChargeItem] = None


class Charge(CamelModel):
    id: str
    total: Money
    total_outstanding: Money = ZERO
    description: str
    status: ChargeStatus = ChargeStatus.UNPAID
    patient: ChargePatient
    created_date: Optional[Timestamp] = None
    creator: Optional[PersonRef] = None
    adjustments: List[Adjustment] = []
    payments: List[Payment] = []
    planned_payments: List[PlannedPayment] = []
    comment: Optional[str] = None
    items: List[ChargeItemEntry] = []
    location_id: Optional[str] = None
    location_name: Optional[str] = None


class ChargeUpdate(CamelModel):
    """
    Fields a generic update may touch. The total, payments and status are
    owned by the ledger operations.
    """

    description: Optional[str] = None
    patient: Optional[ChargePatient] = None
    creator: Optional[PersonRef] = None
    adjustments: Optional[List[Adjustment]] = None
    planned_payments: Optional[List[PlannedPayment]] = None
    comment: Optional[str] = None
    items: Optional[List[ChargeItemEntry]] = None
    location_id: Optional[str] = None
    location_name: Optional[str] = None


class ChargeStatusChange(CamelModel):
    status: ChargeStatus
