"""
Payment method Pydantic schemas
"""

from pydantic import ConfigDict, model_validator
from typing import Optional
from enum import Enum

from schemas.common import CamelModel

CARD_FIELDS = ("brand", "last4", "exp_month", "exp_year")
BANK_FIELDS = (
    "account_holder_type",
    "account_number_last4",
    "bank_name",
    "routing_number",
)


class PaymentMethodType(str, Enum):
    CARD = "CARD"
    BANK_ACCOUNT = "BANK_ACCOUNT"


class PaymentMethod(CamelModel):
    # bank numbers may be stored as JSON numbers
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str
    patient_id: str
    type: PaymentMethodType
    description: str
    is_default: bool = False

    # For cards only
    brand: Optional[str] = None
    last4: Optional[str] = None
    exp_month: Optional[int] = None
    exp_year: Optional[int] = None

    # For bank accounts only
    account_holder_type: Optional[str] = None
    account_number_last4: Optional[str] = None
    bank_name: Optional[str] = None
    routing_number: Optional[str] = None

    @model_validator(mode="after")
    def _one_field_group(self):
        other = BANK_FIELDS if self.type == PaymentMethodType.CARD else CARD_FIELDS
        populated = [name for name in other if getattr(self, name) is not None]
        if populated:
            raise ValueError(
                f"{self.type.value} payment method cannot set {', '.join(populated)}"
            )
        return self


class PaymentMethodUpdate(CamelModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    type: Optional[PaymentMethodType] = None
    description: Optional[str] = None
    is_default: Optional[bool] = None
    brand: Optional[str] = None
    last4: Optional[str] = None
    exp_month: Optional[int] = None
    exp_year: Optional[int] = None
    account_holder_type: Optional[str] = None
    account_number_last4: Optional[str] = None
    bank_name: Optional[str] = None
    routing_number: Optional[str] = None
