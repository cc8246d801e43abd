"""
Shared schema base classes and money handling
"""

from pydantic import (
    BaseModel,
    ConfigDict,
    AfterValidator,
    BeforeValidator,
    PlainSerializer,
)
from pydantic.alias_generators import to_camel
from typing import Annotated
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation

# Configurable rules:
MAX_DIGITS = 10  # total digits (integer + fractional) allowed
DECIMAL_PLACES = 2  # decimal places to quantize to
QUANT = Decimal("0.01")  # Decimal('0.01') for 2 places

ZERO = Decimal("0.00")


def _to_decimal(value, allow_negative: bool) -> Decimal:
    """
    Convert input to Decimal, quantize to DECIMAL_PLACES and enforce max digits.
    Accepts str, int, float, Decimal.
    """
    if value is None:
        return value
    try:
        d = Decimal(str(value))
    except (InvalidOperation, TypeError):
        raise ValueError("value is not a valid decimal")

    if not d.is_finite():
        raise ValueError("value is not a valid decimal")

    # round / quantize to required decimal places
    d = d.quantize(QUANT, rounding=ROUND_HALF_UP)

    if not allow_negative and d < ZERO:
        raise ValueError("value must be >= 0")

    # check total digits (remove sign and decimal point)
    s = f"{d:.{DECIMAL_PLACES}f}".replace("-", "").replace(".", "")
    if len(s) > MAX_DIGITS:
        raise ValueError(f"value has too many digits (max {MAX_DIGITS})")

    return d


_as_json_number = PlainSerializer(float, return_type=float, when_used="json")

# Non-negative amount, e.g. a charge total or a payment
Money = Annotated[
    Decimal, BeforeValidator(lambda v: _to_decimal(v, False)), _as_json_number
]

# Signed amount, used for adjustments
SignedMoney = Annotated[
    Decimal, BeforeValidator(lambda v: _to_decimal(v, True)), _as_json_number
]


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase JSON"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_document(self) -> dict:
        """JSON-ready dict in the persisted camelCase shape"""
        return self.model_dump(mode="json", by_alias=True)


class PersonRef(CamelModel):
    """A user or provider copied by value into another aggregate"""

    id: str
    first_name: str = ""
    last_name: str = ""
    email: str = ""


def as_utc(value: datetime) -> datetime:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# Naive timestamps are taken as UTC so they compare with aware ones
Timestamp = Annotated[datetime, AfterValidator(as_utc)]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
