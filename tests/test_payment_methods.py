"""
Unit tests for the payment method registry and its single-default rule.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from conftest import make_card
from schemas.payment_method import PaymentMethod
from utils.exceptions import DuplicateError, NotFoundError, ValidationError

pytestmark = pytest.mark.anyio


def card(method_id, patient_id="pat-1", is_default=False) -> PaymentMethod:
    return PaymentMethod.model_validate(make_card(method_id, patient_id, is_default))


async def defaults_for(registry, patient_id):
    return [m.id for m in await registry.get_by_patient_id(patient_id) if m.is_default]


class TestCreate:
    async def test_new_default_clears_previous_default(self, registry):
        await registry.create(card("pm-a", is_default=True))
        await registry.create(card("pm-b", is_default=True))

        a = await registry.get_by_id("pm-a")
        b = await registry.get_by_id("pm-b")
        assert a.is_default is False
        assert b.is_default is True

    async def test_non_default_leaves_existing_default(self, registry):
        await registry.create(card("pm-a", is_default=True))
        await registry.create(card("pm-b"))

        assert await defaults_for(registry, "pat-1") == ["pm-a"]

    async def test_other_patients_are_untouched(self, registry):
        await registry.create(card("pm-a", patient_id="pat-1", is_default=True))
        await registry.create(card("pm-x", patient_id="pat-2", is_default=True))

        assert await defaults_for(registry, "pat-1") == ["pm-a"]
        assert await defaults_for(registry, "pat-2") == ["pm-x"]

    async def test_duplicate_id(self, registry, store):
        await registry.create(card("pm-a"))
        before = await store.read("payment_methods")

        with pytest.raises(DuplicateError):
            await registry.create(card("pm-a", is_default=True))

        assert await store.read("payment_methods") == before

    async def test_missing_description(self, registry):
        method = card("pm-a")
        method.description = ""

        with pytest.raises(ValidationError):
            await registry.create(method)

    async def test_card_cannot_carry_bank_fields(self):
        data = make_card("pm-a")
        data["bankName"] = "First Bank"

        with pytest.raises(PydanticValidationError):
            PaymentMethod.model_validate(data)

    async def test_bank_account_accepts_numeric_fields(self):
        method = PaymentMethod.model_validate(
            {
                "id": "pm-bank",
                "patientId": "pat-1",
                "type": "BANK_ACCOUNT",
                "description": "Checking",
                "accountHolderType": "individual",
                "accountNumberLast4": 6789,
                "bankName": "First Bank",
                "routingNumber": 110000000,
                "isDefault": False,
            }
        )
        assert method.account_number_last4 == "6789"
        assert method.brand is None


class TestUpdate:
    async def test_raising_flag_clears_siblings(self, registry):
        await registry.create(card("pm-a", is_default=True))
        await registry.create(card("pm-b"))

        updated = await registry.update("pm-b", {"is_default": True})

        assert updated.is_default is True
        assert await defaults_for(registry, "pat-1") == ["pm-b"]

    async def test_plain_update_keeps_flags(self, registry):
        await registry.create(card("pm-a", is_default=True))

        updated = await registry.update("pm-a", {"description": "Work card"})

        assert updated.description == "Work card"
        assert updated.is_default is True

    async def test_switching_type_requires_clearing_other_group(self, registry):
        await registry.create(card("pm-a"))

        with pytest.raises(ValidationError):
            await registry.update("pm-a", {"type": "BANK_ACCOUNT"})

    async def test_owner_cannot_change(self, registry):
        await registry.create(card("pm-a"))

        with pytest.raises(ValidationError):
            await registry.update("pm-a", {"patient_id": "pat-2"})

    async def test_unknown_id(self, registry):
        with pytest.raises(NotFoundError):
            await registry.update("missing", {"is_default": True})

    async def test_camel_case_flag_clears_siblings(self, registry):
        await registry.create(card("pm-a", is_default=True))
        await registry.create(card("pm-b"))

        updated = await registry.update("pm-b", {"isDefault": True})

        assert updated.is_default is True
        assert await defaults_for(registry, "pat-1") == ["pm-b"]

    async def test_camel_case_owner_cannot_change(self, registry, store):
        await registry.create(card("pm-a", is_default=True))
        before = await store.read("payment_methods")

        with pytest.raises(ValidationError):
            await registry.update("pm-a", {"patientId": "pat-2"})

        assert await store.read("payment_methods") == before
        assert await defaults_for(registry, "pat-2") == []


class TestSetDefault:
    async def test_set_default_is_exclusive(self, registry):
        for method_id in ("pm-a", "pm-b", "pm-c"):
            await registry.create(card(method_id, is_default=method_id == "pm-a"))

        result = await registry.set_default("pm-c")

        assert result.id == "pm-c"
        assert result.is_default is True
        assert await defaults_for(registry, "pat-1") == ["pm-c"]

    async def test_set_default_unknown_id(self, registry, store):
        await registry.create(card("pm-a", is_default=True))
        before = await store.read("payment_methods")

        with pytest.raises(NotFoundError):
            await registry.set_default("missing")

        assert await store.read("payment_methods") == before

    async def test_invariant_over_mixed_sequence(self, registry):
        await registry.create(card("pm-a", is_default=True))
        await registry.create(card("pm-b", is_default=True))
        await registry.update("pm-a", {"is_default": True})
        await registry.set_default("pm-b")
        await registry.create(card("pm-c", is_default=True))
        await registry.update("pm-c", {"description": "Renamed"})

        assert await defaults_for(registry, "pat-1") == ["pm-c"]


class TestGetDefault:
    async def test_returns_default(self, registry):
        await registry.create(card("pm-a"))
        await registry.create(card("pm-b", is_default=True))

        default = await registry.get_default("pat-1")

        assert default.id == "pm-b"

    async def test_none_when_no_default(self, registry):
        await registry.create(card("pm-a"))

        assert await registry.get_default("pat-1") is None

    async def test_requires_patient_id(self, registry):
        with pytest.raises(ValidationError):
            await registry.get_default("")
