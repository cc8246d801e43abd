"""
Unit tests for the patient, event, memo, doctor note and alert services.
"""

from datetime import datetime, timedelta, timezone

import pytest

from schemas.alert import Alert, AlertType
from schemas.doctor_note import DoctorNote
from schemas.event import Event
from schemas.memo import Memo
from schemas.patient import Patient
from services.alerts import AlertService
from services.doctor_notes import DoctorNoteService
from services.events import EventService
from services.memos import MemoService
from services.patients import PatientService
from utils.exceptions import DuplicateError, NotFoundError, ValidationError

pytestmark = pytest.mark.anyio

JAN_10 = datetime(2025, 1, 10, 9, 0, tzinfo=timezone.utc)


def make_event(event_id, start, patient_id="pat-1", provider_id="prov-1"):
    return Event.model_validate(
        {
            "id": event_id,
            "title": "Follow-up",
            "start": start.isoformat(),
            "end": (start + timedelta(minutes=30)).isoformat(),
            "appointment": {
                "id": f"appt-{event_id}",
                "patientId": patient_id,
                "providerId": provider_id,
                "reason": "Blood pressure check",
            },
        }
    )


def make_memo(memo_id, patient_id="pat-1", creator_id="usr-1"):
    return Memo.model_validate(
        {
            "id": memo_id,
            "note": "Called about lab results",
            "patient": {"id": patient_id, "firstName": "Ada"},
            "creator": {"id": creator_id, "firstName": "Lena"},
        }
    )


def make_alert(alert_id, provider_id="prov-1", tags=()):
    return Alert.model_validate(
        {
            "id": alert_id,
            "type": "FORM_SUBMITTED",
            "data": {"formId": "intake"},
            "patient": {"id": "pat-1", "firstName": "Ada"},
            "assignedProvider": {"id": provider_id, "firstName": "Sam"},
            "tags": [{"id": f"tag-{n}", "name": name} for n, name in enumerate(tags)],
        }
    )


class TestPatients:
    @pytest.fixture
    def patients(self, store):
        return PatientService(store)

    async def test_create_stamps_created_date(self, patients):
        created = await patients.create(
            Patient(id="pat-1", first_name="Ada", last_name="Moss")
        )
        assert created.created_date is not None

    async def test_stored_in_camel_case(self, patients, store):
        await patients.create(
            Patient(id="pat-1", first_name="Ada", last_name="Moss", zip_code="02139")
        )

        stored = (await store.read("patients"))[0]
        assert stored["firstName"] == "Ada"
        assert stored["zipCode"] == "02139"

    async def test_missing_last_name(self, patients):
        with pytest.raises(ValidationError):
            await patients.create(Patient(id="pat-1", first_name="Ada", last_name=""))

    async def test_duplicate(self, patients):
        await patients.create(Patient(id="pat-1", first_name="Ada", last_name="Moss"))
        with pytest.raises(DuplicateError):
            await patients.create(
                Patient(id="pat-1", first_name="Other", last_name="Person")
            )

    async def test_update_and_delete(self, patients):
        await patients.create(Patient(id="pat-1", first_name="Ada", last_name="Moss"))

        updated = await patients.update("pat-1", {"city": "Boston"})
        assert updated.city == "Boston"
        assert updated.first_name == "Ada"

        await patients.delete("pat-1")
        assert await patients.get_by_id("pat-1") is None
        with pytest.raises(NotFoundError):
            await patients.delete("pat-1")

    async def test_update_accepts_camel_case_keys(self, patients, store):
        await patients.create(Patient(id="pat-1", first_name="Ada", last_name="Moss"))

        updated = await patients.update(
            "pat-1", {"zipCode": "02139", "city": "Boston"}
        )

        assert updated.zip_code == "02139"
        assert (await store.read("patients"))[0]["zipCode"] == "02139"

    async def test_id_is_immutable(self, patients):
        await patients.create(Patient(id="pat-1", first_name="Ada", last_name="Moss"))
        with pytest.raises(ValidationError):
            await patients.update("pat-1", {"id": "pat-2"})


class TestEvents:
    @pytest.fixture
    async def events(self, store):
        service = EventService(store)
        await service.create(make_event("evt-1", JAN_10))
        await service.create(
            make_event("evt-2", JAN_10 + timedelta(days=5), patient_id="pat-2")
        )
        await service.create(
            make_event("evt-3", JAN_10 + timedelta(days=20), provider_id="prov-2")
        )
        return service

    async def test_by_patient(self, events):
        assert [e.id for e in await events.get_by_patient_id("pat-1")] == [
            "evt-1",
            "evt-3",
        ]

    async def test_by_provider(self, events):
        assert [e.id for e in await events.get_by_provider_id("prov-2")] == ["evt-3"]

    async def test_date_range_is_inclusive(self, events):
        found = await events.get_by_date_range(JAN_10, JAN_10 + timedelta(days=5))
        assert [e.id for e in found] == ["evt-1", "evt-2"]

    async def test_naive_range_bounds_are_utc(self, events):
        found = await events.get_by_date_range(
            datetime(2025, 1, 25), datetime(2025, 2, 1)
        )
        assert [e.id for e in found] == ["evt-3"]

    async def test_date_range_requires_both_bounds(self, events):
        with pytest.raises(ValidationError):
            await events.get_by_date_range(JAN_10, None)

    async def test_event_without_appointment_is_skipped(self, store):
        service = EventService(store)
        await service.create(
            Event(id="evt-x", title="Staff meeting", start=JAN_10, end=JAN_10)
        )
        assert await service.get_by_patient_id("pat-1") == []


class TestMemos:
    @pytest.fixture
    def memos(self, store):
        return MemoService(store)

    async def test_create_stamps_both_dates(self, memos):
        created = await memos.create(make_memo("memo-1"))

        assert created.created_date is not None
        assert created.updated_date == created.created_date

    async def test_update_refreshes_updated_date(self, memos):
        created = await memos.create(make_memo("memo-1"))

        updated = await memos.update("memo-1", {"note": "Results reviewed"})

        assert updated.note == "Results reviewed"
        assert updated.created_date == created.created_date
        assert updated.updated_date >= created.updated_date

    async def test_creator_is_immutable(self, memos):
        await memos.create(make_memo("memo-1"))
        with pytest.raises(ValidationError):
            await memos.update("memo-1", {"creator": {"id": "usr-9"}})

    @pytest.mark.parametrize(
        "updates",
        [
            {"createdDate": "2020-01-01T00:00:00Z"},
            {"patient": {"id": "pat-9"}},
        ],
    )
    async def test_camel_case_keys_hit_the_same_guard(self, memos, updates):
        created = await memos.create(make_memo("memo-1"))

        with pytest.raises(ValidationError):
            await memos.update("memo-1", updates)

        stored = await memos.get_by_id("memo-1")
        assert stored.created_date == created.created_date
        assert stored.patient.id == "pat-1"

    async def test_queries(self, memos):
        await memos.create(make_memo("memo-1"))
        await memos.create(make_memo("memo-2", patient_id="pat-2", creator_id="usr-2"))
        await memos.create(make_memo("memo-3", creator_id="usr-2"))

        assert [m.id for m in await memos.get_by_patient_id("pat-1")] == [
            "memo-1",
            "memo-3",
        ]
        assert [m.id for m in await memos.get_by_creator_id("usr-2")] == [
            "memo-2",
            "memo-3",
        ]
        now = datetime.now(timezone.utc)
        in_range = await memos.get_by_date_range(
            now - timedelta(hours=1), now + timedelta(hours=1)
        )
        assert len(in_range) == 3

    async def test_recent_is_newest_first(self, store):
        store_data = [
            make_memo(f"memo-{n}").model_copy(
                update={"created_date": JAN_10 + timedelta(days=n)}
            )
            for n in range(4)
        ]
        await store.write("memos", [m.to_document() for m in store_data])

        recent = await MemoService(store).get_recent(limit=2)

        assert [m.id for m in recent] == ["memo-3", "memo-2"]


class TestDoctorNotes:
    @pytest.fixture
    def notes(self, store):
        return DoctorNoteService(store)

    def note(self, note_id, event_id="evt-1", providers=("Dr. Reyes",)):
        return DoctorNote.model_validate(
            {
                "id": note_id,
                "eventId": event_id,
                "content": "SOAP note",
                "patient": {"id": "pat-1", "firstName": "Ada"},
                "providerNames": list(providers),
            }
        )

    async def test_queries(self, notes):
        await notes.create(self.note("note-1"))
        await notes.create(self.note("note-2", event_id="evt-2", providers=("Dr. Kim",)))

        assert [n.id for n in await notes.get_by_patient_id("pat-1")] == [
            "note-1",
            "note-2",
        ]
        assert [n.id for n in await notes.get_by_event_id("evt-2")] == ["note-2"]
        assert [n.id for n in await notes.get_by_provider("Dr. Reyes")] == ["note-1"]

    async def test_content_is_required(self, notes):
        empty = self.note("note-1").model_copy(update={"content": ""})
        with pytest.raises(ValidationError):
            await notes.create(empty)

    async def test_ai_flag_is_immutable(self, notes):
        await notes.create(self.note("note-1"))
        with pytest.raises(ValidationError):
            await notes.update("note-1", {"ai_generated": True})


class TestAlerts:
    @pytest.fixture
    def alerts(self, store):
        return AlertService(store)

    async def test_resolve_by_assigned_provider(self, alerts):
        await alerts.create(make_alert("alert-1"))

        resolved = await alerts.resolve("alert-1", "prov-1")

        assert resolved.resolved_date is not None
        assert resolved.resolving_provider.id == "prov-1"
        assert resolved.action_required is False
        assert [a.id for a in await alerts.get_resolved()] == ["alert-1"]
        assert await alerts.get_requiring_action() == []

    async def test_resolve_by_other_provider_is_rejected(self, alerts, store):
        await alerts.create(make_alert("alert-1"))
        before = await store.read("alerts")

        with pytest.raises(ValidationError):
            await alerts.resolve("alert-1", "prov-9")

        assert await store.read("alerts") == before

    async def test_resolve_unknown_alert(self, alerts):
        with pytest.raises(NotFoundError):
            await alerts.resolve("missing", "prov-1")

    async def test_reopen(self, alerts):
        await alerts.create(make_alert("alert-1"))
        await alerts.resolve("alert-1", "prov-1")

        reopened = await alerts.reopen("alert-1")

        assert reopened.resolved_date is None
        assert reopened.resolving_provider is None
        assert [a.id for a in await alerts.get_requiring_action()] == ["alert-1"]

    async def test_queries(self, alerts):
        await alerts.create(make_alert("alert-1", tags=("urgent",)))
        await alerts.create(make_alert("alert-2", provider_id="prov-2"))

        assert [a.id for a in await alerts.get_by_tag("urgent")] == ["alert-1"]
        assert [a.id for a in await alerts.get_by_assigned_provider("prov-2")] == [
            "alert-2"
        ]
        assert len(await alerts.get_by_type(AlertType.FORM_SUBMITTED)) == 2
        assert await alerts.get_by_type(AlertType.MESSAGE_RECEIVED) == []
        assert len(await alerts.get_by_patient_id("pat-1")) == 2
