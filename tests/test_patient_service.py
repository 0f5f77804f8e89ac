import unittest

from core.database import create_tables, make_engine, make_session_factory
from core.errors import NotFoundError, ParseError, ValidationError
from models.record import StoredRecord
from services.dashboard_service import resolve_patient_name
from services.patient_service import (
    create_patient,
    delete_patient,
    get_patient,
    list_patients,
    search_patients,
    update_patient,
)
from services.store_service import PATIENTS, RecordStore


def make_store() -> RecordStore:
    engine = make_engine("sqlite://")
    create_tables(engine)
    store = RecordStore(make_session_factory(engine))
    store.initialize_defaults()
    return store


class TestCreatePatient(unittest.TestCase):
    def setUp(self):
        self.store = make_store()

    def test_create_appends_and_persists(self):
        patient = create_patient(self.store, name="Jane Roe", email="jane@entnt.in", contact="555")

        self.assertTrue(patient.id.startswith("p"))
        self.assertNotEqual(patient.id, "p1")
        self.assertEqual(patient.address, "")
        self.assertEqual(patient.health_info, "")

        stored = self.store.load_collection(PATIENTS)
        self.assertEqual([r["id"] for r in stored], ["p1", patient.id])
        self.assertEqual(stored[-1]["healthInfo"], "")

    def test_ids_are_unique(self):
        ids = {create_patient(self.store, name=f"P{n}", email="e", contact="c").id for n in range(25)}
        self.assertEqual(len(ids), 25)

    def test_missing_required_fields_are_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            create_patient(self.store, name="  ", email="jane@entnt.in")
        self.assertEqual(ctx.exception.fields, ["name", "contact"])
        self.assertEqual(len(list_patients(self.store)), 1)

    def test_refuses_to_overwrite_corrupt_snapshot(self):
        with self.store._session() as db:
            db.merge(StoredRecord(key="dentalPatients", value="{oops"))
            db.commit()
        with self.assertRaises(ParseError):
            create_patient(self.store, name="Jane", email="e", contact="c")


class TestUpdateAndDeletePatient(unittest.TestCase):
    def setUp(self):
        self.store = make_store()

    def test_update_replaces_every_field(self):
        updated = update_patient(self.store, "p1", name="John Q. Doe", email="john@entnt.in", contact="999")
        self.assertEqual(updated.id, "p1")
        self.assertEqual(updated.address, "")
        self.assertEqual(updated.health_info, "")

        stored = get_patient(self.store, "p1")
        self.assertEqual(stored.name, "John Q. Doe")
        self.assertEqual(stored.contact, "999")
        self.assertEqual(stored.dob, "")

    def test_update_unknown_id_raises_not_found(self):
        with self.assertRaises(NotFoundError) as ctx:
            update_patient(self.store, "p404", name="X", email="e", contact="c")
        self.assertEqual(ctx.exception.record_id, "p404")

    def test_delete_leaves_appointments_orphaned(self):
        delete_patient(self.store, "p1")

        self.assertIsNone(get_patient(self.store, "p1"))
        appointments = self.store.load_appointments()
        self.assertEqual(len(appointments), 2)
        self.assertEqual(resolve_patient_name(list_patients(self.store), appointments[0].patient_id), "Unknown Patient")

    def test_delete_unknown_id_raises_not_found(self):
        with self.assertRaises(NotFoundError):
            delete_patient(self.store, "p404")


class TestSearchPatients(unittest.TestCase):
    def test_matches_name_email_and_contact(self):
        store = make_store()
        create_patient(store, name="Jane Roe", email="jane@clinic.org", contact="555-0101")
        patients = list_patients(store)

        self.assertEqual([p.name for p in search_patients(patients, "jane")], ["Jane Roe"])
        self.assertEqual([p.name for p in search_patients(patients, "ENTNT")], ["John Doe"])
        self.assertEqual([p.name for p in search_patients(patients, "0101")], ["Jane Roe"])
        self.assertEqual(len(search_patients(patients, "  ")), 2)


if __name__ == "__main__":
    unittest.main(verbosity=2)
