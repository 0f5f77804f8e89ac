import unittest
from datetime import date, datetime

from pydantic import ValidationError as SchemaError

from core.errors import ValidationError
from core.time_utils import end_of_month, is_same_day, parse_iso, start_of_day, start_of_month
from models.appointment import Appointment, AppointmentForm, Status
from models.base import parse_form
from models.patient import Patient, PatientForm
from models.user import Identity, Role, UserAccount
from services.store_service import DEFAULT_INCIDENTS, DEFAULT_PATIENTS, DEFAULT_USERS


class TestWireFormat(unittest.TestCase):
    def test_seed_records_survive_conversion(self):
        self.assertEqual([Appointment.from_record(r).to_record() for r in DEFAULT_INCIDENTS], DEFAULT_INCIDENTS)
        self.assertEqual([Patient.from_record(r).to_record() for r in DEFAULT_PATIENTS], DEFAULT_PATIENTS)
        self.assertEqual([UserAccount.from_record(r).to_record() for r in DEFAULT_USERS], DEFAULT_USERS)

    def test_appointment_fields(self):
        a = Appointment.from_record(DEFAULT_INCIDENTS[1])
        self.assertEqual(a.patient_id, "p1")
        self.assertEqual(a.status, Status.COMPLETED)
        self.assertEqual(a.appointment_date, datetime(2024, 12, 20, 14, 0))
        self.assertEqual(a.next_date, datetime(2025, 6, 20, 14, 0))

    def test_optional_keys_default(self):
        a = Appointment.from_record({"id": "i9", "patientId": "p1", "title": "T", "appointmentDate": "2025-01-15T10:00"})
        self.assertEqual(a.files, [])
        self.assertIsNone(a.next_date)
        self.assertEqual(a.status, Status.SCHEDULED)

    def test_identity_projection_drops_password(self):
        account = UserAccount.from_record(DEFAULT_USERS[1])
        identity = account.identity()
        self.assertEqual(identity, Identity(id="2", role=Role.PATIENT, email="john@entnt.in", patient_id="p1"))
        self.assertNotIn("password", identity.to_record())

    def test_unknown_keys_are_kept(self):
        record = dict(DEFAULT_INCIDENTS[0], room="2", reminder={"sms": True})
        self.assertEqual(Appointment.from_record(record).to_record(), record)

    def test_saved_identity_ignores_extra_keys(self):
        identity = Identity.from_record({"id": "1", "role": "Admin", "email": "admin@entnt.in", "password": "admin123"})
        self.assertNotIn("password", identity.to_record())
        self.assertTrue(identity.is_admin)

    def test_aware_timestamp_becomes_local_wall_clock(self):
        record = dict(DEFAULT_INCIDENTS[0], appointmentDate="2025-01-15T10:00:00.000Z")
        a = Appointment.from_record(record)
        self.assertIsNone(a.appointment_date.tzinfo)
        self.assertEqual(a.appointment_date, parse_iso("2025-01-15T10:00:00Z"))


class TestAppointmentSchema(unittest.TestCase):
    def test_non_finite_cost_is_rejected(self):
        for cost in ("nan", "inf", float("nan"), float("-inf")):
            with self.subTest(cost=cost):
                with self.assertRaises(SchemaError):
                    AppointmentForm(patient_id="p1", title="T", appointment_date="2025-01-15T10:00", cost=cost)

    def test_blank_optional_values_use_defaults(self):
        form = AppointmentForm(patient_id=" p1 ", title=" T ", appointment_date=date(2025, 1, 15), cost="", next_date="")
        self.assertEqual((form.patient_id, form.title), ("p1", "T"))
        self.assertEqual(form.appointment_date, datetime(2025, 1, 15))
        self.assertEqual(form.cost, 0)
        self.assertIsNone(form.next_date)

    def test_errors_translate_to_validation_error(self):
        with self.assertRaises(ValidationError) as ctx:
            parse_form(AppointmentForm, patient_id="p1", title="T", appointment_date="2025-01-15T10:00", cost=-1)
        self.assertEqual(ctx.exception.fields, ["cost"])
        self.assertIn("cost", str(ctx.exception))

    def test_blank_required_values_report_missing_fields(self):
        with self.assertRaises(ValidationError) as ctx:
            parse_form(PatientForm, name=" ", email="a@b.c", contact=None)
        self.assertEqual(ctx.exception.fields, ["name", "contact"])
        self.assertEqual(str(ctx.exception), "Please fill in all required fields")


class TestTimeUtils(unittest.TestCase):
    def test_parse_iso_forms(self):
        self.assertEqual(parse_iso("2025-01-15T10:00"), datetime(2025, 1, 15, 10, 0))
        self.assertEqual(parse_iso("2025-01-15"), datetime(2025, 1, 15))
        self.assertIsNone(parse_iso("2025-01-15T10:00:00Z").tzinfo)
        with self.assertRaises(ValueError):
            parse_iso("15/01/2025")

    def test_month_and_day_bounds(self):
        self.assertEqual(start_of_day(datetime(2025, 1, 15, 18, 30)), datetime(2025, 1, 15))
        self.assertEqual(start_of_month(date(2024, 2, 29)), datetime(2024, 2, 1))
        self.assertEqual(end_of_month(date(2024, 2, 10)), datetime(2024, 2, 29, 23, 59, 59, 999999))

    def test_bounds_accept_iso_strings(self):
        self.assertEqual(start_of_day("2025-01-15T18:30"), datetime(2025, 1, 15))
        self.assertEqual(start_of_month("2024-02-29"), datetime(2024, 2, 1))
        self.assertEqual(end_of_month("2024-02-10"), datetime(2024, 2, 29, 23, 59, 59, 999999))
        self.assertTrue(is_same_day("2025-01-15", datetime(2025, 1, 15, 9, 0)))


if __name__ == "__main__":
    unittest.main(verbosity=2)
