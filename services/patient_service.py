import logging

from core.errors import NotFoundError
from core.helpers import generate_record_id
from models.base import parse_form
from models.patient import Patient, PatientForm
from services.store_service import RecordStore

logger = logging.getLogger(__name__)


# ------------------------------------------
# Fetch
# ------------------------------------------
def list_patients(store: RecordStore) -> list[Patient]:
    return store.load_patients()


def get_patient(store: RecordStore, patient_id: str) -> Patient | None:
    return next((p for p in store.load_patients() if p.id == patient_id), None)


def search_patients(patients, query: str) -> list[Patient]:
    """Case-insensitive substring match on name, email or contact number."""
    q = (query or "").strip().lower()
    if not q:
        return list(patients)
    return [
        p for p in patients
        if q in p.name.lower() or q in p.email.lower() or q in p.contact.lower()
    ]


# ------------------------------------------
# Create a new patient
# ------------------------------------------
def create_patient(
    store: RecordStore,
    name: str,
    email: str = "",
    contact: str = "",
    dob: str = "",
    address: str = "",
    health_info: str = "",
) -> Patient:
    form = parse_form(
        PatientForm, name=name, email=email, contact=contact, dob=dob, address=address, health_info=health_info
    )

    patients = store.load_patients(strict=True)
    patient = Patient(id=generate_record_id("p", (p.id for p in patients)), **form.model_dump())
    patients.append(patient)
    store.save_patients(patients)

    logger.info("Created patient %s", patient.id)
    return patient


# ------------------------------------------
# Update patient (full replace except id)
# ------------------------------------------
def update_patient(
    store: RecordStore,
    patient_id: str,
    *,
    name: str,
    email: str = "",
    contact: str = "",
    dob: str = "",
    address: str = "",
    health_info: str = "",
) -> Patient:
    form = parse_form(
        PatientForm, name=name, email=email, contact=contact, dob=dob, address=address, health_info=health_info
    )

    patients = store.load_patients(strict=True)
    for index, existing in enumerate(patients):
        if existing.id == patient_id:
            break
    else:
        raise NotFoundError("Patient", patient_id)

    updated = Patient(**(existing.model_extra or {}), id=patient_id, **form.model_dump())
    patients[index] = updated
    store.save_patients(patients)

    logger.info("Updated patient %s", patient_id)
    return updated


# ------------------------------------------
# Delete a patient
# ------------------------------------------
def delete_patient(store: RecordStore, patient_id: str) -> None:
    """Remove the patient record.

    Appointments are left in place; their patient name resolves to the
    unknown-patient label afterwards.
    """
    patients = store.load_patients(strict=True)
    remaining = [p for p in patients if p.id != patient_id]
    if len(remaining) == len(patients):
        raise NotFoundError("Patient", patient_id)

    store.save_patients(remaining)
    logger.info("Deleted patient %s", patient_id)
