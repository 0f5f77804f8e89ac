import logging
from datetime import datetime

from core.errors import NotFoundError
from core.helpers import generate_record_id
from models.appointment import Appointment, AppointmentForm, Attachment, Status
from models.base import parse_form
from services.store_service import RecordStore

logger = logging.getLogger(__name__)


# -----------------------------
# Fetch
# -----------------------------
def list_appointments(store: RecordStore) -> list[Appointment]:
    return store.load_appointments()


def get_appointment(store: RecordStore, appointment_id: str) -> Appointment | None:
    return next((a for a in store.load_appointments() if a.id == appointment_id), None)


def _locate(appointments, appointment_id: str) -> int:
    for index, a in enumerate(appointments):
        if a.id == appointment_id:
            return index
    raise NotFoundError("Appointment", appointment_id)


# -----------------------------
# Schedule a new appointment
# -----------------------------
def create_appointment(
    store: RecordStore,
    patient_id: str,
    title: str,
    appointment_date: datetime | str,
    description: str = "",
    comments: str = "",
    cost: float = 0,
    treatment: str = "",
    status: Status | str = Status.SCHEDULED,
    next_date: datetime | str | None = None,
    files: list[Attachment] | None = None,
) -> Appointment:
    """Validate and append one appointment, attachments included, in a single write."""
    form = parse_form(
        AppointmentForm,
        patient_id=patient_id,
        title=title,
        appointment_date=appointment_date,
        description=description,
        comments=comments,
        cost=cost,
        treatment=treatment,
        status=status,
        next_date=next_date,
    )

    appointments = store.load_appointments(strict=True)
    appointment = Appointment(
        id=generate_record_id("i", (a.id for a in appointments)),
        files=list(files or []),
        **form.model_dump(),
    )
    appointments.append(appointment)
    store.save_appointments(appointments)

    logger.info("Scheduled appointment %s for patient %s", appointment.id, appointment.patient_id)
    return appointment


# -----------------------------
# Edit an appointment
# -----------------------------
def update_appointment(
    store: RecordStore,
    appointment_id: str,
    *,
    patient_id: str,
    title: str,
    appointment_date: datetime | str,
    description: str = "",
    comments: str = "",
    cost: float = 0,
    treatment: str = "",
    status: Status | str = Status.SCHEDULED,
    next_date: datetime | str | None = None,
    files: list[Attachment] | None = None,
) -> Appointment:
    """Replace every field except the id.

    Existing attachments are kept unless files is given. Stored keys this
    model does not know about are carried over.
    """
    form = parse_form(
        AppointmentForm,
        patient_id=patient_id,
        title=title,
        appointment_date=appointment_date,
        description=description,
        comments=comments,
        cost=cost,
        treatment=treatment,
        status=status,
        next_date=next_date,
    )

    appointments = store.load_appointments(strict=True)
    index = _locate(appointments, appointment_id)
    existing = appointments[index]

    updated = Appointment(
        **(existing.model_extra or {}),
        id=appointment_id,
        files=list(files) if files is not None else list(existing.files),
        **form.model_dump(),
    )
    appointments[index] = updated
    store.save_appointments(appointments)

    logger.info("Updated appointment %s", appointment_id)
    return updated


def delete_appointment(store: RecordStore, appointment_id: str) -> None:
    appointments = store.load_appointments(strict=True)
    index = _locate(appointments, appointment_id)
    del appointments[index]
    store.save_appointments(appointments)
    logger.info("Deleted appointment %s", appointment_id)


def replace_files(store: RecordStore, appointment_id: str, files) -> Appointment:
    """Write a new attachment list for one appointment, leaving other fields alone."""
    appointments = store.load_appointments(strict=True)
    index = _locate(appointments, appointment_id)
    appointments[index].files = list(files)
    store.save_appointments(appointments)
    return appointments[index]
