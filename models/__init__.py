from .appointment import Appointment, AppointmentForm, Attachment, Status
from .patient import Patient, PatientForm
from .record import StoredRecord
from .user import Identity, Role, UserAccount

__all__ = [
    "Appointment",
    "AppointmentForm",
    "Attachment",
    "Status",
    "Patient",
    "PatientForm",
    "StoredRecord",
    "Identity",
    "Role",
    "UserAccount",
]
