"""
View model derivations.

Pure functions over the patient and appointment collections. They never
mutate their inputs and always return new lists, so pages can recompute
them on every rerun.
"""

from dataclasses import dataclass, field
from datetime import date, datetime

from core.config import RECENT_LIMIT, UPCOMING_LIMIT
from core.time_utils import end_of_month, is_same_day, start_of_day, start_of_month
from models.appointment import Appointment, Status
from models.patient import Patient
from models.user import Identity

UNKNOWN_PATIENT = "Unknown Patient"


# ------------------------------------------
# Role scoping
# ------------------------------------------
def scope_for_role(identity: Identity, patients, appointments):
    """Restrict both collections to what identity may see.

    Patients see only their own record and appointments (nothing when the
    account has no linked patient); admins see everything.
    """
    if identity.is_patient:
        pid = identity.patient_id
        if not pid:
            return [], []
        return (
            [p for p in patients if p.id == pid][:1],
            [a for a in appointments if a.patient_id == pid],
        )
    return list(patients), list(appointments)


# ------------------------------------------
# Date buckets
# ------------------------------------------
def upcoming_appointments(appointments, as_of, limit: int | None = None) -> list[Appointment]:
    cutoff = start_of_day(as_of)
    result = sorted(
        (a for a in appointments if a.status == Status.SCHEDULED and a.appointment_date >= cutoff),
        key=lambda a: a.appointment_date,
    )
    if limit is not None:
        result = result[:limit]
    return result


def past_or_resolved_appointments(appointments, as_of) -> list[Appointment]:
    cutoff = start_of_day(as_of)
    return sorted(
        (
            a
            for a in appointments
            if a.status == Status.COMPLETED
            or (a.appointment_date < cutoff and a.status != Status.SCHEDULED)
        ),
        key=lambda a: a.appointment_date,
        reverse=True,
    )


def monthly_appointments(appointments, reference_date) -> list[Appointment]:
    first = start_of_month(reference_date)
    last = end_of_month(reference_date)
    return [a for a in appointments if first <= a.appointment_date <= last]


def appointments_on_date(appointments, day) -> list[Appointment]:
    return [a for a in appointments if is_same_day(a.appointment_date, day)]


def days_with_appointments(appointments, reference_date) -> set[date]:
    """Calendar days of the reference month that have at least one appointment."""
    return {a.appointment_date.date() for a in monthly_appointments(appointments, reference_date)}


def recent_treatments(appointments, limit: int | None = RECENT_LIMIT) -> list[Appointment]:
    result = sorted(
        (a for a in appointments if a.status == Status.COMPLETED),
        key=lambda a: a.appointment_date,
        reverse=True,
    )
    if limit is not None:
        result = result[:limit]
    return result


# ------------------------------------------
# Aggregates
# ------------------------------------------
def status_counts(appointments) -> dict[Status, int]:
    counts = {status: 0 for status in Status}
    for a in appointments:
        counts[a.status] += 1
    return counts


def revenue_sum(appointments, statuses=(Status.COMPLETED,)) -> float:
    wanted = set(statuses)
    return sum((a.cost for a in appointments if a.status in wanted), 0)


def patient_history_total(appointments, as_of) -> float:
    """Total cost of a patient's past or resolved appointments."""
    return sum((a.cost for a in past_or_resolved_appointments(appointments, as_of)), 0)


# ------------------------------------------
# Patient lookup
# ------------------------------------------
def find_patient(patients, patient_id: str) -> Patient | None:
    for p in patients:
        if p.id == patient_id:
            return p
    return None


def resolve_patient_name(patients, patient_id: str) -> str:
    patient = find_patient(patients, patient_id)
    return patient.name if patient is not None else UNKNOWN_PATIENT


def appointment_label(patients, appointment: Appointment) -> str:
    """Markdown list label: bold title, then the patient name."""
    return f"**{appointment.title}** · {resolve_patient_name(patients, appointment.patient_id)}"


# ------------------------------------------
# Page summaries
# ------------------------------------------
@dataclass
class DashboardSummary:
    patient_count: int
    completed_count: int
    pending_count: int
    revenue: float
    upcoming: list[Appointment] = field(default_factory=list)
    recent: list[Appointment] = field(default_factory=list)


def build_dashboard(identity: Identity, patients, appointments, as_of: datetime) -> DashboardSummary:
    patients, appointments = scope_for_role(identity, patients, appointments)
    counts = status_counts(appointments)
    return DashboardSummary(
        patient_count=len(patients),
        completed_count=counts[Status.COMPLETED],
        pending_count=counts[Status.SCHEDULED],
        revenue=revenue_sum(appointments),
        upcoming=upcoming_appointments(appointments, as_of, UPCOMING_LIMIT),
        recent=recent_treatments(appointments, RECENT_LIMIT),
    )


@dataclass
class MonthlySummary:
    month_start: datetime
    counts: dict[Status, int]
    revenue: float
    upcoming: list[Appointment] = field(default_factory=list)
    busy_days: set[date] = field(default_factory=set)


def build_monthly_summary(appointments, reference_date, as_of, upcoming_limit: int = 5) -> MonthlySummary:
    month = monthly_appointments(appointments, reference_date)
    return MonthlySummary(
        month_start=start_of_month(reference_date),
        counts=status_counts(month),
        revenue=revenue_sum(month),
        upcoming=upcoming_appointments(month, as_of, upcoming_limit),
        busy_days={a.appointment_date.date() for a in month},
    )
