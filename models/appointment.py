# models/appointment.py
#
# Persisted under the "incidents" collection; the wire keys keep that naming.

from datetime import datetime
from enum import Enum

from pydantic import Field, field_serializer, field_validator

from core.time_utils import format_iso
from models.base import FormModel, WireModel, date_as_datetime, local_datetime


class Status(str, Enum):
    SCHEDULED = "Scheduled"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"

    def __str__(self):
        return self.value


class Attachment(WireModel):
    name: str = ""
    url: str = ""  # inline data: URL


def _blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class Appointment(WireModel):
    id: str
    patient_id: str = Field("", alias="patientId")
    title: str = ""
    description: str = ""
    comments: str = ""
    appointment_date: datetime = Field(alias="appointmentDate")
    cost: float = Field(0, ge=0, allow_inf_nan=False)
    treatment: str = ""
    status: Status = Status.SCHEDULED
    next_date: datetime | None = Field(None, alias="nextDate")
    files: list[Attachment] = Field(default_factory=list)

    @field_validator("patient_id", "title", "description", "comments", "treatment", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return "" if value is None else value

    @field_validator("cost", mode="before")
    @classmethod
    def _blank_cost(cls, value):
        return 0 if _blank(value) else value

    @field_validator("next_date", mode="before")
    @classmethod
    def _blank_next_date(cls, value):
        return None if _blank(value) else value

    @field_validator("appointment_date", "next_date", mode="before")
    @classmethod
    def _midnight(cls, value):
        return date_as_datetime(value)

    @field_validator("files", mode="before")
    @classmethod
    def _no_files(cls, value):
        return [] if value is None else value

    @field_validator("appointment_date", "next_date")
    @classmethod
    def _local(cls, value):
        return local_datetime(value)

    @field_serializer("appointment_date", "next_date")
    def _iso(self, value: datetime | None):
        return format_iso(value) if value is not None else None

    @field_serializer("cost")
    def _whole_cost(self, value: float):
        # 80, not 80.0
        return int(value) if float(value).is_integer() else value

    def __repr__(self):
        return f"<Appointment {self.id} for Patient {self.patient_id} ({self.status.value})>"


class AppointmentForm(FormModel):
    """Schedule/edit appointment form. Patient, title and date are required."""

    patient_id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    appointment_date: datetime
    description: str = ""
    comments: str = ""
    cost: float = Field(0, ge=0, allow_inf_nan=False)
    treatment: str = ""
    status: Status = Status.SCHEDULED
    next_date: datetime | None = None

    @field_validator("description", "comments", "treatment", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return "" if value is None else value

    @field_validator("cost", mode="before")
    @classmethod
    def _blank_cost(cls, value):
        return 0 if _blank(value) else value

    @field_validator("next_date", mode="before")
    @classmethod
    def _blank_next_date(cls, value):
        return None if _blank(value) else value

    @field_validator("appointment_date", "next_date", mode="before")
    @classmethod
    def _midnight(cls, value):
        return date_as_datetime(value)

    @field_validator("appointment_date", "next_date")
    @classmethod
    def _local(cls, value):
        return local_datetime(value)
