# models/patient.py

from pydantic import Field, field_validator

from models.base import FormModel, WireModel


class Patient(WireModel):
    id: str
    name: str = ""
    dob: str = ""  # YYYY-MM-DD as entered, not parsed
    contact: str = ""
    email: str = ""
    address: str = ""
    health_info: str = Field("", alias="healthInfo")

    @field_validator("name", "dob", "contact", "email", "address", "health_info", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return "" if value is None else value

    def __repr__(self):
        return f"<Patient {self.id} - {self.name}>"


class PatientForm(FormModel):
    """Add/edit patient form. Name, email and contact number are required."""

    name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    contact: str = Field(min_length=1)
    dob: str = ""
    address: str = ""
    health_info: str = ""

    @field_validator("name", "email", "contact", "dob", "address", "health_info", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return "" if value is None else value
