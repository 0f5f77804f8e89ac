from enum import Enum

from pydantic import ConfigDict, Field

from models.base import WireModel


class Role(str, Enum):
    ADMIN = "Admin"
    PATIENT = "Patient"

    def __str__(self):
        return self.value


class UserAccount(WireModel):
    """Credential record. Passwords are stored and compared in plain text."""

    id: str
    role: Role
    email: str = ""
    password: str = ""
    patient_id: str | None = Field(None, alias="patientId")

    def identity(self) -> "Identity":
        return Identity(id=self.id, role=self.role, email=self.email, patient_id=self.patient_id)

    def __repr__(self):
        return f"<UserAccount {self.email} ({self.role.value})>"


class Identity(WireModel):
    """Public projection of a logged-in user; never carries the password."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    role: Role
    email: str = ""
    patient_id: str | None = Field(None, alias="patientId")

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    @property
    def is_patient(self) -> bool:
        return self.role is Role.PATIENT
