"""
Record Store: whole-collection snapshots in a key-value table.

Each logical collection lives under one fixed key as a JSON list; the
current session lives under its own key as a single JSON object. Every
write replaces the whole value.
"""

import json
import logging
from contextlib import contextmanager
from functools import lru_cache

from core.database import SessionLocal, create_tables, engine
from core.errors import ParseError
from models.appointment import Appointment
from models.patient import Patient
from models.record import StoredRecord
from models.user import UserAccount

logger = logging.getLogger(__name__)

USERS = "users"
PATIENTS = "patients"
INCIDENTS = "incidents"
CURRENT_USER = "currentUser"

# Logical name -> physical key
COLLECTION_KEYS = {
    USERS: "dentalUsers",
    PATIENTS: "dentalPatients",
    INCIDENTS: "dentalIncidents",
    CURRENT_USER: "dentalCurrentUser",
}

DEFAULT_USERS = [
    {"id": "1", "role": "Admin", "email": "admin@entnt.in", "password": "admin123"},
    {"id": "2", "role": "Patient", "email": "john@entnt.in", "password": "patient123", "patientId": "p1"},
]

DEFAULT_PATIENTS = [
    {
        "id": "p1",
        "name": "John Doe",
        "dob": "1990-05-10",
        "contact": "1234567890",
        "email": "john@entnt.in",
        "address": "123 Main St, City",
        "healthInfo": "No known allergies",
    }
]

DEFAULT_INCIDENTS = [
    {
        "id": "i1",
        "patientId": "p1",
        "title": "Routine Checkup",
        "description": "Regular dental examination",
        "comments": "Good oral health",
        "appointmentDate": "2025-01-15T10:00:00",
        "cost": 80,
        "treatment": "Cleaning and examination",
        "status": "Scheduled",
        "nextDate": "2025-07-15T10:00:00",
        "files": [],
    },
    {
        "id": "i2",
        "patientId": "p1",
        "title": "Tooth Filling",
        "description": "Cavity in upper molar",
        "comments": "Small cavity, requires filling",
        "appointmentDate": "2024-12-20T14:00:00",
        "cost": 120,
        "treatment": "Composite filling",
        "status": "Completed",
        "nextDate": "2025-06-20T14:00:00",
        "files": [],
    },
]


def physical_key(name: str, scope: str | None = None) -> str:
    """Map a logical name to its key; a scope gives each browser its own session key."""
    try:
        key = COLLECTION_KEYS[name]
    except KeyError:
        raise KeyError(f"Unknown collection '{name}'") from None
    return f"{key}:{scope}" if scope else key


def _decodes_to(factory, raw: dict, model) -> bool:
    try:
        return factory(raw) == model
    except (KeyError, TypeError, ValueError, AttributeError):
        return False


class RecordStore:
    """Get/put of whole collections keyed by logical name."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or SessionLocal

    @contextmanager
    def _session(self):
        db = self._session_factory()
        try:
            yield db
        finally:
            db.close()

    # -----------------------------
    # Raw key access
    # -----------------------------
    def _read(self, key: str) -> str | None:
        with self._session() as db:
            row = db.get(StoredRecord, key)
            return row.value if row is not None else None

    def _write(self, key: str, text: str):
        with self._session() as db:
            db.merge(StoredRecord(key=key, value=text))
            db.commit()

    def _delete(self, key: str) -> bool:
        with self._session() as db:
            row = db.get(StoredRecord, key)
            if row is None:
                return False
            db.delete(row)
            db.commit()
            return True

    def _decode(self, key: str, raw: str):
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise ParseError(key, str(e)) from e

    def has(self, name: str) -> bool:
        return self._read(physical_key(name)) is not None

    def keys(self) -> list[str]:
        with self._session() as db:
            return [row.key for row in db.query(StoredRecord).order_by(StoredRecord.key).all()]

    # -----------------------------
    # Collections
    # -----------------------------
    def load_collection(self, name: str) -> list[dict]:
        """Return the stored list, or [] when the key was never written.

        Raises ParseError when the stored text is not a JSON list.
        """
        key = physical_key(name)
        raw = self._read(key)
        if raw is None:
            return []
        data = self._decode(key, raw)
        if not isinstance(data, list):
            raise ParseError(key, f"expected a list, found {type(data).__name__}")
        return data

    def load_collection_or_empty(self, name: str) -> list[dict]:
        """Lenient read used by the views: a corrupt snapshot reads as empty."""
        try:
            return self.load_collection(name)
        except ParseError as e:
            logger.warning("%s; treating it as an empty collection", e)
            return []

    def save_collection(self, name: str, records) -> None:
        key = physical_key(name)
        records = list(records)
        self._write(key, json.dumps(records, allow_nan=False))
        logger.debug("Saved %s (%d records)", key, len(records))

    # -----------------------------
    # Single records (per-browser session)
    # -----------------------------
    def load_record(self, name: str, scope: str | None = None) -> dict | None:
        key = physical_key(name, scope)
        raw = self._read(key)
        if raw is None:
            return None
        data = self._decode(key, raw)
        if not isinstance(data, dict):
            raise ParseError(key, f"expected an object, found {type(data).__name__}")
        return data

    def save_record(self, name: str, record: dict, scope: str | None = None) -> None:
        self._write(physical_key(name, scope), json.dumps(record))

    def delete_record(self, name: str, scope: str | None = None) -> bool:
        return self._delete(physical_key(name, scope))

    def clear(self) -> None:
        """Delete every collection and every browser's saved session."""
        session_prefix = physical_key(CURRENT_USER) + ":"
        with self._session() as db:
            db.query(StoredRecord).filter(
                StoredRecord.key.in_(list(COLLECTION_KEYS.values())) | StoredRecord.key.startswith(session_prefix)
            ).delete(synchronize_session=False)
            db.commit()

    # -----------------------------
    # Typed accessors
    # -----------------------------
    def _load_typed(self, name: str, factory, strict: bool):
        records = self.load_collection(name) if strict else self.load_collection_or_empty(name)
        try:
            return [factory(r) for r in records]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            err = ParseError(physical_key(name), f"malformed record: {e!r}")
            if strict:
                raise err from e
            logger.warning("%s; treating it as an empty collection", err)
            return []

    def _save_typed(self, name: str, factory, models) -> None:
        """Write models back, reusing the stored dict of every record that did not change.

        An untouched record keeps its original timestamp text and any keys the
        model does not declare.
        """
        stored = {}
        for raw in self.load_collection_or_empty(name):
            if isinstance(raw, dict) and raw.get("id") is not None:
                stored[str(raw["id"])] = raw

        records = []
        for model in models:
            raw = stored.get(model.id)
            records.append(raw if raw is not None and _decodes_to(factory, raw, model) else model.to_record())
        self.save_collection(name, records)

    def load_users(self, strict: bool = False) -> list[UserAccount]:
        return self._load_typed(USERS, UserAccount.from_record, strict)

    def load_patients(self, strict: bool = False) -> list[Patient]:
        return self._load_typed(PATIENTS, Patient.from_record, strict)

    def save_patients(self, patients) -> None:
        self._save_typed(PATIENTS, Patient.from_record, patients)

    def load_appointments(self, strict: bool = False) -> list[Appointment]:
        return self._load_typed(INCIDENTS, Appointment.from_record, strict)

    def save_appointments(self, appointments) -> None:
        self._save_typed(INCIDENTS, Appointment.from_record, appointments)

    # -----------------------------
    # First run
    # -----------------------------
    def initialize_defaults(self) -> bool:
        """Seed demo data into every collection key that is still absent.

        A populated key is never overwritten. Returns True if anything was written.
        """
        seeded = False
        for name, records in ((USERS, DEFAULT_USERS), (PATIENTS, DEFAULT_PATIENTS), (INCIDENTS, DEFAULT_INCIDENTS)):
            if self.has(name):
                continue
            self.save_collection(name, json.loads(json.dumps(records)))
            seeded = True
        if seeded:
            logger.info("Default demo data created.")
        return seeded


@lru_cache(maxsize=1)
def get_store() -> RecordStore:
    """The application-wide store bound to the configured database."""
    create_tables(engine)
    return RecordStore(SessionLocal)
