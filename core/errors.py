"""
Exceptions raised by the store and the services.

Pages catch ClinicError and show the message; nothing here is fatal.
"""


class ClinicError(Exception):
    """Base class for every error the dashboard reports to the user."""


class ValidationError(ClinicError, ValueError):
    """Required fields missing or a field value is unusable."""

    def __init__(self, message: str, fields=None):
        super().__init__(message)
        self.fields = list(fields or [])


class NotFoundError(ClinicError, LookupError):
    """A mutation targeted an id that is not in the collection."""

    def __init__(self, kind: str, record_id: str):
        super().__init__(f"{kind} '{record_id}' not found")
        self.kind = kind
        self.record_id = record_id


class StoreError(ClinicError):
    pass


class ParseError(StoreError):
    """A stored snapshot could not be decoded."""

    def __init__(self, key: str, reason: str):
        super().__init__(f"Stored value under '{key}' is corrupt: {reason}")
        self.key = key
        self.reason = reason


class AttachmentError(ClinicError):
    pass
