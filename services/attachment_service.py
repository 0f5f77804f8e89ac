"""
Appointment attachments.

Files are embedded in the appointment record as base64 data: URLs, the
same shape a browser FileReader.readAsDataURL produces. There is no size
limit and no content check.
"""

import base64
import logging
import mimetypes

from core.errors import AttachmentError, NotFoundError
from models.appointment import Appointment, Attachment
from services.appointment_service import replace_files
from services.store_service import RecordStore

logger = logging.getLogger(__name__)

DEFAULT_MIME = "application/octet-stream"


def encode_data_url(name: str, content: bytes | str) -> str:
    """Return content as a data: URL; strings that already are one pass through."""
    if isinstance(content, str):
        if content.startswith("data:"):
            return content
        raise AttachmentError(f"Attachment '{name}' is text, expected bytes or a data URL")
    if not isinstance(content, (bytes, bytearray, memoryview)):
        raise AttachmentError(f"Attachment '{name}' has unsupported content type {type(content).__name__}")
    mime = mimetypes.guess_type(name)[0] or DEFAULT_MIME
    encoded = base64.b64encode(bytes(content)).decode("ascii")
    return f"data:{mime};base64,{encoded}"


def decode_data_url(url: str) -> tuple[str, bytes]:
    """Split a base64 data: URL into (mime type, raw bytes)."""
    if not url.startswith("data:") or ";base64," not in url:
        raise AttachmentError("Not a base64 data URL")
    header, payload = url[len("data:"):].split(";base64,", 1)
    try:
        return header or DEFAULT_MIME, base64.b64decode(payload, validate=True)
    except ValueError as e:
        raise AttachmentError(f"Corrupt attachment payload: {e}") from e


def encode_uploads(uploads) -> list[Attachment]:
    """Encode a batch of (name, content) pairs.

    All-or-nothing: the first file that cannot be read or encoded fails the
    whole batch.
    """
    encoded = []
    for name, content in uploads:
        if hasattr(content, "read"):
            try:
                content = content.read()
            except OSError as e:
                raise AttachmentError(f"Could not read '{name}': {e}") from e
        encoded.append(Attachment(name=name, url=encode_data_url(name, content)))
    return encoded


def _get(store: RecordStore, appointment_id: str) -> Appointment:
    for a in store.load_appointments(strict=True):
        if a.id == appointment_id:
            return a
    raise NotFoundError("Appointment", appointment_id)


def add_attachment(store: RecordStore, appointment_id: str, name: str, content: bytes | str) -> Appointment:
    return add_attachments(store, appointment_id, [(name, content)])


def add_attachments(store: RecordStore, appointment_id: str, uploads) -> Appointment:
    appointment = _get(store, appointment_id)
    new_files = encode_uploads(uploads)
    updated = replace_files(store, appointment_id, appointment.files + new_files)
    logger.info("Attached %d file(s) to appointment %s", len(new_files), appointment_id)
    return updated


def remove_attachment(store: RecordStore, appointment_id: str, index: int) -> Appointment:
    appointment = _get(store, appointment_id)
    if not 0 <= index < len(appointment.files):
        raise AttachmentError(
            f"Appointment '{appointment_id}' has no attachment at position {index}"
        )
    files = [f for i, f in enumerate(appointment.files) if i != index]
    updated = replace_files(store, appointment_id, files)
    logger.info("Removed attachment %d from appointment %s", index, appointment_id)
    return updated
