from .database import get_db_context, engine, SessionLocal, Base, create_tables, make_engine
from .errors import ClinicError, ValidationError, NotFoundError, StoreError, ParseError, AttachmentError

# session_manager and helpers pull in streamlit; import them directly where needed.

__all__ = [
    "get_db_context",
    "engine",
    "SessionLocal",
    "Base",
    "create_tables",
    "make_engine",
    "ClinicError",
    "ValidationError",
    "NotFoundError",
    "StoreError",
    "ParseError",
    "AttachmentError",
]
