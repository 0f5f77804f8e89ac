from .store_service import RecordStore, get_store
from .user_service import SessionContext, authenticate_user

# Import the per-entity services (patient_service, appointment_service,
# attachment_service, dashboard_service) directly where needed.

__all__ = ["RecordStore", "get_store", "SessionContext", "authenticate_user"]
