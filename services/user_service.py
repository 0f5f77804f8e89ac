import logging

from core.errors import ParseError
from models.user import Identity, UserAccount
from services.store_service import CURRENT_USER, RecordStore

logger = logging.getLogger(__name__)


def authenticate_user(store: RecordStore, email: str, password: str) -> UserAccount | None:
    """Return the account whose email and password both match exactly.

    Plain-text, case-sensitive comparison against the seeded credentials.
    """
    for user in store.load_users():
        if user.email == email and user.password == password:
            return user
    return None


class SessionContext:
    """The logged-in identity for one browser session.

    The identity is mirrored into the store under currentUser, scoped by
    browser_id, so a reload of the same browser restores it and no other
    browser sees it. The store is read at most once; after that the
    in-memory value is authoritative until logout.
    """

    def __init__(self, store: RecordStore, browser_id: str):
        if not browser_id:
            raise ValueError("browser_id is required")
        self.store = store
        self.browser_id = browser_id
        self._user: Identity | None = None
        self._restored = False

    def current_user(self) -> Identity | None:
        if not self._restored:
            self._restored = True
            self._user = self._restore()
        return self._user

    def _restore(self) -> Identity | None:
        try:
            record = self.store.load_record(CURRENT_USER, scope=self.browser_id)
        except ParseError as e:
            logger.warning("%s; starting logged out", e)
            return None
        if record is None:
            return None
        try:
            return Identity.from_record(record)
        except (KeyError, ValueError) as e:
            logger.warning("Ignoring unusable saved session: %r", e)
            return None

    def login(self, email: str, password: str) -> bool:
        user = authenticate_user(self.store, email, password)
        if user is None:
            logger.info("Failed login for %s", email)
            return False

        identity = user.identity()
        self._user = identity
        self._restored = True
        self.store.save_record(CURRENT_USER, identity.to_record(), scope=self.browser_id)
        logger.info("Logged in %s (%s)", identity.email, identity.role.value)
        return True

    def logout(self):
        if self._user is not None:
            logger.info("Logged out %s", self._user.email)
        self._user = None
        self._restored = True
        self.store.delete_record(CURRENT_USER, scope=self.browser_id)

    @property
    def is_authenticated(self) -> bool:
        return self.current_user() is not None

    @property
    def is_admin(self) -> bool:
        user = self.current_user()
        return user is not None and user.is_admin

    @property
    def is_patient(self) -> bool:
        user = self.current_user()
        return user is not None and user.is_patient
