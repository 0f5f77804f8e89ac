"""Reset: wipe every dashboard key and reseed the demo data.

All patients, appointments and saved sessions are lost.
"""
import logging
from core.logging_setup import configure_logging
from services.store_service import get_store

logger = logging.getLogger(__name__)


def main():
    configure_logging()
    store = get_store()
    store.clear()
    store.initialize_defaults()
    logger.info("Store reset to demo data.")


if __name__ == "__main__":
    main()
