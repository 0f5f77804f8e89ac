# core/setup_db.py

import logging

from core.database import create_tables, engine
from core.logging_setup import configure_logging
from services.store_service import get_store

logger = logging.getLogger(__name__)


def main():
    configure_logging()
    logger.info("Creating database tables...")

    create_tables(engine)

    # Insert demo users, patient and appointments
    if get_store().initialize_defaults():
        logger.info("Database initialized successfully.")
    else:
        logger.info("Store already populated; nothing seeded.")


if __name__ == "__main__":
    main()
