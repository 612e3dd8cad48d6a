# app/scripts/init_db.py
"""
Prepare a fresh database: verify the connection, create the tables and
load the default FAQ entries.

    python -m app.scripts.init_db [--no-seed]
"""
import asyncio
import logging
import sys

from app.core.database import db
from app.scripts.seed_faqs import seed_faqs

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def init_database(seed: bool = True) -> bool:
    if not asyncio.run(db.check_connection()):
        logger.error("Cannot reach the database, nothing was created")
        return False

    db.init_db()
    if seed:
        seed_faqs()
    logger.info("Database initialized successfully")
    return True


if __name__ == "__main__":
    sys.exit(0 if init_database(seed="--no-seed" not in sys.argv) else 1)
