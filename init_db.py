"""
Database initialization script.
Run this as: python init_db.py
"""

import logging
import sys

# Configure logging
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger("db-init")

from app.core.config import settings
from app.db.init_db import create_all_tables

if __name__ == "__main__":
    logger.info(f"Initializing database at: {settings.DATABASE_URL}")
    if create_all_tables():
        logger.info("Database initialization completed successfully")
    else:
        logger.error("Database initialization failed")
        sys.exit(1)
