# scripts/setup_database.py
#!/usr/bin/env python
"""
Create the logs collection ahead of the first request.
The application does this itself on first connection; run this to check
that DATABASE_URL is reachable before starting the server.
"""
import sys
import logging

from dailylog.core.database import ConnectionManager
from dailylog.core.exceptions import StorageUnavailable

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

def main():
    manager = ConnectionManager()
    try:
        logger.info("Creating logs collection...")
        manager.connect()
        logger.info("\n✅ Database setup complete!")
        logger.info("You can now start the application with: uvicorn dailylog.main:app --reload")
    except StorageUnavailable as e:
        logger.error(f"❌ Error setting up database: {e.__cause__ or e}")
        sys.exit(1)
    finally:
        manager.dispose()

if __name__ == "__main__":
    main()
