"""Initialize the persistent store: data directory, tables and default settings."""

import asyncio
import sys

from manuscript.infrastructure.database.session import init_database
from manuscript.infrastructure.logging import configure_logging, get_logger

logger = get_logger(__name__)


async def main() -> None:
    """Run the initialization phase."""
    configure_logging()
    logger.info("Initializing database...")

    try:
        await init_database()
        logger.info("✅ Database ready")
    except Exception as e:
        logger.error(f"❌ Error initializing database: {str(e)}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
