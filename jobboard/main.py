"""
jobboard main entry point.

Initializes logging and settings, checks the database and serves the
HTTP API with uvicorn.
"""

import sys

import uvicorn


def main() -> int:
    """
    Main entry point for the jobboard service.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    try:
        # Initialize logging first
        from jobboard.utils.logger import log, setup_logging

        setup_logging()
        log.info("Starting jobboard service...")

        # Load configuration
        from jobboard.utils.config import get_settings

        settings = get_settings()
        log.info(f"Environment: {settings.environment}")
        log.info(f"Debug mode: {settings.debug}")

        # Check database connection
        log.info("Checking database connection...")
        from jobboard.data.database import get_database_manager

        db_manager = get_database_manager()
        if db_manager.check_sync_connection():
            log.info("Database connection established")
        else:
            log.warning(
                "Could not connect to MongoDB. "
                "Requests will fail until it is reachable. Run 'jobboard init-db' to initialize."
            )

        from jobboard.api import create_app

        log.info(f"Serving API on {settings.api.host}:{settings.api.port}")
        uvicorn.run(
            create_app(settings),
            host=settings.api.host,
            port=settings.api.port,
            log_level=settings.logging.level.lower(),
        )
        return 0

    except KeyboardInterrupt:
        print("\nService interrupted by user.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
