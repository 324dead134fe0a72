# run.py
"""
Development server entry point.
Loads settings from the environment (.env honoured), checks the schema,
then serves the API with Flask's built-in server.
For production run create_app() under a WSGI server instead.
"""
import sys

from courtbook.app_factory import create_app
from courtbook.config import Settings
from courtbook.db.auto_init import auto_init
from courtbook.logger import configure_logging, get_logger

logger = get_logger("courtbook.run")


def main():
    settings = Settings.from_env()
    configure_logging(settings.log_dir, settings.log_level)
    try:
        settings.validate_required()
    except RuntimeError as e:
        logger.error("Failed to start server: %s", e)
        sys.exit(1)

    # 1️ bind the database and build the app
    app = create_app(settings)

    # 2️ make sure the tables exist
    auto_init()

    logger.info("Server listening on %s:%s", settings.host, settings.port)
    app.run(host=settings.host, port=settings.port, debug=False, use_reloader=False)


if __name__ == "__main__":
    main()
