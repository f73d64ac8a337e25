"""Serve the User Admin API with uvicorn.

Host and port are read from the ``HOST`` and ``PORT`` environment
variables (defaults ``127.0.0.1`` and ``8000``).

Usage:
    python -m user_admin_api
"""

from uvicorn import Config, Server

from user_admin_api.app.core.config import settings
from user_admin_api.app.core.logging_config import setup_logging


def main() -> None:
    setup_logging(settings.log_level, settings.log_file, sql_echo=settings.sql_echo)
    # ``log_config=None`` keeps uvicorn from replacing the handlers set above.
    config = Config(
        app="user_admin_api.app.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_config=None,
        log_level=settings.log_level.lower(),
    )
    Server(config).run()


if __name__ == "__main__":
    main()
