"""CLI entry point for launching the addon with Uvicorn."""
import logging
import sys

import uvicorn

from .app import create_app
from .errors import StartupError
from .settings import AddonSettings

logger = logging.getLogger("backend.addon_api")


def main() -> None:
    """Start the addon server; exit with status 1 if the initial data cannot be loaded."""

    settings = AddonSettings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    try:
        app = create_app(settings)
    except StartupError:
        logger.critical("The addon could not start because its initial data failed to load", exc_info=True)
        sys.exit(1)

    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
