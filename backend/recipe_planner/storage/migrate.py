"""Create the database schema. Installed as the ``recipe-planner-migrate`` script."""

import sys

from recipe_planner.config import settings
from recipe_planner.logging import configure_logging, get_logger
from recipe_planner.storage.db import create_db_and_tables, engine

logger = get_logger(__name__)


def main() -> int:
    configure_logging(settings.log_level)
    logger.info("migrate.start url=%s", engine.url.render_as_string(hide_password=True))
    try:
        create_db_and_tables()
    except Exception:
        logger.exception("migrate.failed")
        return 1
    logger.info("migrate.done")
    return 0


if __name__ == "__main__":
    sys.exit(main())
