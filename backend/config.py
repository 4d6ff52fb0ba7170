import os
import logging

DEFAULT_DATABASE_URL = "sqlite:///data/realvsai.db"

DATABASE_URL = (
    os.environ.get("REALVSAI_DATABASE_URL")
    or os.environ.get("DATABASE_URL")
    or DEFAULT_DATABASE_URL
)

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Setting keys stored in the settings table
DISABLE_USERNAME_VALIDATION = "disable_username_validation"


def configure_logging(level=None):
    """Configure root logging for command-line entry points."""
    logging.basicConfig(level=level or LOG_LEVEL, format=LOG_FORMAT)
