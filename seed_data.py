"""
Create the tables and seed the default banned words and settings.
"""
import os
import sys
import logging

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from backend.config import configure_logging, DISABLE_USERNAME_VALIDATION
from backend.database import Base, engine, SessionLocal, ensure_database_dir
from backend.data_access import BannedWordStore, SettingsStore
from backend.profanity_filter import DEFAULT_BANNED_WORDS
from backend import models  # noqa: F401  registers the tables on Base

logger = logging.getLogger(__name__)


def seed_data(bind=None, session_factory=None):
    if bind is None:
        ensure_database_dir()
    Base.metadata.create_all(bind=bind or engine)
    session_factory = session_factory or SessionLocal

    words = BannedWordStore(session_factory)
    added = sum(1 for word in DEFAULT_BANNED_WORDS if words.add_banned_word(word))

    settings = SettingsStore(session_factory)
    if settings.get_setting(DISABLE_USERNAME_VALIDATION) is None:
        settings.update_setting(DISABLE_USERNAME_VALIDATION, 0)

    logger.info(f"Seeded {added} banned words")
    return added


if __name__ == "__main__":
    configure_logging()
    seed_data()
