import os
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from backend.config import DATABASE_URL


def ensure_database_dir(url=DATABASE_URL):
    """Create the parent directory of a file-backed SQLite database."""
    if not url.startswith("sqlite:///") or url == "sqlite:///:memory:":
        return None
    directory = os.path.dirname(url[len("sqlite:///"):])
    if directory:
        os.makedirs(directory, exist_ok=True)
    return directory or None


def create_db_engine(url):
    connect_args = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(url, connect_args=connect_args)


engine = create_db_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()
