"""Configuration for GeoTutor: data paths, persistence backend and logging."""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from geotutor.classroom import (
    DEFAULT_CATALOG_PATH,
    JsonFilePersistence,
    PersistencePort,
    SqlitePersistence,
)

# Load environment variables from .env file
load_dotenv()

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

DEFAULT_HOME = Path.home() / ".geotutor"


class ConfigurationError(Exception):
    """Raised when configuration values are invalid."""
    pass


def get_home_dir() -> Path:
    return Path(os.getenv("GEOTUTOR_HOME", DEFAULT_HOME)).expanduser()


def get_catalog_path() -> Path:
    return Path(os.getenv("GEOTUTOR_CATALOG_PATH", DEFAULT_CATALOG_PATH)).expanduser()


def get_progress_backend() -> str:
    backend = os.getenv("GEOTUTOR_PROGRESS_BACKEND", "json").lower()
    if backend not in ("json", "sqlite"):
        raise ConfigurationError(
            f"GEOTUTOR_PROGRESS_BACKEND must be 'json' or 'sqlite', got '{backend}'"
        )
    return backend


def get_progress_path() -> Path:
    """Progress location; the default file name depends on the backend."""
    override = os.getenv("GEOTUTOR_PROGRESS_PATH")
    if override:
        return Path(override).expanduser()
    filename = "progress.db" if get_progress_backend() == "sqlite" else "progress.json"
    return get_home_dir() / filename


def create_persistence(student_id: str = "default") -> PersistencePort:
    """Build the persistence port selected by the environment."""
    path = get_progress_path()
    if get_progress_backend() == "sqlite":
        return SqlitePersistence(path, student_id=student_id)
    return JsonFilePersistence(path)


def configure_logging(level: Optional[str] = None):
    """Set up root logging. Level defaults to $LOG_LEVEL, then INFO."""
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
    )
