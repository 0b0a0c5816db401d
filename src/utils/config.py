"""
Configuration management for the Product Lifecycle Tracker application.

This module handles:
- Database path configuration
- Environment-specific configuration (production, development, test)
- Default acting party for command-line use
"""

import getpass
import logging
import os
from pathlib import Path
from typing import Optional

from .constants import (
    APP_NAME,
    APP_VERSION,
    DATABASE_FILENAME,
)

logger = logging.getLogger(__name__)

ENV_VAR_ENVIRONMENT = "PRODUCT_TRACKER_ENV"
ENV_VAR_DATABASE_URL = "PRODUCT_TRACKER_DB_URL"
ENV_VAR_PARTY = "PRODUCT_TRACKER_PARTY"

VALID_ENVIRONMENTS = ("production", "development", "test")


class Config:
    """
    Application configuration manager.

    Resolves where the ledger database lives for the selected environment.
    The test environment uses an in-memory database and touches no files.
    """

    def __init__(self, environment: str = "production"):
        """
        Initialize configuration.

        Args:
            environment: 'production', 'development' or 'test'

        Raises:
            ValueError: If environment is not recognized
        """
        if environment not in VALID_ENVIRONMENTS:
            raise ValueError(
                f"Unknown environment '{environment}'. "
                f"Expected one of: {', '.join(VALID_ENVIRONMENTS)}"
            )

        self.environment = environment
        self._app_name = APP_NAME
        self._app_version = APP_VERSION
        self._url_override = os.environ.get(ENV_VAR_DATABASE_URL)

        if environment == "development":
            self._base_dir = self._get_project_data_dir()
        else:
            self._base_dir = self._get_user_documents_dir()

        self._database_dir = self._base_dir
        self._database_path = self._database_dir / DATABASE_FILENAME

        if not self.is_test and self._url_override is None:
            self._ensure_directories()

    def _get_project_data_dir(self) -> Path:
        """Project data/ directory used during development."""
        project_root = Path(__file__).parent.parent.parent
        return project_root / "data"

    def _get_user_documents_dir(self) -> Path:
        """App subdirectory of the user's Documents folder."""
        return Path.home() / "Documents" / "ProductTracker"

    def _ensure_directories(self):
        """Create necessary directories if they don't exist."""
        self._database_dir.mkdir(parents=True, exist_ok=True)

    @property
    def app_name(self) -> str:
        """Application name."""
        return self._app_name

    @property
    def app_version(self) -> str:
        """Application version."""
        return self._app_version

    @property
    def database_path(self) -> Path:
        """Full path to the database file."""
        return self._database_path

    @property
    def database_url(self) -> str:
        """
        SQLAlchemy database URL.

        PRODUCT_TRACKER_DB_URL wins over everything else. The test
        environment falls back to an in-memory SQLite database.
        """
        if self._url_override:
            return self._url_override
        if self.is_test:
            return "sqlite:///:memory:"
        db_path_str = str(self._database_path).replace("\\", "/")
        return f"sqlite:///{db_path_str}"

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    @property
    def is_test(self) -> bool:
        """Check if running in test mode."""
        return self.environment == "test"

    def database_exists(self) -> bool:
        """True if the database file exists (always False for URL overrides)."""
        if self._url_override or self.is_test:
            return False
        return self._database_path.exists()

    def __repr__(self) -> str:
        return f"Config(environment='{self.environment}', database_url='{self.database_url}')"


_config_instance: Optional[Config] = None


def get_config(environment: Optional[str] = None) -> Config:
    """
    Get the global configuration instance.

    Once created, the singleton's environment cannot be changed by passing
    a different environment argument; this prevents switching databases
    mid-session.

    Args:
        environment: Optional environment for initial creation. If None, uses
                    PRODUCT_TRACKER_ENV or defaults to production. Ignored if
                    singleton already exists.

    Returns:
        Config instance
    """
    global _config_instance

    if _config_instance is None:
        if environment is None:
            environment = os.environ.get(ENV_VAR_ENVIRONMENT, "production")
        _config_instance = Config(environment)
    elif environment is not None and environment != _config_instance.environment:
        logger.warning(
            f"get_config() called with environment='{environment}' but singleton "
            f"already exists with environment='{_config_instance.environment}'. "
            f"Returning existing singleton to prevent database switching."
        )

    return _config_instance


def reset_config():
    """
    Reset the global configuration instance.

    Useful for testing.
    """
    global _config_instance
    _config_instance = None


def get_default_party() -> str:
    """
    Identity used as the acting party when none is given explicitly.

    Returns:
        PRODUCT_TRACKER_PARTY if set, otherwise the login name
    """
    party = os.environ.get(ENV_VAR_PARTY)
    if party:
        return party
    return getpass.getuser()
