"""
Location Resolution for YASS

This module maps a logical save location to an absolute directory, using the
host's well-known directories.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Optional

import platformdirs

from yass.models.errors import ConfigurationError
from yass.models.save_settings import SaveLocation


def get_application_dir() -> Path:
    """
    Returns the directory of the running program.
    Handles both development and Nuitka-compiled environments.
    """
    if "__compiled__" in globals() or getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent

    main_script = sys.argv[0] if sys.argv and sys.argv[0] else ""
    if main_script:
        return Path(main_script).resolve().parent
    return Path.cwd()


class LocationResolver:
    """
    Resolves save locations to directories.

    This class handles:
    - Persistent storage directory (platform user data dir)
    - Application (install) directory
    - User documents directory
    - Fallback to persistent storage for unknown locations
    """

    def __init__(self, app_name: str = "YASS", app_author: Optional[str] = None,
                 persistent_dir: Optional[Path] = None,
                 application_dir: Optional[Path] = None,
                 documents_dir: Optional[Path] = None):
        """
        Initialize the location resolver.

        Args:
            app_name: Application name used for the persistent storage directory
            app_author: Application author, used on Windows
            persistent_dir: Override for the persistent storage directory
            application_dir: Override for the application directory
            documents_dir: Override for the documents directory
        """
        self.logger = logging.getLogger("YASS")
        self.app_name = app_name
        self.app_author = app_author

        self._persistent_dir = Path(persistent_dir) if persistent_dir else None
        self._application_dir = Path(application_dir) if application_dir else None
        self._documents_dir = Path(documents_dir) if documents_dir else None

    @property
    def persistent_dir(self) -> Path:
        if self._persistent_dir is None:
            return Path(platformdirs.user_data_dir(self.app_name, self.app_author or False))
        return self._persistent_dir

    @property
    def application_dir(self) -> Path:
        if self._application_dir is None:
            return get_application_dir()
        return self._application_dir

    @property
    def documents_dir(self) -> Path:
        if self._documents_dir is None:
            return Path(platformdirs.user_documents_dir())
        return self._documents_dir

    def base_dir(self, location: Any) -> Path:
        """
        Get the base directory of a location.

        Args:
            location: A SaveLocation, or its value or name

        Returns:
            Path: The base directory, the persistent storage directory for unknown locations
        """
        try:
            location = SaveLocation.parse(location)
        except ConfigurationError as e:
            self.logger.warning(f"Couldn't get the desired save location ({e}), using the persistent data path instead")
            return self.persistent_dir

        if location == SaveLocation.APPLICATION_PATH:
            return self.application_dir
        if location == SaveLocation.DOCUMENTS:
            return self.documents_dir
        return self.persistent_dir

    def resolve(self, location: Any, directory_name: str) -> Path:
        """
        Get the save directory of a location.

        Args:
            location: A SaveLocation, or its value or name
            directory_name: Name of the save directory inside the location

        Returns:
            Path: Absolute path to the save directory
        """
        directory = (self.base_dir(location) / directory_name).absolute()
        self.logger.debug(f"Resolved {location} to {directory}")
        return directory
