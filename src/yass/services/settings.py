"""
Settings Management System for YASS

This module provides settings storage for the save system: a JSON file holding
the save location, format, naming and auto save configuration.
"""

import logging
from pathlib import Path
from typing import Optional

from yass.models.save_settings import SaveSettings
from yass.utils.helpers import load_json_file, save_json_file


class SettingsStore:
    """
    Settings storage for YASS.

    This class handles:
    - Loading settings from a JSON file
    - Creating and persisting default settings when none exist
    - Saving updated settings
    """

    SETTINGS_FILE = "save_settings.json"

    def __init__(self):
        """Initialize the settings store."""
        self.logger = logging.getLogger("YASS")
        self.settings_file: Optional[Path] = None
        self.current_settings: SaveSettings = SaveSettings()
        self._is_loaded = False

    @property
    def is_loaded(self) -> bool:
        return self._is_loaded

    def initialize(self, settings_dir: Path) -> bool:
        """
        Initialize the settings store and load settings.

        Args:
            settings_dir: Directory where the settings file should be stored

        Returns:
            bool: True if initialization was successful
        """
        try:
            self.logger.info("Initializing settings store...")

            settings_dir = Path(settings_dir)
            settings_dir.mkdir(parents=True, exist_ok=True)
            self.settings_file = settings_dir / self.SETTINGS_FILE

            self.load()

            self._is_loaded = True
            self.logger.info("Settings store initialized successfully")
            return True

        except Exception as e:
            self.logger.error(f"Failed to initialize settings store: {e}")
            return False

    def load(self) -> SaveSettings:
        """
        Load settings from file.

        A missing or unreadable file is replaced by the default settings, which
        are written back to disk.

        Returns:
            SaveSettings: The loaded settings
        """
        if not self.settings_file:
            self.logger.warning("Settings file not set, using defaults")
            self.current_settings = SaveSettings()
            return self.current_settings

        data = None
        if self.settings_file.exists():
            self.logger.info(f"Loading save settings from {self.settings_file}")
            data = load_json_file(self.settings_file)

        if isinstance(data, dict):
            self.current_settings = SaveSettings.from_dict(data)
        else:
            self.logger.info("No usable settings file found, using defaults")
            self.current_settings = SaveSettings()
            # Save defaults to create the file
            self.save(self.current_settings)

        return self.current_settings

    def save(self, settings: Optional[SaveSettings] = None) -> bool:
        """
        Save settings to file.

        Args:
            settings: Settings to store, the current settings if None

        Returns:
            bool: True if settings were saved successfully
        """
        if settings is not None:
            self.current_settings = settings

        if not self.settings_file:
            self.logger.error("Settings file not set")
            return False

        if not save_json_file(self.settings_file, self.current_settings.to_dict()):
            return False

        self.logger.debug(f"Save settings written to {self.settings_file}")
        return True

    def reset_to_defaults(self) -> SaveSettings:
        """
        Reset settings to default values and persist them.

        Returns:
            SaveSettings: The default settings
        """
        self.current_settings = SaveSettings()
        self.save()
        self.logger.info("Save settings reset to defaults")
        return self.current_settings
