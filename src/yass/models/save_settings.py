"""
Save Settings Models for YASS

This module contains the enums and the settings data class that drive every
save manager operation.
"""

import logging
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict

from yass.models.errors import ConfigurationError

logger = logging.getLogger("YASS")

JSON_FILE_EXTENSION = ".json"
XML_FILE_EXTENSION = ".xml"
DEFAULT_INTERVAL_MILLISECONDS = 600000


class SaveLocation(Enum):
    """Logical location of the save directory."""
    PERSISTENT_PATH = "persistent_path"
    APPLICATION_PATH = "application_path"
    DOCUMENTS = "documents"

    @classmethod
    def parse(cls, value: Any) -> 'SaveLocation':
        """
        Get a location from an enum member, a value or a member name.

        Raises:
            ConfigurationError: If the value is not a known location
        """
        return _parse_enum(cls, value)


class SaveFormat(Enum):
    """Serialization format of a save file."""
    BINARY = "binary"
    JSON = "json"
    XML = "xml"

    @classmethod
    def parse(cls, value: Any) -> 'SaveFormat':
        """
        Get a format from an enum member, a value or a member name.

        Raises:
            ConfigurationError: If the value is not a known format
        """
        return _parse_enum(cls, value)


class AutoSaveInterval(Enum):
    """The auto save interval presets, in minutes."""
    ONE_MIN = 1
    TWO_MINS = 2
    THREE_MINS = 3
    FOUR_MINS = 4
    FIVE_MINS = 5
    SEVEN_MINS = 7
    TEN_MINS = 10
    FIFTEEN_MINS = 15
    TWENTY_MINS = 20
    THIRTY_MINS = 30
    FORTY_FIVE_MINS = 45
    SIXTY_MINS = 60

    def to_milliseconds(self) -> int:
        return self.value * 60 * 1000


def interval_to_milliseconds(minutes: Any) -> int:
    """
    Convert an auto save interval to milliseconds.

    Args:
        minutes: Interval in minutes, or an AutoSaveInterval

    Returns:
        int: The preset in milliseconds, ten minutes for anything that is not a preset
    """
    if isinstance(minutes, AutoSaveInterval):
        return minutes.to_milliseconds()
    if isinstance(minutes, bool):
        return DEFAULT_INTERVAL_MILLISECONDS
    for preset in AutoSaveInterval:
        if preset.value == minutes:
            return preset.to_milliseconds()
    return DEFAULT_INTERVAL_MILLISECONDS


def _parse_enum(enum_cls, value: Any):
    if isinstance(value, enum_cls):
        return value
    for member in enum_cls:
        if value == member.value or (isinstance(value, str) and value.upper() == member.name):
            return member
    raise ConfigurationError(f"Unknown {enum_cls.__name__} value: {value!r}")


@dataclass
class SaveSettings:
    """
    Configuration record read by every save manager operation.

    Loaded once when the manager is initialized and swapped wholesale through
    SaveManager.update_settings().
    """
    location: SaveLocation = SaveLocation.PERSISTENT_PATH
    save_format: SaveFormat = SaveFormat.BINARY
    directory_name: str = "Save Data"
    default_file_name: str = "save"
    auto_save_prefix: str = "auto save - "
    exit_save_name: str = "exit save"
    file_extension: str = "oncgm"
    auto_save_enabled: bool = True
    hide_auto_save_files: bool = False
    auto_save_interval_minutes: int = 10

    @property
    def binary_extension(self) -> str:
        """The configured binary extension, always with a leading dot."""
        if self.file_extension.startswith("."):
            return self.file_extension
        return f".{self.file_extension}"

    def extension_for(self, save_format: SaveFormat) -> str:
        """
        Get the file extension used for a format.

        Args:
            save_format: The save format

        Returns:
            str: Extension with a leading dot
        """
        if save_format == SaveFormat.JSON:
            return JSON_FILE_EXTENSION
        if save_format == SaveFormat.XML:
            return XML_FILE_EXTENSION
        return self.binary_extension

    @property
    def interval_milliseconds(self) -> int:
        return interval_to_milliseconds(self.auto_save_interval_minutes)

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to a JSON friendly dictionary."""
        return {
            "location": self.location.value,
            "save_format": self.save_format.value,
            "directory_name": self.directory_name,
            "default_file_name": self.default_file_name,
            "auto_save_prefix": self.auto_save_prefix,
            "exit_save_name": self.exit_save_name,
            "file_extension": self.file_extension,
            "auto_save_enabled": self.auto_save_enabled,
            "hide_auto_save_files": self.hide_auto_save_files,
            "auto_save_interval_minutes": self.auto_save_interval_minutes,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SaveSettings':
        """
        Create settings from a dictionary.

        Unknown enum values fall back to the defaults with a warning, and keys
        that are not settings are ignored.
        """
        defaults = cls()
        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in data.items() if key in known}

        try:
            values["location"] = SaveLocation.parse(values.get("location", defaults.location))
        except ConfigurationError as e:
            logger.warning(f"{e}, using {defaults.location.value} instead")
            values["location"] = defaults.location

        try:
            values["save_format"] = SaveFormat.parse(values.get("save_format", defaults.save_format))
        except ConfigurationError as e:
            logger.warning(f"{e}, using {defaults.save_format.value} instead")
            values["save_format"] = defaults.save_format

        return cls(**values)
