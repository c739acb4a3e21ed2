"""
Save Manager for YASS

This module provides the SaveManager class, which owns the active save record
and the file it belongs to, and orchestrates creating, loading, saving and
deleting save files.
"""

import logging
import threading
from contextlib import contextmanager
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from yass.models.errors import ConfigurationError, EmptyResultError, SaveIOError
from yass.models.save_file import CatalogEntry, FileRecord, SaveCatalog
from yass.models.save_record import SaveRecord
from yass.models.save_settings import SaveFormat, SaveLocation, SaveSettings
from yass.services.catalog import FileCatalog
from yass.services.codec import SaveCodec
from yass.services.events import EventManager, Events
from yass.services.paths import LocationResolver
from yass.utils.file_ops import FileOperations
from yass.utils.helpers import build_save_file_name


class SaveState(Enum):
    """State of the active save record."""
    UNINITIALIZED = "uninitialized"
    LOADED = "loaded"


class SaveManager:
    """
    Manages save files.

    All public operations are serialized by a re-entrant lock so that auto
    save ticks never interleave with foreground saves. Events are queued
    while the lock is held and emitted once it is released, so subscribers
    may call back into the manager or stop the auto save timer. Failures
    are logged and turned into a fallback; nothing is raised to the caller.
    """

    def __init__(self, codec: Optional[SaveCodec] = None,
                 resolver: Optional[LocationResolver] = None,
                 catalog: Optional[FileCatalog] = None,
                 event_manager: Optional[EventManager] = None,
                 file_ops: Optional[FileOperations] = None,
                 clock: Optional[Callable[[], datetime]] = None):
        self.logger = logging.getLogger("YASS")

        self.codec = codec or SaveCodec()
        self.resolver = resolver or LocationResolver()
        self.file_catalog = catalog or FileCatalog(self.codec)
        self.event_manager = event_manager
        self.file_ops = file_ops or FileOperations()
        self.clock = clock or datetime.now

        self.lock = threading.RLock()
        self._lock_depth = 0
        self._pending_events: List[Tuple[str, Dict[str, Any]]] = []
        self.settings: Optional[SaveSettings] = None
        self.directory: Optional[Path] = None
        self.catalog = SaveCatalog()
        self.active_record: Optional[SaveRecord] = None
        self.active_file: Optional[FileRecord] = None
        self._is_initialized = False

    @property
    def is_initialized(self) -> bool:
        return self._is_initialized

    @property
    def state(self) -> SaveState:
        return SaveState.LOADED if self.active_record is not None else SaveState.UNINITIALIZED

    def initialize(self, settings: SaveSettings) -> bool:
        """
        Initialize the manager and load the most recent save.

        Resolves and creates the save directory, scans it, and loads the most
        recent save into the active slot. A fresh default save is created when
        nothing valid is found.

        Args:
            settings: Settings to use

        Returns:
            bool: True if initialization was successful

        Raises:
            ConfigurationError: If settings is None
        """
        if settings is None:
            raise ConfigurationError("Save settings are required to initialize the save manager")

        with self._locked():
            try:
                self.logger.info("Initializing save manager...")

                self.settings = settings
                self.update_directory()
                self.load_most_recent()

                self._is_initialized = True
                self.logger.info(f"Save manager initialized in {self.directory}")
                return True

            except Exception as e:
                self.logger.error(f"Failed to initialize save manager: {e}")
                return False

    def update_settings(self, settings: SaveSettings) -> bool:
        """
        Replace the settings and re-resolve the save directory.

        Args:
            settings: The new settings

        Returns:
            bool: True if the settings were applied
        """
        if settings is None:
            self.logger.warning("Cannot apply empty save settings")
            return False

        with self._locked():
            self.settings = settings
            self.update_directory()
            self.refresh_catalog()
            self._emit(Events.SETTINGS_CHANGED, settings=settings)
            return True

    # Directory management

    def check_directory_exists(self) -> bool:
        """Check if the configured save directory exists."""
        return self.directory is not None and self.directory.is_dir()

    def create_directory_if_missing(self) -> Optional[Path]:
        """
        Create the save directory if it does not exist.

        Returns:
            Path: The save directory, or None if it could not be created
        """
        if not self._ensure_settings():
            return None

        if self.directory is None:
            self.directory = self.resolver.resolve(self.settings.location, self.settings.directory_name)

        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            return self.directory
        except OSError as e:
            self.logger.error(f"Failed to create save directory {self.directory}: {e}")
            return None

    def update_directory(self) -> Optional[Path]:
        """
        Re-resolve the save directory from the current settings and create it.

        Returns:
            Path: The save directory, or None if it could not be created
        """
        if not self._ensure_settings():
            return None

        with self._locked():
            self.directory = self.resolver.resolve(self.settings.location, self.settings.directory_name)
            return self.create_directory_if_missing()

    # Catalog

    def refresh_catalog(self) -> SaveCatalog:
        """
        Rescan the save directory and replace the catalog snapshot.

        Returns:
            SaveCatalog: The new snapshot, or the previous one if the scan failed
        """
        if not self._ensure_settings():
            return self.catalog

        with self._locked():
            try:
                if self.directory is None:
                    self.update_directory()
                self.catalog = self.file_catalog.scan(self.directory, self.settings)
                self._emit(Events.CATALOG_REFRESHED,
                           manual_count=len(self.catalog.manual_saves),
                           auto_count=len(self.catalog.auto_saves))
            except Exception as e:
                self.logger.error(f"Failed to scan save directory {self.directory}: {e}")
            return self.catalog

    def select_most_recent(self) -> Optional[CatalogEntry]:
        """
        Pick the most recent save between the newest manual and newest auto save.

        The strictly later one wins. When only one kind exists it wins. Equal
        last-write times select nothing.

        Returns:
            CatalogEntry, or None if nothing can be selected
        """
        newest_manual = self.file_catalog.newest(self.catalog.manual_saves)
        newest_auto = self.file_catalog.newest(self.catalog.auto_saves)

        if newest_manual is None:
            return newest_auto
        if newest_auto is None:
            return newest_manual

        if newest_manual.file.last_write_time > newest_auto.file.last_write_time:
            return newest_manual
        if newest_auto.file.last_write_time > newest_manual.file.last_write_time:
            return newest_auto

        self.logger.warning(f"{newest_manual.file.name} and {newest_auto.file.name} have the same "
                            f"last write time, neither is selected")
        return None

    # Saving

    def save(self) -> Optional[Path]:
        """
        Overwrite the active file with the active record.

        Without an active file, the record is written to the default file name
        in the configured format and that file becomes the active file.

        Returns:
            Path: The written file, or None if nothing was saved
        """
        with self._locked():
            if not self._ensure_settings():
                return None

            if self.active_record is None:
                self.logger.warning("No save record is loaded, the file was not saved")
                return None

            try:
                if self.active_file is not None:
                    path = self.active_file.path
                    save_format = self.codec.format_for_path(path, self.settings) or self.settings.save_format
                    path.parent.mkdir(parents=True, exist_ok=True)
                else:
                    self.create_directory_if_missing()
                    save_format = self.settings.save_format
                    path = self.directory / build_save_file_name(self.settings.default_file_name,
                                                                 self.settings.extension_for(save_format))

                self.codec.write_file(path, self.active_record, save_format)
                self.active_file = FileRecord.from_path(path)

                self.logger.info(f"Saved {path.name}")
                self.refresh_catalog()
                self._emit(Events.SAVE_WRITTEN, path=path, record=self.active_record)
                return path

            except Exception as e:
                self.logger.error(f"Failed to save the active record: {e}")
                return None

    def save_as(self, record: Optional[SaveRecord], save_format: Any = None,
                location: Any = None, name: Optional[str] = None,
                append_timestamp: bool = True) -> Optional[Path]:
        """
        Write a record to a new file.

        The active record and file are left unchanged.

        Args:
            record: The record to write, nothing is written if None
            save_format: Format to write, the configured format if None
            location: Location to write to, the configured location if None
            name: Base file name, the default name if empty
            append_timestamp: Whether to append " HH-MM-SS_MM-DD-YYYY" to the name

        Returns:
            Path: The written file, or None if nothing was saved
        """
        if record is None:
            self.logger.warning("No save record was given, the file was not saved")
            return None

        with self._locked():
            if not self._ensure_settings():
                return None

            try:
                save_format = self._parse_format(save_format)
                if location is None:
                    directory = self.create_directory_if_missing()
                else:
                    directory = self.resolver.resolve(location, self.settings.directory_name)
                    directory.mkdir(parents=True, exist_ok=True)

                base_name = name if name and name.strip() else self.settings.default_file_name
                moment = self.clock() if append_timestamp else None
                path = directory / build_save_file_name(base_name, self.settings.extension_for(save_format), moment)

                self.codec.write_file(path, record, save_format)

                self.logger.info(f"Saved {path.name}")
                self.refresh_catalog()
                self._emit(Events.SAVE_WRITTEN, path=path, record=record)
                return path

            except Exception as e:
                self.logger.error(f"Failed to save record: {e}")
                return None

    def auto_save(self, record: Optional[SaveRecord] = None) -> Optional[Path]:
        """
        Write an auto save of a record, the active record by default.

        Returns:
            Path: The written file, or None if the auto save was skipped
        """
        with self._locked():
            record = record if record is not None else self.active_record
            if record is None:
                self.logger.warning("No save record is loaded, the auto save was skipped")
                return None

            path = self._write_auto_save(record, "")
            if path is not None:
                self._emit(Events.AUTO_SAVE_WRITTEN, path=path, record=record)
            return path

    def exit_save(self, record: Optional[SaveRecord] = None) -> Optional[Path]:
        """
        Write an exit save of a record, the active record by default.

        An exit save is an auto save named with the configured exit save name.

        Returns:
            Path: The written file, or None if the exit save was skipped
        """
        with self._locked():
            record = record if record is not None else self.active_record
            if record is None:
                self.logger.warning("No save record is loaded, the exit save was skipped")
                return None
            if not self._ensure_settings():
                return None

            path = self._write_auto_save(record, self.settings.exit_save_name)
            if path is not None:
                self._emit(Events.EXIT_SAVE_WRITTEN, path=path, record=record)
            return path

    # Loading

    def load(self, path: Optional[Path] = None, save_format: Any = None) -> SaveRecord:
        """
        Load a save into the active slot.

        Without a path the most recent save is loaded. With a path only, the
        format comes from the file extension. A missing or unreadable file
        is replaced by a new default save.

        Args:
            path: Save file to load
            save_format: Format to decode with, taken from the extension if None

        Returns:
            SaveRecord: The loaded record, never None
        """
        if path is None:
            return self.load_most_recent()

        with self._locked():
            if not self._ensure_settings():
                return SaveRecord()

            path = Path(path)
            if not path.is_file():
                self.logger.warning(f"The file {path} could not be found, creating a new save file")
                return self._create_default_save()

            if save_format is None:
                save_format = self.codec.format_for_path(path, self.settings)
                if save_format is None:
                    self.logger.warning(f"Unrecognized save file extension '{path.suffix}', creating a new save file")
                    return self._create_default_save()
            else:
                save_format = self._parse_format(save_format)

            return self._load_path(path, save_format)

    def load_most_recent(self) -> SaveRecord:
        """
        Rescan the directory and load the most recent save.

        Returns:
            SaveRecord: The loaded record, or a new default record if no save
                        could be selected
        """
        with self._locked():
            if not self._ensure_settings():
                return SaveRecord()

            self.refresh_catalog()
            entry = self.select_most_recent()
            if entry is None:
                self.logger.info("No save was selected, creating a new save file")
                return self._create_default_save()

            return self._load_entry(entry)

    def load_from_location(self, location: Any, name: str, save_format: Any) -> SaveRecord:
        """
        Load a save by location and file name.

        Args:
            location: Location of the save directory
            name: File name inside the save directory
            save_format: Format to decode with

        Returns:
            SaveRecord: The loaded record, or a new default record
        """
        with self._locked():
            if not self._ensure_settings():
                return SaveRecord()

            directory = self.resolver.resolve(location, self.settings.directory_name)
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                self.logger.error(f"Failed to create save directory {directory}: {e}")

            return self.load(directory / name, save_format)

    def load_latest_auto_save(self, name_filter: Optional[str] = None) -> Optional[SaveRecord]:
        """
        Load the most recent auto save.

        Without a filter exit saves are ignored. With a filter, the most recent
        auto save whose name contains it is loaded.

        Args:
            name_filter: Text the file name must contain

        Returns:
            SaveRecord, or None if there is no matching auto save
        """
        with self._locked():
            if not self._ensure_settings():
                return None

            self.refresh_catalog()

            prefix = self.settings.auto_save_prefix
            exit_name = self.settings.exit_save_name
            if name_filter:
                def predicate(entry: CatalogEntry) -> bool:
                    return name_filter in entry.file.name
            else:
                def predicate(entry: CatalogEntry) -> bool:
                    return prefix in entry.file.name and not (exit_name and exit_name in entry.file.name)

            try:
                entry = self.file_catalog.require_latest(self.catalog.auto_saves, predicate)
            except EmptyResultError:
                self.logger.info(f"No auto save matching '{name_filter or prefix}' was found")
                return None

            return self._load_entry(entry)

    def load_latest_exit_save(self) -> Optional[SaveRecord]:
        """
        Load the most recent exit save.

        Returns:
            SaveRecord, or None if there is no exit save
        """
        if not self._ensure_settings():
            return None
        return self.load_latest_auto_save(self.settings.exit_save_name)

    # Deleting

    def delete(self, path: Path) -> bool:
        """
        Delete a save file.

        Deleting the active file also clears the active record.

        Args:
            path: The file to delete

        Returns:
            bool: True if the file was deleted
        """
        with self._locked():
            path = Path(path)
            try:
                self.file_ops.delete_file(path)
            except SaveIOError as e:
                self.logger.error(f"Failed to delete save file: {e}")
                return False

            if self.active_file is not None and self.active_file.path.resolve() == path.resolve():
                self.clear_active()

            self.logger.info(f"Deleted {path.name}")
            self.refresh_catalog()
            self._emit(Events.SAVE_DELETED, path=path)
            return True

    def delete_active(self) -> bool:
        """
        Delete the active file and clear the active record.

        The active state is cleared only when the file is gone afterwards, so
        a failed delete leaves the manager pointing at the file it still has.

        Returns:
            bool: True if the file was deleted
        """
        with self._locked():
            if self.active_file is None:
                self.logger.warning("No save file is loaded, nothing was deleted")
                return False

            path = self.active_file.path
            try:
                self.file_ops.delete_file(path)
                deleted = True
            except SaveIOError as e:
                self.logger.error(f"Failed to delete the active save file: {e}")
                deleted = False

            if not path.exists():
                self.clear_active()

            if deleted:
                self.logger.info(f"Deleted {path.name}")
                self.refresh_catalog()
                self._emit(Events.SAVE_DELETED, path=path)
            return deleted

    def clear_active(self) -> None:
        """Forget the active record and file."""
        with self._locked():
            self.active_record = None
            self.active_file = None

    # File checks

    def has_save_files(self) -> bool:
        """
        Check if any location holds a file with a recognized save extension.

        Returns:
            bool: True if at least one candidate save file exists
        """
        if not self._ensure_settings():
            return False

        for location in SaveLocation:
            directory = self.resolver.resolve(location, self.settings.directory_name)
            if self.file_catalog.candidate_files(directory, self.settings):
                return True
        return False

    def save_file_exists(self, path: Path) -> bool:
        """Check if a save file exists at a path."""
        return Path(path).is_file()

    def save_file_exists_at(self, location: Any, name: str) -> bool:
        """
        Check if a save file exists in a location.

        Args:
            location: Location of the save directory
            name: File name inside the save directory

        Returns:
            bool: True if the file exists
        """
        if not self._ensure_settings():
            return False
        return self.save_file_exists(self.resolver.resolve(location, self.settings.directory_name) / name)

    # Internal helpers

    def _ensure_settings(self) -> bool:
        if self.settings is None:
            self.logger.warning("Save manager has no settings, call initialize() first")
            return False
        return True

    def _parse_format(self, save_format: Any) -> SaveFormat:
        if save_format is None:
            return self.settings.save_format
        try:
            return SaveFormat.parse(save_format)
        except ConfigurationError as e:
            self.logger.warning(f"{e}, using {self.settings.save_format.value} instead")
            return self.settings.save_format

    def _load_entry(self, entry: CatalogEntry) -> SaveRecord:
        save_format = self.codec.format_for_path(entry.file.path, self.settings)
        if save_format is None:
            self.logger.warning(f"Unrecognized save file extension '{entry.file.extension}', creating a new save file")
            return self._create_default_save()
        return self._load_path(entry.file.path, save_format)

    def _load_path(self, path: Path, save_format: SaveFormat) -> SaveRecord:
        try:
            record = self.codec.read_file(path, save_format)
        except Exception as e:
            self.logger.error(f"Failed to read {path.name}: {e}")
            record = None
        if record is None:
            self.logger.warning(f"{path.name} was found but couldn't be read as a save, creating a new save file")
            return self._create_default_save()

        self.active_record = record
        self.active_file = FileRecord.from_path(path)

        self.logger.info(f"Loaded {path.name}")
        self._emit(Events.SAVE_LOADED, path=path, record=record)
        return record

    def _create_default_save(self) -> SaveRecord:
        record = SaveRecord()
        path = None
        try:
            self.create_directory_if_missing()
            save_format = self.settings.save_format
            path = self.directory / build_save_file_name(self.settings.default_file_name,
                                                         self.settings.extension_for(save_format),
                                                         self.clock())
            self.codec.write_file(path, record, save_format)
            self.logger.info(f"Created new save file {path.name}")
        except Exception as e:
            self.logger.error(f"Failed to write the new default save: {e}")
            path = None

        self.active_record = record
        self.active_file = FileRecord.from_path(path) if path is not None else None

        if path is not None:
            self.refresh_catalog()
            self._emit(Events.SAVE_WRITTEN, path=path, record=record)
        return record

    def _write_auto_save(self, record: SaveRecord, name: str) -> Optional[Path]:
        if not self._ensure_settings():
            return None

        try:
            directory = self.create_directory_if_missing()
            if directory is None:
                return None

            save_format = self.settings.save_format
            path = directory / build_save_file_name(name,
                                                    self.settings.extension_for(save_format),
                                                    self.clock(),
                                                    prefix=self.settings.auto_save_prefix)
            # Hidden files cannot be opened for writing on Windows
            if path.exists():
                path.unlink()

            self.codec.write_file(path, record, save_format)
            if self.settings.hide_auto_save_files:
                self.file_ops.hide_file(path)

            self.logger.info(f"Auto saved {path.name}")
            self.refresh_catalog()
            return path

        except Exception as e:
            self.logger.error(f"Failed to write auto save: {e}")
            return None

    @contextmanager
    def _locked(self):
        with self.lock:
            self._lock_depth += 1
            try:
                yield
            finally:
                self._lock_depth -= 1
                events = []
                if self._lock_depth == 0:
                    events, self._pending_events = self._pending_events, []

        for event_name, kwargs in events:
            self._dispatch(event_name, kwargs)

    def _emit(self, event_name: str, **kwargs) -> None:
        with self.lock:
            if self._lock_depth:
                self._pending_events.append((event_name, kwargs))
                return
        self._dispatch(event_name, kwargs)

    def _dispatch(self, event_name: str, kwargs: Dict[str, Any]) -> None:
        if self.event_manager:
            self.event_manager.emit(event_name, **kwargs)
