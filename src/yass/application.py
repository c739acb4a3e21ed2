"""
YASS Application Framework

This module contains the host application class that wires the save system
components together and manages their lifecycle.
"""

import logging
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

import platformdirs

from yass.models.save_manager import SaveManager
from yass.models.save_settings import SaveSettings
from yass.services.events import EventManager, Events
from yass.services.paths import LocationResolver
from yass.services.scheduler import AutoSaveScheduler
from yass.services.settings import SettingsStore
from yass.utils.logging_handler import EventManagerHandler, add_event_manager_handler_to_logger


class SaveSystemApplication:
    """
    Main application class for YASS.
    """

    logger: logging.Logger

    event_manager: EventManager
    settings_store: SettingsStore
    resolver: LocationResolver
    save_manager: SaveManager
    scheduler: AutoSaveScheduler
    log_handler: Optional[EventManagerHandler]
    _is_initialized: bool

    def __init__(self, settings_dir: Optional[Path] = None,
                 resolver: Optional[LocationResolver] = None,
                 event_manager: Optional[EventManager] = None,
                 clock: Optional[Callable[[], datetime]] = None):
        """
        Create the application components.

        Args:
            settings_dir: Directory of the settings file, the platform config dir if None
            resolver: Location resolver, a default one if None
            event_manager: Event manager, a new one if None
            clock: Time source used for save file names
        """
        self.logger = logging.getLogger("YASS")

        if settings_dir is None:
            settings_dir = platformdirs.user_config_dir("YASS", False)
        self.settings_dir = Path(settings_dir)

        self.event_manager = event_manager or EventManager()
        self.settings_store = SettingsStore()
        self.resolver = resolver or LocationResolver()
        self.save_manager = SaveManager(resolver=self.resolver,
                                        event_manager=self.event_manager,
                                        clock=clock)
        self.scheduler = AutoSaveScheduler(self.save_manager.auto_save)
        self.log_handler = None
        self._is_initialized = False

    @property
    def is_initialized(self) -> bool:
        return self._is_initialized

    @property
    def settings(self) -> SaveSettings:
        return self.settings_store.current_settings

    def initialize(self) -> bool:
        """
        Initialize the application and all its components.

        Returns:
            bool: True if initialization was successful
        """
        try:
            self.logger.info("Initializing YASS Application...")

            if not self._initialize_core_systems():
                return False

            if not self._initialize_managers():
                return False

            self._is_initialized = True
            self.event_manager.emit(Events.APP_INITIALIZED)
            self.logger.info("YASS Application initialization complete")
            return True

        except Exception as e:
            self.logger.error(f"Failed to initialize application: {e}")
            return False

    def update_settings(self, settings: SaveSettings) -> bool:
        """
        Apply new settings to every component and persist them.

        Args:
            settings: The new settings

        Returns:
            bool: True if the settings were applied
        """
        if settings is None:
            self.logger.warning("Cannot apply empty save settings")
            return False

        try:
            if not self.save_manager.update_settings(settings):
                return False

            self.settings_store.save(settings)
            self.scheduler.set_interval(settings.auto_save_interval_minutes)
            self.scheduler.set_enabled(settings.auto_save_enabled)
            return True

        except Exception as e:
            self.logger.error(f"Failed to update settings: {e}")
            return False

    def set_auto_save(self, enabled: bool, interval_minutes: int, hide_files: bool = False) -> bool:
        """
        Turn auto save on or off.

        Args:
            enabled: Whether the auto save timer runs
            interval_minutes: Interval preset in minutes
            hide_files: Whether auto save files are hidden

        Returns:
            bool: True if the settings were applied
        """
        settings = replace(self.settings,
                           auto_save_enabled=enabled,
                           auto_save_interval_minutes=interval_minutes,
                           hide_auto_save_files=hide_files)
        self.logger.info(f"Auto save {'enabled' if enabled else 'disabled'}")
        return self.update_settings(settings)

    def shutdown(self, exit_save: bool = True) -> None:
        """
        Shutdown the application and clean up resources.

        The auto save timer is stopped before the exit save is written.

        Args:
            exit_save: Whether to write an exit save of the active record
        """
        try:
            self.logger.info("Shutting down YASS Application...")

            self.event_manager.emit(Events.APP_SHUTDOWN)

            self.scheduler.stop()

            if exit_save and self._is_initialized and self.save_manager.active_record is not None:
                self.save_manager.exit_save()

            if self.settings_store.is_loaded:
                self.settings_store.save()

            self._is_initialized = False
            self.logger.info("YASS Application shutdown complete")

        except Exception as e:
            self.logger.error(f"Error during application shutdown: {e}")

        finally:
            self._shutdown_logging()

    def _initialize_core_systems(self) -> bool:
        """Initialize settings and logging."""
        try:
            self.logger.info("Initializing core systems...")

            if not self.initialize_logging():
                self.logger.error("Failed to initialize logging handler")
                return False

            if not self.settings_store.initialize(self.settings_dir):
                self.logger.error("Failed to initialize settings store")
                return False
            self.event_manager.emit(Events.SETTINGS_LOADED, settings=self.settings)

            return True

        except Exception as e:
            self.logger.error(f"Failed to initialize core systems: {e}")
            return False

    def initialize_logging(self) -> bool:
        """
        Forward log records to the event manager as status messages.

        Returns:
            bool: True if initialization was successful
        """
        try:
            if self.log_handler is None:
                self.log_handler = add_event_manager_handler_to_logger(
                    self.logger, self.event_manager, logging.INFO,
                    logging.Formatter('%(asctime)s - [%(levelname)s] %(message)s', datefmt='%H:%M:%S'))
            return True

        except Exception as e:
            self.logger.error(f"Failed to initialize logging handler: {e}")
            return False

    def _initialize_managers(self) -> bool:
        """Initialize the save manager and the auto save timer."""
        try:
            self.logger.info("Initializing managers...")

            settings = self.settings
            if not self.save_manager.initialize(settings):
                self.logger.error("Failed to initialize save manager")
                return False

            self.scheduler.set_interval(settings.auto_save_interval_minutes)
            self.scheduler.set_enabled(settings.auto_save_enabled)

            self.logger.info("Managers initialized successfully")
            return True

        except Exception as e:
            self.logger.error(f"Failed to initialize managers: {e}")
            return False

    def _shutdown_logging(self) -> None:
        if self.log_handler is not None:
            self.logger.removeHandler(self.log_handler)
            self.log_handler.close()
            self.log_handler = None
