"""
Event Management System for YASS

This module provides the event system the save system uses to notify its host
(a UI layer, a game loop) about catalog and save file changes.
It uses the Blinker library for fast, reliable signal dispatching with weak reference support.
"""

import logging
from typing import Callable

from blinker import Namespace


class EventManager:
    """
    Central event management system for YASS using Blinker signals.

    This class lets the host react to save system activity without the save
    manager knowing who listens.
    """

    def __init__(self):
        """Initialize the event manager."""
        self.logger = logging.getLogger("YASS")

        # Create a Blinker namespace for YASS events
        self._namespace = Namespace()

        self.logger.debug("Event manager initialized with Blinker backend")

    def subscribe(self, event_name: str, callback: Callable, weak: bool = True) -> bool:
        """
        Subscribe to an event.

        Args:
            event_name: Name of the event to subscribe to
            callback: Function to call when the event is emitted
            weak: Whether to use weak references (default: True)

        Returns:
            bool: True if subscription was successful
        """
        try:
            signal = self._namespace.signal(event_name)
            signal.connect(callback, weak=weak)

            self.logger.debug(f"Subscribed to event '{event_name}': {callback}")
            return True

        except Exception as e:
            self.logger.error(f"Failed to subscribe to event '{event_name}': {e}")
            return False

    def unsubscribe(self, event_name: str, callback: Callable) -> bool:
        """
        Unsubscribe from an event.

        Args:
            event_name: Name of the event to unsubscribe from
            callback: Function to remove from subscribers

        Returns:
            bool: True if unsubscription was successful
        """
        try:
            signal = self._namespace.signal(event_name)

            signal.disconnect(receiver=callback)

            self.logger.debug(f"Unsubscribed from event '{event_name}': {callback}")
            return True

        except Exception as e:
            self.logger.error(f"Failed to unsubscribe from event '{event_name}': {e}")
            return False

    def emit(self, event_name: str, **kwargs) -> int:
        """
        Emit an event to all subscribers.

        Args:
            event_name: Name of the event to emit
            **kwargs: Keyword arguments to pass to callbacks

        Returns:
            int: Number of callbacks that were successfully called
        """
        try:
            signal = self._namespace.signal(event_name)

            results = signal.send(self, **kwargs)

            return len(results)

        except Exception as e:
            self.logger.error(f"Failed to emit event '{event_name}': {e}")
            return 0


# Common event names used throughout the save system
class Events:
    """Common event names used throughout YASS."""

    # Application events
    APP_INITIALIZED = "app_initialized"
    APP_SHUTDOWN = "app_shutdown"

    # Settings events
    SETTINGS_LOADED = "settings_loaded"
    SETTINGS_CHANGED = "settings_changed"

    # Catalog events
    CATALOG_REFRESHED = "catalog_refreshed"

    # Save file events
    SAVE_WRITTEN = "save_written"
    SAVE_LOADED = "save_loaded"
    SAVE_DELETED = "save_deleted"
    AUTO_SAVE_WRITTEN = "auto_save_written"
    EXIT_SAVE_WRITTEN = "exit_save_written"

    # Status events
    STATUS_MESSAGE = "status_message"
