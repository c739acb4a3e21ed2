"""
Event Manager Logging Handler for YASS

This module provides a custom logging handler that bridges Python's standard
logging system with YASS's event management system, so a host UI can show
save system messages in its status bar.
"""

import logging
import sys
import threading
import traceback
from typing import Optional

from yass.services.events import EventManager, Events


class EventManagerHandler(logging.Handler):
    """
    Custom logging handler that forwards log records to the event manager.
    """

    def __init__(self, event_manager: Optional[EventManager] = None, level: int = logging.NOTSET):
        """
        Initialize the event manager logging handler.

        Args:
            event_manager: The event manager instance to forward messages to.
                          If None, the handler will silently ignore log records.
            level: The minimum log level to handle (default: NOTSET)
        """
        super().__init__(level)
        self.event_manager = event_manager
        self._local = threading.local()

        if not self.formatter:
            self.setFormatter(logging.Formatter(
                '%(name)s - %(levelname)s - %(message)s'
            ))

    def emit(self, record: logging.LogRecord) -> None:
        """
        Emit a log record as a STATUS_MESSAGE event.
        """
        # Records logged by the event manager while forwarding are dropped
        if self.event_manager is None or getattr(self._local, "forwarding", False):
            return

        self._local.forwarding = True
        try:
            formatted_message = self.format(record)

            self.event_manager.emit(Events.STATUS_MESSAGE,
                                    message=formatted_message,
                                    message_type=record.levelname.lower())

        except Exception:
            self.handleError(record)
        finally:
            self._local.forwarding = False

    def set_event_manager(self, event_manager: Optional[EventManager]) -> None:
        """
        Set or update the event manager instance.

        Args:
            event_manager: New event manager instance, or None to disable
        """
        self.event_manager = event_manager

    def handleError(self, record: logging.LogRecord) -> None:
        """
        Handle errors that occur during logging.
        Args:
            record: The log record that caused the error
        """
        ei = sys.exc_info()
        if ei[1] is not None:
            print(f"EventManagerHandler failed while processing record: {record.getMessage()}", file=sys.stderr)
            traceback.print_exception(*ei, file=sys.stderr)

    def close(self) -> None:
        """
        Close the handler and release the event manager.
        """
        self.event_manager = None
        super().close()


def add_event_manager_handler_to_logger(
    logger: logging.Logger,
    event_manager: Optional[EventManager] = None,
    level: int = logging.INFO,
    formatter: Optional[logging.Formatter] = None
) -> EventManagerHandler:
    """
    Convenience function to add an EventManagerHandler to an existing logger.

    Args:
        logger: Logger to add the handler to
        event_manager: Event manager instance to use
        level: Minimum log level to handle
        formatter: Custom formatter to use (optional)

    Returns:
        EventManagerHandler: The handler that was added to the logger
    """
    handler = EventManagerHandler(event_manager, level)

    if formatter:
        handler.setFormatter(formatter)

    logger.addHandler(handler)
    return handler
