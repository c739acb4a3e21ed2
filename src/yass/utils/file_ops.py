"""
File Operations Utilities for YASS

This module provides the cross-platform file operations the save manager
needs beyond reading and writing: deleting save files and marking them hidden.
"""

import ctypes
import logging
import os
import stat
import sys
from pathlib import Path
from typing import Optional

from yass.models.errors import SaveIOError

FILE_ATTRIBUTE_HIDDEN = 0x02
INVALID_FILE_ATTRIBUTES = 0xFFFFFFFF


class FileOperations:
    """
    File operations utility class for YASS.

    This class handles:
    - Deleting save files
    - Marking files as hidden (Windows attribute, macOS flag)
    """

    def __init__(self):
        """Initialize the file operations helper."""
        self.logger = logging.getLogger("YASS")
        self.last_operation_error: Optional[str] = None

    def delete_file(self, file_path: str | Path) -> None:
        """
        Delete a single file.

        Args:
            file_path: Path of the file to delete

        Raises:
            SaveIOError: If the file is missing or could not be removed
        """
        path = Path(file_path)
        try:
            path.unlink()
            self.logger.debug(f"Deleted file: {path}")
        except FileNotFoundError as e:
            self.last_operation_error = str(e)
            raise SaveIOError(f"File not found: {path}") from e
        except OSError as e:
            self.last_operation_error = str(e)
            raise SaveIOError(f"Failed to delete {path}: {e}") from e

    def hide_file(self, file_path: str | Path) -> bool:
        """
        Mark a file as hidden in the platform's file browser.

        Args:
            file_path: Path of the file to hide

        Returns:
            bool: True if the file was marked hidden, False if the platform has no
                  hidden attribute or the operation failed
        """
        path = Path(file_path)
        try:
            if sys.platform.startswith("win"):
                kernel32 = ctypes.windll.kernel32
                attributes = kernel32.GetFileAttributesW(str(path))
                if attributes == INVALID_FILE_ATTRIBUTES:
                    raise OSError(f"Cannot read attributes of {path}")
                if not kernel32.SetFileAttributesW(str(path), attributes | FILE_ATTRIBUTE_HIDDEN):
                    raise OSError(f"Cannot set attributes of {path}")
                return True

            if hasattr(os, "chflags") and hasattr(stat, "UF_HIDDEN"):
                os.chflags(path, os.stat(path).st_flags | stat.UF_HIDDEN)
                return True

            self.logger.debug(f"Hidden files are not supported on {sys.platform}, leaving {path.name} visible")
            return False

        except Exception as e:
            self.last_operation_error = str(e)
            self.logger.warning(f"Failed to hide file {path}: {e}")
            return False
