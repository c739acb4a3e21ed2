"""
Helper Functions for YASS

This module provides helper functions for JSON handling, save file naming and
other utility functions.
"""

import json
import logging
from datetime import datetime
from typing import Dict, Any, Optional
from pathlib import Path

TIMESTAMP_FORMAT = "%H-%M-%S_%m-%d-%Y"


def load_json_file(file_path: str | Path) -> Optional[Dict[str, Any]]:
    """
    Load a JSON file.

    Args:
        file_path: Path to the JSON file

    Returns:
        dict: JSON data or None if failed to load
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except Exception as e:
        logging.getLogger("YASS").error(f"Failed to load JSON file {file_path}: {e}")
        return None


def save_json_file(file_path: str | Path, data: Dict[str, Any]) -> bool:
    """
    Save data to a JSON file.

    Args:
        file_path: Path to save the JSON file
        data: Data to save

    Returns:
        bool: True if saved successfully
    """
    try:
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=4, ensure_ascii=False)

        return True

    except Exception as e:
        logging.getLogger("YASS").error(f"Failed to save JSON file {file_path}: {e}")
        return False


def format_timestamp_suffix(moment: datetime) -> str:
    """
    Format the suffix appended to timestamped save names.

    Args:
        moment: The time of the save

    Returns:
        str: A leading space followed by HH-MM-SS_MM-DD-YYYY
    """
    return f" {moment.strftime(TIMESTAMP_FORMAT)}"


def build_save_file_name(name: str, extension: str, moment: Optional[datetime] = None,
                         prefix: str = "") -> str:
    """
    Build the file name of a save.

    The names follow the pattern "<prefix><name>< timestamp><extension>".

    Args:
        name: Base name of the save
        extension: File extension, with or without the leading dot
        moment: Time used for the timestamp suffix, no suffix if None
        prefix: Prefix placed before the name (used by auto saves)

    Returns:
        str: The file name
    """
    suffix = format_timestamp_suffix(moment) if moment is not None else ""
    return f"{prefix}{name}{suffix}{normalize_extension(extension)}"


def normalize_extension(extension: str) -> str:
    """Return the extension with exactly one leading dot."""
    if not extension:
        return ""
    return extension if extension.startswith(".") else f".{extension}"
