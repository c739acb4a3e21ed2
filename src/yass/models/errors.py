"""
Error Types for YASS

This module contains the exceptions raised inside the save system. Public
operations catch them at their boundary and turn them into a fallback.
"""


class SaveSystemError(Exception):
    """Base exception raised for save system errors."""
    pass


class DecodeError(SaveSystemError):
    """Exception raised when a payload cannot be decoded into a save record."""
    pass


class SaveRecordError(DecodeError):
    """Exception raised when decoded data does not match the save record fields."""
    pass


class SaveIOError(SaveSystemError):
    """Exception raised for file system errors (open, write, delete)."""
    pass


class ConfigurationError(SaveSystemError):
    """Exception raised for unusable settings or unknown enum values."""
    pass


class EmptyResultError(SaveSystemError):
    """Exception raised when a most-recent selection has no candidates."""
    pass


class EncodeError(SaveSystemError):
    """Exception raised when a save record cannot be written in the requested format."""
    pass
