"""
Save Record Model for YASS

This module contains the SaveRecord data class, the player-progress value object
that every codec writes to and reads from disk.
"""

import typing
from dataclasses import dataclass, field, fields, asdict
from typing import Any, Dict, List

from yass.models.errors import SaveRecordError


@dataclass
class SaveRecord:
    """
    Represents the persisted game and player state.

    A flat value object made of primitive and array fields. It carries no
    invariants beyond being default-constructible.
    """
    player_name: str = "Player"
    player_death_count: int = 0
    last_player_position: List[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    checkpoints: List[bool] = field(default_factory=lambda: [False, False, False])
    dialogs_cleared: List[bool] = field(default_factory=lambda: [False, False, False])
    difficulty: int = 2
    graphics_level: int = 1
    lod_level: int = 1
    audio_master_volume: float = 0.0
    audio_sfx_volume: float = 0.0
    audio_music_volume: float = 0.0
    audio_ui_volume: float = 0.0
    screen_resolution: List[int] = field(default_factory=lambda: [1280, 720])
    total_time_in_game: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert the record to a dictionary of plain values."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SaveRecord':
        """
        Create a SaveRecord from a dictionary.

        Missing keys keep their default value and unknown keys are ignored.

        Args:
            data: Dictionary produced by a decoder

        Returns:
            SaveRecord: The validated record

        Raises:
            SaveRecordError: If data is not a mapping or a value has the wrong type
        """
        if not isinstance(data, dict):
            raise SaveRecordError(f"Expected a mapping, got {type(data).__name__}")

        values = {}
        for record_field in fields(cls):
            if record_field.name not in data:
                continue
            values[record_field.name] = coerce_value(record_field.name,
                                                     field_types()[record_field.name],
                                                     data[record_field.name])
        return cls(**values)


def field_types() -> Dict[str, Any]:
    """
    Get the declared type of every SaveRecord field.

    Returns:
        Dict[str, Any]: Field name to type annotation
    """
    return typing.get_type_hints(SaveRecord)


def element_type(annotation: Any) -> Any:
    """
    Get the item type of a list annotation.

    Args:
        annotation: A field annotation such as List[float]

    Returns:
        The item type, or None if the annotation is not a list
    """
    if typing.get_origin(annotation) in (list, List):
        return typing.get_args(annotation)[0]
    return None


def coerce_value(name: str, annotation: Any, value: Any) -> Any:
    """
    Validate a decoded value against a field annotation.

    Args:
        name: Field name, used in error messages
        annotation: Declared field type
        value: Decoded value

    Returns:
        The value converted to the declared type

    Raises:
        SaveRecordError: If the value does not match the declared type
    """
    item_type = element_type(annotation)
    if item_type is not None:
        if not isinstance(value, (list, tuple)):
            raise SaveRecordError(f"Field '{name}' must be a list, got {type(value).__name__}")
        return [_coerce_scalar(name, item_type, item) for item in value]

    return _coerce_scalar(name, annotation, value)


def _coerce_scalar(name: str, scalar_type: Any, value: Any) -> Any:
    # bool is a subclass of int, so it is checked first
    if scalar_type is bool:
        if isinstance(value, bool):
            return value
    elif scalar_type is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    elif scalar_type is float:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
    elif scalar_type is str:
        if isinstance(value, str):
            return value
    else:
        raise SaveRecordError(f"Field '{name}' has an unsupported type {scalar_type}")

    raise SaveRecordError(
        f"Field '{name}' expects {scalar_type.__name__}, got {type(value).__name__}"
    )
