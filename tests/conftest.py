"""
Pytest configuration and fixtures for YASS tests.
"""

import os
import pytest
import tempfile
import shutil
from datetime import datetime, timedelta
from pathlib import Path
from unittest.mock import Mock

from yass.models.save_manager import SaveManager
from yass.models.save_record import SaveRecord
from yass.models.save_settings import SaveFormat, SaveLocation, SaveSettings
from yass.services.codec import SaveCodec
from yass.services.events import EventManager
from yass.services.paths import LocationResolver


class FakeClock:
    """Clock that moves one second forward on every call."""

    def __init__(self, start: datetime = datetime(2024, 3, 5, 14, 7, 9)):
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(seconds=1)
        return current


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def mock_event_manager():
    """Create a mock event manager."""
    event_manager = Mock(spec=EventManager)
    event_manager.emit = Mock()
    event_manager.subscribe = Mock()
    event_manager.unsubscribe = Mock()
    return event_manager


@pytest.fixture
def resolver(temp_dir):
    """Create a location resolver rooted in the temporary directory."""
    return LocationResolver(
        persistent_dir=temp_dir / "persistent",
        application_dir=temp_dir / "application",
        documents_dir=temp_dir / "documents",
    )


@pytest.fixture
def json_settings():
    """Settings writing JSON saves to the persistent location."""
    return SaveSettings(location=SaveLocation.PERSISTENT_PATH, save_format=SaveFormat.JSON)


@pytest.fixture
def save_dir(resolver, json_settings):
    """The save directory the manager resolves for json_settings."""
    return resolver.resolve(json_settings.location, json_settings.directory_name)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def manager(resolver, mock_event_manager, clock):
    """Create an uninitialized save manager."""
    return SaveManager(resolver=resolver, event_manager=mock_event_manager, clock=clock)


@pytest.fixture
def codec():
    return SaveCodec()


@pytest.fixture
def sample_record():
    """Create a record with non-default values in every field."""
    return SaveRecord(
        player_name="Ayla",
        player_death_count=3,
        last_player_position=[1.5, -2.25, 10.0],
        checkpoints=[True, False, True],
        dialogs_cleared=[False, True, False],
        difficulty=3,
        graphics_level=2,
        lod_level=0,
        audio_master_volume=0.8,
        audio_sfx_volume=0.5,
        audio_music_volume=0.25,
        audio_ui_volume=1.0,
        screen_resolution=[1920, 1080],
        total_time_in_game=3600.5,
    )


def write_save(codec: SaveCodec, path: Path, record: SaveRecord, save_format: SaveFormat,
               mtime: float = None) -> Path:
    """Write a save file directly and optionally set its modification time."""
    path.parent.mkdir(parents=True, exist_ok=True)
    codec.write_file(path, record, save_format)
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


@pytest.fixture
def make_save(codec):
    """Return a helper writing save files straight to disk."""
    def _make_save(path: Path, record: SaveRecord = None, save_format: SaveFormat = SaveFormat.JSON,
                   mtime: float = None) -> Path:
        return write_save(codec, path, record or SaveRecord(), save_format, mtime)
    return _make_save
