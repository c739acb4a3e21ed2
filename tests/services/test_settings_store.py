"""
Tests for the settings store.
"""

import json

from yass.models.save_settings import SaveFormat, SaveLocation, SaveSettings
from yass.services.settings import SettingsStore


class TestSettingsStore:
    """Tests for SettingsStore."""

    def test_initialize_creates_default_file(self, temp_dir):
        """Test that a missing settings file is created with defaults."""
        store = SettingsStore()

        assert store.initialize(temp_dir / "config") is True

        settings_file = temp_dir / "config" / "save_settings.json"
        assert store.is_loaded
        assert store.settings_file == settings_file
        assert store.current_settings == SaveSettings()
        assert json.loads(settings_file.read_text(encoding="utf-8"))["save_format"] == "binary"

    def test_load_existing_file(self, temp_dir):
        """Test loading stored settings."""
        (temp_dir / "save_settings.json").write_text(json.dumps({
            "location": "documents",
            "save_format": "xml",
            "auto_save_interval_minutes": 30,
        }), encoding="utf-8")
        store = SettingsStore()

        store.initialize(temp_dir)

        assert store.current_settings.location == SaveLocation.DOCUMENTS
        assert store.current_settings.save_format == SaveFormat.XML
        assert store.current_settings.auto_save_interval_minutes == 30

    def test_unreadable_file_is_replaced(self, temp_dir):
        """Test that an unreadable settings file is replaced by defaults."""
        settings_file = temp_dir / "save_settings.json"
        settings_file.write_text("not json", encoding="utf-8")
        store = SettingsStore()

        store.initialize(temp_dir)

        assert store.current_settings == SaveSettings()
        assert json.loads(settings_file.read_text(encoding="utf-8")) == SaveSettings().to_dict()

    def test_save_and_reload(self, temp_dir):
        """Test that saved settings are loaded by a new store."""
        store = SettingsStore()
        store.initialize(temp_dir)
        settings = SaveSettings(save_format=SaveFormat.JSON, hide_auto_save_files=True)

        assert store.save(settings) is True

        other = SettingsStore()
        other.initialize(temp_dir)
        assert other.current_settings == settings

    def test_save_without_file(self):
        """Test that saving before initialize fails."""
        assert SettingsStore().save() is False

    def test_load_without_file(self):
        """Test that loading before initialize gives defaults."""
        assert SettingsStore().load() == SaveSettings()

    def test_reset_to_defaults(self, temp_dir):
        """Test resetting the stored settings."""
        store = SettingsStore()
        store.initialize(temp_dir)
        store.save(SaveSettings(directory_name="Other"))

        assert store.reset_to_defaults() == SaveSettings()
        assert store.load() == SaveSettings()
