"""
Tests for save location resolution.
"""

import sys
from pathlib import Path
from unittest.mock import patch

from yass.models.save_settings import SaveLocation
from yass.services.paths import LocationResolver, get_application_dir


class TestLocationResolver:
    """Tests for LocationResolver."""

    def test_resolve_overridden_locations(self, resolver, temp_dir):
        """Test resolving every location with host overrides."""
        assert resolver.resolve(SaveLocation.PERSISTENT_PATH, "Save Data") == temp_dir / "persistent" / "Save Data"
        assert resolver.resolve(SaveLocation.APPLICATION_PATH, "Save Data") == temp_dir / "application" / "Save Data"
        assert resolver.resolve(SaveLocation.DOCUMENTS, "Save Data") == temp_dir / "documents" / "Save Data"

    def test_resolve_accepts_values(self, resolver, temp_dir):
        """Test resolving locations given as strings."""
        assert resolver.resolve("documents", "Saves") == temp_dir / "documents" / "Saves"

    def test_unknown_location_falls_back_to_persistent(self, resolver, temp_dir):
        """Test that unknown locations resolve to persistent storage."""
        assert resolver.resolve("cloud", "Save Data") == temp_dir / "persistent" / "Save Data"
        assert resolver.base_dir(None) == temp_dir / "persistent"

    def test_resolve_is_absolute(self):
        """Test that relative overrides become absolute paths."""
        resolver = LocationResolver(persistent_dir=Path("relative"))

        assert resolver.resolve(SaveLocation.PERSISTENT_PATH, "Save Data").is_absolute()

    def test_resolve_does_not_create_directories(self, resolver, temp_dir):
        """Test that resolving has no side effects."""
        resolver.resolve(SaveLocation.DOCUMENTS, "Save Data")

        assert not (temp_dir / "documents").exists()

    def test_platform_directories(self):
        """Test the platformdirs lookups used without overrides."""
        with patch("yass.services.paths.platformdirs") as mock_platformdirs:
            mock_platformdirs.user_data_dir.return_value = "/data/YASS"
            mock_platformdirs.user_documents_dir.return_value = "/home/me/Documents"

            resolver = LocationResolver(app_name="MyGame")

            assert resolver.base_dir(SaveLocation.PERSISTENT_PATH) == Path("/data/YASS")
            assert resolver.base_dir(SaveLocation.DOCUMENTS) == Path("/home/me/Documents")
            mock_platformdirs.user_data_dir.assert_called_once_with("MyGame", False)


class TestApplicationDir:
    """Tests for get_application_dir."""

    def test_script_directory(self, temp_dir):
        """Test using the directory of the running script."""
        with patch.object(sys, "argv", [str(temp_dir / "game.py")]):
            assert get_application_dir() == temp_dir.resolve()

    def test_frozen_executable(self, temp_dir):
        """Test using the directory of a frozen executable."""
        with patch.object(sys, "frozen", True, create=True), \
             patch.object(sys, "executable", str(temp_dir / "game.exe")):
            assert get_application_dir() == temp_dir.resolve()

    def test_no_script(self):
        """Test falling back to the working directory."""
        with patch.object(sys, "argv", [""]):
            assert get_application_dir() == Path.cwd()
