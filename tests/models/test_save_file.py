"""
Tests for the save file models.
"""

import os
from datetime import datetime

from yass.models.save_file import CatalogEntry, FileRecord, SaveCatalog
from yass.models.save_record import SaveRecord


class TestFileRecord:
    """Tests for FileRecord."""

    def test_from_existing_path(self, temp_dir):
        """Test building a record of an existing file."""
        path = temp_dir / "save 10-00-00_01-02-2024.json"
        path.write_text("{}")
        os.utime(path, (1700000000, 1700000000))

        file = FileRecord.from_path(path)

        assert file.path == path
        assert file.name == "save 10-00-00_01-02-2024.json"
        assert file.extension == ".json"
        assert file.last_write_time == datetime.fromtimestamp(1700000000)
        assert file.exists is True

    def test_from_missing_path(self, temp_dir):
        """Test building a record of a missing file."""
        file = FileRecord.from_path(temp_dir / "missing.xml")

        assert file.exists is False
        assert file.last_write_time == datetime.min
        assert file.extension == ".xml"

    def test_str(self, temp_dir):
        """Test the display string."""
        path = temp_dir / "save.json"
        path.write_text("{}")

        assert str(FileRecord.from_path(path)).startswith("save.json (")


class TestSaveCatalog:
    """Tests for SaveCatalog."""

    def test_empty_catalog(self):
        """Test a new catalog is empty."""
        catalog = SaveCatalog()

        assert catalog.is_empty
        assert catalog.all_entries == []

    def test_find(self, temp_dir):
        """Test finding an entry by path."""
        manual_path = temp_dir / "a.json"
        auto_path = temp_dir / "auto save - b.json"
        for path in (manual_path, auto_path):
            path.write_text("{}")

        manual = CatalogEntry(FileRecord.from_path(manual_path), SaveRecord())
        auto = CatalogEntry(FileRecord.from_path(auto_path), SaveRecord(player_name="B"))
        catalog = SaveCatalog(manual_saves=[manual], auto_saves=[auto])

        assert not catalog.is_empty
        assert catalog.all_entries == [manual, auto]
        assert catalog.find(auto_path) is auto
        assert catalog.find(temp_dir / "c.json") is None
