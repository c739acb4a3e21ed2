"""
Save File Data Models for YASS

This module contains the data classes describing save files found on disk and
the catalog snapshot built from them.
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from yass.models.save_record import SaveRecord


@dataclass(frozen=True)
class FileRecord:
    """Represents directory-entry metadata of a save file."""
    path: Path
    name: str
    extension: str
    last_write_time: datetime
    exists: bool = True

    @classmethod
    def from_path(cls, path: Path) -> 'FileRecord':
        """
        Build a file record from a path.

        Args:
            path: Path to the save file

        Returns:
            FileRecord: Metadata of the file, with exists=False if it is missing
        """
        path = Path(path)
        try:
            last_write_time = datetime.fromtimestamp(path.stat().st_mtime)
            exists = path.is_file()
        except OSError:
            last_write_time = datetime.min
            exists = False

        return cls(
            path=path,
            name=path.name,
            extension=path.suffix,
            last_write_time=last_write_time,
            exists=exists
        )

    def __str__(self) -> str:
        return f"{self.name} ({self.last_write_time.strftime('%Y-%m-%d %H:%M:%S')})"


@dataclass
class CatalogEntry:
    """A decodable save file paired with its decoded record."""
    file: FileRecord
    record: SaveRecord


@dataclass
class SaveCatalog:
    """
    Snapshot of the decodable save files in a directory.

    Both lists keep the order of the scan: grouped by extension (binary, JSON,
    XML) and most recent first inside each group.
    """
    manual_saves: List[CatalogEntry] = field(default_factory=list)
    auto_saves: List[CatalogEntry] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.manual_saves and not self.auto_saves

    @property
    def all_entries(self) -> List[CatalogEntry]:
        return self.manual_saves + self.auto_saves

    def find(self, path: Path) -> Optional[CatalogEntry]:
        """
        Get the entry of a specific file.

        Args:
            path: Path of the save file

        Returns:
            CatalogEntry if the file is in the catalog, None otherwise
        """
        path = Path(path)
        for entry in self.all_entries:
            if entry.file.path == path:
                return entry
        return None
