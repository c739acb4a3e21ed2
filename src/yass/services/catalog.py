"""
File Catalog for YASS

This module scans a save directory, keeps the files that decode into a save
record, and splits them into manual saves and auto saves.
"""

import logging
from pathlib import Path
from typing import Callable, List, Optional

from yass.models.errors import EmptyResultError
from yass.models.save_file import CatalogEntry, FileRecord, SaveCatalog
from yass.models.save_settings import SaveSettings, JSON_FILE_EXTENSION, XML_FILE_EXTENSION
from yass.services.codec import SaveCodec


class FileCatalog:
    """Builds catalog snapshots of save directories."""

    def __init__(self, codec: Optional[SaveCodec] = None):
        self.logger = logging.getLogger("YASS")
        self.codec = codec or SaveCodec()

    @staticmethod
    def recognized_extensions(settings: SaveSettings) -> List[str]:
        """
        Get the extensions the catalog looks for, in scan order.

        Args:
            settings: Settings providing the binary extension

        Returns:
            List[str]: Binary extension, then JSON, then XML, without duplicates
        """
        extensions = []
        for extension in (settings.binary_extension, JSON_FILE_EXTENSION, XML_FILE_EXTENSION):
            if extension not in extensions:
                extensions.append(extension)
        return extensions

    def candidate_files(self, directory: Path, settings: SaveSettings) -> List[FileRecord]:
        """
        List the files with a recognized extension, without decoding them.

        Files are grouped by extension in scan order, most recent first inside
        each group.

        Args:
            directory: Directory to list
            settings: Active settings

        Returns:
            List[FileRecord]: Candidate save files
        """
        directory = Path(directory)
        if not directory.is_dir():
            return []

        files = [FileRecord.from_path(path) for path in directory.iterdir() if path.is_file()]

        candidates = []
        for extension in self.recognized_extensions(settings):
            group = [f for f in files if f.extension == extension]
            group.sort(key=lambda f: f.name)
            group.sort(key=lambda f: f.last_write_time, reverse=True)
            candidates.extend(group)
        return candidates

    def scan(self, directory: Path, settings: SaveSettings) -> SaveCatalog:
        """
        Scan a directory and build a catalog snapshot.

        The directory is created if it is missing. Files that cannot be read or
        decoded are left out of both lists.

        Args:
            directory: Directory to scan
            settings: Active settings

        Returns:
            SaveCatalog: Manual saves and auto saves found in the directory
        """
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)

        catalog = SaveCatalog()
        skipped = 0

        for file in self.candidate_files(directory, settings):
            save_format = self.codec.format_for_path(file.path, settings)
            try:
                record = self.codec.read_file(file.path, save_format)
            except Exception as e:
                self.logger.warning(f"Skipping {file.name}: {e}")
                record = None
            if record is None:
                skipped += 1
                continue

            entry = CatalogEntry(file=file, record=record)
            if settings.auto_save_prefix and settings.auto_save_prefix in file.name:
                catalog.auto_saves.append(entry)
            else:
                catalog.manual_saves.append(entry)

        self.logger.debug(f"Scanned {directory}: {len(catalog.manual_saves)} saves, "
                          f"{len(catalog.auto_saves)} auto saves, {skipped} unreadable")
        return catalog

    @staticmethod
    def newest(entries: List[CatalogEntry]) -> Optional[CatalogEntry]:
        """
        Get the entry with the latest last-write time.

        Args:
            entries: Entries to pick from

        Returns:
            CatalogEntry, or None if there are no entries
        """
        newest_entry = None
        for entry in entries:
            if newest_entry is None or entry.file.last_write_time > newest_entry.file.last_write_time:
                newest_entry = entry
        return newest_entry

    def require_latest(self, entries: List[CatalogEntry],
                       predicate: Optional[Callable[[CatalogEntry], bool]] = None) -> CatalogEntry:
        """
        Get the most recent entry matching a predicate.

        Args:
            entries: Entries to pick from
            predicate: Optional filter applied before picking

        Returns:
            CatalogEntry: The most recent matching entry

        Raises:
            EmptyResultError: If no entry matches
        """
        matching = [entry for entry in entries if predicate is None or predicate(entry)]
        latest = self.newest(matching)
        if latest is None:
            raise EmptyResultError("No matching save file was found")
        return latest
