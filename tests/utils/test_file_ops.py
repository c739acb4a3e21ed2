"""
Tests for file operations.
"""

import pytest
from unittest.mock import patch

from yass.models.errors import SaveIOError
from yass.utils.file_ops import FileOperations


class TestDeleteFile:
    """Tests for deleting files."""

    def test_delete_file(self, temp_dir):
        """Test deleting an existing file."""
        path = temp_dir / "save.json"
        path.write_text("{}")

        FileOperations().delete_file(path)

        assert not path.exists()

    def test_delete_missing_file(self, temp_dir):
        """Test that deleting a missing file raises."""
        file_ops = FileOperations()

        with pytest.raises(SaveIOError, match="File not found"):
            file_ops.delete_file(temp_dir / "missing.json")

        assert file_ops.last_operation_error is not None

    def test_delete_directory(self, temp_dir):
        """Test that directories are not deleted."""
        directory = temp_dir / "folder.json"
        directory.mkdir()

        with pytest.raises(SaveIOError):
            FileOperations().delete_file(directory)

        assert directory.exists()


class TestHideFile:
    """Tests for hiding files."""

    def test_hide_missing_file(self, temp_dir):
        """Test that hiding a missing file fails without raising."""
        assert FileOperations().hide_file(temp_dir / "missing.json") is False

    def test_hide_unsupported_platform(self, temp_dir):
        """Test that platforms without a hidden attribute leave the file alone."""
        path = temp_dir / "auto save - a.json"
        path.write_text("{}")

        with patch("yass.utils.file_ops.sys") as mock_sys, \
             patch("yass.utils.file_ops.os") as mock_os:
            mock_sys.platform = "linux"
            del mock_os.chflags

            assert FileOperations().hide_file(path) is False

        assert path.exists()

    def test_hide_with_chflags(self, temp_dir):
        """Test hiding a file with the BSD hidden flag."""
        path = temp_dir / "auto save - a.json"
        path.write_text("{}")

        with patch("yass.utils.file_ops.sys") as mock_sys, \
             patch("yass.utils.file_ops.os") as mock_os, \
             patch("yass.utils.file_ops.stat") as mock_stat:
            mock_sys.platform = "darwin"
            mock_stat.UF_HIDDEN = 0x8000
            mock_os.stat.return_value.st_flags = 0

            assert FileOperations().hide_file(path) is True

            mock_os.chflags.assert_called_once_with(path, 0x8000)
