"""Unit tests for utility functions."""

import os
import re
from datetime import datetime

from pydirsync.utils import (
    DEFAULT_HASH_ALGORITHM,
    DEFAULT_HASH_CHUNK_SIZE,
    format_clock_time,
    format_size,
    name_key,
    normalize_path,
)


class TestFormatClockTime:
    """Tests for format_clock_time function."""

    def test_afternoon_uses_pm(self):
        """Test that afternoon times use a 12-hour clock with PM."""
        moment = datetime(2024, 5, 1, 15, 7, 45)
        assert format_clock_time(moment) == "03:07:45 PM"

    def test_morning_uses_am(self):
        """Test that morning times use AM."""
        moment = datetime(2024, 5, 1, 9, 0, 5)
        assert format_clock_time(moment) == "09:00:05 AM"

    def test_midnight_is_twelve_am(self):
        """Test that midnight is shown as 12 AM."""
        moment = datetime(2024, 5, 1, 0, 30, 0)
        assert format_clock_time(moment) == "12:30:00 AM"

    def test_defaults_to_now(self):
        """Test that omitting the timestamp formats the current time."""
        result = format_clock_time()
        assert re.fullmatch(r"\d{2}:\d{2}:\d{2} (AM|PM)", result)


class TestFormatSize:
    """Tests for format_size function."""

    def test_bytes(self):
        assert format_size(0) == "0 B"
        assert format_size(1023) == "1023 B"

    def test_kilobytes(self):
        assert format_size(1024) == "1.0 KB"
        assert format_size(1536) == "1.5 KB"

    def test_megabytes(self):
        assert format_size(5 * 1024 * 1024) == "5.0 MB"

    def test_gigabytes(self):
        assert format_size(3 * 1024 * 1024 * 1024) == "3.0 GB"


class TestNormalizePath:
    """Tests for normalize_path function."""

    def test_collapses_parent_segments(self, tmp_path):
        """Test that '..' segments are resolved."""
        raw = os.path.join(str(tmp_path), "a", "..", "b")
        assert normalize_path(raw) == os.path.join(str(tmp_path), "b")

    def test_collapses_duplicate_separators(self, tmp_path):
        """Test that doubled separators are removed."""
        raw = str(tmp_path) + os.sep + os.sep + "file.txt"
        assert normalize_path(raw) == os.path.join(str(tmp_path), "file.txt")

    def test_relative_paths_become_absolute(self):
        """Test that relative paths are made absolute."""
        assert os.path.isabs(normalize_path("some/relative/path"))

    def test_accepts_path_objects(self, tmp_path):
        """Test that os.PathLike values are accepted."""
        assert normalize_path(tmp_path) == str(tmp_path)


class TestNameKey:
    """Tests for name_key function."""

    def test_matches_normcase(self):
        """Test that keys follow the host filesystem's case rules."""
        assert name_key("ReadMe.TXT") == os.path.normcase("ReadMe.TXT")

    def test_identical_names_share_key(self):
        assert name_key("file.txt") == name_key("file.txt")


class TestConstants:
    """Tests for module constants."""

    def test_hash_defaults(self):
        assert DEFAULT_HASH_ALGORITHM == "sha256"
        assert DEFAULT_HASH_CHUNK_SIZE == 64 * 1024
