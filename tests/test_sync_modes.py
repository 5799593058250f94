"""Unit tests for sync policies."""

import pytest

from pydirsync.sync.modes import SyncPolicy


class TestSyncPolicy:
    """Tests for SyncPolicy enum."""

    def test_values(self):
        """Test enum values."""
        assert SyncPolicy.FULL.value == "full"
        assert SyncPolicy.DIFFERENTIAL.value == "differential"

    def test_is_string_enum(self):
        """Test that policies compare equal to their string values."""
        assert SyncPolicy.FULL == "full"

    def test_from_string_full_names(self):
        assert SyncPolicy.from_string("full") == SyncPolicy.FULL
        assert SyncPolicy.from_string("differential") == SyncPolicy.DIFFERENTIAL

    def test_from_string_is_case_insensitive(self):
        assert SyncPolicy.from_string("Full") == SyncPolicy.FULL
        assert SyncPolicy.from_string(" DIFFERENTIAL ") == SyncPolicy.DIFFERENTIAL

    def test_from_string_abbreviation(self):
        assert SyncPolicy.from_string("diff") == SyncPolicy.DIFFERENTIAL

    def test_from_string_invalid(self):
        with pytest.raises(ValueError, match="Invalid sync policy"):
            SyncPolicy.from_string("mirror")

    def test_compares_content(self):
        """Only the differential policy hashes existing destination files."""
        assert SyncPolicy.DIFFERENTIAL.compares_content is True
        assert SyncPolicy.FULL.compares_content is False
