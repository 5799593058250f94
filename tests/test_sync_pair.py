"""Unit tests for sync pair configuration."""

from pathlib import Path

import pytest

from pydirsync.sync.messages import MessageLevel
from pydirsync.sync.modes import SyncPolicy
from pydirsync.sync.pair import SyncPair


class TestSyncPair:
    """Tests for SyncPair dataclass."""

    def test_create_sync_pair(self):
        """Test creating a sync pair with defaults."""
        pair = SyncPair(source=Path("/data/docs"), destination=Path("/backup/docs"))

        assert pair.source == Path("/data/docs")
        assert pair.destination == Path("/backup/docs")
        assert pair.policy == SyncPolicy.DIFFERENTIAL
        assert pair.alias is None
        assert pair.exclude == []
        assert pair.verbosity == MessageLevel.FILE_IO

    def test_sync_pair_normalization(self):
        """Test that string values are converted to their types."""
        pair = SyncPair(
            source="/data/docs",
            destination="/backup/docs",
            policy="full",
            exclude=("*.tmp",),
            verbosity="debug",
        )

        assert pair.source == Path("/data/docs")
        assert pair.destination == Path("/backup/docs")
        assert pair.policy == SyncPolicy.FULL
        assert pair.exclude == ["*.tmp"]
        assert pair.verbosity == MessageLevel.DEBUG

    def test_integer_verbosity(self):
        pair = SyncPair(source="/a", destination="/b", verbosity=4)
        assert pair.verbosity == MessageLevel.ERROR

    def test_from_dict(self):
        data = {
            "source": "/data/docs",
            "destination": "/backup/docs",
            "policy": "full",
            "alias": "docs",
            "exclude": ["*.tmp", "*cache*"],
            "verbosity": "Information",
        }

        pair = SyncPair.from_dict(data)

        assert pair.source == Path("/data/docs")
        assert pair.destination == Path("/backup/docs")
        assert pair.policy == SyncPolicy.FULL
        assert pair.alias == "docs"
        assert pair.exclude == ["*.tmp", "*cache*"]
        assert pair.verbosity == MessageLevel.INFORMATION

    def test_from_dict_minimal(self):
        pair = SyncPair.from_dict({"source": "/a", "destination": "/b"})

        assert pair.policy == SyncPolicy.DIFFERENTIAL
        assert pair.verbosity == MessageLevel.FILE_IO
        assert pair.exclude == []

    def test_from_dict_null_values_use_defaults(self):
        pair = SyncPair.from_dict(
            {"source": "/a", "destination": "/b", "policy": None, "verbosity": None}
        )

        assert pair.policy == SyncPolicy.DIFFERENTIAL
        assert pair.verbosity == MessageLevel.FILE_IO

    def test_from_dict_missing_required_field(self):
        with pytest.raises(ValueError, match="Missing required fields: destination"):
            SyncPair.from_dict({"source": "/a"})

    def test_from_dict_exclude_must_be_list(self):
        data = {"source": "/a", "destination": "/b", "exclude": "*.tmp"}
        with pytest.raises(ValueError, match="'exclude' must be a list"):
            SyncPair.from_dict(data)

    def test_from_dict_invalid_policy(self):
        with pytest.raises(ValueError, match="Invalid sync policy"):
            SyncPair.from_dict({"source": "/a", "destination": "/b", "policy": "two"})

    def test_to_dict(self):
        pair = SyncPair(
            source=Path("/data/docs"),
            destination=Path("/backup/docs"),
            policy=SyncPolicy.FULL,
            alias="docs",
            exclude=["*.tmp"],
        )

        assert pair.to_dict() == {
            "source": str(Path("/data/docs")),
            "destination": str(Path("/backup/docs")),
            "policy": "full",
            "alias": "docs",
            "exclude": ["*.tmp"],
            "verbosity": "FileIO",
        }

    def test_dict_round_trip(self):
        pair = SyncPair.from_dict(
            {"source": "/a", "destination": "/b", "alias": "x", "verbosity": "Error"}
        )
        assert SyncPair.from_dict(pair.to_dict()) == pair

    def test_str_representation(self):
        pair = SyncPair(source=Path("/a"), destination=Path("/b"))
        assert str(pair) == f"{Path('/a')} => {Path('/b')} (differential)"

    def test_str_representation_with_alias(self):
        pair = SyncPair(source=Path("/a"), destination=Path("/b"), alias="docs")
        assert str(pair).startswith("docs: ")


class TestSyncPairLiteralParsing:
    """Tests for SyncPair.parse_literal."""

    def test_parse_literal_simple(self):
        pair = SyncPair.parse_literal("/data/docs:/backup/docs")

        assert pair.source == Path("/data/docs")
        assert pair.destination == Path("/backup/docs")
        assert pair.policy == SyncPolicy.DIFFERENTIAL

    def test_parse_literal_with_policy(self):
        pair = SyncPair.parse_literal("/data/docs:full:/backup/docs")

        assert pair.policy == SyncPolicy.FULL
        assert pair.destination == Path("/backup/docs")

    def test_parse_literal_with_abbreviation(self):
        pair = SyncPair.parse_literal("/data/docs:diff:/backup/docs")
        assert pair.policy == SyncPolicy.DIFFERENTIAL

    def test_parse_literal_windows_drives(self):
        """Test that drive letters are not treated as separators."""
        pair = SyncPair.parse_literal("C:\\data:full:D:\\backup")

        assert str(pair.source) == str(Path("C:\\data"))
        assert str(pair.destination) == str(Path("D:\\backup"))
        assert pair.policy == SyncPolicy.FULL

    def test_parse_literal_windows_forward_slashes(self):
        pair = SyncPair.parse_literal("C:/data:D:/backup")

        assert pair.source == Path("C:/data")
        assert pair.destination == Path("D:/backup")

    def test_parse_literal_invalid_format(self):
        with pytest.raises(ValueError, match="Invalid sync pair literal"):
            SyncPair.parse_literal("/only/one/path")

    def test_parse_literal_too_many_parts(self):
        with pytest.raises(ValueError, match="Invalid sync pair literal"):
            SyncPair.parse_literal("/a:full:/b:/c")

    def test_parse_literal_invalid_policy(self):
        with pytest.raises(ValueError, match="Invalid sync policy"):
            SyncPair.parse_literal("/a:mirror:/b")

    def test_parse_literal_empty_paths(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            SyncPair.parse_literal(":/backup")
