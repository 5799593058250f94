"""Unit tests for loading sync pairs from JSON."""

import json

import pytest

from pydirsync.exceptions import DirSyncConfigError
from pydirsync.sync.config import (
    SyncConfigError,
    load_sync_pairs_from_json,
    parse_sync_pairs,
)
from pydirsync.sync.modes import SyncPolicy


class TestParseSyncPairs:
    """Tests for parse_sync_pairs."""

    def test_list_of_pairs(self):
        pairs = parse_sync_pairs(
            [
                {"source": "/a", "destination": "/b"},
                {"source": "/c", "destination": "/d", "policy": "full"},
            ]
        )

        assert len(pairs) == 2
        assert pairs[1].policy == SyncPolicy.FULL

    def test_object_with_pairs_key(self):
        pairs = parse_sync_pairs({"pairs": [{"source": "/a", "destination": "/b"}]})
        assert len(pairs) == 1

    def test_object_without_pairs_key(self):
        with pytest.raises(SyncConfigError, match="'pairs' list"):
            parse_sync_pairs({"source": "/a", "destination": "/b"})

    def test_not_a_list(self):
        with pytest.raises(SyncConfigError, match="must be a JSON list"):
            parse_sync_pairs("nope")

    def test_item_not_an_object(self):
        with pytest.raises(SyncConfigError, match="Sync pair #1 must be a JSON object"):
            parse_sync_pairs([{"source": "/a", "destination": "/b"}, "bad"])

    def test_invalid_pair(self):
        with pytest.raises(SyncConfigError, match="Invalid sync pair #0"):
            parse_sync_pairs([{"source": "/a"}])

    def test_duplicate_alias(self):
        data = [
            {"source": "/a", "destination": "/b", "alias": "docs"},
            {"source": "/c", "destination": "/d", "alias": "docs"},
        ]
        with pytest.raises(SyncConfigError, match="duplicate alias 'docs'"):
            parse_sync_pairs(data)

    def test_empty_list(self):
        assert parse_sync_pairs([]) == []

    def test_error_hierarchy(self):
        assert issubclass(SyncConfigError, DirSyncConfigError)


class TestLoadSyncPairsFromJson:
    """Tests for load_sync_pairs_from_json."""

    def test_load(self, tmp_path):
        config_file = tmp_path / "pairs.json"
        config_file.write_text(
            json.dumps(
                [
                    {
                        "source": "/home/user/docs",
                        "destination": "/mnt/backup/docs",
                        "exclude": ["*.tmp"],
                        "alias": "docs",
                    }
                ]
            )
        )

        pairs = load_sync_pairs_from_json(config_file)

        assert len(pairs) == 1
        assert pairs[0].alias == "docs"
        assert pairs[0].exclude == ["*.tmp"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(SyncConfigError, match="Cannot read sync config"):
            load_sync_pairs_from_json(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        config_file = tmp_path / "pairs.json"
        config_file.write_text("[{not json")

        with pytest.raises(SyncConfigError, match="Invalid JSON"):
            load_sync_pairs_from_json(str(config_file))
