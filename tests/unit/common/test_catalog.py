"""Tests for common.catalog module."""

from unittest.mock import Mock

import pytest

from common.catalog import (
    CatalogItem,
    DirectoryCatalogSource,
    FilteredCatalogSource,
    PlaylistCatalogSource,
    is_internal_file,
)
from common.errors import ChannelNotFoundError
from common.models import SourceItem


def _videos(n: int):
    for i in range(n):
        yield SourceItem(video_id=f"vid{i:08d}", title=f"Video {i}", published_at=None)


class TestDirectoryCatalogSource:
    def test_lists_matching_files_sorted(self, tmp_path) -> None:
        for name in ["b.md", "a.md", "notes.txt", "_summary.json", "_draft.md", "run_summary.md"]:
            (tmp_path / name).write_text("x")

        items = list(DirectoryCatalogSource(tmp_path, ".md").items())

        assert [i.key for i in items] == ["a.md", "b.md"]
        assert items[0].title == "a"
        assert items[0].data == tmp_path / "a.md"

    def test_missing_directory_is_empty(self, tmp_path) -> None:
        assert list(DirectoryCatalogSource(tmp_path / "missing", ".md").items()) == []

    def test_to_item_can_drop_and_rekey(self, tmp_path) -> None:
        (tmp_path / "keep.md").write_text("x")
        (tmp_path / "drop.md").write_text("x")

        def to_item(path):
            if path.stem == "drop":
                return None
            return CatalogItem(key="custom-key", title="Custom", data=path)

        items = list(DirectoryCatalogSource(tmp_path, ".md", to_item=to_item).items())

        assert [i.key for i in items] == ["custom-key"]

    def test_is_internal_file(self, tmp_path) -> None:
        assert is_internal_file(tmp_path / "_summary.json")
        assert is_internal_file(tmp_path / "weekly_summary.md")
        assert not is_internal_file(tmp_path / "My_Video.md")


class TestPlaylistCatalogSource:
    def test_keys_by_video_id(self) -> None:
        client = Mock()
        client.get_uploads_playlist_id.return_value = "UUabc"
        client.iter_playlist_items.return_value = _videos(3)

        items = list(PlaylistCatalogSource(client, "UCabc").items())

        assert [i.key for i in items] == ["vid00000000", "vid00000001", "vid00000002"]
        assert items[0].data.title == "Video 0"
        client.iter_playlist_items.assert_called_once_with("UUabc", page_size=50)

    def test_max_items_stops_consuming_early(self) -> None:
        consumed = []

        def tracked():
            for video in _videos(10):
                consumed.append(video.video_id)
                yield video

        client = Mock()
        client.get_uploads_playlist_id.return_value = "UUabc"
        client.iter_playlist_items.return_value = tracked()

        items = list(PlaylistCatalogSource(client, "UCabc", max_items=2).items())

        assert len(items) == 2
        assert len(consumed) == 2

    def test_channel_not_found_propagates(self) -> None:
        client = Mock()
        client.get_uploads_playlist_id.side_effect = ChannelNotFoundError("UCnope")

        with pytest.raises(ChannelNotFoundError):
            list(PlaylistCatalogSource(client, "UCnope").items())


class TestFilteredCatalogSource:
    def test_yields_only_requested_keys_and_stops(self) -> None:
        seen = []

        class Catalog:
            def items(self):
                for key in ["a", "b", "c", "d"]:
                    seen.append(key)
                    yield CatalogItem(key=key, title=key)

        items = list(FilteredCatalogSource(Catalog(), ["b"]).items())

        assert [i.key for i in items] == ["b"]
        assert seen == ["a", "b"]

    def test_missing_key_yields_nothing(self) -> None:
        class Catalog:
            def items(self):
                yield CatalogItem(key="a", title="a")

        assert list(FilteredCatalogSource(Catalog(), ["zzz"]).items()) == []
