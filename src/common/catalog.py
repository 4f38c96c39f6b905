"""Catalog sources: where a stage gets its candidate work items.

Two implementations share one capability, ``items()``, which yields
``CatalogItem`` objects in a stable order:

* ``PlaylistCatalogSource`` pages through a channel's uploads playlist.
* ``DirectoryCatalogSource`` lists artifacts a previous stage left on disk.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Iterable, Iterator, Optional, Protocol

from common.youtube_data import YouTubeDataClient

logger = logging.getLogger(__name__)

EXCLUDED_STEM_SUFFIXES = ("_summary",)


@dataclass(frozen=True)
class CatalogItem:
    """A candidate work item with the key its stage's ledger uses."""
    key: str
    title: str
    data: Any = None


class CatalogSource(Protocol):
    def items(self) -> Iterator[CatalogItem]:
        ...


class PlaylistCatalogSource:
    """Videos uploaded to a channel, newest first as the API returns them.

    Keyed by video id. ``ChannelNotFoundError`` from the client is fatal and
    propagates out of ``items()``.
    """

    def __init__(
        self,
        client: YouTubeDataClient,
        channel_id: str,
        max_items: int | None = None,
        page_size: int = 50,
    ):
        self.client = client
        self.channel_id = channel_id
        self.max_items = max_items
        self.page_size = page_size

    def items(self) -> Iterator[CatalogItem]:
        playlist_id = self.client.get_uploads_playlist_id(self.channel_id)
        logger.info("Uploads playlist ID: %s", playlist_id)

        videos = self.client.iter_playlist_items(playlist_id, page_size=self.page_size)
        if self.max_items is not None:
            videos = itertools.islice(videos, self.max_items)

        for video in videos:
            yield CatalogItem(key=video.video_id, title=video.title, data=video)


def is_internal_file(path: Path) -> bool:
    """Summary and bookkeeping files are not artifacts."""
    return path.name.startswith("_") or path.stem.endswith(EXCLUDED_STEM_SUFFIXES)


def _item_from_path(path: Path) -> CatalogItem:
    return CatalogItem(key=path.name, title=path.stem, data=path)


class DirectoryCatalogSource:
    """Artifact files in ``directory`` with the given suffix, sorted by name.

    ``to_item`` turns a path into a ``CatalogItem``; returning None drops
    the file from the catalog. By default the key is the filename.
    """

    def __init__(
        self,
        directory: str | Path,
        suffix: str,
        to_item: Optional[Callable[[Path], Optional[CatalogItem]]] = None,
    ):
        self.directory = Path(directory)
        self.suffix = suffix
        self.to_item = to_item or _item_from_path

    def paths(self) -> list[Path]:
        if not self.directory.is_dir():
            logger.warning("Catalog directory %s does not exist", self.directory)
            return []
        return sorted(
            p for p in self.directory.iterdir()
            if p.is_file() and p.name.endswith(self.suffix) and not is_internal_file(p)
        )

    def items(self) -> Iterator[CatalogItem]:
        for path in self.paths():
            item = self.to_item(path)
            if item is not None:
                yield item


class FilteredCatalogSource:
    """Restrict another catalog to a set of keys.

    Enumeration stops as soon as every requested key has been seen, so a
    paginated catalog only fetches the pages it needs.
    """

    def __init__(self, catalog: CatalogSource, keys: Iterable[str]):
        self.catalog = catalog
        self.keys = frozenset(keys)

    def items(self) -> Iterator[CatalogItem]:
        remaining = set(self.keys)
        if not remaining:
            return
        for item in self.catalog.items():
            if item.key in remaining:
                remaining.discard(item.key)
                yield item
                if not remaining:
                    return
        if remaining:
            logger.warning("Not found in catalog: %s", ", ".join(sorted(remaining)))
