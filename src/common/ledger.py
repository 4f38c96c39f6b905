"""Per-stage ledger of completed work.

A ledger maps a stable key (video id or transcript filename) to the record
written when that key finished. Presence of a key is the only signal that its
work is done; there is no failure marker, so anything missing is attempted
again on the next run.

The whole ledger is rewritten after every ``record`` call. Storage is
pluggable: ``JsonFileLedgerStore`` for real runs, ``InMemoryLedgerStore``
for tests.
"""

from __future__ import annotations

import copy
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Protocol

from common.local_io import read_json, write_json_atomic

logger = logging.getLogger(__name__)


class LedgerStore(Protocol):
    def read(self) -> dict | None:
        """Return the persisted ledger document, or None if there is none."""

    def write(self, document: dict) -> None:
        """Durably replace the persisted ledger document."""


class JsonFileLedgerStore:
    """Ledger persisted as pretty-printed JSON, safe to hand-edit."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def read(self) -> dict | None:
        if not self.path.exists():
            return None
        return read_json(self.path)

    def write(self, document: dict) -> None:
        write_json_atomic(self.path, document)

    def __repr__(self) -> str:
        return f"JsonFileLedgerStore({str(self.path)!r})"


class InMemoryLedgerStore:
    """Ledger kept in a dict; ``writes`` counts flushes."""

    def __init__(self, document: dict | None = None):
        self.document = copy.deepcopy(document)
        self.writes = 0

    def read(self) -> dict | None:
        return copy.deepcopy(self.document)

    def write(self, document: dict) -> None:
        self.document = copy.deepcopy(document)
        self.writes += 1


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class Ledger:
    """Append-only record of which keys a stage has completed."""

    def __init__(self, store: LedgerStore, description: str = "", entries: dict[str, dict] | None = None,
                 last_updated: str | None = None):
        self.store = store
        self.description = description
        self.entries: dict[str, dict] = entries or {}
        self.last_updated = last_updated

    @classmethod
    def load(cls, store: LedgerStore, description: str = "") -> Ledger:
        """Load a ledger from ``store``.

        Never raises for missing or damaged data: an absent document gives an
        empty ledger, and an unreadable one is logged and treated as empty.
        """
        try:
            document = store.read()
        except (OSError, ValueError) as e:
            logger.warning("Could not read ledger from %r, starting empty: %s", store, e)
            document = None

        if not isinstance(document, dict):
            if document is not None:
                logger.warning("Ledger in %r is not an object, starting empty", store)
            return cls(store, description=description)

        entries = document.get("entries")
        if not isinstance(entries, dict):
            entries = {}

        return cls(
            store,
            description=document.get("description") or description,
            entries=entries,
            last_updated=document.get("lastUpdated"),
        )

    def __contains__(self, key: str) -> bool:
        return self.has(key)

    def __len__(self) -> int:
        return len(self.entries)

    def has(self, key: str) -> bool:
        return key in self.entries

    def get(self, key: str) -> dict | None:
        return self.entries.get(key)

    def record(self, key: str, metadata: dict[str, Any]) -> bool:
        """Record ``key`` as complete and flush the ledger immediately.

        Existing records are never replaced. Returns False (without writing)
        when ``key`` is already present.
        """
        if key in self.entries:
            logger.debug("Ledger already has %s, keeping original record", key)
            return False

        entry = dict(metadata)
        entry.setdefault("completedAt", _now_iso())
        self.entries[key] = entry
        try:
            self.flush()
        except Exception:
            # Not durable, so not done.
            del self.entries[key]
            raise
        return True

    def to_document(self) -> dict:
        return {
            "description": self.description,
            "lastUpdated": self.last_updated,
            "totalEntries": len(self.entries),
            "entries": self.entries,
        }

    def flush(self) -> None:
        self.last_updated = _now_iso()
        self.store.write(self.to_document())


def load_file_ledger(path: str | Path, description: str) -> Ledger:
    """Shortcut for the JSON-file ledger used by the stage CLIs."""
    return Ledger.load(JsonFileLedgerStore(path), description=description)
