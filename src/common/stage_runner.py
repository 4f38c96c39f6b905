"""Generic control loop shared by every pipeline stage.

A stage is a catalog, a ledger and a ``process`` callable. The runner walks
the catalog in order, skips keys the ledger already holds, and hands the rest
to ``process`` one at a time. ``process`` returns an outcome:

* ``Processed``: the item is done. Its artifact (if any) is written first,
  then the ledger entry is recorded and flushed.
* ``Unavailable``: nothing could be produced this time. No ledger entry is
  written, so the item comes back on the next run.

Any other exception is logged against the item and the loop moves on.
``FatalStageError`` is the exception to that rule: it aborts the run. So
does any error raised while enumerating the catalog. Either way the reason is
recorded as ``aborted`` in the run summary before it propagates.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Iterable, Optional, Union

from common.catalog import CatalogItem, CatalogSource
from common.errors import FatalStageError
from common.ledger import Ledger
from common.local_io import write_json_atomic, write_text_atomic
from common.serialization import serialize_dataclass

logger = logging.getLogger(__name__)

SKIPPED = "skipped"
PROCESSED = "processed"
UNAVAILABLE = "unavailable"
FAILED = "failed"


@dataclass(frozen=True)
class Artifact:
    """File contents a stage produced for one item, named relative to its store."""
    name: str
    content: str


@dataclass
class Processed:
    record: dict[str, Any]
    artifact: Optional[Artifact] = None
    # False for dry runs: counted as processed, but nothing is written.
    persist: bool = True
    status: str = "done"


@dataclass
class Unavailable:
    reason: str


Outcome = Union[Processed, Unavailable]


@dataclass
class ItemResult:
    key: str
    title: str
    status: str
    has_output: Optional[bool] = None
    artifact_path: Optional[str] = None
    detail: Optional[str] = None


@dataclass
class RunSummary:
    stage: str
    started_at: datetime
    finished_at: Optional[datetime] = None
    total: int = 0
    skipped: int = 0
    processed: int = 0
    unavailable: int = 0
    failed: int = 0
    aborted: Optional[str] = None
    extras: dict[str, Any] = field(default_factory=dict)
    items: list[ItemResult] = field(default_factory=list)

    def add(self, result: ItemResult) -> None:
        self.items.append(result)
        if result.status == SKIPPED:
            self.skipped += 1
        elif result.status == PROCESSED:
            self.processed += 1
        elif result.status == UNAVAILABLE:
            self.unavailable += 1
        elif result.status == FAILED:
            self.failed += 1


class ArtifactStore:
    """Directory of artifacts; a given name always maps to the same path."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def path_for(self, name: str) -> Path:
        return self.directory / name

    def write(self, artifact: Artifact) -> Path:
        return write_text_atomic(self.path_for(artifact.name), artifact.content)


class StageRunner:
    def __init__(
        self,
        name: str,
        ledger: Ledger,
        catalog: CatalogSource,
        process: Callable[[CatalogItem], Outcome],
        artifacts: Optional[ArtifactStore] = None,
        summary_path: Optional[str | Path] = None,
        force_keys: Iterable[str] = (),
        extras: Optional[dict[str, Any]] = None,
    ):
        self.name = name
        self.ledger = ledger
        self.catalog = catalog
        self.process = process
        self.artifacts = artifacts
        self.summary_path = Path(summary_path) if summary_path else None
        self.force_keys = frozenset(force_keys)
        self.extras = extras or {}

    def run(self) -> RunSummary:
        summary = RunSummary(
            stage=self.name,
            started_at=datetime.now(timezone.utc),
            extras=dict(self.extras),
        )
        logger.info("[%s] Loaded ledger with %d completed entries", self.name, len(self.ledger))

        try:
            candidates = list(self.catalog.items())
            summary.total = len(candidates)
            logger.info("[%s] Found %d candidate items", self.name, summary.total)

            for i, item in enumerate(candidates, 1):
                summary.add(self._run_item(item, i, summary.total))
        except Exception as e:
            # Only fatal errors and catalog failures get here.
            summary.aborted = str(e)
            raise
        finally:
            summary.finished_at = datetime.now(timezone.utc)
            self._write_summary(summary)
            log_summary(summary)

        return summary

    def _run_item(self, item: CatalogItem, index: int, total: int) -> ItemResult:
        prefix = f"[{index}/{total}] {item.title}"

        if self.ledger.has(item.key) and item.key not in self.force_keys:
            logger.info("%s ... skipped (already done)", prefix)
            return ItemResult(item.key, item.title, SKIPPED, has_output=True)

        try:
            outcome = self.process(item)

            if isinstance(outcome, Unavailable):
                logger.info("%s ... unavailable: %s", prefix, outcome.reason)
                return ItemResult(item.key, item.title, UNAVAILABLE, has_output=False, detail=outcome.reason)

            artifact_path = None
            if outcome.persist:
                if outcome.artifact is not None:
                    artifact_path = str(self._write_artifact(outcome.artifact))
                self.ledger.record(item.key, outcome.record)

            logger.info("%s ... %s", prefix, outcome.status)
            return ItemResult(item.key, item.title, PROCESSED, has_output=True, artifact_path=artifact_path)

        except FatalStageError:
            raise
        except Exception as e:
            logger.error("%s ... failed (%s): %s", prefix, item.key, e)
            return ItemResult(item.key, item.title, FAILED, detail=str(e))

    def _write_artifact(self, artifact: Artifact) -> Path:
        if self.artifacts is None:
            raise RuntimeError(f"Stage {self.name} produced an artifact but has no artifact store")
        return self.artifacts.write(artifact)

    def _write_summary(self, summary: RunSummary) -> None:
        if self.summary_path is None:
            return
        try:
            write_json_atomic(self.summary_path, serialize_dataclass(summary))
        except OSError as e:
            logger.error("[%s] Could not write run summary to %s: %s", self.name, self.summary_path, e)


def log_summary(summary: RunSummary) -> None:
    logger.info("--- %s SUMMARY ---", summary.stage.upper())
    logger.info("Total candidates: %d", summary.total)
    logger.info("Skipped (already done): %d", summary.skipped)
    logger.info("Processed: %d", summary.processed)
    logger.info("Unavailable: %d", summary.unavailable)
    logger.info("Failed: %d", summary.failed)
    if summary.aborted:
        logger.error("Run aborted: %s", summary.aborted)
