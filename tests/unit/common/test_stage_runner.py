"""Tests for common.stage_runner module."""

import json
from unittest.mock import Mock

import pytest

from common.catalog import CatalogItem
from common.errors import ChannelNotFoundError, YouTubeApiError
from common.ledger import InMemoryLedgerStore, Ledger
from common.stage_runner import (
    FAILED,
    PROCESSED,
    SKIPPED,
    UNAVAILABLE,
    Artifact,
    ArtifactStore,
    Processed,
    StageRunner,
    Unavailable,
)


class ListCatalog:
    def __init__(self, items):
        self._items = list(items)
        self.calls = 0

    def items(self):
        self.calls += 1
        return iter(self._items)


def _catalog(*keys: str) -> ListCatalog:
    return ListCatalog(CatalogItem(key=k, title=f"Video {k}") for k in keys)


def _captions_process(unavailable=(), failing=()):
    """Produce an artifact per key, except for the ones told to fail."""

    def process(item: CatalogItem):
        if item.key in unavailable:
            return Unavailable("No transcript available")
        if item.key in failing:
            raise RuntimeError("boom")
        return Processed(
            record={"filename": f"{item.key}.md"},
            artifact=Artifact(f"{item.key}.md", f"content for {item.key}"),
        )

    return process


def _runner(tmp_path, store, catalog, process, **kwargs) -> StageRunner:
    return StageRunner(
        name="test-stage",
        ledger=Ledger.load(store),
        catalog=catalog,
        process=process,
        artifacts=ArtifactStore(tmp_path / "out"),
        **kwargs,
    )


class TestStageRunnerScenarios:
    def test_fresh_run_with_one_uncaptioned_item(self, tmp_path) -> None:
        store = InMemoryLedgerStore()
        runner = _runner(tmp_path, store, _catalog("A", "B", "C"), _captions_process(unavailable={"B"}))

        summary = runner.run()

        assert sorted(p.name for p in (tmp_path / "out").iterdir()) == ["A.md", "C.md"]
        assert set(store.document["entries"]) == {"A", "C"}
        assert summary.processed == 2
        assert summary.unavailable == 1
        assert summary.failed == 0
        assert [r.status for r in summary.items] == [PROCESSED, UNAVAILABLE, PROCESSED]

    def test_rerun_skips_recorded_item(self, tmp_path) -> None:
        store = InMemoryLedgerStore({"entries": {"A": {"filename": "A.md"}}})
        process = Mock(side_effect=_captions_process())
        runner = _runner(tmp_path, store, _catalog("A", "B", "C"), process)

        summary = runner.run()

        processed_keys = [call.args[0].key for call in process.call_args_list]
        assert processed_keys == ["B", "C"]
        assert summary.skipped == 1
        assert store.document["entries"]["A"] == {"filename": "A.md"}
        assert not (tmp_path / "out" / "A.md").exists()


class TestStageRunnerProperties:
    def test_second_run_does_no_new_work(self, tmp_path) -> None:
        store = InMemoryLedgerStore()
        _runner(tmp_path, store, _catalog("A", "B"), _captions_process()).run()
        writes_after_first = store.writes

        process = Mock(side_effect=_captions_process())
        summary = _runner(tmp_path, store, _catalog("A", "B"), process).run()

        process.assert_not_called()
        assert store.writes == writes_after_first
        assert summary.skipped == 2
        assert summary.processed == 0

    def test_failing_item_does_not_stop_the_run(self, tmp_path) -> None:
        store = InMemoryLedgerStore()
        runner = _runner(
            tmp_path, store, _catalog("A", "B", "C", "D"),
            _captions_process(unavailable={"D"}, failing={"B"}),
        )

        summary = runner.run()

        assert set(store.document["entries"]) == {"A", "C"}
        assert summary.failed == 1
        assert summary.items[1].status == FAILED
        assert summary.items[1].detail == "boom"
        assert summary.processed == summary.total - summary.skipped - summary.failed - summary.unavailable

    def test_interrupt_after_nth_flush_leaves_n_entries(self, tmp_path) -> None:
        store = InMemoryLedgerStore()
        inner = _captions_process()

        def process(item):
            if item.key == "C":
                raise KeyboardInterrupt
            return inner(item)

        runner = _runner(tmp_path, store, _catalog("A", "B", "C", "D"), process)

        with pytest.raises(KeyboardInterrupt):
            runner.run()

        assert store.writes == 2
        assert set(store.document["entries"]) == {"A", "B"}
        assert sorted(p.name for p in (tmp_path / "out").iterdir()) == ["A.md", "B.md"]

    def test_unavailable_item_is_offered_again(self, tmp_path) -> None:
        store = InMemoryLedgerStore()
        _runner(tmp_path, store, _catalog("B"), _captions_process(unavailable={"B"})).run()

        process = Mock(side_effect=_captions_process())
        _runner(tmp_path, store, _catalog("B"), process).run()

        process.assert_called_once()
        assert "B" in store.document["entries"]

    def test_artifact_path_is_deterministic(self, tmp_path) -> None:
        store = InMemoryLedgerStore()
        versions = iter(["first", "second"])

        def process(item):
            return Processed(record={}, artifact=Artifact("A.md", next(versions)))

        first = _runner(tmp_path, store, _catalog("A"), process, force_keys=["A"]).run()
        second = _runner(tmp_path, store, _catalog("A"), process, force_keys=["A"]).run()

        assert first.items[0].artifact_path == second.items[0].artifact_path
        assert (tmp_path / "out" / "A.md").read_text() == "second"
        assert store.document["totalEntries"] == 1

    def test_ledger_not_written_when_artifact_write_fails(self, tmp_path) -> None:
        store = InMemoryLedgerStore()
        runner = _runner(tmp_path, store, _catalog("A"), _captions_process())
        runner.artifacts = Mock(write=Mock(side_effect=OSError("read-only")))

        summary = runner.run()

        assert summary.failed == 1
        assert store.writes == 0

    def test_dry_run_outcome_writes_nothing(self, tmp_path) -> None:
        store = InMemoryLedgerStore()

        def process(item):
            return Processed(record={"x": 1}, artifact=Artifact("A.md", "c"), persist=False)

        summary = _runner(tmp_path, store, _catalog("A"), process).run()

        assert summary.processed == 1
        assert store.writes == 0
        assert not (tmp_path / "out").exists()

    def test_force_keys_bypass_ledger(self, tmp_path) -> None:
        store = InMemoryLedgerStore({"entries": {"A": {}, "B": {}}})
        process = Mock(side_effect=_captions_process())

        summary = _runner(tmp_path, store, _catalog("A", "B"), process, force_keys=["A"]).run()

        assert [call.args[0].key for call in process.call_args_list] == ["A"]
        assert summary.items[1].status == SKIPPED


class TestStageRunnerFatal:
    def test_fatal_error_during_enumeration_propagates(self, tmp_path) -> None:
        catalog = Mock()
        catalog.items.side_effect = ChannelNotFoundError("UCmissing")
        process = Mock()
        summary_path = tmp_path / "_summary.json"
        runner = _runner(tmp_path, InMemoryLedgerStore(), catalog, process, summary_path=summary_path)

        with pytest.raises(ChannelNotFoundError):
            runner.run()

        process.assert_not_called()
        assert "UCmissing" in json.loads(summary_path.read_text())["aborted"]

    def test_fatal_error_from_item_aborts(self, tmp_path) -> None:
        process = Mock(side_effect=ChannelNotFoundError("x"))
        runner = _runner(tmp_path, InMemoryLedgerStore(), _catalog("A", "B"), process)

        with pytest.raises(ChannelNotFoundError):
            runner.run()

        process.assert_called_once()


class TestRunSummaryFile:
    def test_summary_written_with_counts_and_extras(self, tmp_path) -> None:
        summary_path = tmp_path / "out" / "_summary.json"
        runner = _runner(
            tmp_path, InMemoryLedgerStore(), _catalog("A", "B"),
            _captions_process(unavailable={"B"}),
            summary_path=summary_path,
            extras={"channel_id": "UC123"},
        )

        runner.run()

        data = json.loads(summary_path.read_text())
        assert data["stage"] == "test-stage"
        assert data["total"] == 2
        assert data["processed"] == 1
        assert data["unavailable"] == 1
        assert data["extras"] == {"channel_id": "UC123"}
        assert [item["has_output"] for item in data["items"]] == [True, False]

    def test_catalog_error_is_recorded_as_aborted(self, tmp_path) -> None:
        catalog = Mock()
        catalog.items.side_effect = YouTubeApiError(403, {"message": "quotaExceeded"})
        summary_path = tmp_path / "_summary.json"
        runner = _runner(tmp_path, InMemoryLedgerStore(), catalog, Mock(), summary_path=summary_path)

        with pytest.raises(YouTubeApiError):
            runner.run()

        aborted = json.loads(summary_path.read_text())["aborted"]
        assert "403" in aborted
        assert "quotaExceeded" in aborted
