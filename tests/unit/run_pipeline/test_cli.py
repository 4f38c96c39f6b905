"""Tests for run_pipeline CLI."""

from unittest.mock import patch

import pytest

from common.errors import YouTubeApiError
from run_pipeline import cli as pipeline_cli


class TestMain:
    def test_skip_fetch_needs_no_youtube_env(self, config, monkeypatch) -> None:
        monkeypatch.delenv("YOUTUBE_API_KEY", raising=False)
        monkeypatch.delenv("YOUTUBE_CHANNEL_ID", raising=False)
        with patch.object(pipeline_cli, "load_config", return_value=config), \
                patch.object(pipeline_cli, "run_pipeline") as run:
            pipeline_cli.main(["--skip-fetch"])

        assert run.call_args.kwargs["skip_fetch"] is True
        assert run.call_args.kwargs["api_key"] is None

    def test_catalog_failure_exits_nonzero(self, config, monkeypatch) -> None:
        monkeypatch.setenv("YOUTUBE_API_KEY", "KEY")
        monkeypatch.setenv("YOUTUBE_CHANNEL_ID", "UC1")
        with patch.object(pipeline_cli, "load_config", return_value=config), \
                patch.object(pipeline_cli, "run_pipeline", side_effect=YouTubeApiError(403, "quota")):
            with pytest.raises(SystemExit) as exc_info:
                pipeline_cli.main([])
        assert exc_info.value.code == 1
