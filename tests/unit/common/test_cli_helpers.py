"""Tests for common.cli_helpers module."""

import argparse

import pytest

from common.cli_helpers import parse_positive_int, parse_video_id


class TestParseVideoId:
    def test_url(self) -> None:
        assert parse_video_id("https://youtu.be/dQw4w9WgXcQ") == "dQw4w9WgXcQ"

    def test_invalid(self) -> None:
        with pytest.raises(argparse.ArgumentTypeError):
            parse_video_id("short")


class TestParsePositiveInt:
    def test_valid(self) -> None:
        assert parse_positive_int("5") == 5

    @pytest.mark.parametrize("value", ["0", "-1", "abc"])
    def test_invalid(self, value: str) -> None:
        with pytest.raises(argparse.ArgumentTypeError):
            parse_positive_int(value)
