"""Tests for ablet.config."""

from __future__ import annotations

import logging

import pytest

from ablet.config import TOO_SMALL_MESSAGE, AbletConfig, config_from_env
from ablet.splittree import Orientation


class TestConfig:
    def test_defaults(self) -> None:
        config = AbletConfig()
        assert config.layout_orientation is Orientation.VERTICAL
        assert config.vertical_border == "│"
        assert config.horizontal_border == "─"
        assert config.too_small_message == TOO_SMALL_MESSAGE
        assert config.write_log_path == ""

    def test_empty_environment(self) -> None:
        assert config_from_env({}) == AbletConfig()

    def test_reads_variables(self) -> None:
        config = config_from_env(
            {
                "ABLET_ORIENTATION": "HORIZONTAL",
                "ABLET_WRITE_LOG": "/tmp/frames.log",
                "ABLET_LOG_FILE": "/tmp/ablet.log",
            }
        )
        assert config.layout_orientation is Orientation.HORIZONTAL
        assert config.write_log_path == "/tmp/frames.log"
        assert config.log_file == "/tmp/ablet.log"

    def test_bad_orientation_keeps_default(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="ablet.config"):
            config = config_from_env({"ABLET_ORIENTATION": "sideways"})
        assert config.layout_orientation is Orientation.VERTICAL
        assert "sideways" in caplog.text

    def test_reads_os_environ(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ABLET_ORIENTATION", "horizontal")
        assert config_from_env().layout_orientation is Orientation.HORIZONTAL
