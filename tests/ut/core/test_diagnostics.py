"""诊断输出实现单元测试"""

from __future__ import annotations

import logging

import pytest

from pluginmeta.core.diagnostics import CollectingDiagnostics, LoggingDiagnostics


class TestLoggingDiagnostics:
    def test_levels(self, caplog: pytest.LogCaptureFixture) -> None:
        diag = LoggingDiagnostics()
        with caplog.at_level(logging.WARNING, logger="pluginmeta"):
            diag.warn("icon missing")
            diag.error("category missing")
        levels = [(r.levelno, r.getMessage()) for r in caplog.records]
        assert levels == [
            (logging.WARNING, "icon missing"),
            (logging.ERROR, "category missing"),
        ]

    def test_custom_logger(self, caplog: pytest.LogCaptureFixture) -> None:
        diag = LoggingDiagnostics(logging.getLogger("custom.diag"))
        with caplog.at_level(logging.ERROR, logger="custom.diag"):
            diag.error("boom")
        assert caplog.records[0].name == "custom.diag"


class TestCollectingDiagnostics:
    def test_collects(self) -> None:
        diag = CollectingDiagnostics()
        diag.warn("w")
        diag.error("e1")
        diag.error("e2")
        assert diag.warnings == ["w"]
        assert diag.errors == ["e1", "e2"]
        assert diag.has_errors

    def test_clear(self) -> None:
        diag = CollectingDiagnostics()
        diag.error("e")
        diag.clear()
        assert diag.errors == []
        assert not diag.has_errors

    def test_forward(self, caplog: pytest.LogCaptureFixture) -> None:
        diag = CollectingDiagnostics(forward=True)
        with caplog.at_level(logging.WARNING, logger="pluginmeta"):
            diag.warn("w")
        assert diag.warnings == ["w"]
        assert [r.getMessage() for r in caplog.records] == ["w"]
