import json

import pytest

from searcher.config import SearchConfig
from searcher.errors import AbortReason
from searcher.instrumentation import logging as run_logging
from searcher.instrumentation.logging import RunLogger, get_logger, init_logger, load_session_logs
from searcher.scanner import ScanResult
from searcher.state import RunState

pytestmark = pytest.mark.unit


class TestLoggerLifecycle:

    def test_get_logger_before_init(self, monkeypatch):
        monkeypatch.setattr(run_logging, "INSTANCE", None)
        with pytest.raises(ValueError):
            get_logger()

    def test_disabled_logger_is_noop(self):
        init_logger(None, enable_logging=False)
        logger = get_logger()

        assert logger.session_id == "disabled"
        assert logger.log_file_result(object()) is None
        assert logger.log_run_start("x", ["."]) is None

    def test_enabled_logger_requires_log_dir(self):
        with pytest.raises(ValueError):
            init_logger(SearchConfig(), enable_logging=True)

    def test_enabled_logger(self, tmp_path):
        init_logger(SearchConfig(log_dir=str(tmp_path)), enable_logging=True)
        assert isinstance(get_logger(), RunLogger)


class TestRunLogger:

    def test_session_file_and_summary(self, tmp_path):
        logger = RunLogger(SearchConfig(after_context=2, log_dir=str(tmp_path / "logs")))

        logger.log_run_start("needle", ["."])
        logger.log_path_not_found("ghost")
        logger.log_file_result(ScanResult(path="a.txt", run_state=RunState(True), matches=3, lines_printed=5))
        logger.log_file_result(ScanResult(path="b.bin", run_state=RunState(True), aborted=AbortReason.BINARY))
        logger.log_error(RuntimeError("boom"), context="scan")
        logger.log_run_complete({"lines_written": 6}, total_time_seconds=0.5)

        entries = load_session_logs(str(tmp_path / "logs"), logger.session_id)
        assert [e["event"] for e in entries] == [
            "session_start", "run_start", "path_not_found", "file", "file", "error", "run_complete",
        ]
        assert entries[0]["config"]["after_context"] == 2
        assert entries[5]["error_type"] == "RuntimeError"

        summary = logger.get_session_summary()
        assert summary["files_scanned"] == 2
        assert summary["total_matches"] == 3
        assert summary["files_skipped"] == {"binary": 1}
        assert summary["missing_paths"] == 1

    def test_entries_are_one_json_object_per_line(self, tmp_path):
        logger = RunLogger(SearchConfig(log_dir=str(tmp_path)))
        logger.log_run_start("café", ["."])

        lines = logger.log_file.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 2
        assert json.loads(lines[1])["pattern"] == "café"

    def test_missing_session(self, tmp_path):
        assert load_session_logs(str(tmp_path), "nope") == []

    def test_runs_in_the_same_second_get_separate_files(self, tmp_path):
        first = RunLogger(SearchConfig(log_dir=str(tmp_path)))
        second = RunLogger(SearchConfig(log_dir=str(tmp_path)))

        assert first.session_id != second.session_id
        assert first.log_file != second.log_file
        assert len(list(tmp_path.glob("run_*.jsonl"))) == 2
