import io
import sys
import pytest
from pathlib import Path

# Add the project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from searcher.config import SearchConfig
from searcher.formatter import TerminalPrinter
from searcher.instrumentation import logging as run_logging
from searcher.matcher import PatternMatcher
from searcher.scanner import FileScanner
from searcher.state import RunState


@pytest.fixture(autouse=True)
def null_logger(monkeypatch):
    """Every test starts with session logging disabled."""
    monkeypatch.setattr(run_logging, "INSTANCE", None)
    run_logging.init_logger(None, enable_logging=False)
    yield


@pytest.fixture(autouse=True)
def no_user_config(monkeypatch, tmp_path):
    """Keep a real ~/.config/searcher/config.yaml out of the tests."""
    import searcher.config as config_module
    monkeypatch.setattr(config_module, "DEFAULT_CONFIG_PATH", tmp_path / "no-such-config.yaml")


@pytest.fixture
def write_file(tmp_path):
    """Write a file under tmp_path. Lists of str are joined as newline-terminated lines."""
    def _write(name, lines):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(lines, bytes):
            path.write_bytes(lines)
        else:
            path.write_bytes("".join(f"{line}\n" for line in lines).encode("utf-8"))
        return str(path)
    return _write


@pytest.fixture
def scan():
    """
    Scan a sequence of files with one shared RunState.
    Returns (output text, list of ScanResult).
    """
    def _scan(paths, pattern, **config_kwargs):
        cfg = SearchConfig(**config_kwargs)
        matcher = PatternMatcher.compile(pattern, ignore_case=cfg.ignore_case)
        stream = io.StringIO()
        scanner = FileScanner(cfg, matcher, TerminalPrinter(stream, color=cfg.color))

        run_state = RunState()
        results = []
        for path in paths:
            result = scanner.scan_file(path, run_state)
            run_state = result.run_state
            results.append(result)
        return stream.getvalue(), results
    return _scan
