import json
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Any, Optional

from searcher.config import SearchConfig

INSTANCE: Optional[Any] = None


class _NullLogger:
    """No-op logger used when logging is disabled."""

    config: Optional[SearchConfig] = None
    session_id = "disabled"

    def __getattr__(self, name: str):  # pragma: no cover - simple passthrough
        def _noop(*args, **kwargs):
            return None

        return _noop


def get_logger() -> Any:
    global INSTANCE
    if INSTANCE is None:
        raise ValueError("get_logger called before init_logger!")
    return INSTANCE


class RunLogger:
    """
    Session log for search runs.
    Creates one JSONL file per session under `config.log_dir`, one event per line:
    the run's configuration, every path that was missing, every file scanned
    (with its match count or the reason it was skipped) and a closing summary.
    """
    def __init__(self, config: SearchConfig):
        self.config = config
        self.session_id = datetime.now().strftime("%Y%m%d_%H%M%S_%f")

        self.logs_dir = Path(config.log_dir)
        self.logs_dir.mkdir(parents=True, exist_ok=True)

        self.log_file = self.logs_dir / f"run_{self.session_id}.jsonl"
        # coarse clocks can repeat a timestamp; never append to another session's file
        suffix = 1
        while self.log_file.exists():
            self.session_id = f"{self.session_id.rsplit('-', 1)[0]}-{suffix}"
            self.log_file = self.logs_dir / f"run_{self.session_id}.jsonl"
            suffix += 1

        self.files_logged = 0
        self.init_logger()

    def init_logger(self):
        session_info = {
            "event": "session_start",
            "timestamp": datetime.now().isoformat(),
            "session_id": self.session_id,
            "config": self.config.to_dict(),
        }
        self._write_log(session_info)

    def log_run_start(self, pattern: str, paths: List[str]):
        self._write_log({
            "event": "run_start",
            "timestamp": datetime.now().isoformat(),
            "pattern": pattern,
            "paths": list(paths),
        })

    def log_path_not_found(self, path: str):
        self._write_log({
            "event": "path_not_found",
            "timestamp": datetime.now().isoformat(),
            "path": path,
        })

    def log_file_result(self, result):
        """Record the outcome of scanning one file (a ScanResult)."""
        self.files_logged += 1
        self._write_log({
            "event": "file",
            "timestamp": datetime.now().isoformat(),
            "file_id": self.files_logged,
            "path": result.path,
            "matches": result.matches,
            "lines_printed": result.lines_printed,
            "skipped": result.aborted.value if result.aborted else None,
            "error_message": result.error,
        })

    def log_run_complete(self, summary: Dict[str, Any], total_time_seconds: Optional[float] = None):
        data = {
            "event": "run_complete",
            "timestamp": datetime.now().isoformat(),
            "summary": summary,
        }
        if total_time_seconds is not None:
            data["total_time_seconds"] = round(total_time_seconds, 3)
        self._write_log(data)

    def log_error(self, error: Exception, context: str = ""):
        """Log errors during processing."""
        self._write_log({
            "event": "error",
            "timestamp": datetime.now().isoformat(),
            "context": context,
            "error_type": type(error).__name__,
            "error_message": str(error),
        })

    def _write_log(self, data: Dict[str, Any]):
        """Write a log entry to the JSONL file."""
        with open(self.log_file, "a", encoding="utf-8") as f:
            f.write(json.dumps(data, ensure_ascii=False) + "\n")

    def get_session_summary(self) -> Dict[str, Any]:
        """Get summary statistics for the current session."""
        if not self.log_file.exists():
            return {}

        files_scanned = 0
        total_matches = 0
        missing_paths = 0
        skipped: Dict[str, int] = {}

        with open(self.log_file, "r", encoding="utf-8") as f:
            for line in f:
                try:
                    entry = json.loads(line.strip())
                except json.JSONDecodeError:
                    continue

                event = entry.get("event")
                if event == "file":
                    files_scanned += 1
                    total_matches += entry.get("matches", 0)
                    reason = entry.get("skipped")
                    if reason:
                        skipped[reason] = skipped.get(reason, 0) + 1
                elif event == "path_not_found":
                    missing_paths += 1

        return {
            "session_id": self.session_id,
            "files_scanned": files_scanned,
            "files_skipped": skipped,
            "total_matches": total_matches,
            "missing_paths": missing_paths,
            "log_file": str(self.log_file)
        }


def init_logger(cfg: Optional[SearchConfig], enable_logging: bool = True):
    """Initialize the global logger, optionally disabling logging entirely."""

    global INSTANCE

    if not enable_logging:
        INSTANCE = _NullLogger()
        return

    if cfg is None or cfg.log_dir is None:
        raise ValueError("SearchConfig with a log_dir is required when enable_logging is True")

    INSTANCE = RunLogger(cfg)


def load_session_logs(log_dir: str, session_id: str) -> List[Dict[str, Any]]:
    """Load all log entries for a session."""
    log_file = Path(log_dir) / f"run_{session_id}.jsonl"
    if not log_file.exists():
        return []

    logs = []
    with open(log_file, "r", encoding="utf-8") as f:
        for line in f:
            try:
                logs.append(json.loads(line.strip()))
            except json.JSONDecodeError:
                continue
    return logs
