from __future__ import annotations

import argparse
import os
import pathlib
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Optional

import yaml

from searcher.errors import ConfigError

DEFAULT_CONFIG_PATH = pathlib.Path.home() / ".config" / "searcher" / "config.yaml"

# CLI dest -> config field; CLI values win over the config file
_CLI_OVERRIDES = (
    "after_context",
    "before_context",
    "color",
    "hidden",
    "ignore_case",
    "no_heading",
    "log_dir",
)


@dataclass(frozen=True)
class SearchConfig:
    # context window
    after_context: int = 0
    before_context: int = 0

    # presentation
    color: bool = False
    no_heading: bool = False

    # matching + traversal
    hidden: bool = False
    ignore_case: bool = False

    # instrumentation; session logging is off when unset
    log_dir: Optional[str] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._validate()

    @property
    def context_enabled(self) -> bool:
        return self.after_context > 0 or self.before_context > 0

    # ---------- factory + validation ----------
    @staticmethod
    def from_yaml(path: os.PathLike) -> SearchConfig:
        config_path = pathlib.Path(path).expanduser().resolve()
        with open(config_path, "r", encoding="utf-8") as fp:
            raw = yaml.safe_load(fp)

        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ConfigError(f"{config_path}: expected a mapping at the top level")

        def pick(key, default=None):
            return raw.get(key, default)

        log_dir = pick("log_dir", None)
        if isinstance(log_dir, str):
            log_dir_path = pathlib.Path(log_dir).expanduser()
            if not log_dir_path.is_absolute():
                log_dir = str((config_path.parent / log_dir_path).resolve())

        # a single `context` key sets both sides, explicit keys refine it
        context = pick("context", 0)

        return SearchConfig(
            # Context
            after_context  = pick("after_context", context),
            before_context = pick("before_context", context),

            # Presentation
            color          = pick("color", False),
            no_heading     = pick("no_heading", False),

            # Matching + traversal
            hidden         = pick("hidden", False),
            ignore_case    = pick("ignore_case", False),

            # Instrumentation
            log_dir        = log_dir,
        )

    @staticmethod
    def from_args(args: argparse.Namespace, base: Optional[SearchConfig] = None) -> SearchConfig:
        """Overlay parsed command-line options on `base` (defaults if None)."""
        base = base or SearchConfig()
        overrides = {}
        for name in _CLI_OVERRIDES:
            value = getattr(args, name, None)
            if value is not None:
                overrides[name] = value
        return replace(base, **overrides)

    @staticmethod
    def load(path: Optional[os.PathLike] = None) -> SearchConfig:
        """
        Resolve the config file: an explicit path must exist, otherwise the
        per-user file is used when present, otherwise defaults.
        """
        if path is not None:
            config_path = pathlib.Path(path)
            if not config_path.is_file():
                raise ConfigError(f"Config file not found - {path}")
        elif DEFAULT_CONFIG_PATH.is_file():
            config_path = DEFAULT_CONFIG_PATH
        else:
            return SearchConfig()

        try:
            return SearchConfig.from_yaml(config_path)
        except yaml.YAMLError as e:
            raise ConfigError(f"{config_path}: {e}") from e
        except AssertionError as e:
            raise ConfigError(f"{config_path}: {e}") from e

    def _validate(self) -> None:
        for name in ("after_context", "before_context"):
            value = getattr(self, name)
            assert isinstance(value, int) and not isinstance(value, bool), f"{name} must be an integer"
            assert value >= 0, f"{name} must be >= 0"
        for name in ("color", "hidden", "ignore_case", "no_heading"):
            assert isinstance(getattr(self, name), bool), f"{name} must be true or false"
        assert self.log_dir is None or isinstance(self.log_dir, str), "log_dir must be a path"

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}
