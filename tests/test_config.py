import argparse

import pytest

from searcher.config import SearchConfig
from searcher.errors import ConfigError

pytestmark = pytest.mark.unit


class TestSearchConfig:
    """Tests for SearchConfig defaults, validation and loading."""

    def test_default_initialization(self):
        cfg = SearchConfig()

        assert cfg.after_context == 0
        assert cfg.before_context == 0
        assert not cfg.color
        assert not cfg.no_heading
        assert not cfg.context_enabled
        assert cfg.log_dir is None

    def test_context_enabled(self):
        assert SearchConfig(after_context=1).context_enabled
        assert SearchConfig(before_context=1).context_enabled

    def test_validation_rejects_negative_context(self):
        with pytest.raises(AssertionError):
            SearchConfig(before_context=-1)

    def test_validation_rejects_non_bool_flags(self):
        with pytest.raises(AssertionError):
            SearchConfig(color="yes")

    def test_is_immutable(self):
        cfg = SearchConfig()
        with pytest.raises(Exception):
            cfg.color = True

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("context: 2\nafter_context: 5\nignore_case: true\nlog_dir: logs\n")

        cfg = SearchConfig.from_yaml(path)

        assert cfg.before_context == 2
        assert cfg.after_context == 5
        assert cfg.ignore_case
        assert cfg.log_dir == str((tmp_path / "logs").resolve())

    def test_from_yaml_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")

        assert SearchConfig.from_yaml(path) == SearchConfig()

    def test_from_yaml_rejects_non_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigError):
            SearchConfig.from_yaml(path)

    def test_cli_overrides_file_values(self):
        base = SearchConfig(after_context=3, color=True)
        args = argparse.Namespace(
            after_context=1, before_context=None, color=None,
            hidden=True, ignore_case=None, no_heading=None, log_dir=None,
        )

        cfg = SearchConfig.from_args(args, base=base)

        assert cfg.after_context == 1
        assert cfg.color
        assert cfg.hidden

    def test_load_explicit_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            SearchConfig.load(tmp_path / "absent.yaml")

    def test_load_without_any_file_uses_defaults(self):
        assert SearchConfig.load() == SearchConfig()

    def test_load_user_file(self, tmp_path, monkeypatch):
        import searcher.config as config_module
        user_file = tmp_path / "user.yaml"
        user_file.write_text("no_heading: true\n")
        monkeypatch.setattr(config_module, "DEFAULT_CONFIG_PATH", user_file)

        assert SearchConfig.load().no_heading

    def test_load_wraps_invalid_values(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("before_context: -4\n")

        with pytest.raises(ConfigError):
            SearchConfig.load(path)

    def test_load_wraps_yaml_errors(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("color: [unclosed\n")

        with pytest.raises(ConfigError):
            SearchConfig.load(path)

    def test_to_dict(self):
        d = SearchConfig(after_context=2).to_dict()
        assert d["after_context"] == 2
        assert set(d) == {
            "after_context", "before_context", "color", "no_heading",
            "hidden", "ignore_case", "log_dir",
        }
