"""
Tests for varion.config module.
"""

import pytest

from varion.core.errors import ConfigError


class TestParseToml:
    """Tests for tomlkit-based parsing."""

    def test_multiline_array(self):
        from varion.config import parse_toml

        content = """\
[scripts]
extensions = [
    ".va",
    ".vion",
]
"""
        assert parse_toml(content)["scripts"]["extensions"] == [".va", ".vion"]

    def test_returns_plain_types(self):
        from varion.config import parse_toml

        result = parse_toml('[output]\nformat = "json"  # inline comment\n')
        assert type(result) is dict
        assert type(result["output"]["format"]) is str

    def test_invalid_toml(self):
        from varion.config import parse_toml

        with pytest.raises(ConfigError):
            parse_toml("[scripts\npaths = ")


class TestConfigMerge:
    """Tests for configuration merging."""

    def test_merge_configs_override(self):
        from varion.config import merge_configs

        defaults = {"scripts": {"paths": ["."], "recursive": True}}
        user = {"scripts": {"paths": ["story"]}}

        merged = merge_configs(defaults, user)

        assert merged["scripts"]["paths"] == ["story"]
        assert merged["scripts"]["recursive"] is True

    def test_merge_does_not_mutate_inputs(self):
        from varion.config import merge_configs

        defaults = {"output": {"format": "text"}}
        merge_configs(defaults, {"output": {"format": "json"}})
        assert defaults == {"output": {"format": "text"}}


class TestConfigLoader:
    """Tests for locating and loading .varion.toml."""

    def test_load_config_with_defaults(self, tmp_path):
        from varion.config import load_config

        config_file = tmp_path / ".varion.toml"
        config_file.write_text('[scripts]\npaths = ["story"]\n', encoding="utf-8")

        config = load_config(config_file)

        assert config["scripts"]["paths"] == ["story"]
        assert config["scripts"]["extensions"] == [".va", ".vion"]
        assert config["output"]["format"] == "text"

    def test_load_missing_file(self, tmp_path):
        from varion.config import load_config

        with pytest.raises(ConfigError):
            load_config(tmp_path / "missing.toml")

    def test_find_config_in_parent(self, tmp_path):
        from varion.config import find_config_file

        (tmp_path / ".varion.toml").write_text("", encoding="utf-8")
        nested = tmp_path / "story" / "act1"
        nested.mkdir(parents=True)

        assert find_config_file(nested) == (tmp_path / ".varion.toml").resolve()

    def test_get_config_defaults_without_file(self, tmp_path):
        from varion.config import DEFAULT_CONFIG, get_config

        config = get_config(start=tmp_path)
        assert config == DEFAULT_CONFIG
        assert config is not DEFAULT_CONFIG


class TestEnvOverrides:
    """Tests for VARION_* environment overrides."""

    def test_try_parse_env_value(self):
        from varion.config import _try_parse_env_value

        assert _try_parse_env_value('[".va"]') == [".va"]
        assert _try_parse_env_value('{"a": 1}') == {"a": 1}
        assert _try_parse_env_value("TRUE") is True
        assert _try_parse_env_value("false") is False
        assert _try_parse_env_value("json") == "json"
        assert _try_parse_env_value("[not json") == "[not json"

    def test_override_nested_key_with_underscores(self):
        from varion.config import _apply_env_overrides

        config = {"scripts": {"skip_files": []}}
        result = _apply_env_overrides(config, {"VARION_SCRIPTS_SKIP_FILES": '["draft.va"]'})
        assert result["scripts"]["skip_files"] == ["draft.va"]

    def test_unrelated_variables_ignored(self):
        from varion.config import _apply_env_overrides

        result = _apply_env_overrides({}, {"PATH": "/bin", "VARION_": "x", "VARION_OUTPUT": "x"})
        assert result == {}

    def test_load_config_applies_env(self, tmp_path, monkeypatch):
        from varion.config import load_config

        config_file = tmp_path / ".varion.toml"
        config_file.write_text('[output]\nformat = "text"\n', encoding="utf-8")
        monkeypatch.setenv("VARION_OUTPUT_FORMAT", "json")

        assert load_config(config_file)["output"]["format"] == "json"
