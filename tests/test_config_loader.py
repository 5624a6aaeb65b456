"""Tests for the unified config loader."""

from pathlib import Path
from unittest.mock import patch

import pytest

from inspovid.config.defaults import DEFAULT_FALLBACKS, DEFAULT_REQUEST_TIMEOUT
from inspovid.config.loader import (
    ConfigSource,
    InspovidConfig,
    _find_project_config,
    _get_user_config_path,
    _interpolate_env_vars,
    _load_yaml_config,
    clear_config_cache,
    get_config,
    load_config,
    validate_config_dict,
)


class TestInspovidConfig:
    """Tests for InspovidConfig dataclass."""

    def test_defaults(self):
        config = InspovidConfig()
        assert config.request_timeout == DEFAULT_REQUEST_TIMEOUT
        assert config.chain_for("tiktok") == DEFAULT_FALLBACKS["tiktok"]
        assert config.chain_for("vimeo") == ()
        assert not config.has_tiktok_credentials

    def test_repr_hides_secrets(self):
        config = InspovidConfig(rapidapi_key="super-secret")
        repr_str = repr(config)
        assert "super-secret" not in repr_str
        assert "rapidapi_key" in repr_str

    def test_config_is_frozen(self):
        config = InspovidConfig()
        with pytest.raises(AttributeError):
            config.rapidapi_key = "x"  # type: ignore

    def test_tiktok_credentials_need_both(self):
        assert not InspovidConfig(tiktok_client_key="k").has_tiktok_credentials
        assert InspovidConfig(
            tiktok_client_key="k", tiktok_client_secret="s"
        ).has_tiktok_credentials


class TestLoadYamlConfig:
    """Tests for _load_yaml_config."""

    def test_load_nonexistent_file(self, tmp_path):
        assert _load_yaml_config(tmp_path / "nonexistent.yaml") is None

    def test_load_valid_yaml(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("request_timeout: 5\nlog_level: debug\n")
        assert _load_yaml_config(config_file) == {"request_timeout": 5, "log_level": "debug"}

    def test_load_empty_yaml(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")
        assert _load_yaml_config(config_file) == {}

    def test_load_invalid_yaml(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("providers: [unclosed\n")
        assert _load_yaml_config(config_file) is None

    def test_load_non_dict_yaml(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- just\n- a list\n")
        assert _load_yaml_config(config_file) is None


class TestInterpolation:
    """Tests for ${ENV_VAR} interpolation."""

    def test_replaces_nested(self, monkeypatch):
        monkeypatch.setenv("MY_KEY", "abc")
        data = {"providers": {"rapidapi": {"api_key": "${MY_KEY}"}}, "list": ["${MY_KEY}"]}
        result = _interpolate_env_vars(data)
        assert result["providers"]["rapidapi"]["api_key"] == "abc"
        assert result["list"] == ["abc"]

    def test_missing_var_is_empty(self):
        assert _interpolate_env_vars("${DOES_NOT_EXIST_12345}") == ""


class TestLoadConfig:
    """Tests for load_config priority handling."""

    def test_yaml_secrets(self):
        config = load_config(
            {
                "providers": {
                    "rapidapi": {"api_key": "r"},
                    "youtube": {"api_key": "y"},
                    "tiktok": {"client_key": "k", "client_secret": "s"},
                }
            }
        )
        assert config.rapidapi_key == "r"
        assert config.youtube_api_key == "y"
        assert config.has_tiktok_credentials

    def test_env_beats_yaml(self, monkeypatch):
        monkeypatch.setenv("RAPIDAPI_KEY", "from-env")
        config = load_config({"providers": {"rapidapi": {"api_key": "from-yaml"}}})
        assert config.rapidapi_key == "from-env"

    def test_prefixed_env(self, monkeypatch):
        monkeypatch.setenv("INSPOVID_YOUTUBE_API_KEY", "prefixed")
        assert load_config().youtube_api_key == "prefixed"

    def test_empty_string_is_unset(self, monkeypatch):
        monkeypatch.setenv("RAPIDAPI_KEY", "")
        assert load_config().rapidapi_key is None

    def test_custom_fallbacks(self):
        config = load_config({"providers": {"fallbacks": {"tiktok": ["tiktok-page"]}}})
        assert config.chain_for("tiktok") == ("tiktok-page",)
        assert config.chain_for("youtube") == DEFAULT_FALLBACKS["youtube"]

    def test_timeout_and_log_level(self, monkeypatch):
        config = load_config({"request_timeout": 3, "log_level": "debug"})
        assert config.request_timeout == 3.0
        assert config.log_level == "DEBUG"

        monkeypatch.setenv("INSPOVID_REQUEST_TIMEOUT", "7.5")
        assert load_config({"request_timeout": 3}).request_timeout == 7.5

    def test_invalid_timeout_uses_default(self):
        assert load_config({"request_timeout": -1}).request_timeout == DEFAULT_REQUEST_TIMEOUT
        assert load_config({"request_timeout": "soon"}).request_timeout == DEFAULT_REQUEST_TIMEOUT

    def test_cors_origins(self):
        config = load_config({"server": {"cors_origins": "https://app.example"}})
        assert config.cors_origins == ("https://app.example",)


class TestFindProjectConfig:
    """Tests for _find_project_config."""

    def test_walks_up(self, tmp_path, monkeypatch):
        config_dir = tmp_path / ".inspovid"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("log_level: INFO\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        assert _find_project_config() == config_dir / "config.yaml"

    def test_user_config_uses_root(self, tmp_path, monkeypatch):
        monkeypatch.setenv("INSPOVID_ROOT", str(tmp_path))
        assert _get_user_config_path() == tmp_path.resolve() / "config.yaml"


class TestGetConfig:
    """Tests for get_config caching and source detection."""

    def test_project_config(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("providers:\n  rapidapi:\n    api_key: project-key\n")
        with patch("inspovid.config.loader._find_project_config", return_value=config_file):
            config = get_config()
        assert config.source == ConfigSource.PROJECT
        assert config.config_path == config_file
        assert config.rapidapi_key == "project-key"

    def test_defaults_without_files(self):
        with (
            patch("inspovid.config.loader._find_project_config", return_value=None),
            patch(
                "inspovid.config.loader._get_user_config_path",
                return_value=Path("/nonexistent/config.yaml"),
            ),
        ):
            config = get_config()
        assert config.source == ConfigSource.DEFAULT

    def test_cached_until_cleared(self, monkeypatch):
        with patch("inspovid.config.loader._find_project_config", return_value=None):
            first = get_config()
            monkeypatch.setenv("RAPIDAPI_KEY", "later")
            assert get_config() is first
            clear_config_cache()
            assert get_config().rapidapi_key == "later"


class TestValidateConfigDict:
    """Tests for validate_config_dict."""

    def test_none_is_valid(self):
        assert validate_config_dict(None).is_valid

    def test_valid(self):
        result = validate_config_dict(
            {
                "providers": {
                    "rapidapi": {"api_key": "x"},
                    "fallbacks": {"tiktok": ["tiktok-official", "scrape"]},
                },
                "request_timeout": 10,
            }
        )
        assert result.is_valid
        assert result.warnings == []

    def test_unknown_provider_in_chain(self):
        result = validate_config_dict({"providers": {"fallbacks": {"tiktok": ["nope"]}}})
        assert not result.is_valid
        assert "Unknown provider 'nope'" in result.errors[0]

    def test_bad_timeout_and_level(self):
        result = validate_config_dict({"request_timeout": 0, "log_level": "loud"})
        assert len(result.errors) == 2

    def test_unknown_keys_warn(self):
        result = validate_config_dict({"cache_dir": "/tmp", "providers": {"openai": {}}})
        assert result.is_valid
        assert len(result.warnings) == 2

    def test_half_tiktok_credentials_warn(self):
        result = validate_config_dict({"providers": {"tiktok": {"client_key": "k"}}})
        assert result.is_valid
        assert any("client_secret" in w for w in result.warnings)

    def test_non_dict(self):
        result = validate_config_dict(["not", "a", "dict"])
        assert not result.is_valid
