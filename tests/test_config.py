import sys

import pytest

from stem_client.core import config
from stem_client.core.config import ClientSettings, write_user_env_vars
from stem_client.core.domain.options import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_MS


def test_defaults():
    settings = ClientSettings(_env_file=None)
    assert settings.base_url == DEFAULT_BASE_URL
    assert settings.timeout_ms == DEFAULT_TIMEOUT_MS
    assert settings.api_key is None
    assert settings.transport == "auto"


def test_env_prefix(monkeypatch):
    monkeypatch.setenv("STEMSEP_API_KEY", "abc")
    monkeypatch.setenv("stemsep_timeout_ms", "42")
    settings = ClientSettings(_env_file=None)
    assert settings.api_key == "abc"
    assert settings.timeout_ms == 42


def test_dotenv_in_working_directory(tmp_path):
    (tmp_path / ".env").write_text("STEMSEP_BASE_URL=https://from-dotenv.local\n", encoding="utf-8")
    settings = ClientSettings(_env_file=tmp_path / ".env")
    assert settings.base_url == "https://from-dotenv.local"


def test_write_user_env_vars_merges(monkeypatch, tmp_path):
    env_file = tmp_path / "cfg" / ".env"
    monkeypatch.setattr(config, "get_user_env_file", lambda: env_file)

    write_user_env_vars({"STEMSEP_BASE_URL": "https://a", "STEMSEP_API_KEY": "k"})
    write_user_env_vars({"STEMSEP_BASE_URL": "https://b", "STEMSEP_API_KEY": None})

    lines = env_file.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("#")
    assert "STEMSEP_BASE_URL=https://b" in lines
    assert "STEMSEP_API_KEY=k" in lines


def test_user_config_dir_honours_xdg(monkeypatch, tmp_path):
    if sys.platform.startswith("win") or sys.platform == "darwin":
        pytest.skip("XDG only applies on Linux/BSD")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert config.get_user_config_dir() == tmp_path / "stem-separator-client"


def test_write_user_env_vars_empty_string_removes_key(monkeypatch, tmp_path):
    env_file = tmp_path / "cfg" / ".env"
    monkeypatch.setattr(config, "get_user_env_file", lambda: env_file)

    write_user_env_vars({"STEMSEP_BASE_URL": "https://a", "STEMSEP_API_KEY": "k"})
    write_user_env_vars({"STEMSEP_API_KEY": ""})

    lines = env_file.read_text(encoding="utf-8").splitlines()
    assert "STEMSEP_BASE_URL=https://a" in lines
    assert not any(line.startswith("STEMSEP_API_KEY") for line in lines)
