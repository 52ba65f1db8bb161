import os
import tempfile

import pytest

from swologs import config
from swologs.errors import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.setattr(config, "_dotenv_loaded", True)
    monkeypatch.setattr(config, "_custom_dotenv_path", None)
    for key in ("SWO_API_TOKEN", "SWO_API_URL", "SWO_API_TIMEOUT", "DOTENV_PATH"):
        monkeypatch.delenv(key, raising=False)


def _write(tmp_path, text, name="config.yaml"):
    path = tmp_path / name
    path.write_text(text)
    return str(path)


def test_load_config_from_file(tmp_path):
    path = _write(tmp_path, "token: file-token\napi-url: https://file.example.com\n")
    cfg = config.load_config(path)
    assert cfg.token == "file-token"
    assert cfg.api_url == "https://file.example.com"
    assert cfg.timeout == 30


def test_default_api_url(tmp_path):
    cfg = config.load_config(_write(tmp_path, "token: t\n"))
    assert cfg.api_url == config.DEFAULT_API_URL


def test_api_url_flag_beats_file(tmp_path):
    path = _write(tmp_path, "token: t\napi-url: https://file.example.com\n")
    cfg = config.load_config(path, api_url="https://flag.example.com")
    assert cfg.api_url == "https://flag.example.com"


def test_environment_overrides(tmp_path, monkeypatch):
    path = _write(tmp_path, "token: file-token\napi-url: https://file.example.com\n")
    monkeypatch.setenv("SWO_API_TOKEN", "env-token")
    monkeypatch.setenv("SWO_API_URL", "https://env.example.com")
    cfg = config.load_config(path, api_url="https://flag.example.com")
    assert cfg.token == "env-token"
    assert cfg.api_url == "https://env.example.com"


def test_missing_file_with_env_token(tmp_path, monkeypatch):
    monkeypatch.setenv("SWO_API_TOKEN", "env-token")
    cfg = config.load_config(str(tmp_path / "missing.yaml"))
    assert cfg.token == "env-token"


def test_missing_token(tmp_path):
    with pytest.raises(ConfigurationError, match="token"):
        config.load_config(_write(tmp_path, "api-url: https://file.example.com\n"))


def test_invalid_yaml(tmp_path, monkeypatch):
    monkeypatch.setenv("SWO_API_TOKEN", "env-token")
    with pytest.raises(ConfigurationError, match="unmarshaling"):
        config.load_config(_write(tmp_path, "token: [unclosed\n"))


def test_home_directory_expansion(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    _write(tmp_path, "token: home-token\n", name=".swo-cli.yaml")
    cfg = config.load_config("~/.swo-cli.yaml")
    assert cfg.token == "home-token"


def test_invalid_timeout(tmp_path, monkeypatch):
    monkeypatch.setenv("SWO_API_TIMEOUT", "soon")
    with pytest.raises(ConfigurationError):
        config.load_config(_write(tmp_path, "token: t\n"))


def test_set_dotenv_path(tmp_path, monkeypatch):
    """Test that set_dotenv_path() loads the custom env file."""
    monkeypatch.setattr(config, "_dotenv_loaded", False)
    with tempfile.NamedTemporaryFile(mode='w', suffix='.env', delete=False) as f:
        f.write("SWO_API_TOKEN=dotenv-token\n")
        temp_env_path = f.name

    try:
        config.set_dotenv_path(temp_env_path)
        cfg = config.load_config(str(tmp_path / "missing.yaml"))
        assert cfg.token == "dotenv-token"
    finally:
        os.unlink(temp_env_path)
        os.environ.pop("SWO_API_TOKEN", None)


def test_set_dotenv_path_resets_loaded_flag():
    config.set_dotenv_path("/path/to/custom.env")
    assert config._dotenv_loaded == False
    assert config._custom_dotenv_path == "/path/to/custom.env"
