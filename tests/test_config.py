from __future__ import annotations

import sys

import pytest
from pydantic import ValidationError

from core.config import AppSettings, get_user_config_dir, write_user_env_vars


def test_defaults(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    settings = AppSettings(_env_file=None)
    assert settings.items_per_page == 21
    assert settings.max_visible_pages == 7
    assert settings.storage_key == "rocksmith-file-manager-data"
    assert settings.log_level == "WARNING"


def test_env_prefix(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("ROCKSMITH_CATALOG_ITEMS_PER_PAGE", "12")
    monkeypatch.setenv("ROCKSMITH_CATALOG_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("ROCKSMITH_CATALOG_LOG_LEVEL", "debug")
    settings = AppSettings(_env_file=None)
    assert settings.items_per_page == 12
    assert settings.resolved_data_dir() == tmp_path
    assert settings.log_level == "DEBUG"


def test_invalid_values_are_rejected() -> None:
    with pytest.raises(ValidationError):
        AppSettings(items_per_page=0, _env_file=None)
    with pytest.raises(ValidationError):
        AppSettings(log_level="LOUD", _env_file=None)


@pytest.mark.skipif(sys.platform != "linux", reason="XDG layout")
def test_default_data_dir_follows_xdg(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert get_user_config_dir() == tmp_path / "rocksmith-catalog"
    assert AppSettings(_env_file=None).resolved_data_dir() == tmp_path / "rocksmith-catalog" / "data"


def test_write_user_env_vars_merges(tmp_path) -> None:
    env_path = tmp_path / "cfg" / ".env"
    write_user_env_vars({"B": "2", "A": "1"}, env_path)
    write_user_env_vars({"A": "3"}, env_path)
    lines = env_path.read_text(encoding="utf-8").splitlines()
    assert lines == ["# rocksmith-catalog user config (.env)", "A=3", "B=2"]
