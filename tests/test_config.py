from __future__ import annotations

import pytest

from reversi.config import ENV_VAR, ConfigError, load_config, load_defaults, resolve_config_path


def test_defaults_shape():
    cfg = load_defaults()
    assert cfg["logging"]["level"] == "INFO"
    assert cfg["players"]["black"] == "heuristic"
    assert cfg["players"]["minimax_depth"] == 3
    assert cfg["game"]["max_plies"] == 200


def test_missing_file_gives_defaults(tmp_path):
    assert load_config(tmp_path / "nope.toml") == load_defaults()


def test_user_file_is_deep_merged(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('[players]\nwhite = "random"\n\n[extra]\nkey = 1\n', encoding="utf-8")
    cfg = load_config(path)
    assert cfg["players"]["white"] == "random"
    assert cfg["players"]["black"] == "heuristic"
    assert cfg["extra"] == {"key": 1}
    # Defaults are not mutated by the merge
    assert load_defaults()["players"]["white"] == "minimax"


def test_invalid_toml_raises(tmp_path):
    path = tmp_path / "bad.toml"
    path.write_text("[players\nblack = ", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path)


def test_env_var_selects_file(tmp_path, monkeypatch):
    path = tmp_path / "env.toml"
    path.write_text("[game]\nhints = false\n", encoding="utf-8")
    monkeypatch.setenv(ENV_VAR, str(path))
    assert resolve_config_path() == path
    assert load_config()["game"]["hints"] is False
    # An explicit path wins over the environment
    assert resolve_config_path(tmp_path / "other.toml") == tmp_path / "other.toml"
