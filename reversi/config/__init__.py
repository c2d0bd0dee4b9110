from __future__ import annotations

import copy
import logging
import os
import pathlib
from importlib import resources
from typing import Any, Dict, Optional, Union

# Parse TOML config; prefer stdlib tomllib (3.11+), else tomli
try:
    import tomllib  # type: ignore[import-not-found]
except ModuleNotFoundError:  # pragma: no cover - Python < 3.11
    import tomli as tomllib  # type: ignore[no-redef]

CONFIG_HOME = pathlib.Path(os.path.expanduser("~/.reversi"))
CONFIG_PATH = CONFIG_HOME / "config.toml"
ENV_VAR = "REVERSI_CONFIG"

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when a config file exists but cannot be parsed."""


def load_defaults() -> Dict[str, Any]:
    text = resources.files("reversi.config").joinpath("defaults.toml").read_text(encoding="utf-8")
    return tomllib.loads(text)


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = _merge(out[key], value)
        else:
            out[key] = value
    return out


def resolve_config_path(path: Optional[Union[str, pathlib.Path]] = None) -> pathlib.Path:
    if path is not None:
        return pathlib.Path(path).expanduser()
    env = os.environ.get(ENV_VAR)
    if env:
        return pathlib.Path(env).expanduser()
    return CONFIG_PATH


def load_config(path: Optional[Union[str, pathlib.Path]] = None) -> Dict[str, Any]:
    """Packaged defaults deep-merged with the user's TOML file, if there is one."""
    cfg = load_defaults()
    user_path = resolve_config_path(path)
    if not user_path.exists():
        logger.debug("No config at %s, using defaults", user_path)
        return cfg
    try:
        with open(user_path, "rb") as f:
            user_cfg = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Cannot parse {user_path}: {e}") from e
    logger.debug("Loaded config from %s", user_path)
    return _merge(cfg, user_cfg)
