"""Configuration management for veisku."""

import logging
import os
import shlex
import sys
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

MARKER_DIR = ".veisku"
CONFIG_FILE = "config.yaml"
SCRIPT_DIR = "bin"

DEFAULT_CONFIG = {
    "root": "",
    "extensions": [".md", ".mdown", ".markdown"],
    "pager": None,
    "editor": None,
    "opener": None,
    "run": None,
    "filters": {},
    "theme": {"tags": {}, "tag_default": "green on grey23"},
}

# Expected type of each configurable value, used to reject bad overrides.
_SCHEMA: dict[str, Any] = {
    "root": str,
    "extensions": list,
    "pager": (str, type(None)),
    "editor": (str, type(None)),
    "opener": (str, type(None)),
    "run": (str, type(None)),
    "filters": dict,
    "theme": dict,
}


def config_file_path(marker_parent: Path) -> Path:
    return marker_parent / MARKER_DIR / CONFIG_FILE


def default_config() -> dict[str, Any]:
    """Return a fresh copy of the built-in defaults."""
    cfg = dict(DEFAULT_CONFIG)
    cfg["extensions"] = list(DEFAULT_CONFIG["extensions"])
    cfg["filters"] = {}
    cfg["theme"] = {"tags": {}, "tag_default": DEFAULT_CONFIG["theme"]["tag_default"]}
    return cfg


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """Load configuration, merging the file over the defaults.

    A missing file yields the defaults. An unreadable or invalid file is
    reported as a warning and the offending values fall back to defaults.
    """
    cfg = default_config()
    if config_path is None:
        return cfg

    path = Path(config_path)
    if not path.exists():
        logger.debug(f"{path} doesn't exist; using the default configuration")
        return cfg

    logger.debug(f"Reading configuration from {path}")
    try:
        with open(path, encoding="utf-8") as f:
            file_cfg = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        logger.warning(f"Ignoring invalid configuration {path}: {e}")
        return cfg

    if file_cfg is None:
        return cfg
    if not isinstance(file_cfg, dict):
        logger.warning(f"Ignoring configuration {path}: top level is not a mapping")
        return cfg

    _deep_merge(cfg, _validated(file_cfg, path))
    cfg["extensions"] = [_normalize_extension(e) for e in cfg["extensions"]]
    return cfg


def _validated(file_cfg: dict[str, Any], path: Path) -> dict[str, Any]:
    """Drop keys whose values have the wrong type."""
    valid = {}
    for key, value in file_cfg.items():
        expected = _SCHEMA.get(key)
        if expected is None:
            logger.debug(f"Ignoring unknown configuration key '{key}' in {path}")
            continue
        if not isinstance(value, expected):
            logger.warning(f"Ignoring configuration key '{key}' in {path}: unexpected value {value!r}")
            continue
        if key == "extensions" and not all(isinstance(e, str) for e in value):
            logger.warning(f"Ignoring configuration key 'extensions' in {path}: entries must be strings")
            continue
        if key == "filters":
            value = {str(k): str(v) for k, v in value.items() if v is not None}
        valid[key] = value
    return valid


def _normalize_extension(ext: str) -> str:
    return ext if ext.startswith(".") else f".{ext}"


def _deep_merge(base: dict, override: dict) -> None:
    """Merge override into base in-place."""
    for k, v in override.items():
        if k in base and isinstance(base[k], dict) and isinstance(v, dict):
            _deep_merge(base[k], v)
        else:
            base[k] = v


def command_for(config: dict[str, Any], name: str) -> list[str]:
    """Return the argv of a configured command, falling back to built-ins.

    ``name`` is one of ``pager``, ``editor``, ``opener`` or ``run``.
    """
    configured = config.get(name)
    if configured:
        return shlex.split(configured)
    return shlex.split(_default_command(name))


def _default_command(name: str) -> str:
    if name == "pager":
        return os.environ.get("PAGER") or "less -R"
    if name == "editor":
        return os.environ.get("EDITOR") or "vi"
    if name == "opener":
        return "open" if sys.platform == "darwin" else "xdg-open"
    if name == "run":
        return os.environ.get("SHELL") or "sh"
    raise ValueError(f"Unknown command: {name}")
