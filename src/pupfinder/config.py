"""Configuration loading and defaults."""

from __future__ import annotations

import json
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


CONFIG_DIR_NAME = ".pupfinder"

DEFAULT_CONFIG = {
    "source": {
        "kind": "bundled",
        "path": "",
        "url": "",
        "timeout": 10.0,
    },
}


class Config:
    def __init__(self, data: dict, config_dir: Path):
        self._data = data
        self.config_dir = config_dir

    @classmethod
    def load(cls, project_root: Path) -> "Config":
        config_dir = project_root / CONFIG_DIR_NAME
        config_file = config_dir / "config.toml"

        data = _deep_merge(DEFAULT_CONFIG, {})

        if config_file.exists():
            with open(config_file, "rb") as f:
                user_data = tomllib.load(f)
            data = _deep_merge(DEFAULT_CONFIG, user_data)

        return cls(data, config_dir)

    @classmethod
    def load_from_cwd(cls) -> "Config":
        root = _find_project_root(Path.cwd())
        return cls.load(root)

    # --- source ---
    @property
    def source_kind(self) -> str:
        return self._data["source"]["kind"]

    @property
    def source_path(self) -> Path | None:
        raw = self._data["source"]["path"]
        if not raw:
            return None
        p = Path(raw)
        if not p.is_absolute():
            p = self.config_dir.parent / p
        return p

    @property
    def source_url(self) -> str:
        return self._data["source"]["url"]

    @property
    def source_timeout(self) -> float:
        return float(self._data["source"]["timeout"])


def _deep_merge(base: dict, override: dict) -> dict:
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _find_project_root(start: Path) -> Path:
    """Walk up to find the directory containing .pupfinder/ or .git/."""
    current = start.resolve()
    while True:
        if (current / CONFIG_DIR_NAME).exists() or (current / ".git").exists():
            return current
        parent = current.parent
        if parent == current:
            return start.resolve()
        current = parent


def render_config_toml(
    kind: str = "bundled", path: str = "", url: str = "", timeout: float = 10.0
) -> str:
    """Render a config.toml selecting one payload source."""
    return (
        "[source]\n"
        "# bundled | file | http\n"
        f"kind    = {json.dumps(kind)}\n"
        f"path    = {json.dumps(path)}\n"
        f"url     = {json.dumps(url)}\n"
        f"timeout = {float(timeout)}\n"
    )
