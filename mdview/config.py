"""Persistent JSON config and effective-settings resolution.

Stores default render width, code style, UI theme, pager command, and extra
pruned directory names. All access is defensive: malformed or missing config
falls back safely. Command-line flags win over environment variables, which
win over the config file, which wins over built-in defaults.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "mdview"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_WIDTH = 100
MIN_WIDTH = 20
DEFAULT_STYLE = "monokai"
DEFAULT_THEME = "default"
DEFAULT_PAGER = "less"
DEFAULT_EXCLUDED_DIRS: frozenset[str] = frozenset({"node_modules"})

PAGER_ENV = "MDVIEW_PAGER"
NO_COLOR_ENV = "NO_COLOR"


@dataclass(frozen=True)
class Settings:
    """Effective runtime settings after merging all sources."""

    width: int = DEFAULT_WIDTH
    style: str = DEFAULT_STYLE
    theme: str = DEFAULT_THEME
    pager: str = DEFAULT_PAGER
    no_color: bool = False
    exclude_dirs: frozenset[str] = DEFAULT_EXCLUDED_DIRS
    log_level: int = logging.WARNING


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def _load_string(data: Mapping[str, object], key: str) -> str | None:
    value = data.get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_width(data: Mapping[str, object]) -> int | None:
    """Return the configured render width, ignoring booleans and tiny values."""
    value = data.get("width")
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    if value < MIN_WIDTH:
        return None
    return value


def load_exclude_dirs(data: Mapping[str, object]) -> frozenset[str]:
    """Return extra directory names to prune, merged with the defaults.

    Non-list values are ignored; non-string and empty entries are dropped.
    """
    value = data.get("exclude_dirs")
    if not isinstance(value, list):
        return DEFAULT_EXCLUDED_DIRS
    extra = {item.strip() for item in value if isinstance(item, str) and item.strip()}
    return DEFAULT_EXCLUDED_DIRS | frozenset(extra)


def no_color_requested(environ: Mapping[str, str]) -> bool:
    """Return whether the conventional ``NO_COLOR`` variable is set non-empty."""
    return bool(environ.get(NO_COLOR_ENV, ""))


def resolve_settings(args: object | None = None, environ: Mapping[str, str] | None = None) -> Settings:
    """Merge CLI arguments, environment, and config file into ``Settings``.

    ``args`` is typically an ``argparse.Namespace``; attributes left at
    ``None`` (or missing) fall through to the next source.
    """
    if environ is None:
        environ = os.environ
    data = load_config()

    def arg(name: str) -> object:
        return getattr(args, name, None) if args is not None else None

    width = arg("width")
    if not isinstance(width, int):
        width = load_width(data) or DEFAULT_WIDTH

    style = arg("style") or _load_string(data, "style") or DEFAULT_STYLE
    theme = arg("theme") or _load_string(data, "theme") or DEFAULT_THEME
    pager = arg("pager") or environ.get(PAGER_ENV, "").strip() or _load_string(data, "pager") or DEFAULT_PAGER

    no_color = bool(arg("no_color")) or no_color_requested(environ)
    log_level = logging.DEBUG if arg("verbose") else logging.WARNING

    return Settings(
        width=width,
        style=str(style),
        theme=str(theme),
        pager=str(pager),
        no_color=no_color,
        exclude_dirs=load_exclude_dirs(data),
        log_level=log_level,
    )
