# store_config.py
from __future__ import annotations

import configparser
import os
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from errors import ConfigError
from models import FORMATS, SinkFormat
from sink_parse import compile_pattern


DEFAULT_CONFIG_TEXT = """\
[Poll]
interval_ms = 1000

[Audio]
# pactl | pacmd
tool = pactl
# 0 disables the sink report cache
cache_size = 1000
client_name = autosink

# Leave empty to use the tool's built-in layout.
[Patterns]
sink_index =
sink_name =
sink_priority =
sink_state =
enabled_marker =
stream_index =

# Leave empty to use the tool's built-in commands.
# Placeholders: {name} {sink_id} {stream_id}
[Commands]
list_sinks =
list_streams =
set_default_sink =
move_stream =
"""

PATTERN_KEYS = {
    "sink_index": "sink_index_pattern",
    "sink_name": "sink_name_pattern",
    "sink_priority": "sink_priority_pattern",
    "sink_state": "sink_state_pattern",
    "enabled_marker": "enabled_marker",
    "stream_index": "stream_index_pattern",
}

COMMAND_KEYS = {
    "list_sinks": "list_sinks_cmd",
    "list_streams": "list_streams_cmd",
    "set_default_sink": "set_default_cmd",
    "move_stream": "move_stream_cmd",
}


def _linux_xdg_config_dir() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg)
    return Path.home() / ".config"


def user_config_dir(app_name: str) -> Path:
    return _linux_xdg_config_dir() / app_name


@dataclass(frozen=True)
class AppConfig:
    interval_ms: int
    cache_size: int
    client_name: str
    fmt: SinkFormat


def _get_int(cfg: configparser.ConfigParser, section: str, key: str, fallback: int) -> int:
    try:
        return cfg.getint(section, key, fallback=fallback)
    except ValueError as e:
        raise ConfigError(f"[{section}] {key} must be an integer") from e


def build_format(cfg: configparser.ConfigParser, tool_override: Optional[str] = None) -> SinkFormat:
    tool = (tool_override or cfg.get("Audio", "tool", fallback="pactl")).strip().lower()
    base = FORMATS.get(tool)
    if base is None:
        known = ", ".join(sorted(FORMATS))
        raise ConfigError(f"unknown tool {tool!r} (known: {known})")

    changes = {}
    for key, field in PATTERN_KEYS.items():
        changes[field] = cfg.get("Patterns", key, fallback="").strip()
    for key, field in COMMAND_KEYS.items():
        raw = cfg.get("Commands", key, fallback="").strip()
        changes[field] = tuple(shlex.split(raw)) if raw else ()

    fmt = base.with_overrides(**changes)
    for field in PATTERN_KEYS.values():
        if field.endswith("_pattern"):
            compile_pattern(getattr(fmt, field))
    return fmt


@dataclass(frozen=True)
class ConfigStore:
    app_name: str = "autosink"
    filename: str = "autosink.cfg"
    path_override: Optional[Path] = None

    @property
    def dir_path(self) -> Path:
        return user_config_dir(self.app_name)

    @property
    def file_path(self) -> Path:
        if self.path_override is not None:
            return self.path_override
        return self.dir_path / self.filename

    def write_default(self) -> Path:
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        if not self.file_path.exists():
            self.file_path.write_text(DEFAULT_CONFIG_TEXT, encoding="utf-8")
        return self.file_path

    def read(self) -> configparser.ConfigParser:
        cfg = configparser.ConfigParser(interpolation=None)
        cfg.read_string(DEFAULT_CONFIG_TEXT)
        if self.file_path.exists():
            try:
                cfg.read(self.file_path, encoding="utf-8")
            except configparser.Error as e:
                raise ConfigError(f"cannot parse {self.file_path}: {e}") from e
        elif self.path_override is not None:
            raise ConfigError(f"config file not found: {self.file_path}")
        return cfg

    def load(self, tool: Optional[str] = None, interval_ms: Optional[int] = None) -> AppConfig:
        cfg = self.read()

        interval = interval_ms if interval_ms is not None else _get_int(cfg, "Poll", "interval_ms", 1000)
        if interval <= 0:
            raise ConfigError("poll interval must be positive")

        cache_size = _get_int(cfg, "Audio", "cache_size", 1000)
        if cache_size < 0:
            raise ConfigError("cache_size must not be negative")

        return AppConfig(
            interval_ms=interval,
            cache_size=cache_size,
            client_name=cfg.get("Audio", "client_name", fallback="autosink").strip() or "autosink",
            fmt=build_format(cfg, tool),
        )
