# audio_cli.py
from __future__ import annotations

import logging
import os
import subprocess
from typing import List, Sequence

import pulsectl

from errors import ConfigError, ExternalUnavailable
from models import AudioOutput, AudioStream, SinkFormat

logger = logging.getLogger(__name__)


# Reports are matched against English headers; pactl translates them.
TOOL_ENV_OVERRIDES = {"LC_ALL": "C"}


def _run(cmd: Sequence[str]) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        list(cmd),
        capture_output=True,
        text=True,
        encoding="utf-8",
        errors="replace",
        env={**os.environ, **TOOL_ENV_OVERRIDES},
    )


def _fill(template: Sequence[str], **values: object) -> List[str]:
    try:
        return [part.format(**values) for part in template]
    except (KeyError, IndexError, ValueError) as e:
        raise ConfigError(f"bad command template {list(template)}: {e}") from e


def run_checked(cmd: Sequence[str]) -> str:
    """
    Run one audio tool command and return its stdout.
    No timeout: a hung tool blocks the caller.
    """
    try:
        p = _run(cmd)
    except OSError as e:
        raise ExternalUnavailable(f"{cmd[0]} could not be started: {e}", cmd) from e

    if p.returncode != 0:
        msg = (p.stderr or p.stdout).strip()
        raise ExternalUnavailable(f"{' '.join(cmd)} failed ({p.returncode}): {msg}", cmd)

    return p.stdout


class AudioCommands:
    """The four operations autosink needs from the audio server, as text in/out."""

    def __init__(self, fmt: SinkFormat) -> None:
        self.fmt = fmt

    def list_sinks(self) -> str:
        return run_checked(self.fmt.list_sinks_cmd)

    def list_streams(self) -> str:
        return run_checked(self.fmt.list_streams_cmd)

    def set_default_sink(self, output: AudioOutput) -> None:
        cmd = _fill(self.fmt.set_default_cmd, name=output.name, sink_id=output.id)
        logger.debug("running %s", cmd)
        run_checked(cmd)

    def move_stream(self, stream: AudioStream, output: AudioOutput) -> None:
        cmd = _fill(
            self.fmt.move_stream_cmd,
            name=output.name,
            sink_id=output.id,
            stream_id=stream.id,
        )
        logger.debug("running %s", cmd)
        run_checked(cmd)


def pulse_server_label(client_name: str = "autosink") -> str:
    try:
        with pulsectl.Pulse(client_name) as pulse:
            info = pulse.server_info()
    except pulsectl.PulseError as e:
        raise ExternalUnavailable(f"cannot reach the Pulse server: {e}") from e

    label = f"{info.server_name} {info.server_version}".strip()
    default = getattr(info, "default_sink_name", "") or ""
    return f"{label} (default sink: {default})" if default else label
