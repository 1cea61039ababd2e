# models.py
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Tuple


@dataclass(frozen=True)
class AudioOutput:
    name: str       # used by "set default sink"
    id: int         # used by "move stream"
    priority: int   # higher wins
    enabled: bool   # currently the running/default sink


@dataclass(frozen=True)
class AudioStream:
    id: int


@dataclass(frozen=True)
class SinkFormat:
    """
    Text layout and commands of one external tool.

    The four sink patterns each yield one match per sink, in document order.
    Command templates are argv lists; {name}, {sink_id} and {stream_id} are
    filled in per call.
    """

    tool: str
    list_sinks_cmd: Tuple[str, ...]
    list_streams_cmd: Tuple[str, ...]
    set_default_cmd: Tuple[str, ...]
    move_stream_cmd: Tuple[str, ...]
    sink_index_pattern: str
    sink_name_pattern: str
    sink_priority_pattern: str
    sink_state_pattern: str
    enabled_marker: str
    stream_index_pattern: str

    def with_overrides(self, **changes: object) -> SinkFormat:
        return replace(self, **{k: v for k, v in changes.items() if v})


PACTL_FORMAT = SinkFormat(
    tool="pactl",
    list_sinks_cmd=("pactl", "list", "sinks"),
    list_streams_cmd=("pactl", "list", "sink-inputs"),
    set_default_cmd=("pactl", "set-default-sink", "{name}"),
    move_stream_cmd=("pactl", "move-sink-input", "{stream_id}", "{sink_id}"),
    sink_index_pattern=r"Sink #[0-9]+",
    sink_name_pattern=r"Name: .+",
    sink_priority_pattern=r"priority: [0-9]+",
    sink_state_pattern=r"State: [A-Z]+",
    enabled_marker="RUNNING",
    stream_index_pattern=r"Sink Input #[0-9]+",
)

# pacmd marks the default sink with "*" in front of its index line.
PACMD_FORMAT = SinkFormat(
    tool="pacmd",
    list_sinks_cmd=("pacmd", "list-sinks"),
    list_streams_cmd=("pacmd", "list-sink-inputs"),
    set_default_cmd=("pacmd", "set-default-sink", "{name}"),
    move_stream_cmd=("pacmd", "move-sink-input", "{stream_id}", "{sink_id}"),
    sink_index_pattern=r"index: [0-9]+",
    sink_name_pattern=r"name: <.+>",
    sink_priority_pattern=r"priority: [0-9]+",
    sink_state_pattern=r"[ *] index: [0-9]+",
    enabled_marker="*",
    stream_index_pattern=r"index: [0-9]+",
)

FORMATS: Dict[str, SinkFormat] = {
    PACTL_FORMAT.tool: PACTL_FORMAT,
    PACMD_FORMAT.tool: PACMD_FORMAT,
}
