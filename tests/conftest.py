"""Pytest fixtures: sample tool reports and a fake audio command responder."""

from typing import Iterable, List, Tuple

import pytest

from errors import ExternalUnavailable
from models import AudioOutput, AudioStream


PACTL_SINKS = """\
Sink #0
\tState: SUSPENDED
\tName: alsa_output.pci-0000_00_1f.3.analog-stereo
\tDescription: Built-in Audio Analog Stereo
\tDriver: module-alsa-card.c
\tSample Specification: s16le 2ch 44100Hz
\tOwner Module: 7
\tMute: no
\tMonitor Source: alsa_output.pci-0000_00_1f.3.analog-stereo.monitor
\tPorts:
\t\tanalog-output-speaker: Speakers (priority: 10000)
\tActive Port: analog-output-speaker

Sink #3
\tState: RUNNING
\tName: bluez_sink.00_11_22_33_44_55.a2dp_sink
\tDescription: Headphones
\tDriver: module-bluez5-device.c
\tOwner Module: 26
\tMute: no
\tPorts:
\t\theadset-output: Headset (priority: 0)
\tActive Port: headset-output
"""

PACTL_STREAMS = """\
Sink Input #42
\tDriver: protocol-native.c
\tOwner Module: 10
\tClient: 33
\tSink: 3

Sink Input #57
\tDriver: protocol-native.c
\tOwner Module: 10
\tClient: 35
\tSink: 3
"""

PACMD_SINKS = """\
2 sink(s) available.
    index: 0
\tname: <alsa_output.pci-0000_00_1f.3.analog-stereo>
\tdriver: <module-alsa-card.c>
\tstate: SUSPENDED
\tsuspend cause: IDLE
\tpriority: 9039
\tcard: 0 <alsa_card.pci-0000_00_1f.3>
\tports:
\t\tanalog-output-speaker: Speakers (priority 10000, latency offset 0 usec, available: unknown)
  * index: 1
\tname: <bluez_sink.00_11_22_33_44_55.a2dp_sink>
\tdriver: <module-bluez5-device.c>
\tstate: RUNNING
\tpriority: 9050
\tports:
\t\theadset-output: Headset (priority 0, latency offset 0 usec, available: yes)
"""

PACMD_STREAMS = """\
1 sink input(s) available.
    index: 7
\tdriver: <protocol-native.c>
\tstate: RUNNING
\tsink: 1 <bluez_sink.00_11_22_33_44_55.a2dp_sink>
"""


def render_pactl(outputs: Iterable[AudioOutput]) -> str:
    blocks = []
    for o in outputs:
        state = "RUNNING" if o.enabled else "SUSPENDED"
        blocks.append(
            f"Sink #{o.id}\n"
            f"\tState: {state}\n"
            f"\tName: {o.name}\n"
            f"\tPorts:\n"
            f"\t\tanalog-output: Output (priority: {o.priority})\n"
        )
    return "\n".join(blocks)


def render_pacmd(outputs: Iterable[AudioOutput]) -> str:
    items = list(outputs)
    lines = [f"{len(items)} sink(s) available."]
    for o in items:
        mark = "*" if o.enabled else " "
        lines.append(f"  {mark} index: {o.id}")
        lines.append(f"\tname: <{o.name}>")
        lines.append(f"\tpriority: {o.priority}")
    return "\n".join(lines) + "\n"


class FakeCommands:
    """Stands in for AudioCommands: canned text out, calls recorded."""

    def __init__(
        self,
        sinks: str = "",
        streams: str = "",
        fail_moves: Iterable[int] = (),
        fail_default: bool = False,
        unavailable: bool = False,
    ) -> None:
        self.sinks = sinks
        self.streams = streams
        self.fail_moves = set(fail_moves)
        self.fail_default = fail_default
        self.unavailable = unavailable
        self.calls: List[Tuple] = []

    def list_sinks(self) -> str:
        self.calls.append(("list_sinks",))
        if self.unavailable:
            raise ExternalUnavailable("pactl list sinks failed (1): Connection refused")
        return self.sinks

    def list_streams(self) -> str:
        self.calls.append(("list_streams",))
        return self.streams

    def set_default_sink(self, output: AudioOutput) -> None:
        self.calls.append(("set_default", output.name))
        if self.fail_default:
            raise ExternalUnavailable("set-default-sink failed")

    def move_stream(self, stream: AudioStream, output: AudioOutput) -> None:
        self.calls.append(("move", stream.id, output.id))
        if stream.id in self.fail_moves:
            raise ExternalUnavailable(f"move-sink-input {stream.id} failed")

    def commands_issued(self) -> List[Tuple]:
        return [c for c in self.calls if c[0] in ("set_default", "move")]


@pytest.fixture
def fake_commands():
    """Factory for FakeCommands."""
    return FakeCommands


@pytest.fixture
def renderers():
    return {"pactl": render_pactl, "pacmd": render_pacmd}


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtCore import QCoreApplication

    return QCoreApplication.instance() or QCoreApplication([])


@pytest.fixture
def pactl_sinks():
    return PACTL_SINKS


@pytest.fixture
def pactl_streams():
    return PACTL_STREAMS


@pytest.fixture
def pacmd_sinks():
    return PACMD_SINKS


@pytest.fixture
def pacmd_streams():
    return PACMD_STREAMS
