# backend.py
from __future__ import annotations

import logging
from typing import List, Optional

from audio_cli import AudioCommands
from errors import AutoSinkError, PartialSwitchFailure
from models import AudioOutput, AudioStream, SinkFormat
from response_cache import ResponseCache
from sink_parse import parse_outputs, parse_streams

logger = logging.getLogger(__name__)


class SinkBackend:
    """
    Reads sinks and streams from the audio tool and applies a switch.

    `commands` is anything with list_sinks/list_streams/set_default_sink/
    move_stream; tests hand in a fake responder.
    """

    def __init__(
        self,
        commands: AudioCommands,
        fmt: SinkFormat,
        cache: Optional[ResponseCache[List[AudioOutput]]] = None,
    ) -> None:
        self.commands = commands
        self.fmt = fmt
        self.cache = cache

    def list_outputs(self) -> List[AudioOutput]:
        raw = self.commands.list_sinks()

        if self.cache is not None:
            hit = self.cache.get(raw)
            if self.cache.record_hit_rate:
                logger.debug("sink cache hit rate %.2f", self.cache.hit_rate())
            if hit is not None:
                return list(hit)

        outputs = parse_outputs(raw, self.fmt)
        if not outputs and raw.strip():
            logger.warning(
                "%s printed a sink report but no sinks matched; check the patterns or the tool locale",
                self.fmt.tool,
            )
        if self.cache is not None:
            self.cache.put(raw, outputs)
        return list(outputs)

    def list_streams(self) -> List[AudioStream]:
        return parse_streams(self.commands.list_streams(), self.fmt)

    def switch_to(self, output: AudioOutput) -> List[AudioStream]:
        self.commands.set_default_sink(output)
        logger.info("default sink set to %s (#%d, priority %d)", output.name, output.id, output.priority)

        moved: List[AudioStream] = []
        failed: List[int] = []
        for stream in self.list_streams():
            try:
                self.commands.move_stream(stream, output)
            except AutoSinkError as e:
                logger.warning("could not move stream #%d to %s: %s", stream.id, output.name, e)
                failed.append(stream.id)
                continue
            moved.append(stream)

        if moved:
            logger.info("moved %d stream(s) to %s", len(moved), output.name)
        if failed:
            raise PartialSwitchFailure(output, failed)
        return moved
