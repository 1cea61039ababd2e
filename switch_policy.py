# switch_policy.py
from __future__ import annotations

import logging
from typing import Optional, Sequence

from backend import SinkBackend
from models import AudioOutput

logger = logging.getLogger(__name__)


def prioritized_output(outputs: Sequence[AudioOutput]) -> Optional[AudioOutput]:
    best: Optional[AudioOutput] = None
    for o in outputs:
        if best is None or o.priority > best.priority:
            best = o
    return best


def enabled_output(outputs: Sequence[AudioOutput]) -> Optional[AudioOutput]:
    for o in outputs:
        if o.enabled:
            return o
    return None


def needs_switch(outputs: Sequence[AudioOutput]) -> Optional[AudioOutput]:
    """
    Return the sink to switch to, or None when nothing should change.

    With fewer than two sinks there is nothing to choose between.
    """
    if len(outputs) < 2:
        return None

    target = prioritized_output(outputs)
    if target is None or enabled_output(outputs) == target:
        return None
    return target


class SwitchPolicy:
    def __init__(self, backend: SinkBackend, dry_run: bool = False) -> None:
        self.backend = backend
        self.dry_run = dry_run

    def evaluate(self, outputs: Sequence[AudioOutput]) -> Optional[AudioOutput]:
        target = needs_switch(outputs)
        if target is None:
            logger.debug("no switch needed (%d sinks)", len(outputs))
            return None

        current = enabled_output(outputs)
        logger.info(
            "switching from %s to %s",
            current.name if current else "<none>",
            target.name,
        )
        if self.dry_run:
            logger.info("dry run: not touching the audio server")
            return target

        self.backend.switch_to(target)
        return target
