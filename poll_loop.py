# poll_loop.py
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QObject, QTimer

from backend import SinkBackend
from errors import AutoSinkError
from switch_policy import SwitchPolicy

logger = logging.getLogger(__name__)


class PollLoop(QObject):
    """
    Runs one inspect + evaluate cycle per timer tick.

    Ticks run on the Qt event loop thread, so a slow tick delays the next one
    instead of overlapping it.
    """

    def __init__(
        self,
        backend: SinkBackend,
        policy: SwitchPolicy,
        interval_ms: int = 1000,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.backend = backend
        self.policy = policy
        self.failures = 0

        self.timer = QTimer(self)
        self.timer.setInterval(interval_ms)
        self.timer.timeout.connect(self.tick)

    def start(self) -> None:
        logger.info("polling every %d ms", self.timer.interval())
        self.timer.start()

    def stop(self) -> None:
        self.timer.stop()

    def tick(self) -> bool:
        try:
            outputs = self.backend.list_outputs()
            self.policy.evaluate(outputs)
        except AutoSinkError as e:
            self.failures += 1
            if self.failures == 1:
                logger.warning("tick skipped: %s", e)
            else:
                logger.debug("tick skipped (%d in a row): %s", self.failures, e)
            return False

        if self.failures:
            logger.info("audio server reachable again after %d failed tick(s)", self.failures)
            self.failures = 0
        return True
