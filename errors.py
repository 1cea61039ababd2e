# errors.py
from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from models import AudioOutput


class AutoSinkError(RuntimeError):
    pass


class ExternalUnavailable(AutoSinkError):
    """The audio tool could not be started or exited nonzero."""

    def __init__(self, message: str, argv: Optional[Sequence[str]] = None) -> None:
        super().__init__(message)
        self.argv: List[str] = list(argv or [])


class MalformedResponse(AutoSinkError):
    """The tool's report did not have the expected shape."""

    def __init__(self, message: str, counts: Optional[Dict[str, int]] = None) -> None:
        super().__init__(message)
        self.counts: Dict[str, int] = dict(counts or {})


class PartialSwitchFailure(AutoSinkError):
    """The default sink changed but some streams could not be moved to it."""

    def __init__(self, target: AudioOutput, failed_stream_ids: Sequence[int]) -> None:
        ids = ", ".join(str(i) for i in failed_stream_ids)
        super().__init__(f"switched default to {target.name} but could not move streams: {ids}")
        self.target = target
        self.failed_stream_ids: List[int] = list(failed_stream_ids)


class ConfigError(AutoSinkError):
    pass
