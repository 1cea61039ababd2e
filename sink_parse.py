# sink_parse.py
from __future__ import annotations

import re
from typing import Dict, List, Sequence, Tuple

from errors import ConfigError, MalformedResponse
from models import AudioOutput, AudioStream, SinkFormat


def compile_pattern(pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern, re.MULTILINE)
    except re.error as e:
        raise ConfigError(f"invalid pattern {pattern!r}: {e}") from e


def find_all(pattern: str, text: str) -> List[str]:
    return [m.group(0) for m in compile_pattern(pattern).finditer(text)]


def to_rows(columns: Sequence[Sequence[str]]) -> List[Tuple[str, ...]]:
    """
    Turn per-field match lists into per-sink rows.

    [[id0, id1], [name0, name1]] -> [(id0, name0), (id1, name1)]
    """
    if not columns:
        return []

    n = len(columns[0])
    if any(len(c) != n for c in columns):
        lengths = ", ".join(str(len(c)) for c in columns)
        raise MalformedResponse(f"field match counts differ: {lengths}")

    return [tuple(c[i] for c in columns) for i in range(n)]


def _last_token(fragment: str) -> str:
    parts = fragment.split()
    if not parts:
        raise MalformedResponse(f"empty field: {fragment!r}")
    return parts[-1]


def _to_int(token: str, fragment: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise MalformedResponse(f"expected an integer in {fragment!r}") from None


def parse_index(fragment: str) -> int:
    # "Sink #3", "Sink Input #12", "index: 3"
    return _to_int(_last_token(fragment).lstrip("#"), fragment)


def parse_name(fragment: str) -> str:
    # "Name: alsa_output.x" or "name: <alsa_output.x>"
    tok = _last_token(fragment)
    if tok.startswith("<") and tok.endswith(">"):
        tok = tok[1:-1]
    return tok


def parse_priority(fragment: str) -> int:
    return _to_int(_last_token(fragment), fragment)


def parse_enabled(fragment: str, marker: str) -> bool:
    return marker in fragment


def parse_outputs(text: str, fmt: SinkFormat) -> List[AudioOutput]:
    fields: Dict[str, str] = {
        "index": fmt.sink_index_pattern,
        "name": fmt.sink_name_pattern,
        "priority": fmt.sink_priority_pattern,
        "state": fmt.sink_state_pattern,
    }
    columns = [find_all(p, text) for p in fields.values()]

    try:
        rows = to_rows(columns)
    except MalformedResponse as e:
        counts = {k: len(c) for k, c in zip(fields, columns)}
        raise MalformedResponse(f"{fmt.tool} sink report: {e}", counts) from e

    return [
        AudioOutput(
            id=parse_index(idx),
            name=parse_name(name),
            priority=parse_priority(prio),
            enabled=parse_enabled(state, fmt.enabled_marker),
        )
        for idx, name, prio, state in rows
    ]


def parse_streams(text: str, fmt: SinkFormat) -> List[AudioStream]:
    return [AudioStream(id=parse_index(s)) for s in find_all(fmt.stream_index_pattern, text)]
