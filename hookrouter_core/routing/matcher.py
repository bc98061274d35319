"""Route Matcher - Path pattern matching utilities.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple, Union

PARAM_MARKER = ":"


@dataclass(frozen=True)
class Literal:
    """Segment that must match exactly."""

    text: str


@dataclass(frozen=True)
class Param:
    """Named segment that matches any value."""

    name: str


Segment = Union[Literal, Param]


@dataclass(frozen=True)
class PathPattern:
    """A route pattern split into tagged segments.

    Compiled once at registration so requests never re-parse the
    pattern string.
    """

    raw: str
    segments: Tuple[Segment, ...]

    @classmethod
    def compile(cls, pattern: str) -> "PathPattern":
        """Split pattern on ``/`` and tag each segment."""
        segments = []
        for part in pattern.split("/"):
            if part.startswith(PARAM_MARKER):
                segments.append(Param(part[len(PARAM_MARKER):]))
            else:
                segments.append(Literal(part))
        return cls(raw=pattern, segments=tuple(segments))

    @property
    def param_names(self) -> Tuple[str, ...]:
        return tuple(s.name for s in self.segments if isinstance(s, Param))

    @property
    def is_parameterized(self) -> bool:
        return any(isinstance(s, Param) for s in self.segments)

    def __len__(self) -> int:
        return len(self.segments)


@dataclass
class MatchResult:
    """Outcome of matching a path against a pattern."""

    matched: bool
    params: Dict[str, str] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return self.matched


def match_segments(pattern: PathPattern, path: str) -> MatchResult:
    """Match a compiled pattern against a concrete path.

    Segment counts must be equal. Literals compare exactly and
    parameters match any segment, including an empty one. No URL
    decoding or trailing-slash normalization is applied.
    """
    parts = path.split("/")
    if len(parts) != len(pattern.segments):
        return MatchResult(matched=False)

    params: Dict[str, str] = {}
    for segment, part in zip(pattern.segments, parts):
        if isinstance(segment, Param):
            params[segment.name] = part
        elif segment.text != part:
            return MatchResult(matched=False)

    return MatchResult(matched=True, params=params)


def match(pattern: Union[str, PathPattern], path: str) -> MatchResult:
    """Match ``pattern`` (string or compiled) against ``path``."""
    if isinstance(pattern, str):
        pattern = PathPattern.compile(pattern)
    return match_segments(pattern, path)


__all__ = [
    "Literal",
    "Param",
    "Segment",
    "PathPattern",
    "MatchResult",
    "match",
    "match_segments",
]
