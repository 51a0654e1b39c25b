"""Configuration types."""
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ParserLimits:
    """Termination guards for the stylesheet parser.

    ``failsafe`` caps the number of match iterations per parser instance;
    reaching it truncates the parse without raising. ``max_depth`` caps block
    nesting and raises when exceeded.
    """

    failsafe: int = 512
    max_depth: int = 32


@dataclass(frozen=True)
class CompilerConfig:
    """Stylesheet compiler settings."""

    strict: bool = False  # raise on conflicting @charset instead of first-wins
    limits: ParserLimits = field(default_factory=ParserLimits)


@dataclass(frozen=True)
class ScriptConfig:
    """JavaScript minifier settings."""

    flagged_comments: bool = True  # keep /*! ... */ license comments


@dataclass(frozen=True)
class HttpTimeout:
    """Timeouts used for URL sources and the remote compressor."""

    connect: float = 5.0
    request: float = 30.0
