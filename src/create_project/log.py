"""Levelled terminal output for create-project.

Every message goes through a fresh rich ``Console`` so tests and the typer
runner can swap ``sys.stdout``/``sys.stderr`` underneath. Warnings and errors
are written to stderr, everything else to stdout.

The active level is ``--log-level`` when given, otherwise
``CREATE_PROJECT_LOG_LEVEL``, otherwise ``info``. Unknown names fall back to
``info`` rather than failing; the CLI validates its own option.
"""

from __future__ import annotations

import os
import sys
from enum import IntEnum

from rich.console import Console
from rich.text import Text

LEVEL_ENV_VAR = "CREATE_PROJECT_LOG_LEVEL"
NO_COLOR_ENV_VARS = ("NO_COLOR", "CREATE_PROJECT_NO_COLOR")


class LogLevel(IntEnum):
    TRACE = 10
    DEBUG = 20
    INFO = 30
    SUCCESS = 35
    WARNING = 40
    ERROR = 50


LEVEL_NAMES = tuple(level.name.lower() for level in LogLevel)

_ALIASES = {"warn": LogLevel.WARNING}
_STYLES = {
    LogLevel.TRACE: "dim",
    LogLevel.DEBUG: "cyan",
    LogLevel.INFO: "",
    LogLevel.SUCCESS: "green",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "bold red",
}
_STDERR_LEVELS = frozenset({LogLevel.WARNING, LogLevel.ERROR})

_configured_level: LogLevel | None = None
_no_color: bool | None = None


def _parse_level(value: str | None) -> LogLevel:
    """Map a level name to ``LogLevel``.

    Example:
        >>> _parse_level(" Debug ")
        <LogLevel.DEBUG: 20>
        >>> _parse_level("warn")
        <LogLevel.WARNING: 40>
        >>> _parse_level("loud")
        <LogLevel.INFO: 30>
    """
    name = (value or "").strip().lower()
    if name in _ALIASES:
        return _ALIASES[name]
    if name in LEVEL_NAMES:
        return LogLevel[name.upper()]
    return LogLevel.INFO


def configured_level() -> LogLevel:
    global _configured_level
    if _configured_level is None:
        _configured_level = _parse_level(os.environ.get(LEVEL_ENV_VAR))
    return _configured_level


def set_level(value: str | None) -> None:
    """Override the level for the rest of the process."""
    global _configured_level
    _configured_level = _parse_level(value)


def set_no_color(value: bool) -> None:
    """Force colors off (``True``) or defer to the environment (``False``)."""
    global _no_color
    _no_color = True if value else None


def _colors_disabled() -> bool:
    if _no_color is not None:
        return _no_color
    return any(os.environ.get(name) for name in NO_COLOR_ENV_VARS)


def is_enabled(level: LogLevel) -> bool:
    return level >= configured_level()


def emit(level: LogLevel, message: str) -> None:
    if not is_enabled(level):
        return
    console = Console(
        file=sys.stderr if level in _STDERR_LEVELS else sys.stdout,
        soft_wrap=True,
        highlight=False,
        no_color=_colors_disabled(),
    )
    console.print(Text(message, style=_STYLES[level]))


def trace(message: str) -> None:
    emit(LogLevel.TRACE, message)


def debug(message: str) -> None:
    emit(LogLevel.DEBUG, message)


def info(message: str) -> None:
    emit(LogLevel.INFO, message)


def success(message: str) -> None:
    emit(LogLevel.SUCCESS, message)


def warning(message: str) -> None:
    emit(LogLevel.WARNING, message)


def error(message: str) -> None:
    emit(LogLevel.ERROR, message)
