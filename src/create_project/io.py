"""Console I/O helpers for user-facing messages and prompts.

Prompts use questionary on an interactive terminal and plain ``input()``
otherwise. Every prompt raises ``CancellationError`` when the user aborts
(Ctrl-C, EOF, or questionary returning ``None``).
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Sequence
from typing import NoReturn, TypeVar

import questionary

from . import log
from .services.errors import CancellationError

T = TypeVar("T")
Validator = Callable[[str], "bool | str"]


def _use_questionary() -> bool:
    return sys.stdin.isatty() and sys.stdout.isatty()


def say(message: str) -> None:
    """Print a normal message to stdout.

    Args:
        message: Text to print.

    Example:
        >>> say("Hello")
        Hello
    """
    print(message)


def warn(message: str) -> None:
    """Print a warning message to stderr.

    Args:
        message: Warning text.
    """
    log.warning(f"warning: {message}")


def die(message: str, code: int = 1) -> NoReturn:
    """Print an error message and exit.

    Args:
        message: Error message to display.
        code: Exit code to use.
    """
    log.error(f"error: {message}")
    sys.exit(code)


def _read_line(text: str) -> str:
    try:
        return input(text)
    except (EOFError, KeyboardInterrupt) as exc:
        raise CancellationError() from exc


def _ask(question: questionary.Question) -> object:
    answer = question.ask()
    if answer is None:
        raise CancellationError()
    return answer


def prompt(
    text: str,
    default: str | None = None,
    *,
    validate: Validator | None = None,
) -> str:
    """Prompt for a line of text, re-asking until ``validate`` accepts it.

    Args:
        text: Prompt label shown to the user.
        default: Value used when the user enters an empty string.
        validate: Returns ``True`` or an error message for the entered value.

    Returns:
        The stripped user-provided or default string.

    Example:
        Project name: [vue-project]:
    """
    if _use_questionary():
        question = questionary.text(text, default=default or "", validate=validate)
        return str(_ask(question)).strip()
    while True:
        if default:
            value = _read_line(f"{text} [{default}]: ").strip() or default
        else:
            value = _read_line(f"{text} ").strip()
        if validate is None:
            return value
        verdict = validate(value)
        if verdict is True:
            return value
        warn(verdict if isinstance(verdict, str) else f"invalid value: {value}")


def confirm(text: str, default: bool = False) -> bool:
    """Prompt for a yes/no confirmation.

    Args:
        text: Prompt label shown to the user.
        default: Default answer when the user presses enter.

    Returns:
        ``True`` when the user confirms.
    """
    if _use_questionary():
        return bool(_ask(questionary.confirm(text, default=default)))
    suffix = "[Y/n]" if default else "[y/N]"
    response = _read_line(f"{text} {suffix}: ").strip().lower()
    if response == "":
        return default
    return response in {"y", "yes"}


def toggle(text: str, default: bool = False) -> bool:
    """Prompt for a Yes/No switch; same contract as ``confirm``."""
    return confirm(text, default=default)


def select(text: str, choices: Sequence[tuple[str, T]], default: T) -> T:
    """Prompt for one choice out of ``choices``.

    Args:
        text: Prompt label shown to the user.
        choices: ``(title, value)`` pairs in display order.
        default: Value selected when the user presses enter.

    Returns:
        The selected value.
    """
    if _use_questionary():
        options = [questionary.Choice(title, value=value) for title, value in choices]
        return _ask(questionary.select(text, choices=options, default=default))  # type: ignore[return-value]
    say(text)
    default_index = 1
    for index, (title, value) in enumerate(choices, start=1):
        say(f"  {index}) {title}")
        if value == default:
            default_index = index
    while True:
        response = _read_line(f"Select [{default_index}]: ").strip()
        if response == "":
            return choices[default_index - 1][1]
        if response.isdigit() and 1 <= int(response) <= len(choices):
            return choices[int(response) - 1][1]
        for title, value in choices:
            if response.lower() in {title.lower(), str(value).lower()}:
                return value
        warn(f"unknown choice: {response}")
