"""Ordered prompt sequences with conditional activation.

A sequence is a tuple of ``Prompt`` and ``Checkpoint`` entries. Each prompt's
``should_ask`` predicate sees the answers collected so far and is evaluated
right before the prompt would run. Skipped prompts still get their default
computed so callers can merge it. ``run_prompts`` never raises for user
cancellation; it returns ``PromptCancelled`` instead.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Literal, Protocol

from . import io, log
from .flags import RawInvocation
from .services.errors import CancellationError

PromptKind = Literal["text", "confirm", "toggle", "select"]
Answers = Mapping[str, object]
CANCELLED_REASON = "Operation cancelled"


@dataclass(frozen=True)
class PromptContext:
    """Read-only inputs available to prompt predicates and messages."""

    invocation: RawInvocation
    cwd: Path

    def target_dir(self, answers: Answers) -> str:
        """Return the target directory implied by the answers so far."""
        answered = answers.get("project_name")
        if isinstance(answered, str) and answered.strip():
            return answered.strip()
        return self.invocation.default_project_name

    def root(self, answers: Answers) -> Path:
        return self.cwd / self.target_dir(answers)


Predicate = Callable[[Answers, PromptContext], bool]
Computed = Callable[[Answers, PromptContext], object]


def always(answers: Answers, context: PromptContext) -> bool:
    return True


@dataclass(frozen=True)
class Prompt:
    """One question in a prompt sequence.

    Attributes:
        name: Key the answer is stored under.
        kind: Widget type (text, confirm, toggle, select).
        message: Label, or a callable computing it from answers and context.
        should_ask: Pure predicate; ``False`` skips the prompt.
        default: Default value, or a callable computing it.
        validate: Text validator returning ``True`` or an error message.
        choices: ``(title, value)`` pairs for select prompts.
    """

    name: str
    kind: PromptKind
    message: str | Callable[[Answers, PromptContext], str]
    should_ask: Predicate = always
    default: object = None
    validate: Callable[[str], bool | str] | None = None
    choices: tuple[tuple[str, object], ...] = ()

    def message_for(self, answers: Answers, context: PromptContext) -> str:
        if callable(self.message):
            return self.message(answers, context)
        return self.message

    def default_for(self, answers: Answers, context: PromptContext) -> object:
        if callable(self.default):
            return self.default(answers, context)
        return self.default


@dataclass(frozen=True)
class Checkpoint:
    """Abort point: cancels the sequence when ``cancel_when`` holds."""

    name: str
    cancel_when: Callable[[Answers], bool]
    reason: str = CANCELLED_REASON


PromptEntry = Prompt | Checkpoint


@dataclass(frozen=True)
class PromptAnswers:
    """Answers of asked prompts plus computed defaults of skipped ones."""

    values: Mapping[str, object] = field(default_factory=dict)
    defaults: Mapping[str, object] = field(default_factory=dict)
    cancelled: Literal[False] = False

    def was_asked(self, name: str) -> bool:
        return name in self.values

    def get(self, name: str, fallback: object = None) -> object:
        if name in self.values:
            return self.values[name]
        return self.defaults.get(name, fallback)


@dataclass(frozen=True)
class PromptCancelled:
    """The sequence stopped early; ``reason`` is shown to the user."""

    reason: str = CANCELLED_REASON
    cancelled: Literal[True] = True


PromptOutcome = PromptAnswers | PromptCancelled


class PromptWidget(Protocol):
    """Renders one prompt and returns its answer.

    Raises ``CancellationError`` when the user aborts.
    """

    def ask(self, prompt: Prompt, message: str, default: object) -> object: ...


class ConsoleWidget:
    """Prompt widget backed by ``create_project.io``."""

    def ask(self, prompt: Prompt, message: str, default: object) -> object:
        if prompt.kind == "text":
            return io.prompt(
                message,
                default=str(default) if default else None,
                validate=prompt.validate,
            )
        if prompt.kind == "confirm":
            return io.confirm(message, default=bool(default))
        if prompt.kind == "toggle":
            return io.toggle(message, default=bool(default))
        if prompt.kind == "select":
            return io.select(message, prompt.choices, default)
        raise ValueError(f"unsupported prompt kind: {prompt.kind}")


def run_prompts(
    sequence: Sequence[PromptEntry],
    context: PromptContext,
    widget: PromptWidget,
) -> PromptOutcome:
    """Run ``sequence`` in order and collect answers.

    Args:
        sequence: Prompts and checkpoints in execution order.
        context: Invocation data shared by predicates.
        widget: Renders asked prompts.

    Returns:
        ``PromptAnswers`` when every step completed, otherwise
        ``PromptCancelled`` carrying the reason.
    """
    values: dict[str, object] = {}
    defaults: dict[str, object] = {}
    for entry in sequence:
        answers = MappingProxyType(values)
        if isinstance(entry, Checkpoint):
            if entry.cancel_when(answers):
                log.debug(f"prompt checkpoint {entry.name} cancelled the run")
                return PromptCancelled(entry.reason)
            continue
        default = entry.default_for(answers, context)
        if not entry.should_ask(answers, context):
            log.trace(f"skipped prompt {entry.name} (default {default!r})")
            defaults[entry.name] = default
            continue
        try:
            values[entry.name] = widget.ask(entry, entry.message_for(answers, context), default)
        except CancellationError as exc:
            return PromptCancelled(exc.message)
    return PromptAnswers(values=dict(values), defaults=dict(defaults))
