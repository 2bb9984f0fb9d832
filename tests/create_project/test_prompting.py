from __future__ import annotations

from pathlib import Path

import pytest

from create_project.flags import FeatureFlags, RawInvocation
from create_project.prompting import (
    CANCELLED_REASON,
    Checkpoint,
    ConsoleWidget,
    Prompt,
    PromptAnswers,
    PromptCancelled,
    PromptContext,
    run_prompts,
)
from create_project.services.errors import CancellationError
from tests.create_project.helpers import FakeWidget


def _context(target_dir: str | None = None, **flags: object) -> PromptContext:
    return PromptContext(
        invocation=RawInvocation(target_dir=target_dir, flags=FeatureFlags(**flags)),
        cwd=Path("/work"),
    )


def test_context_target_dir_prefers_answer() -> None:
    context = _context("from-args")

    assert context.target_dir({}) == "from-args"
    assert context.target_dir({"project_name": "  typed  "}) == "typed"
    assert context.root({"project_name": "typed"}) == Path("/work/typed")
    assert _context().target_dir({"project_name": "   "}) == "vue-project"


def test_run_prompts_collects_answers_and_skipped_defaults() -> None:
    sequence = (
        Prompt(name="first", kind="text", message="First?", default="one"),
        Prompt(
            name="second",
            kind="confirm",
            message="Second?",
            should_ask=lambda answers, context: False,
            default=lambda answers, context: answers["first"] == "typed",
        ),
    )
    widget = FakeWidget({"first": "typed"})

    outcome = run_prompts(sequence, _context(), widget)

    assert isinstance(outcome, PromptAnswers)
    assert outcome.values == {"first": "typed"}
    assert outcome.defaults == {"second": True}
    assert outcome.was_asked("first") and not outcome.was_asked("second")
    assert outcome.get("second") is True
    assert outcome.get("missing", "fallback") == "fallback"
    assert widget.asked == ["first"]


def test_run_prompts_computes_messages_from_answers() -> None:
    sequence = (
        Prompt(name="name", kind="text", message="Name:"),
        Prompt(
            name="greet",
            kind="confirm",
            message=lambda answers, context: f"Hello {answers['name']}?",
        ),
    )
    widget = FakeWidget({"name": "Ada", "greet": True})

    run_prompts(sequence, _context(), widget)

    assert widget.calls[1] == ("greet", "Hello Ada?", None)


def test_checkpoint_cancels_and_stops_asking() -> None:
    sequence = (
        Prompt(name="go", kind="confirm", message="Go?"),
        Checkpoint(name="stop", cancel_when=lambda answers: answers.get("go") is False),
        Prompt(name="after", kind="text", message="After?"),
    )
    widget = FakeWidget({"go": False})

    outcome = run_prompts(sequence, _context(), widget)

    assert outcome == PromptCancelled(CANCELLED_REASON)
    assert outcome.cancelled is True
    assert widget.asked == ["go"]


def test_checkpoint_passes_when_condition_is_false() -> None:
    sequence = (
        Checkpoint(name="stop", cancel_when=lambda answers: answers.get("go") is False),
        Prompt(name="after", kind="text", message="After?", default="x"),
    )

    outcome = run_prompts(sequence, _context(), FakeWidget())

    assert isinstance(outcome, PromptAnswers)
    assert outcome.get("after") == "x"


def test_widget_cancellation_becomes_outcome() -> None:
    sequence = (Prompt(name="name", kind="text", message="Name:"),)
    widget = FakeWidget({"name": CancellationError("aborted by user")})

    outcome = run_prompts(sequence, _context(), widget)

    assert outcome == PromptCancelled("aborted by user")


def test_console_widget_dispatches_by_kind(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[str, object]] = []
    monkeypatch.setattr(
        "create_project.io.prompt",
        lambda text, default=None, validate=None: calls.append(("prompt", default)) or "typed",
    )
    monkeypatch.setattr(
        "create_project.io.confirm",
        lambda text, default=False: calls.append(("confirm", default)) or True,
    )
    monkeypatch.setattr(
        "create_project.io.toggle",
        lambda text, default=False: calls.append(("toggle", default)) or False,
    )
    monkeypatch.setattr(
        "create_project.io.select",
        lambda text, choices, default: calls.append(("select", default)) or choices[1][1],
    )
    widget = ConsoleWidget()
    choices = (("No", False), ("Cypress", "cypress"))

    assert widget.ask(Prompt(name="a", kind="text", message="A"), "A", "d") == "typed"
    assert widget.ask(Prompt(name="b", kind="confirm", message="B"), "B", 1) is True
    assert widget.ask(Prompt(name="c", kind="toggle", message="C"), "C", None) is False
    assert (
        widget.ask(Prompt(name="d", kind="select", message="D", choices=choices), "D", False)
        == "cypress"
    )
    assert calls == [("prompt", "d"), ("confirm", True), ("toggle", False), ("select", False)]
