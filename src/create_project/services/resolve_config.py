"""Resolve flags and prompt answers into a ``ResolvedConfig``.

The prompt order is fixed: project name, overwrite confirmation, a
cancellation checkpoint, package name, then the selection step. The
selection step is either discrete feature toggles or a single template
choice, depending on ``Settings.selection_mode``, and is skipped entirely
when feature flags were given on the command line.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .. import log
from ..config import SelectionMode, Settings
from ..directory import can_skip_emptying
from ..flags import RawInvocation
from ..models import FeatureSet, ResolvedConfig
from ..naming import is_valid_package_name, package_name_or_fallback, validate_package_name
from ..prompting import (
    Answers,
    Checkpoint,
    ConsoleWidget,
    Prompt,
    PromptAnswers,
    PromptContext,
    PromptEntry,
    PromptWidget,
    run_prompts,
)
from ..templates import select_template_source
from .result import ServiceResult, service_failure, service_success

E2E_CHOICES: tuple[tuple[str, object], ...] = (
    ("No", False),
    ("Cypress", "cypress"),
    ("Playwright", "playwright"),
)

FEATURE_PROMPTS: tuple[tuple[str, str], ...] = (
    ("needs_typescript", "Add TypeScript?"),
    ("needs_jsx", "Add JSX Support?"),
    ("needs_router", "Add Vue Router for Single Page Application development?"),
    ("needs_pinia", "Add Pinia for state management?"),
    ("needs_vitest", "Add Vitest for Unit Testing?"),
)


class ResolveConfigRequest(BaseModel):
    """Input contract for configuration resolution.

    Attributes:
        invocation: Positional target directory and parsed flags.
        cwd: Directory the target is resolved against.
        settings: Environment settings (selection mode, template repo).
    """

    invocation: RawInvocation
    cwd: Path
    settings: Settings = Field(default_factory=Settings)

    model_config = ConfigDict(frozen=True)


def _flags_mode(answers: Answers, context: PromptContext) -> bool:
    return context.invocation.flags.is_feature_flags_used


def _ask_selection(answers: Answers, context: PromptContext) -> bool:
    return not _flags_mode(answers, context)


def _flag_feature(name: str) -> Callable[[Answers, PromptContext], object]:
    def default(answers: Answers, context: PromptContext) -> object:
        return getattr(FeatureSet.from_flags(context.invocation.flags), name)

    return default


def _overwrite_message(answers: Answers, context: PromptContext) -> str:
    target = context.target_dir(answers)
    label = "Current directory" if target == "." else f'Target directory "{target}"'
    return f"{label} is not empty. Remove existing files and continue?"


def _should_confirm_overwrite(answers: Answers, context: PromptContext) -> bool:
    if context.invocation.flags.enabled("force"):
        return False
    return not can_skip_emptying(context.root(answers))


def _package_name_default(answers: Answers, context: PromptContext) -> str:
    target = context.target_dir(answers)
    if is_valid_package_name(target):
        return target
    return package_name_or_fallback(target)


def _selection_prompts(settings: Settings) -> tuple[PromptEntry, ...]:
    if settings.selection_mode is SelectionMode.TEMPLATE:
        return (
            Prompt(
                name="template",
                kind="select",
                message="Select a template:",
                should_ask=_ask_selection,
                default=lambda answers, context: (
                    context.invocation.flags.template or settings.templates[0]
                ),
                choices=tuple((name, name) for name in settings.templates),
            ),
        )
    toggles = tuple(
        Prompt(
            name=name,
            kind="toggle",
            message=message,
            should_ask=_ask_selection,
            default=_flag_feature(name),
        )
        for name, message in FEATURE_PROMPTS
    )
    return (
        *toggles,
        Prompt(
            name="needs_e2e_testing",
            kind="select",
            message="Add an End-to-End Testing Solution?",
            should_ask=_ask_selection,
            default=_flag_feature("needs_e2e_testing"),
            choices=E2E_CHOICES,
        ),
        Prompt(
            name="needs_eslint",
            kind="toggle",
            message="Add ESLint for code quality?",
            should_ask=_ask_selection,
            default=_flag_feature("needs_eslint"),
        ),
        Prompt(
            name="needs_prettier",
            kind="toggle",
            message="Add Prettier for code formatting?",
            should_ask=lambda answers, context: (
                _ask_selection(answers, context) and answers.get("needs_eslint") is True
            ),
            default=_flag_feature("needs_prettier"),
        ),
    )


def build_prompt_sequence(settings: Settings) -> tuple[PromptEntry, ...]:
    """Return the full prompt sequence for ``settings.selection_mode``."""
    return (
        Prompt(
            name="project_name",
            kind="text",
            message="Project name:",
            should_ask=lambda answers, context: context.invocation.target_dir is None,
            default=lambda answers, context: context.invocation.default_project_name,
        ),
        Prompt(
            name="should_overwrite",
            kind="confirm",
            message=_overwrite_message,
            should_ask=_should_confirm_overwrite,
            default=lambda answers, context: context.invocation.flags.enabled("force"),
        ),
        Checkpoint(
            name="overwrite_checker",
            cancel_when=lambda answers: answers.get("should_overwrite") is False,
        ),
        Prompt(
            name="package_name",
            kind="text",
            message="Package name:",
            should_ask=lambda answers, context: not is_valid_package_name(
                context.target_dir(answers)
            ),
            default=_package_name_default,
            validate=validate_package_name,
        ),
        *_selection_prompts(settings),
    )


def merge_answers(
    answers: PromptAnswers, context: PromptContext, settings: Settings
) -> ResolvedConfig:
    """Merge prompt answers over flag-derived defaults.

    Asked prompts win; skipped prompts contribute their computed default,
    which for every feature is the flag value.

    Raises:
        pydantic.ValidationError: When a merged value is invalid.
    """
    flags = context.invocation.flags
    target_dir = context.target_dir(answers.values)
    from_flags = FeatureSet.from_flags(flags)

    explicit_template = flags.template
    if settings.selection_mode is SelectionMode.TEMPLATE:
        features = from_flags
        chosen = answers.get("template")
        if isinstance(chosen, str) and chosen.strip():
            explicit_template = chosen
    else:
        values = {
            name: answers.get(name, getattr(from_flags, name))
            for name in FeatureSet.model_fields
        }
        values["needs_prettier"] = bool(values["needs_eslint"] and values["needs_prettier"])
        features = FeatureSet(**values)

    return ResolvedConfig(
        project_name=target_dir,
        package_name=str(answers.get("package_name") or target_dir).strip(),
        target_dir=target_dir,
        root=context.root(answers.values),
        should_overwrite=bool(answers.get("should_overwrite", flags.enabled("force"))),
        features=features,
        template=select_template_source(
            features,
            template_repo=settings.template_repo,
            explicit=explicit_template,
        ),
    )


class ResolveConfigService:
    """Run the prompt sequence and merge it into a ``ResolvedConfig``."""

    def __init__(
        self,
        *,
        widget: PromptWidget | None = None,
        run=run_prompts,
    ) -> None:
        """Create the service.

        Args:
            widget: Prompt widget; defaults to the console widget.
            run: Prompt-sequence runner.
        """
        self._widget = widget or ConsoleWidget()
        self._run_prompts = run

    def run(self, request: ResolveConfigRequest) -> ServiceResult[ResolvedConfig]:
        """Resolve the configuration for one run.

        Args:
            request: Invocation, working directory and settings.

        Returns:
            ``ServiceSuccess`` with the resolved configuration, or a failure
            result with code ``cancelled`` (overwrite declined or prompt
            aborted) or ``validation_failed``.
        """
        context = PromptContext(invocation=request.invocation, cwd=request.cwd)
        flags = request.invocation.flags
        log.debug(
            "feature flags "
            + ("given, skipping feature prompts" if flags.is_feature_flags_used else "not given")
        )
        outcome = self._run_prompts(build_prompt_sequence(request.settings), context, self._widget)
        if outcome.cancelled:
            return service_failure(code="cancelled", message=outcome.reason)
        try:
            resolved = merge_answers(outcome, context, request.settings)
        except ValidationError as exc:
            first = exc.errors()[0]
            location = ".".join(str(part) for part in first["loc"]) or "config"
            return service_failure(
                code="validation_failed",
                message=f"invalid {location}: {first['msg']}",
                recovery_hint="Choose a different project or package name.",
            )
        log.debug(f"resolved template {resolved.template} into {resolved.root}")
        return service_success(resolved)
