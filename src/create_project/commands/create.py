"""Implementation for the ``create-project`` command.

The run is strictly sequential: resolve the configuration (prompting when
needed), empty or create the target directory, fetch the template, print the
next steps. Nothing on disk changes before the configuration is resolved, so
a cancelled run leaves the target untouched.
"""

from __future__ import annotations

import os
import shlex
import sys
from pathlib import Path

from .. import config, directory, log
from ..fetch import FetchOptions, TemplateFetcher
from ..flags import FeatureFlags, RawInvocation
from ..io import say
from ..models import ResolvedConfig
from ..prompting import PromptWidget
from ..services.materialize_template import (
    FetcherFactory,
    MaterializeTemplateRequest,
    MaterializeTemplateService,
)
from ..services.resolve_config import ResolveConfigRequest, ResolveConfigService


def build_invocation(args: object) -> RawInvocation:
    """Collect the positional target and explicitly supplied flags from ``args``."""
    supplied = {
        name: getattr(args, name)
        for name in FeatureFlags.model_fields
        if getattr(args, name, None) is not None
    }
    return RawInvocation(
        target_dir=getattr(args, "target_dir", None),
        flags=FeatureFlags(**supplied),
    )


def resolve_settings(args: object) -> config.Settings:
    """Load environment settings and apply CLI overrides."""
    settings = config.load_settings()
    overrides: dict[str, object] = {}
    mode = getattr(args, "selection_mode", None)
    if mode is not None:
        overrides["selection_mode"] = config.SelectionMode(mode)
    if getattr(args, "no_cache", False):
        overrides["cache"] = False
    if overrides:
        settings = settings.model_copy(update=overrides)
    return settings


def package_manager(user_agent: str | None = None) -> str:
    """Detect the package manager that launched us, defaulting to npm.

    Example:
        >>> package_manager("pnpm/8.6.0 npm/? node/v20.0.0 linux x64")
        'pnpm'
        >>> package_manager("yarn/1.22.19 npm/? node/v18.17.0 darwin arm64")
        'yarn'
    """
    agent = user_agent if user_agent is not None else os.environ.get("npm_config_user_agent", "")
    if agent.startswith("pnpm"):
        return "pnpm"
    if agent.startswith("yarn"):
        return "yarn"
    return "npm"


def next_steps(resolved: ResolvedConfig, cwd: Path, manager: str) -> list[str]:
    """Return the shell commands the user should run next."""
    steps: list[str] = []
    if resolved.root.resolve() != cwd.resolve():
        try:
            relative = resolved.root.relative_to(cwd)
        except ValueError:
            relative = resolved.root
        steps.append(f"cd {shlex.quote(str(relative))}")
    if manager == "yarn":
        steps.extend(["yarn", "yarn dev"])
    elif manager == "pnpm":
        steps.extend(["pnpm install", "pnpm dev"])
    else:
        steps.extend(["npm install", "npm run dev"])
    return steps


def create_project(
    args: object,
    *,
    widget: PromptWidget | None = None,
    make_fetcher: FetcherFactory = TemplateFetcher,
    cwd: Path | None = None,
) -> ResolvedConfig:
    """Scaffold a new project.

    Args:
        args: CLI argument object with ``target_dir``, the feature flags
            (``default``, ``typescript``, ``jsx``, ``router``, ``pinia``,
            ``with_tests``, ``vitest``, ``cypress``, ``playwright``,
            ``eslint``, ``eslint_with_prettier``, ``force``, ``template``),
            and optional ``selection_mode``, ``no_cache`` and ``verbose``.
        widget: Prompt widget override.
        make_fetcher: Template fetcher factory.
        cwd: Directory the target is resolved against.

    Returns:
        The resolved configuration.

    Raises:
        ServiceFailure: ``ValidationFailedError`` for an unusable
            configuration, ``IoFailedError`` or ``FetchError`` from the
            directory and materialization steps.

    Example:
        $ create-project my-app --ts --router
    """
    cwd = cwd or Path.cwd()
    settings = resolve_settings(args)
    invocation = build_invocation(args)

    result = ResolveConfigService(widget=widget).run(
        ResolveConfigRequest(invocation=invocation, cwd=cwd, settings=settings)
    )
    if result.success is False:
        if result.code == "cancelled":
            log.error(f"✖ {result.message}")
            sys.exit(1)
        raise result.to_error()
    resolved = result.outcome

    state = directory.prepare_target_dir(resolved.root, resolved.should_overwrite)
    log.debug(f"target directory was {state.value}")

    outcome = MaterializeTemplateService(make_fetcher=make_fetcher)(
        MaterializeTemplateRequest(
            config=resolved,
            options=FetchOptions(
                cache=settings.cache,
                verbose=bool(getattr(args, "verbose", False)),
                timeout=settings.fetch_timeout,
            ),
        )
    )
    log.debug(f"wrote {outcome.files_written} files from {outcome.template}")

    say("\nDone. Now run:\n")
    for step in next_steps(resolved, cwd, package_manager()):
        say(f"  {step}")
    say("")
    return resolved
