"""Typer entry point for ``create-project``."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Annotated

import typer
from . import __version__
from . import log as create_project_log
from .commands import create as create_cmd
from .config import SelectionMode
from .flags import FEATURE_FLAG_NAMES
from .services.errors import ServiceFailure

app = typer.Typer(
    add_completion=False,
    help="Scaffold a new project from a template.",
    context_settings={"help_option_names": ["-h", "--help"]},
)

FLAG_NAMES = (*FEATURE_FLAG_NAMES, "force")
_EXPLICIT_SOURCES = frozenset({"COMMANDLINE", "ENVIRONMENT"})


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"create-project {__version__}")
        raise typer.Exit()


def _log_level_callback(value: str | None) -> str | None:
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized not in create_project_log.LEVEL_NAMES:
        raise typer.BadParameter(
            f"expected one of: {', '.join(create_project_log.LEVEL_NAMES)}"
        )
    return normalized


def _supplied(ctx: typer.Context, name: str, value: bool) -> bool | None:
    """Return ``value`` only when the flag was given explicitly."""
    # Compared by name: typer may ship its own copy of click.
    source = ctx.get_parameter_source(name)
    if source is not None and source.name in _EXPLICIT_SOURCES:
        return value
    return None


@app.command()
def main(
    ctx: typer.Context,
    target_dir: Annotated[
        str | None, typer.Argument(help="Directory to create the project in.")
    ] = None,
    default: Annotated[
        bool, typer.Option("--default", help="Skip feature prompts and use defaults.")
    ] = False,
    typescript: Annotated[
        bool, typer.Option("--typescript", "--ts", help="Add TypeScript.")
    ] = False,
    jsx: Annotated[bool, typer.Option("--jsx", help="Add JSX support.")] = False,
    router: Annotated[
        bool, typer.Option("--router", "--vue-router", help="Add Vue Router.")
    ] = False,
    pinia: Annotated[bool, typer.Option("--pinia", help="Add Pinia.")] = False,
    with_tests: Annotated[
        bool,
        typer.Option("--with-tests", "--tests", help="Add Vitest and Cypress."),
    ] = False,
    vitest: Annotated[bool, typer.Option("--vitest", help="Add Vitest.")] = False,
    cypress: Annotated[bool, typer.Option("--cypress", help="Add Cypress.")] = False,
    playwright: Annotated[
        bool, typer.Option("--playwright", help="Add Playwright.")
    ] = False,
    eslint: Annotated[bool, typer.Option("--eslint", help="Add ESLint.")] = False,
    eslint_with_prettier: Annotated[
        bool,
        typer.Option("--eslint-with-prettier", help="Add ESLint with Prettier."),
    ] = False,
    force: Annotated[
        bool, typer.Option("--force", help="Overwrite the target without asking.")
    ] = False,
    template: Annotated[
        str | None,
        typer.Option("--template", help="Template name or owner/repo[/subdir][#ref]."),
    ] = None,
    selection_mode: Annotated[
        SelectionMode | None,
        typer.Option(
            "--selection-mode",
            help="Ask for individual features or for one named template.",
            case_sensitive=False,
        ),
    ] = None,
    no_cache: Annotated[
        bool, typer.Option("--no-cache", help="Always download the template.")
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", help="Report every fetch step.")
    ] = False,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            help="Log level: trace, debug, info, success, warning or error.",
            callback=_log_level_callback,
        ),
    ] = None,
    no_color: Annotated[
        bool, typer.Option("--no-color", help="Disable colorized output.")
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version", callback=_version_callback, is_eager=True, help="Show the version."
        ),
    ] = False,
) -> None:
    """Create a new project in TARGET_DIR."""
    if log_level is not None:
        create_project_log.set_level(log_level)
    if no_color:
        create_project_log.set_no_color(True)
    values = {
        "default": default,
        "typescript": typescript,
        "jsx": jsx,
        "router": router,
        "pinia": pinia,
        "with_tests": with_tests,
        "vitest": vitest,
        "cypress": cypress,
        "playwright": playwright,
        "eslint": eslint,
        "eslint_with_prettier": eslint_with_prettier,
        "force": force,
    }
    args = SimpleNamespace(
        target_dir=target_dir,
        template=template,
        selection_mode=selection_mode.value if selection_mode is not None else None,
        no_cache=no_cache,
        verbose=verbose,
        **{name: _supplied(ctx, name, values[name]) for name in FLAG_NAMES},
    )
    try:
        create_cmd.create_project(args)
    except ServiceFailure as exc:
        create_project_log.error(f"error: {exc.message}")
        if exc.recovery_hint:
            create_project_log.error(f"hint: {exc.recovery_hint}")
        raise typer.Exit(code=1) from exc
