"""Pydantic models for the resolved project configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

from .flags import FeatureFlags
from .naming import is_valid_package_name

E2eTesting = Literal[False, "cypress", "playwright"]


class FeatureSet(BaseModel):
    """Optional capabilities selected for the generated project.

    Example:
        >>> FeatureSet(needs_typescript=True).needs_router
        False
    """

    model_config = ConfigDict(frozen=True)

    needs_typescript: bool = False
    needs_jsx: bool = False
    needs_router: bool = False
    needs_pinia: bool = False
    needs_vitest: bool = False
    needs_e2e_testing: E2eTesting = False
    needs_eslint: bool = False
    needs_prettier: bool = False

    @classmethod
    def from_flags(cls, flags: FeatureFlags) -> FeatureSet:
        """Derive the feature set purely from command-line flags.

        ``--with-tests`` enables Vitest and Cypress; ``--eslint-with-prettier``
        enables both ESLint and Prettier.

        Example:
            >>> FeatureSet.from_flags(FeatureFlags(with_tests=True)).needs_e2e_testing
            'cypress'
        """
        e2e: E2eTesting = False
        if flags.enabled("cypress") or flags.enabled("with_tests"):
            e2e = "cypress"
        elif flags.enabled("playwright"):
            e2e = "playwright"
        return cls(
            needs_typescript=flags.enabled("typescript"),
            needs_jsx=flags.enabled("jsx"),
            needs_router=flags.enabled("router"),
            needs_pinia=flags.enabled("pinia"),
            needs_vitest=flags.enabled("vitest") or flags.enabled("with_tests"),
            needs_e2e_testing=e2e,
            needs_eslint=flags.enabled("eslint") or flags.enabled("eslint_with_prettier"),
            needs_prettier=flags.enabled("eslint_with_prettier"),
        )


class ResolvedConfig(BaseModel):
    """Every decision needed to materialize a project.

    Attributes:
        project_name: Name the user gave (or the positional argument).
        package_name: Valid package name written into the project.
        target_dir: Target directory as entered, relative to ``cwd``.
        root: Absolute target directory.
        should_overwrite: Whether existing content may be removed.
        features: Selected optional capabilities.
        template: Template source identifier handed to the fetcher.
    """

    model_config = ConfigDict(frozen=True)

    project_name: str
    package_name: str
    target_dir: str
    root: Path
    should_overwrite: bool
    features: FeatureSet
    template: str

    @field_validator("package_name")
    @classmethod
    def require_valid_package_name(cls, value: str) -> str:
        if not is_valid_package_name(value):
            raise ValueError(f"invalid package name: {value!r}")
        return value

    @field_validator("project_name", "target_dir", "template")
    @classmethod
    def require_non_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value
