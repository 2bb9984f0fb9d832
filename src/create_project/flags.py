"""Command-line invocation and feature-flag models.

``None`` means a flag was not supplied, which is what lets the resolver tell
flags mode (any feature flag given) apart from prompt mode.
"""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .naming import DEFAULT_PROJECT_NAME

FEATURE_FLAG_NAMES: tuple[str, ...] = (
    "default",
    "typescript",
    "jsx",
    "router",
    "pinia",
    "with_tests",
    "vitest",
    "cypress",
    "playwright",
    "eslint",
    "eslint_with_prettier",
)


class FeatureFlags(BaseModel):
    """Options recognized on the command line.

    Aliases mirror the CLI spellings: ``ts`` for ``typescript``, ``tests``
    for ``with_tests`` and ``vue_router`` for ``router``.

    Example:
        >>> flags = FeatureFlags.model_validate({"ts": True})
        >>> flags.typescript, flags.is_feature_flags_used
        (True, True)
        >>> FeatureFlags(force=True).is_feature_flags_used
        False
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    default: bool | None = None
    typescript: bool | None = Field(default=None, validation_alias=AliasChoices("typescript", "ts"))
    jsx: bool | None = None
    router: bool | None = Field(default=None, validation_alias=AliasChoices("router", "vue_router"))
    pinia: bool | None = None
    with_tests: bool | None = Field(
        default=None, validation_alias=AliasChoices("with_tests", "tests")
    )
    vitest: bool | None = None
    cypress: bool | None = None
    playwright: bool | None = None
    eslint: bool | None = None
    eslint_with_prettier: bool | None = None
    force: bool | None = None
    template: str | None = None

    @field_validator("template", mode="before")
    @classmethod
    def normalize_template(cls, value: object) -> object:
        if isinstance(value, str):
            normalized = value.strip()
            return normalized or None
        return value

    @property
    def is_feature_flags_used(self) -> bool:
        """Whether any feature flag or a template was given explicitly."""
        if self.template is not None:
            return True
        return any(isinstance(getattr(self, name), bool) for name in FEATURE_FLAG_NAMES)

    def enabled(self, name: str) -> bool:
        """Return the flag as a plain boolean (unsupplied counts as off)."""
        return bool(getattr(self, name))


class RawInvocation(BaseModel):
    """The positional target directory plus the parsed flags.

    Example:
        >>> RawInvocation().default_project_name
        'vue-project'
        >>> RawInvocation(target_dir=" demo ").default_project_name
        'demo'
    """

    model_config = ConfigDict(frozen=True)

    target_dir: str | None = None
    flags: FeatureFlags = Field(default_factory=FeatureFlags)

    @field_validator("target_dir", mode="before")
    @classmethod
    def normalize_target_dir(cls, value: object) -> object:
        if isinstance(value, str):
            normalized = value.strip()
            return normalized or None
        return value

    @property
    def default_project_name(self) -> str:
        return self.target_dir or DEFAULT_PROJECT_NAME
