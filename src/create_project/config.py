"""Environment-driven settings for create-project.

Only ``CREATE_PROJECT_*`` environment variables are consulted; no
configuration file is read or written. CLI options override these values.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .io import die

DEFAULT_TEMPLATE_REPO = "kaywahmatch/create-project-template"
DEFAULT_TEMPLATES = ("vue", "vue-ts", "vue-ts-router-pinia")
DEFAULT_FETCH_TIMEOUT = 30
_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


class SelectionMode(str, Enum):
    """How the interactive selection step is presented."""

    FEATURES = "features"
    TEMPLATE = "template"


class Settings(BaseModel):
    """Resolved runtime settings.

    Attributes:
        template_repo: Repository that bare template names resolve under.
        templates: Named templates offered in template selection mode.
        selection_mode: Feature toggles or a single template choice.
        cache: Reuse previously downloaded template tarballs.
        fetch_timeout: HTTP timeout in seconds.

    Example:
        >>> Settings().selection_mode
        <SelectionMode.FEATURES: 'features'>
    """

    model_config = ConfigDict(frozen=True)

    template_repo: str = DEFAULT_TEMPLATE_REPO
    templates: tuple[str, ...] = Field(default=DEFAULT_TEMPLATES, min_length=1)
    selection_mode: SelectionMode = SelectionMode.FEATURES
    cache: bool = True
    fetch_timeout: int = Field(default=DEFAULT_FETCH_TIMEOUT, gt=0)

    @field_validator("template_repo", mode="before")
    @classmethod
    def normalize_template_repo(cls, value: object) -> object:
        if isinstance(value, str):
            normalized = value.strip().strip("/")
            return normalized or DEFAULT_TEMPLATE_REPO
        return value


def _parse_bool(name: str, raw: str) -> bool:
    normalized = raw.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    die(f"{name} must be one of: 1, true, yes, on, 0, false, no, off")


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build ``Settings`` from ``CREATE_PROJECT_*`` environment variables.

    Args:
        environ: Environment mapping; defaults to ``os.environ``.

    Returns:
        Validated settings. Invalid values exit with an error message.
    """
    env = os.environ if environ is None else environ
    values: dict[str, object] = {}

    repo = env.get("CREATE_PROJECT_TEMPLATE_REPO", "").strip()
    if repo:
        values["template_repo"] = repo

    templates = env.get("CREATE_PROJECT_TEMPLATES", "").strip()
    if templates:
        names = tuple(name.strip() for name in templates.split(",") if name.strip())
        if names:
            values["templates"] = names

    mode = env.get("CREATE_PROJECT_SELECTION_MODE", "").strip().lower()
    if mode:
        try:
            values["selection_mode"] = SelectionMode(mode)
        except ValueError:
            die("CREATE_PROJECT_SELECTION_MODE must be one of: features, template")

    cache = env.get("CREATE_PROJECT_CACHE", "").strip()
    if cache:
        values["cache"] = _parse_bool("CREATE_PROJECT_CACHE", cache)

    timeout = env.get("CREATE_PROJECT_FETCH_TIMEOUT", "").strip()
    if timeout:
        try:
            seconds = int(timeout)
        except ValueError:
            die("CREATE_PROJECT_FETCH_TIMEOUT must be an integer number of seconds")
        if seconds <= 0:
            die("CREATE_PROJECT_FETCH_TIMEOUT must be a positive number of seconds")
        values["fetch_timeout"] = seconds

    return Settings(**values)
