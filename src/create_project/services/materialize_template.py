"""Write the selected template into the target directory.

Acquisition goes through a single ``TemplateFetcher.clone`` call per run.
The result is best-effort, not atomic: when the fetch fails the target keeps
whatever the emptying step and the fetcher left behind.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass, replace
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .. import log
from ..fetch import FetchEvent, FetchOptions, TemplateFetcher
from ..io import warn
from ..models import ResolvedConfig
from .base import BaseService
from .errors import IoFailedError, ServiceFailure

FetcherFactory = Callable[[str, FetchOptions], TemplateFetcher]


class MaterializeTemplateRequest(BaseModel):
    """Input contract for template materialization.

    Attributes:
        config: Resolved configuration for the run.
        options: Fetch transport options (``force`` is always enabled, the
            target has already been emptied or created).
    """

    config: ResolvedConfig
    options: FetchOptions = Field(default_factory=FetchOptions)

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


@dataclass(frozen=True)
class MaterializeTemplateOutcome:
    root: Path
    template: str
    files_written: int
    readme_title: str | None = None


def report_fetch_event(event: FetchEvent) -> None:
    if event.verbose:
        log.debug(event.message)
    elif event.code == "SUCCESS":
        log.success(event.message)
    else:
        log.info(event.message)


def write_package_name(package_json: Path, package_name: str) -> bool:
    """Set ``name`` in ``package_json`` when the file exists.

    Returns:
        ``True`` when the file was rewritten.

    Raises:
        IoFailedError: When the file cannot be read or written.
    """
    if not package_json.is_file():
        return False
    try:
        payload = json.loads(package_json.read_text(encoding="utf-8"))
    except json.JSONDecodeError:
        warn(f"{package_json.name} is not valid JSON; leaving the package name unchanged")
        return False
    except OSError as exc:
        raise IoFailedError(f"failed to read {package_json}: {exc}") from exc
    if not isinstance(payload, dict) or payload.get("name") == package_name:
        return False
    payload["name"] = package_name
    try:
        package_json.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        raise IoFailedError(f"failed to write {package_json}: {exc}") from exc
    return True


def read_readme_title(readme: Path) -> str | None:
    """Return the first Markdown heading of ``readme``, if any.

    Purely informational; read errors only warn.
    """
    if not readme.is_file():
        return None
    try:
        text = readme.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        warn(f"could not read {readme.name}: {exc}")
        return None
    for line in text.splitlines():
        stripped = line.strip()
        if stripped.startswith("#"):
            return stripped.lstrip("#").strip() or None
    return None


class MaterializeTemplateService(
    BaseService[MaterializeTemplateRequest, MaterializeTemplateOutcome]
):
    """Fetch the configured template into ``config.root``."""

    def __init__(self, *, make_fetcher: FetcherFactory = TemplateFetcher) -> None:
        self._make_fetcher = make_fetcher

    def _run(self, request: MaterializeTemplateRequest) -> MaterializeTemplateOutcome:
        config = request.config
        log.info(f"\nScaffolding project in {config.root}...\n")
        fetcher = self._make_fetcher(config.template, replace(request.options, force=True))
        fetcher.on(report_fetch_event)
        written = fetcher.clone(config.root)
        if write_package_name(config.root / "package.json", config.package_name):
            log.debug(f"set package name to {config.package_name}")
        title = read_readme_title(config.root / "README.md")
        if title:
            log.debug(f"README: {title}")
        return MaterializeTemplateOutcome(
            root=config.root,
            template=config.template,
            files_written=written,
            readme_title=title,
        )

    def _handle_failure(self, error: ServiceFailure) -> MaterializeTemplateOutcome:
        log.debug(f"materialization stopped ({error.code}); the target directory is left as is")
        raise error
