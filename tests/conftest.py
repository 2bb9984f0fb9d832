# ruff: noqa: E402

import builtins
import sys
from pathlib import Path

import pytest
from _pytest.doctest import DoctestModule

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
for entry in (SRC, ROOT):
    if str(entry) not in sys.path:
        sys.path.insert(0, str(entry))

import create_project.io as io
import create_project.log as log

DOCTEST_MODULES = {
    ROOT / "src" / "create_project" / "__init__.py",
    ROOT / "src" / "create_project" / "commands" / "create.py",
    ROOT / "src" / "create_project" / "config.py",
    ROOT / "src" / "create_project" / "fetch.py",
    ROOT / "src" / "create_project" / "log.py",
    ROOT / "src" / "create_project" / "flags.py",
    ROOT / "src" / "create_project" / "models.py",
    ROOT / "src" / "create_project" / "naming.py",
    ROOT / "src" / "create_project" / "paths.py",
    ROOT / "src" / "create_project" / "services" / "base.py",
    ROOT / "src" / "create_project" / "services" / "result.py",
    ROOT / "src" / "create_project" / "templates.py",
}

_ENV_KEYS = (
    "CREATE_PROJECT_TEMPLATE_REPO",
    "CREATE_PROJECT_TEMPLATES",
    "CREATE_PROJECT_SELECTION_MODE",
    "CREATE_PROJECT_CACHE",
    "CREATE_PROJECT_FETCH_TIMEOUT",
    "CREATE_PROJECT_LOG_LEVEL",
    "npm_config_user_agent",
)


@pytest.fixture(autouse=True)
def _isolate_prompts_and_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(io, "_use_questionary", lambda: False)
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(log, "_configured_level", None)
    monkeypatch.setattr(log, "_no_color", None)

    def fail_input(prompt: str = "") -> str:
        raise AssertionError("prompted unexpectedly")

    monkeypatch.setattr(builtins, "input", fail_input)


def pytest_collect_file(
    parent: pytest.Collector, file_path: Path
) -> DoctestModule | None:
    path = file_path if isinstance(file_path, Path) else Path(str(file_path))
    if path in DOCTEST_MODULES:
        return DoctestModule.from_parent(parent, path=path)
    return None
