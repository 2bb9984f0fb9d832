from __future__ import annotations

import io
import tarfile
from pathlib import Path
from types import SimpleNamespace

from create_project.fetch import FetchEvent, FetchOptions
from create_project.prompting import Prompt

FLAG_NAMES = (
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
    "force",
)


def make_create_args(**overrides: object) -> SimpleNamespace:
    data: dict[str, object] = {name: None for name in FLAG_NAMES}
    data.update(
        {
            "target_dir": None,
            "template": None,
            "selection_mode": None,
            "no_cache": False,
            "verbose": False,
        }
    )
    data.update(overrides)
    return SimpleNamespace(**data)


class FakeWidget:
    """Scripted prompt widget: answers by prompt name, records every call."""

    def __init__(self, answers: dict[str, object] | None = None, *, accept_defaults: bool = True):
        self.answers = dict(answers or {})
        self.accept_defaults = accept_defaults
        self.calls: list[tuple[str, str, object]] = []

    @property
    def asked(self) -> list[str]:
        return [name for name, _, _ in self.calls]

    def ask(self, prompt: Prompt, message: str, default: object) -> object:
        self.calls.append((prompt.name, message, default))
        if prompt.name in self.answers:
            answer = self.answers[prompt.name]
            if isinstance(answer, BaseException):
                raise answer
            return answer
        if self.accept_defaults:
            return default
        raise AssertionError(f"unexpected prompt: {prompt.name}")


class FakeFetcher:
    """Stands in for ``TemplateFetcher``; writes ``files`` into the destination."""

    def __init__(
        self,
        src: str,
        options: FetchOptions,
        *,
        files: dict[str, str] | None = None,
        error: BaseException | None = None,
    ) -> None:
        self.src = src
        self.options = options
        self.files = files if files is not None else {"README.md": "# Demo\n"}
        self.error = error
        self.listeners: list = []
        self.cloned_to: Path | None = None

    def on(self, listener) -> None:
        self.listeners.append(listener)

    def clone(self, dest: Path) -> int:
        self.cloned_to = dest
        for listener in self.listeners:
            listener(FetchEvent(code="FETCHING", message=f"downloading {self.src}"))
        if self.error is not None:
            raise self.error
        for name, text in self.files.items():
            target = dest / name
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(text, encoding="utf-8")
        return len(self.files)


def fetcher_factory(**kwargs: object):
    created: list[FakeFetcher] = []

    def make(src: str, options: FetchOptions) -> FakeFetcher:
        fetcher = FakeFetcher(src, options, **kwargs)
        created.append(fetcher)
        return fetcher

    make.created = created  # type: ignore[attr-defined]
    return make


def make_tarball(files: dict[str, str], *, top: str = "repo-abc123") -> bytes:
    """Build a GitHub-style ``.tar.gz`` with everything under ``top/``."""
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as tar:
        directories: set[str] = set()
        for name, text in files.items():
            parts = name.split("/")[:-1]
            for index in range(1, len(parts) + 1):
                directories.add("/".join(parts[:index]))
        root = tarfile.TarInfo(top)
        root.type = tarfile.DIRTYPE
        root.mode = 0o755
        tar.addfile(root)
        for directory in sorted(directories):
            info = tarfile.TarInfo(f"{top}/{directory}")
            info.type = tarfile.DIRTYPE
            info.mode = 0o755
            tar.addfile(info)
        for name, text in files.items():
            data = text.encode("utf-8")
            info = tarfile.TarInfo(f"{top}/{name}")
            info.size = len(data)
            info.mode = 0o644
            tar.addfile(info, io.BytesIO(data))
    return buffer.getvalue()
