"""Remote template acquisition from GitHub tarballs.

``TemplateFetcher`` downloads ``owner/repo`` at a ref, optionally keeps the
tarball in the user cache, and extracts one subdirectory of it into a
destination. Extraction writes files in place: a failure part-way through
leaves whatever was already written. Callers must treat a clone as
best-effort, not atomic.
"""

from __future__ import annotations

import gzip
import io
import re
import tarfile
import urllib.error
import urllib.request
import zlib
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from . import __version__, paths
from .services.errors import FetchError, IoFailedError

CODELOAD_URL = "https://codeload.github.com/{owner}/{repo}/tar.gz/{ref}"
DEFAULT_REF = "HEAD"

_SOURCE_RE = re.compile(
    r"^(?:(?P<host>github):)?"
    r"(?P<owner>[A-Za-z0-9_.-]+)/(?P<repo>[A-Za-z0-9_.-]+)"
    r"(?P<subdir>(?:/[^#/\s]+)*)/?"
    r"(?:#(?P<ref>[^#\s]+))?$"
)


@dataclass(frozen=True)
class TemplateSource:
    """Parsed template source identifier.

    Example:
        >>> source = parse_source("acme/templates/vue-ts#v2")
        >>> source.owner, source.repo, source.subdir, source.ref
        ('acme', 'templates', 'vue-ts', 'v2')
    """

    owner: str
    repo: str
    subdir: str = ""
    ref: str = DEFAULT_REF

    @property
    def url(self) -> str:
        return CODELOAD_URL.format(owner=self.owner, repo=self.repo, ref=self.ref)

    def __str__(self) -> str:
        location = f"{self.owner}/{self.repo}"
        if self.subdir:
            location = f"{location}/{self.subdir}"
        return f"{location}#{self.ref}"


def parse_source(src: str) -> TemplateSource:
    """Parse ``[github:]owner/repo[/subdir][#ref]``.

    Raises:
        FetchError: When ``src`` does not match the syntax.
    """
    match = _SOURCE_RE.fullmatch(src.strip())
    if match is None:
        raise FetchError(
            f"could not parse template source {src!r}",
            recovery_hint="Use owner/repo[/subdir][#ref].",
        )
    subdir = match.group("subdir").strip("/")
    if ".." in subdir.split("/"):
        raise FetchError(f"template subdirectory may not contain '..': {src!r}")
    return TemplateSource(
        owner=match.group("owner"),
        repo=match.group("repo"),
        subdir=subdir,
        ref=match.group("ref") or DEFAULT_REF,
    )


@dataclass(frozen=True)
class FetchOptions:
    """Transport configuration.

    Attributes:
        cache: Reuse and store tarballs in the user cache directory.
        force: Allow cloning into a non-empty destination.
        verbose: Also emit verbose-only events.
        timeout: HTTP timeout in seconds.
    """

    cache: bool = True
    force: bool = False
    verbose: bool = False
    timeout: int = 30


@dataclass(frozen=True)
class FetchEvent:
    """Informational event emitted while cloning."""

    code: str
    message: str
    verbose: bool = False


FetchListener = Callable[[FetchEvent], None]
Downloader = Callable[[str, int], bytes]
CachePath = Callable[[str, str, str], Path]


def download(url: str, timeout: int) -> bytes:
    """Download ``url`` and return the response body.

    Raises:
        FetchError: On HTTP, network or timeout errors.
    """
    request = urllib.request.Request(
        url, headers={"User-Agent": f"create-project/{__version__}"}
    )
    try:
        with urllib.request.urlopen(request, timeout=timeout) as response:
            return response.read()
    except urllib.error.HTTPError as exc:
        if exc.code == 404:
            raise FetchError(
                f"could not find template repository at {url}",
                recovery_hint="Check the template name and repository.",
            ) from exc
        raise FetchError(f"template download failed ({exc.code} {exc.reason})") from exc
    except (urllib.error.URLError, TimeoutError) as exc:
        reason = getattr(exc, "reason", exc)
        raise FetchError(
            f"template download failed: {reason}",
            recovery_hint="Check your network connection or retry with the cache enabled.",
        ) from exc


def _member_path(name: str, subdir: str) -> PurePosixPath | None:
    parts = PurePosixPath(name).parts[1:]
    if subdir:
        prefix = tuple(subdir.split("/"))
        if parts[: len(prefix)] != prefix:
            return None
        parts = parts[len(prefix) :]
    if not parts or ".." in parts:
        return None
    return PurePosixPath(*parts)


def _extract(archive: bytes, subdir: str, dest: Path) -> int:
    dest_root = dest.resolve()
    written = 0
    with tarfile.open(fileobj=io.BytesIO(archive), mode="r:gz") as tar:
        for member in tar:
            relative = _member_path(member.name, subdir)
            if relative is None:
                continue
            target = (dest_root / relative).resolve()
            if not target.is_relative_to(dest_root) or target == dest_root:
                continue
            if member.isdir():
                target.mkdir(parents=True, exist_ok=True)
                continue
            if not member.isfile():
                continue
            handle = tar.extractfile(member)
            if handle is None:
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            with handle:
                target.write_bytes(handle.read())
            if member.mode & 0o111:
                target.chmod(0o755)
            written += 1
    return written


class TemplateFetcher:
    """Clone a template source into a directory.

    Example:
        >>> fetcher = TemplateFetcher("acme/templates/vue", FetchOptions(cache=False))
        >>> str(fetcher.source)
        'acme/templates/vue#HEAD'
    """

    def __init__(
        self,
        src: str,
        options: FetchOptions,
        *,
        downloader: Downloader = download,
        cache_path: CachePath = paths.tarball_cache_path,
    ) -> None:
        self.source = parse_source(src)
        self.options = options
        self._downloader = downloader
        self._cache_path = cache_path
        self._listeners: list[FetchListener] = []

    def on(self, listener: FetchListener) -> None:
        """Register ``listener`` for info events."""
        self._listeners.append(listener)

    def _emit(self, code: str, message: str, *, verbose: bool = False) -> None:
        if verbose and not self.options.verbose:
            return
        event = FetchEvent(code=code, message=message, verbose=verbose)
        for listener in self._listeners:
            listener(event)

    def _tarball(self) -> bytes:
        source = self.source
        cached = self._cache_path(source.owner, source.repo, source.ref)
        if self.options.cache and cached.is_file():
            self._emit("USING_CACHE", f"using cached tarball for {source.owner}/{source.repo}")
            try:
                return cached.read_bytes()
            except OSError as exc:
                raise IoFailedError(f"failed to read cached tarball {cached}: {exc}") from exc
        self._emit("FETCHING", f"downloading {source.url}")
        archive = self._downloader(source.url, self.options.timeout)
        if self.options.cache:
            try:
                paths.ensure_dir(cached.parent)
                cached.write_bytes(archive)
                self._emit("CACHED", f"stored tarball at {cached}", verbose=True)
            except OSError as exc:
                self._emit("CACHE_FAILED", f"could not cache tarball: {exc}", verbose=True)
        return archive

    def clone(self, dest: Path) -> int:
        """Populate ``dest`` with the template files.

        Args:
            dest: Destination directory; created when missing.

        Returns:
            Number of files written.

        Raises:
            FetchError: When the destination is not empty (without ``force``),
                the download fails, the archive is corrupt, or the
                subdirectory is missing.
            IoFailedError: When files cannot be written.
        """
        dest = Path(dest)
        if not self.options.force and dest.is_dir() and any(dest.iterdir()):
            raise FetchError(
                f"destination directory is not empty: {dest}",
                recovery_hint="Empty the directory or enable force.",
            )
        archive = self._tarball()
        self._emit("EXTRACTING", f"extracting {self.source} to {dest}", verbose=True)
        try:
            paths.ensure_dir(dest)
            written = _extract(archive, self.source.subdir, dest)
        except (tarfile.TarError, gzip.BadGzipFile, zlib.error, EOFError) as exc:
            raise FetchError(f"template archive for {self.source} is corrupt: {exc}") from exc
        except OSError as exc:
            raise IoFailedError(f"failed to write template files to {dest}: {exc}") from exc
        if written == 0:
            location = self.source.subdir or "repository root"
            raise FetchError(
                f"could not find {location} in {self.source.owner}/{self.source.repo}",
                recovery_hint="Check the template name.",
            )
        self._emit("SUCCESS", f"cloned {self.source} to {dest}")
        return written
