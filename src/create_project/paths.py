"""Path helpers for locating create-project cache directories."""

from pathlib import Path

from platformdirs import user_cache_dir

APP_NAME = "create-project"
TARBALLS_DIRNAME = "tarballs"


def cache_dir() -> Path:
    """Return the base cache directory.

    Returns:
        Path to the user cache directory for create-project.

    Example:
        >>> isinstance(cache_dir(), Path)
        True
    """
    return Path(user_cache_dir(APP_NAME))


def tarball_cache_path(owner: str, repo: str, ref: str) -> Path:
    """Return the cache location for a repository tarball.

    Args:
        owner: Repository owner.
        repo: Repository name.
        ref: Git ref the tarball was taken from.

    Returns:
        Path of the cached ``.tar.gz`` file.

    Example:
        >>> tarball_cache_path("acme", "templates", "HEAD").name
        'HEAD.tar.gz'
    """
    safe_ref = ref.replace("/", "__")
    return cache_dir() / TARBALLS_DIRNAME / owner / repo / f"{safe_ref}.tar.gz"


def ensure_dir(path: Path) -> None:
    """Create ``path`` and its parents when missing.

    Example:
        >>> ensure_dir(Path("/tmp/create-project-example"))
    """
    path.mkdir(parents=True, exist_ok=True)
