"""Thin wrappers around the git executable."""

import subprocess

from loguru import logger

from repovector.core.errors import CloneError

# Branches served by a plain clone without an explicit checkout
DEFAULT_BRANCHES = ("", "main", "master")


def git_clone(repo_url: str, dest_dir: str, branch: str = "") -> None:
    """Clone a git repository and check out ``branch`` when needed.

    Args:
        repo_url: URL of the git repository to clone.
        dest_dir: Destination directory path.
        branch: Branch to check out. Default branches are left as cloned.

    Raises:
        CloneError: If git clone or checkout fails.
    """
    try:
        subprocess.run(
            ["git", "clone", repo_url, dest_dir],
            check=True,
            capture_output=True,
            text=True,
        )
    except (subprocess.CalledProcessError, OSError) as e:
        raise CloneError(
            f"Failed to clone repository: {getattr(e, 'stderr', None) or e}"
        ) from e

    if branch in DEFAULT_BRANCHES:
        return

    try:
        subprocess.run(
            ["git", "checkout", branch],
            cwd=dest_dir,
            check=True,
            capture_output=True,
            text=True,
        )
    except (subprocess.CalledProcessError, OSError) as e:
        raise CloneError(
            f"Failed to checkout branch {branch}: {getattr(e, 'stderr', None) or e}"
        ) from e
    logger.info(f"Checked out branch: {branch}")
