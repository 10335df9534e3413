"""
Side effects performed by planned steps.

All filesystem, subprocess and network access made while applying a plan
goes through an Effects instance bound to one project directory. Failures
raise CommandError or FetchError, except for ``remove_quietly``, which is
the one lenient operation: it exists to clear stale files before they are
replaced, so a file that is already gone is not a problem.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Iterable, Sequence
from pathlib import Path
from types import TracebackType

import httpx

logger = logging.getLogger(__name__)


class CommandError(Exception):
    """An external command could not be started or exited non-zero."""

    def __init__(self, args: Sequence[str], returncode: int | None, stderr: str = "") -> None:
        self.args_list = list(args)
        self.returncode = returncode
        self.stderr = stderr
        command = " ".join(self.args_list)
        if returncode is None:
            message = f"Could not run '{command}'"
        else:
            message = f"'{command}' exited with status {returncode}"
        if stderr:
            message += f": {stderr.strip()}"
        super().__init__(message)


class FetchError(Exception):
    """A template download failed."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Could not download {url}: {reason}")


class Effects:
    """
    Filesystem, subprocess and HTTP access scoped to a project directory.

    Usage:
        >>> with Effects(project_dir) as effects:
        ...     effects.run(["git", "init"])
        ...     effects.write_file(".gitignore", effects.fetch_text(url))

    Args:
        project_dir: Directory every relative path and command is bound to
        client: Optional preconfigured httpx.Client (tests pass one backed
            by ``httpx.MockTransport``)
        timeout: Request timeout in seconds; None waits indefinitely
    """

    def __init__(
        self,
        project_dir: Path,
        *,
        client: httpx.Client | None = None,
        timeout: float | None = None,
    ) -> None:
        self.project_dir = Path(project_dir)
        self._client = client
        self._owns_client = client is None
        self._timeout = timeout

    def __enter__(self) -> Effects:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=self._timeout, follow_redirects=True)
        return self._client

    def run(self, args: Sequence[str]) -> str:
        """
        Run an external command in the project directory.

        Returns:
            The command's stdout

        Raises:
            CommandError: The command is missing or exited non-zero
        """
        logger.debug("Running %s in %s", args, self.project_dir)
        try:
            result = subprocess.run(
                list(args),
                cwd=self.project_dir,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            raise CommandError(args, None, str(e)) from e

        if result.returncode != 0:
            raise CommandError(args, result.returncode, result.stderr or "")
        return result.stdout or ""

    def fetch_text(self, url: str) -> str:
        """
        Download ``url`` and return the body as text.

        Raises:
            FetchError: Network failure or non-2xx response
        """
        logger.debug("Fetching %s", url)
        try:
            response = self.client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FetchError(url, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise FetchError(url, str(e) or type(e).__name__) from e
        return response.text

    def write_file(self, name: str, content: str) -> Path:
        """Write ``content`` to ``project_dir/name``, replacing any existing file."""
        path = self.project_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        logger.debug("Wrote %s (%d bytes)", path, len(content))
        return path

    def remove_quietly(self, names: Iterable[str]) -> None:
        """
        Delete each of ``names`` under the project directory, one at a time.

        Missing files and permission races are ignored.
        """
        for name in names:
            path = self.project_dir / name
            try:
                path.unlink()
            except OSError as e:
                logger.debug("Ignoring failure to remove %s: %s", path, e)
