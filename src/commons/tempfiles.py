"""Scoped temporary files that are removed on every exit path."""

import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO

from src.commons.telemetry import get_logger

logger = get_logger(__name__)


class StagedFile:
    """A named temporary file owned by a single pipeline invocation.

    ``release()`` closes the handle before removing the file and may be
    called any number of times.
    """

    def __init__(self, path: Path, handle: BinaryIO) -> None:
        self.path = path
        self.handle = handle
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        """Close the handle, then remove the file.

        Raises:
            OSError: If closing or removing fails.
        """
        if self._released:
            return
        if not self.handle.closed:
            self.handle.close()
        self.path.unlink(missing_ok=True)
        self._released = True


def remove_quietly(path: Path) -> None:
    """Remove ``path`` if it exists, logging instead of raising on failure."""
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning(
            "Failed to remove temporary file",
            extra={"file_path": str(path), "error": str(e)},
        )


@contextmanager
def staged_file(
    prefix: str = "tubely-upload-",
    suffix: str = ".mp4",
    directory: str | Path | None = None,
) -> Iterator[StagedFile]:
    """Create a named temporary file and guarantee its removal.

    Args:
        prefix: File name prefix.
        suffix: File name suffix.
        directory: Directory to create the file in; system default if None.

    Yields:
        The staged file, open for reading and writing.

    Raises:
        OSError: If the file cannot be created.
    """
    handle = tempfile.NamedTemporaryFile(  # noqa: SIM115
        mode="w+b",
        prefix=prefix,
        suffix=suffix,
        dir=directory,
        delete=False,
    )
    staged = StagedFile(Path(handle.name), handle)
    try:
        yield staged
    finally:
        try:
            staged.release()
        except OSError as e:
            logger.warning(
                "Failed to release staged file",
                extra={"file_path": str(staged.path), "error": str(e)},
            )

