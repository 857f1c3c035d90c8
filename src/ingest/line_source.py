"""Line reader for score logs.

This module opens a score log and yields its lines in file order.
Open and read failures are fatal and raised immediately. Undecodable
bytes become U+FFFD so a damaged line only fails the request if the
record parsed from it reaches the result set.
"""

from __future__ import annotations

from pathlib import Path
from types import TracebackType
from typing import IO, Iterator

from core.constants import BYTE_ORDER_MARK, DEFAULT_ENCODING
from core.errors import ScoreSourceError


class ScoreLineReader:
    """Lazy line iterator that owns its open file handle.

    The handle closes when iteration is exhausted, on ``close()``, or on
    leaving a ``with`` block, whether or not iteration ever started.
    """

    def __init__(self, handle: IO[str], path: Path) -> None:
        self._handle = handle
        self._lines = _iterate_lines(handle, path)

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        return next(self._lines)

    def __enter__(self) -> "ScoreLineReader":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        """Return whether the file handle is closed."""
        return self._handle.closed

    def close(self) -> None:
        """Release the file handle."""
        self._lines.close()
        self._handle.close()


def read_score_lines(source_path: str | Path, encoding: str = DEFAULT_ENCODING) -> ScoreLineReader:
    """Open a score log and return a lazy reader over its lines.

    The file is opened before this function returns, so a missing or
    unreadable path fails here rather than on first iteration.

    Args:
        source_path: Path to the score log.
        encoding: Text encoding of the file.

    Returns:
        Reader yielding lines with LF, CRLF, or CR terminators removed and a
        leading byte order mark dropped.

    Raises:
        ScoreSourceError: If the file cannot be opened or the encoding is unknown.
    """
    path = Path(source_path).expanduser()
    try:
        handle = path.open("r", encoding=encoding, errors="replace", newline="")
    except (OSError, LookupError) as error:
        raise ScoreSourceError(
            f"Failed to open score log at {path}: {_describe(error)}. "
            "Provide an existing, readable file."
        ) from error
    return ScoreLineReader(handle, path)


def _iterate_lines(handle: IO[str], path: Path) -> Iterator[str]:
    """Yield stripped lines and close the handle when exhausted.

    Raises:
        ScoreSourceError: If the file cannot be read.
    """
    with handle:
        try:
            for line_number, line in enumerate(handle):
                if line_number == 0:
                    line = line.removeprefix(BYTE_ORDER_MARK)
                yield _strip_line_terminator(line)
        except OSError as error:
            raise ScoreSourceError(
                f"Failed to read score log at {path}: {error}. "
                "Check the file permissions and retry."
            ) from error


def _strip_line_terminator(line: str) -> str:
    """Remove one trailing LF, CRLF, or CR terminator."""
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith(("\n", "\r")):
        return line[:-1]
    return line


def _describe(error: Exception) -> str:
    """Return the most readable message for an open failure."""
    if isinstance(error, OSError) and error.strerror:
        return error.strerror
    return str(error)
