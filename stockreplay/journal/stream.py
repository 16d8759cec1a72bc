"""
Lazy movement journal stream.

The stream owns the open file handle. Use it as a context manager so the
handle is released even when iteration stops early.
"""

from typing import IO, Iterator, Optional

from ..core.errors import JournalReadError
from ..core.events import ParseResult
from ..core.fields import is_header_line
from ..logging_config import get_logger
from .parser import parse_movement_line


class MovementStream:
    """
    Iterate parse results of a journal file in file order.

    Usage:
        with open_journal("movements.csv") as stream:
            for result in stream:
                engine.apply(result)
    """

    def __init__(self, path: str, encoding: str = "utf-8-sig") -> None:
        self.path = path
        self.encoding = encoding
        self._handle: Optional[IO[str]] = None
        self.logger = get_logger(__name__, trace_id=path)

    def open(self) -> "MovementStream":
        try:
            self._handle = open(self.path, "r", encoding=self.encoding, newline="")
        except OSError as ex:
            raise JournalReadError(f"Failed to read CSV file {self.path}: {ex}") from ex
        self.logger.info("Reading movement journal")
        return self

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    @property
    def closed(self) -> bool:
        return self._handle is None

    def __enter__(self) -> "MovementStream":
        if self._handle is None:
            self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __iter__(self) -> Iterator[ParseResult]:
        if self._handle is None:
            raise JournalReadError(f"Movement journal {self.path} is not open")
        try:
            first = True
            for line in self._handle:
                if first:
                    first = False
                    if is_header_line(line):
                        continue
                yield parse_movement_line(line)
        except (OSError, UnicodeDecodeError) as ex:
            raise JournalReadError(f"Failed to read CSV file {self.path}: {ex}") from ex


def open_journal(path: str) -> MovementStream:
    """
    Open a journal file for streaming.

    Raises:
        JournalReadError: If the file cannot be opened
    """
    return MovementStream(path).open()
