from __future__ import annotations

from contextlib import ExitStack
from dataclasses import dataclass
from typing import BinaryIO, Iterable, Iterator, Optional

from wordweave.core.errors import OpenWarning, WeaveFatalError
from wordweave.core.report import NullReporter, Reporter


DEFAULT_BUFFER_SIZE = 128 * 1024


@dataclass
class InputCursor:
    """Read position in one input. Becomes inactive at end of stream."""

    path: str
    handle: Optional[BinaryIO]
    lines_read: int = 0
    unique_written: int = 0

    @property
    def alive(self) -> bool:
        return self.handle is not None

    def read_line(self) -> Optional[bytes]:
        """Next line without its `\\n`, or None once the input is exhausted."""
        if self.handle is None:
            return None
        raw = self.handle.readline()
        if not raw:
            self.release()
            return None
        self.lines_read += 1
        if raw.endswith(b"\n"):
            return raw[:-1]
        return raw

    def release(self) -> None:
        if self.handle is not None:
            self.handle.close()
            self.handle = None


class InputPool:
    """Owns one open cursor per input for the length of a merge run.

    Use as a context manager; every handle is closed on exit, including when
    the run is aborted.
    """

    def __init__(self, cursors: list[InputCursor], stack: ExitStack) -> None:
        self.cursors = cursors
        self._stack = stack

    @classmethod
    def open(
        cls,
        paths: Iterable[str],
        *,
        reporter: Optional[Reporter] = None,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
    ) -> "InputPool":
        reporter = reporter or NullReporter()
        stack = ExitStack()
        cursors: list[InputCursor] = []
        try:
            for path in paths:
                try:
                    handle = open(path, "rb", buffering=buffer_size)
                except OSError as e:
                    reporter.warning(
                        OpenWarning(
                            code="W_OPEN_FAILED",
                            message=f"could not open file: {e.strerror or e}",
                            file=path,
                        )
                    )
                    continue
                cursor = InputCursor(path=path, handle=handle)
                stack.callback(cursor.release)
                cursors.append(cursor)
        except BaseException:
            stack.close()
            raise

        if not cursors:
            stack.close()
            raise WeaveFatalError(
                code="E_NO_INPUT_OPENED",
                message="no input files could be opened for weave-merge",
            )
        return cls(cursors, stack)

    def __enter__(self) -> "InputPool":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __iter__(self) -> Iterator[InputCursor]:
        return iter(self.cursors)

    def __len__(self) -> int:
        return len(self.cursors)

    @property
    def active(self) -> list[InputCursor]:
        return [c for c in self.cursors if c.alive]

    def close(self) -> None:
        self._stack.close()
