from __future__ import annotations

from contextlib import ExitStack
from dataclasses import dataclass, field
from typing import BinaryIO, Callable, Iterable, Optional, Union

from wordweave.core.merge.inputs import DEFAULT_BUFFER_SIZE, InputPool
from wordweave.core.merge.line_set import DedupMode, SeenSet, new_seen_set
from wordweave.core.report import NullReporter, Reporter


DEFAULT_PROGRESS_EVERY = 10_000


@dataclass(frozen=True)
class InputStats:
    path: str
    lines_read: int
    unique_written: int


@dataclass(frozen=True)
class MergeResult:
    unique_lines: int
    lines_read: int
    rounds: int
    approx_seen_bytes: int
    inputs: list[InputStats] = field(default_factory=list)

    @property
    def duplicates(self) -> int:
        return self.lines_read - self.unique_lines


def weave(
    pool: InputPool,
    sink: BinaryIO,
    *,
    seen: Optional[SeenSet] = None,
    reporter: Optional[Reporter] = None,
    progress_every: int = DEFAULT_PROGRESS_EVERY,
) -> MergeResult:
    """Round-robin over the pool, writing each not-yet-seen line once.

    Each round takes one line from every input that is still alive, in pool
    order. An input drops out at end of stream; the merge ends after a round
    in which nothing was read.
    """

    seen = seen if seen is not None else new_seen_set("hash")
    reporter = reporter or NullReporter()

    written = 0
    lines_read = 0
    rounds = 0
    progressed = True

    while progressed:
        progressed = False
        rounds += 1

        for cursor in pool:
            if not cursor.alive:
                continue
            line = cursor.read_line()
            if line is None:
                continue
            progressed = True
            lines_read += 1
            if seen.add(line):
                sink.write(line + b"\n")
                cursor.unique_written += 1
                written += 1

        if progress_every > 0 and rounds % progress_every == 0:
            reporter.progress(written, rounds)

    return MergeResult(
        unique_lines=written,
        lines_read=lines_read,
        rounds=rounds,
        approx_seen_bytes=seen.approx_bytes(),
        inputs=[
            InputStats(path=c.path, lines_read=c.lines_read, unique_written=c.unique_written)
            for c in pool
        ],
    )


def merge(
    paths: Iterable[str],
    sink: Union[BinaryIO, Callable[[], BinaryIO]],
    *,
    dedup: DedupMode = "hash",
    reporter: Optional[Reporter] = None,
    progress_every: int = DEFAULT_PROGRESS_EVERY,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> MergeResult:
    """Open `paths`, weave-merge them into `sink`, and release every input.

    `sink` is either a binary writable or a zero-argument callable that opens
    one. A callable is only invoked once at least one input is open, and the
    handle it returns is closed when the merge ends.

    Raises WeaveFatalError (E_NO_INPUT_OPENED) before writing anything when
    none of the inputs can be opened.
    """

    reporter = reporter or NullReporter()
    seen = new_seen_set(dedup)
    with InputPool.open(paths, reporter=reporter, buffer_size=buffer_size) as pool:
        with ExitStack() as stack:
            if callable(sink):
                sink = stack.enter_context(sink())
            reporter.info(f"Weave-merging {len(pool)} files...")
            return weave(
                pool,
                sink,
                seen=seen,
                reporter=reporter,
                progress_every=progress_every,
            )
