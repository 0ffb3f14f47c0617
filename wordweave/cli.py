from __future__ import annotations

from pathlib import Path
from typing import Any, BinaryIO, Optional

import click
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from wordweave.core.errors import ConfigError, WeaveError, WeaveFatalError
from wordweave.core.io.load_config import load_and_merge
from wordweave.core.merge.line_set import DEDUP_MODES
from wordweave.core.merge.weave_merge import MergeResult, merge
from wordweave.core.resolve.expand_patterns import expand_patterns

app = typer.Typer(add_completion=False, no_args_is_help=False)

OUTPUT_BUFFER_SIZE = 1024 * 1024


class ConsoleReporter:
    """Renders diagnostics on stderr. Merged content never goes through here."""

    def __init__(self, console: Console, quiet: bool = False) -> None:
        self.console = console
        self.quiet = quiet
        self._progress_shown = False

    def warning(self, item: WeaveError) -> None:
        self._end_progress()
        typer.echo(f"WARN: {item}", err=True)

    def info(self, message: str) -> None:
        if self.quiet:
            return
        self._end_progress()
        self.console.print(message, markup=False, highlight=False, soft_wrap=True)

    def progress(self, unique_lines: int, rounds: int) -> None:
        if self.quiet:
            return
        self.console.print(
            f"Progress: {unique_lines} unique lines written (round {rounds})...",
            end="\r",
            markup=False,
            highlight=False,
        )
        self._progress_shown = True

    def _end_progress(self) -> None:
        if self._progress_shown:
            self.console.print()
            self._progress_shown = False


@app.command()
def weave_cmd(
    patterns: Optional[list[str]] = typer.Argument(
        None,
        help="Input files or globs (`*` and `?` in the file name part); "
        "put `--` before names that start with `-`",
    ),
    output: Optional[str] = typer.Option(
        None, "-o", "--output", help="Output file (default: merged.txt)"
    ),
    config_file: Optional[str] = typer.Option(
        None, "--config", help="Optional YAML file with default settings"
    ),
    dedup: Optional[str] = typer.Option(
        None, "--dedup", help="Deduplication: hash (default, 64-bit digests) or exact"
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only print warnings and errors"),
) -> None:
    """Weave-merge wordlists: one line from each file per round, duplicates dropped."""
    if not patterns:
        _print_errors(
            [
                WeaveFatalError(
                    code="E_NO_PATTERNS",
                    message="no input files specified (supports wildcards: *.txt, file?.txt)",
                )
            ]
        )
        raise typer.Exit(code=1)

    try:
        settings = load_and_merge(config_file)
    except FileNotFoundError:
        _print_errors(
            [
                WeaveFatalError(
                    code="E_CONFIG_FILE_NOT_FOUND",
                    message=f"config file not found: {config_file}",
                    file=config_file,
                )
            ]
        )
        raise typer.Exit(code=1)
    except ConfigError as e:
        _print_errors(
            [WeaveFatalError(code="E_CONFIG_FILE_INVALID", message=str(e), file=config_file)]
        )
        raise typer.Exit(code=1)

    if output is not None:
        settings["output"] = output
    if dedup is not None:
        if dedup not in DEDUP_MODES:
            _print_errors(
                [
                    WeaveFatalError(
                        code="E_UNKNOWN_DEDUP",
                        message=f"unknown dedup mode: {dedup} (choose one of: {', '.join(DEDUP_MODES)})",
                    )
                ]
            )
            raise typer.Exit(code=1)
        settings["dedup"] = dedup

    reporter = ConsoleReporter(Console(stderr=True), quiet=quiet)

    reporter.info("Expanding file patterns...")
    paths = expand_patterns(patterns, reporter=reporter)
    if not paths:
        _print_errors(
            [WeaveFatalError(code="E_NO_INPUT_FILES", message="no valid input files found")]
        )
        raise typer.Exit(code=1)

    reporter.info(f"Processing {len(paths)} files...")
    if len(paths) > settings["fd_warning_threshold"]:
        reporter.warning(
            WeaveError(
                code="W_MANY_FILES",
                message=(
                    f"opening {len(paths)} files simultaneously; "
                    "if you encounter errors, your OS may have file descriptor limits"
                ),
            )
        )

    out_path = settings["output"]
    try:
        result = _run(paths, out_path, settings, reporter)
    except WeaveFatalError as e:
        _print_errors([e])
        raise typer.Exit(code=1)

    _print_summary(reporter, result, out_path)


def _run(
    paths: list[str], out_path: str, settings: dict[str, Any], reporter: ConsoleReporter
) -> MergeResult:
    def open_sink() -> BinaryIO:
        reporter.info(f"Output file: {out_path}")
        return _open_output(out_path, reporter)

    return merge(
        paths,
        open_sink,
        dedup=settings["dedup"],
        reporter=reporter,
        progress_every=settings["progress_every"],
        buffer_size=settings["buffer_size"],
    )


def _open_output(path: str, reporter: ConsoleReporter) -> BinaryIO:
    p = Path(path)
    try:
        if str(p.parent) not in (".", "") and not p.parent.is_dir():
            p.parent.mkdir(parents=True, exist_ok=True)
            reporter.info(f"Created output directory: {p.parent}")
        return open(p, "wb", buffering=OUTPUT_BUFFER_SIZE)
    except OSError as e:
        raise WeaveFatalError(
            code="E_OUTPUT_OPEN",
            message=f"could not open output file: {e.strerror or e}",
            file=path,
        ) from e


def _print_summary(reporter: ConsoleReporter, result: MergeResult, out_path: str) -> None:
    if reporter.quiet:
        return
    reporter.info(f"Merge complete: {result.unique_lines} unique lines written")
    reporter.info(f"Duplicates suppressed: {result.duplicates}")
    reporter.info(f"Memory usage: ~{result.approx_seen_bytes // 1024 // 1024} MB")

    table = Table(title="wordweave inputs")
    table.add_column("File")
    table.add_column("Lines", justify="right")
    table.add_column("Unique", justify="right")
    for s in result.inputs:
        table.add_row(escape(s.path), str(s.lines_read), str(s.unique_written))
    reporter.console.print(table)

    reporter.info(f"Output written to: {out_path}")


def _print_errors(errors: list[WeaveError]) -> None:
    errors_sorted = sorted(errors, key=lambda e: (e.file or "", e.code))
    for e in errors_sorted:
        typer.echo(str(e), err=True)


def main(argv: Optional[list[str]] = None) -> None:
    """Console entry point. Usage errors exit with code 1."""
    command = typer.main.get_command(app)
    try:
        rv = command.main(args=argv, prog_name="wordweave", standalone_mode=False)
    except click.UsageError as e:
        e.show()
        raise SystemExit(1)
    except click.Abort:
        typer.echo("Aborted!", err=True)
        raise SystemExit(1)
    raise SystemExit(rv or 0)


cli = typer.main.get_command(app)

if __name__ == "__main__":
    main()
