from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from wordweave.core.errors import WeaveError


class Reporter(Protocol):
    """Diagnostic side channel used by the resolver and the merger."""

    def warning(self, item: WeaveError) -> None: ...

    def info(self, message: str) -> None: ...

    def progress(self, unique_lines: int, rounds: int) -> None: ...


class NullReporter:
    def warning(self, item: WeaveError) -> None:
        return

    def info(self, message: str) -> None:
        return

    def progress(self, unique_lines: int, rounds: int) -> None:
        return


@dataclass
class CollectingReporter:
    """Keeps everything it is told. Handy in tests and for batch callers."""

    warnings: list[WeaveError] = field(default_factory=list)
    messages: list[str] = field(default_factory=list)
    ticks: list[tuple[int, int]] = field(default_factory=list)

    def warning(self, item: WeaveError) -> None:
        self.warnings.append(item)

    def info(self, message: str) -> None:
        self.messages.append(message)

    def progress(self, unique_lines: int, rounds: int) -> None:
        self.ticks.append((unique_lines, rounds))

    @property
    def warning_codes(self) -> list[str]:
        return [w.code for w in self.warnings]
