from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class WeaveError(Exception):
    """Base error envelope. Warnings are reported, fatal errors are raised."""

    code: str
    message: str
    file: Optional[str] = None

    def __str__(self) -> str:
        loc = self.file if self.file else "<wordweave>"
        return f"{loc}: {self.code}: {self.message}"


class ResolveWarning(WeaveError):
    pass


class OpenWarning(WeaveError):
    pass


class WeaveFatalError(WeaveError):
    pass


class ConfigError(ValueError):
    pass
