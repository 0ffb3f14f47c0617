from __future__ import annotations

import hashlib
import sys
from typing import Literal, Protocol, Union


DedupMode = Literal["hash", "exact"]
DEDUP_MODES: tuple[str, ...] = ("hash", "exact")

# 64-bit digests: collisions are possible and accepted in "hash" mode.
DIGEST_SIZE = 8


def line_hash(line: bytes) -> int:
    digest = hashlib.blake2b(line, digest_size=DIGEST_SIZE).digest()
    return int.from_bytes(digest, "little")


class SeenSet(Protocol):
    def add(self, line: bytes) -> bool: ...

    def __len__(self) -> int: ...

    def approx_bytes(self) -> int: ...


class HashedLineSet:
    """Remembers line digests only. A colliding line is treated as already seen."""

    def __init__(self) -> None:
        self._hashes: set[int] = set()

    def add(self, line: bytes) -> bool:
        h = line_hash(line)
        if h in self._hashes:
            return False
        self._hashes.add(h)
        return True

    def __contains__(self, line: bytes) -> bool:
        return line_hash(line) in self._hashes

    def __len__(self) -> int:
        return len(self._hashes)

    def approx_bytes(self) -> int:
        # Set table plus one boxed int per member.
        per_item = sys.getsizeof(1 << (DIGEST_SIZE * 8 - 1))
        return sys.getsizeof(self._hashes) + per_item * len(self._hashes)


class ExactLineSet:
    """Remembers full line content. No false duplicates, more memory."""

    def __init__(self) -> None:
        self._lines: set[bytes] = set()
        self._payload = 0

    def add(self, line: bytes) -> bool:
        if line in self._lines:
            return False
        self._lines.add(line)
        self._payload += sys.getsizeof(line)
        return True

    def __contains__(self, line: bytes) -> bool:
        return line in self._lines

    def __len__(self) -> int:
        return len(self._lines)

    def approx_bytes(self) -> int:
        return sys.getsizeof(self._lines) + self._payload


def new_seen_set(mode: str = "hash") -> Union[HashedLineSet, ExactLineSet]:
    if mode == "hash":
        return HashedLineSet()
    if mode == "exact":
        return ExactLineSet()
    raise ValueError(f"unknown dedup mode: {mode} (choose one of: {', '.join(DEDUP_MODES)})")
