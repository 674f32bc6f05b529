"""Enforcement – SkipList."""
from __future__ import annotations

import dataclasses
from typing import Iterable


@dataclasses.dataclass(frozen=True)
class SkipList:
    """Paths that bypass enforcement.

    Entries starting with ``=`` match the path exactly (``=/`` skips only the
    root); every other entry is a prefix.
    """
    exact: frozenset[str] = frozenset()
    prefixes: tuple[str, ...] = ()

    @classmethod
    def parse(cls, entries: Iterable[str]) -> "SkipList":
        exact: set[str] = set()
        prefixes: list[str] = []
        for raw in entries:
            entry = raw.strip()
            if not entry:
                continue
            if entry.startswith("="):
                exact.add(entry[1:])
            else:
                prefixes.append(entry)
        return cls(exact=frozenset(exact), prefixes=tuple(prefixes))

    def matches(self, path: str) -> bool:
        return path in self.exact or path.startswith(self.prefixes)


__all__ = ["SkipList"]
