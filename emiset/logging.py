from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import List


@dataclass(frozen=True)
class Diagnostic:
    kind: str
    offset: int
    message: str


@dataclass
class DiagnosticLog:
    """Collects decoder observations that do not abort decoding."""

    destination: Path | None = None
    entries: List[Diagnostic] = field(default_factory=list)

    def record(self, kind: str, offset: int, message: str) -> None:
        self.entries.append(Diagnostic(kind=kind, offset=offset, message=message))

    def __len__(self) -> int:
        return len(self.entries)

    def summary(self) -> str:
        if not self.entries:
            return "no diagnostics"
        counts = Counter(entry.kind for entry in self.entries)
        return ", ".join(f"{kind}={count}" for kind, count in sorted(counts.items()))

    def lines(self) -> List[str]:
        return [
            f"#{idx:04d} offset=0x{entry.offset:04X} kind={entry.kind:<16} {entry.message}"
            for idx, entry in enumerate(self.entries, start=1)
        ]

    def flush(self) -> None:
        if self.destination is None:
            return
        self.destination.parent.mkdir(parents=True, exist_ok=True)
        lines = self.lines()
        self.destination.write_text("\n".join(lines) + ("\n" if lines else ""), encoding="utf-8")
