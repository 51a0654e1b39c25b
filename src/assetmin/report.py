"""Before/after size accounting for a minification run."""
from __future__ import annotations

from dataclasses import dataclass


def _kilobytes(size: int) -> float:
    return round(size / 1024, 2)


def _percent(before: int, after: int) -> float:
    if before == 0:
        return 0.0
    return round((before - after) / before * 100, 2)


@dataclass(frozen=True)
class SizeReport:
    """Sizes are in bytes; ``elapsed`` is in milliseconds when known."""

    generator: str
    before: int
    after: int
    key: str | None = None
    elapsed: float | None = None

    @property
    def saved(self) -> int:
        return self.before - self.after

    @property
    def percent(self) -> float:
        return _percent(self.before, self.after)

    @property
    def message(self) -> str:
        before_kb = _kilobytes(self.before)
        after_kb = _kilobytes(self.after)
        parts = [
            f"{self.generator} reduced",
            self.key,
            f"by {self.percent}%.",
            f"{before_kb}KB to {after_kb}KB, saving {round(before_kb - after_kb, 2)}KB.",
        ]
        if self.elapsed is not None:
            parts.append(f"Taking {self.elapsed:.3f}ms to complete.")
        return " ".join(p for p in parts if p)

    def __str__(self) -> str:
        return self.message


def size_report(
    generator: str,
    before: str | bytes | int,
    after: str | bytes | int,
    key: str | None = None,
    elapsed: float | None = None,
) -> SizeReport:
    """Build a :class:`SizeReport` from texts or byte counts.

    Text is measured in UTF-8 bytes.
    """
    return SizeReport(
        generator=generator,
        before=_size(before),
        after=_size(after),
        key=key,
        elapsed=elapsed,
    )


def _size(value: str | bytes | int) -> int:
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        value = value.encode("utf-8")
    return len(value)
