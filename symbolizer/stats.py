from dataclasses import dataclass
from typing import IO

K = 1000
M = K * K
MINUTE = 60
HOUR = MINUTE * 60
DAY = HOUR * 24


@dataclass
class LineStats:
    symbolized: int = 0
    failed: int = 0


@dataclass
class RunStats:
    symbolized: int = 0
    failed: int = 0
    files: int = 0
    skipped: int = 0
    errors: int = 0
    elapsed: float = 0.0

    def add(self, stats: LineStats) -> None:
        self.symbolized += stats.symbolized
        self.failed += stats.failed
        self.files += 1


def number_to_human(n: int) -> str:
    if n > M:
        return f"{n / M:.1f}m"
    if n > K:
        return f"{n / K:.1f}k"
    return f"{n:.1f}"


def seconds_to_human(seconds: float) -> str:
    if seconds >= DAY:
        return f"{seconds / DAY:.1f}d"
    if seconds >= HOUR:
        return f"{seconds / HOUR:.1f}hr"
    if seconds >= MINUTE:
        return f"{seconds / MINUTE:.1f}min"
    return f"{seconds:.1f}s"


def pp(stats: RunStats, fp: IO[str]) -> None:
    fp.write(
        f"Completed symbolization of {number_to_human(stats.symbolized)} "
        f"addresses ({number_to_human(stats.failed)} failed) in "
        f"{seconds_to_human(stats.elapsed)} across "
        f"{number_to_human(stats.files)} files.\n"
    )
    if stats.skipped != 0 or stats.errors != 0:
        fp.write(f"{stats.skipped} files skipped, {stats.errors} files failed.\n")
