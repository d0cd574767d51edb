from dataclasses import dataclass
import re
from typing import Iterator

ADDRESS_MAX = 2 ** 64 - 1
ADDRESS_RE = re.compile(rb"\s*(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]*)")


def parse_address(raw: bytes) -> int:
    # Best effort, like strtoull(line, nullptr, 16): stray content parses to
    # 0 and is left for the resolver to reject.
    digits = ADDRESS_RE.match(raw).group(1)
    if len(digits) == 0:
        return 0
    return min(int(digits, 16), ADDRESS_MAX)


@dataclass
class TraceLine:
    number: int
    raw: bytes

    @property
    def address(self) -> int:
        return parse_address(self.raw)

    @property
    def text(self) -> str:
        return self.raw.split(b"\r", 1)[0].decode("utf-8", errors="replace")


class TraceFile:
    def __init__(self, path: str):
        self.path = path
        self.fp = open(path, "rb")

    def close(self) -> None:
        self.fp.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __iter__(self) -> Iterator[TraceLine]:
        for number, raw in enumerate(self.fp):
            if raw.endswith(b"\n"):
                raw = raw[:-1]
            yield TraceLine(number, raw)
