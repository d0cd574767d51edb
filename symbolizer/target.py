from contextlib import contextmanager
import os
from typing import IO, Iterator

from symbolizer.errors import ProcessingError


class StdoutTarget:
    def __init__(self, stream: IO[str]):
        self.stream = stream

    def exists(self) -> bool:
        return False

    @contextmanager
    def open(self) -> Iterator[IO[str]]:
        try:
            yield self.stream
        finally:
            self.stream.flush()

    def __str__(self) -> str:
        return "<stdout>"


class FileTarget:
    def __init__(self, path: str):
        self.path = path

    def exists(self) -> bool:
        return os.path.exists(self.path)

    @contextmanager
    def open(self) -> Iterator[IO[str]]:
        try:
            fp = open(self.path, "w", encoding="utf-8", newline="")
        except OSError as exc:
            raise ProcessingError(self.path, f"could not create output: {exc}") from exc
        with fp:
            yield fp

    def __str__(self) -> str:
        return self.path
