from dataclasses import dataclass
import logging
import os
from typing import IO, Union

from symbolizer.cache import SymbolCache
from symbolizer.errors import ProcessingError, ResolutionError
from symbolizer.format import format_failure, format_line
from symbolizer.stats import LineStats, number_to_human
from symbolizer.target import FileTarget, StdoutTarget
from symbolizer.trace import TraceFile

LOG = logging.getLogger(__name__)


@dataclass
class ProcessOptions:
    skip: int = 0
    max_lines: int = 0  # 0 means no limit
    line_numbers: bool = False


class LineProcessor:
    """Streams one trace file through the cache into an output target.

    Lines are read one at a time, so memory use does not depend on the size
    of the trace. A failing address is reported on `diag` and counted; it
    never stops the file.
    """

    def __init__(self, cache: SymbolCache, options: ProcessOptions, diag: IO[str]):
        self.cache = cache
        self.options = options
        self.diag = diag

    def process(
        self, input_path: str, target: Union[FileTarget, StdoutTarget]
    ) -> LineStats:
        try:
            trace = TraceFile(input_path)
        except OSError as exc:
            raise ProcessingError(input_path, f"could not open input: {exc}") from exc
        try:
            with trace, target.open() as sink:
                return self._process(trace, sink)
        except OSError as exc:
            raise ProcessingError(input_path, f"I/O error: {exc}") from exc

    def _process(self, trace: TraceFile, sink: IO[str]) -> LineStats:
        stats = LineStats()
        filename = os.path.basename(trace.path)
        max_lines = self.options.max_lines
        for line in trace:
            if line.number < self.options.skip:
                continue
            address = line.address
            try:
                symbol = self.cache.resolve(address)
            except ResolutionError as exc:
                LOG.debug("%s:%d: %s", filename, line.number, exc)
                self.diag.write(
                    format_failure(filename, line.number, address, line.text)
                )
                stats.failed += 1
                continue
            line_number = line.number if self.options.line_numbers else None
            sink.write(format_line(symbol, line_number))
            stats.symbolized += 1
            if max_lines > 0 and stats.symbolized >= max_lines:
                self.diag.write(
                    "Hit the maximum number of symbolized lines "
                    f"{number_to_human(max_lines)}, exiting\n"
                )
                break
        return stats
