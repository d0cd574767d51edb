from dataclasses import dataclass
import logging
import os
import sys
import time
from typing import Callable, IO, List, Optional, Union

from symbolizer.cache import SymbolCache
from symbolizer.errors import ConfigurationError, ProcessingError
from symbolizer.processor import LineProcessor, ProcessOptions
from symbolizer.resolver import Resolver
from symbolizer.stats import RunStats, pp
from symbolizer.style import TraceStyle
from symbolizer.target import FileTarget, StdoutTarget

LOG = logging.getLogger(__name__)

OUTPUT_SUFFIX = ".symbolizer"

Target = Union[FileTarget, StdoutTarget]


class StdoutLayout:
    def __init__(self, stream: IO[str]):
        self.target = StdoutTarget(stream)

    def target_for(self, input_path: str) -> Target:
        return self.target


class FileLayout:
    def __init__(self, path: str):
        self.path = path

    def target_for(self, input_path: str) -> Target:
        return FileTarget(self.path)


class DirectoryLayout:
    def __init__(self, path: str):
        self.path = path

    def target_for(self, input_path: str) -> Target:
        filename = os.path.basename(input_path) + OUTPUT_SUFFIX
        return FileTarget(os.path.join(self.path, filename))


Layout = Union[StdoutLayout, FileLayout, DirectoryLayout]


def plan_layout(input: str, output: str, stdout: IO[str]) -> Layout:
    if not os.path.exists(input):
        raise ConfigurationError(f"The input {input} does not exist")
    input_is_directory = os.path.isdir(input)
    if not input_is_directory and not os.path.isfile(input):
        raise ConfigurationError(
            f"The input {input} is neither a file nor a directory"
        )
    if output == "":
        return StdoutLayout(stdout)
    if os.path.isdir(output):
        return DirectoryLayout(output)
    if input_is_directory:
        raise ConfigurationError(
            "When the input is a directory, the output can only be either "
            "empty (for stdout) or a directory as well"
        )
    if not os.path.exists(output) or os.path.isfile(output):
        return FileLayout(output)
    raise ConfigurationError(f"The output {output} is not a regular file")


@dataclass
class Job:
    input: str
    target: Target


class BatchCoordinator:
    """Symbolizes one trace file or a directory full of them.

    The coordinator owns the resolver session and the symbol cache for the
    whole run: `open_resolver` is called once, after the configuration has
    been validated, and the session it returns is closed however the run
    ends.
    """

    def __init__(
        self,
        input: str,
        output: str,
        open_resolver: Callable[[], Resolver],
        style: TraceStyle = TraceStyle.FULLSYM,
        options: Optional[ProcessOptions] = None,
        overwrite: bool = False,
        stdout: Optional[IO[str]] = None,
        stderr: Optional[IO[str]] = None,
    ):
        self.input = input
        self.output = output
        self.open_resolver = open_resolver
        self.style = style
        self.options = ProcessOptions() if options is None else options
        self.overwrite = overwrite
        self.stdout = sys.stdout if stdout is None else stdout
        self.stderr = sys.stderr if stderr is None else stderr

    def _inputs(self) -> List[str]:
        if not os.path.isdir(self.input):
            return [self.input]
        inputs = []
        try:
            with os.scandir(self.input) as entries:
                for entry in entries:
                    if not entry.is_file():
                        continue
                    # Outputs written next to their inputs on a previous run.
                    if entry.name.endswith(OUTPUT_SUFFIX):
                        self.stderr.write(f"Skipping {entry.path}..\n")
                        continue
                    inputs.append(entry.path)
        except OSError as exc:
            raise ConfigurationError(
                f"Could not list the input directory {self.input}: {exc}"
            ) from exc
        return inputs

    def plan(self) -> List[Job]:
        layout = plan_layout(self.input, self.output, self.stdout)
        return [Job(input, layout.target_for(input)) for input in self._inputs()]

    def run(self) -> RunStats:
        jobs = self.plan()
        stats = RunStats()
        with self.open_resolver() as resolver:
            cache = SymbolCache(resolver, self.style)
            processor = LineProcessor(cache, self.options, self.stderr)
            self.stderr.write("Starting to process files..\n")
            start = time.monotonic()
            try:
                for job in jobs:
                    self._run_job(processor, job, stats, len(jobs))
            finally:
                stats.elapsed = time.monotonic() - start
                LOG.debug("%d unique addresses cached", len(cache))
                pp(stats, self.stderr)
        return stats

    def _run_job(
        self, processor: LineProcessor, job: Job, stats: RunStats, total: int
    ) -> None:
        if job.target.exists():
            if not self.overwrite:
                self.stderr.write(
                    f"The output file {job.target} already exists, continuing\n"
                )
                stats.skipped += 1
                return
            self.stderr.write(f"The output file {job.target} will be overwritten..\n")
        try:
            file_stats = processor.process(job.input, job.target)
        except ProcessingError as exc:
            self.stderr.write(f"Processing {job.input} failed ({exc}), continuing\n")
            stats.errors += 1
            return
        stats.add(file_stats)
        self.stderr.write(f"[{stats.files} / {total}] {job.input} done\n")
