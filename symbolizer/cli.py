#!/usr/bin/env python3
import functools
import logging
import sys

import click
import click.types

import symbolizer
from symbolizer.batch import BatchCoordinator
from symbolizer.errors import ConfigurationError, InitError
from symbolizer.processor import ProcessOptions
from symbolizer.session import open_session
from symbolizer.style import TraceStyle


class AnyIntParamType(click.types.IntParamType):
    def convert(self, value, param, ctx):
        if isinstance(value, int):
            return value
        try:
            return int(value, 0)
        except ValueError:
            self.fail(f"{value!r} is not a valid integer", param, ctx)


@click.command(help="symbolizer version " + symbolizer.__version__)
@click.option(
    "-i",
    "--input",
    required=True,
    type=click.Path(exists=True),
    help="Input trace file or directory",
)
@click.option(
    "-c",
    "--crash-dump",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Crash-dump or binary image path",
)
@click.option(
    "-o",
    "--output",
    default="",
    help="Output trace file or directory (default: stdout)",
)
@click.option(
    "-s",
    "--skip",
    type=AnyIntParamType(),
    default="0",
    help="Skip a number of lines",
)
@click.option(
    "-m",
    "--max",
    "max_lines",
    type=AnyIntParamType(),
    default="20000000",
    help="Stop after a number of symbolized lines per file (0: no limit)",
)
@click.option(
    "--style",
    type=click.Choice([style.value for style in TraceStyle], case_sensitive=False),
    default="fullsym",
    help="Trace style",
)
@click.option(
    "--overwrite",
    is_flag=True,
    help="Overwrite the output file if necessary",
)
@click.option(
    "--line-numbers",
    is_flag=True,
    help="Include line numbers",
)
@click.option(
    "--base",
    type=AnyIntParamType(),
    help="Load address of an ELF image (default: its link address)",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable debug logging",
)
def main(
    input,
    crash_dump,
    output,
    skip,
    max_lines,
    style,
    overwrite,
    line_numbers,
    base,
    verbose,
):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )
    coordinator = BatchCoordinator(
        input=input,
        output=output,
        open_resolver=functools.partial(open_session, crash_dump, base),
        style=TraceStyle.parse(style),
        options=ProcessOptions(
            skip=skip,
            max_lines=max_lines,
            line_numbers=line_numbers,
        ),
        overwrite=overwrite,
    )
    try:
        coordinator.run()
    except ConfigurationError as exc:
        print(exc, file=sys.stderr)
        sys.exit(1)
    except InitError as exc:
        print(f"Failed to initialize the resolver: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
