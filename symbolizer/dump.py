import logging
import ntpath
from typing import BinaryIO

from minidump.minidumpfile import MinidumpFile

from symbolizer.errors import InitError
from symbolizer.modules import Module, ModuleMap
from symbolizer.resolver import ModuleResolver

LOG = logging.getLogger(__name__)


def module_name(path: str) -> str:
    # C:\Windows\System32\ntdll.dll -> ntdll
    return ntpath.splitext(ntpath.basename(path))[0]


class MinidumpResolver(ModuleResolver):
    """Module map of a Windows minidump. Owns the dump's file handle."""

    def __init__(self, dump: MinidumpFile):
        super().__init__(ModuleMap())
        self.dump = dump
        self.on_close(dump.file_handle.close)


def parse_minidump(fp: BinaryIO, path: str) -> MinidumpFile:
    try:
        return MinidumpFile.parse_external(fp, path)
    except Exception as exc:
        fp.close()
        raise InitError(f"Could not parse {path}: {exc}") from exc


def open_minidump(path: str) -> MinidumpResolver:
    try:
        fp = open(path, "rb")
    except OSError as exc:
        raise InitError(f"Could not open {path}: {exc}") from exc
    resolver = MinidumpResolver(parse_minidump(fp, path))
    if resolver.dump.modules is None:
        resolver.close()
        raise InitError(f"{path} has no module list")
    for entry in resolver.dump.modules.modules:
        module = Module(
            name=module_name(entry.name),
            start=entry.baseaddress,
            end=entry.baseaddress + entry.size,
        )
        try:
            resolver.modules.add(module)
        except ValueError as exc:
            LOG.warning("Ignoring module %s: %s", entry.name, exc)
    if len(resolver.modules) == 0:
        resolver.close()
        raise InitError(f"{path} has no usable modules")
    LOG.debug("Loaded %d modules from %s", len(resolver.modules), path)
    return resolver
