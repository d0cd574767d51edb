import logging
import os
from typing import Optional

from elftools.common.exceptions import ELFError
from elftools.elf.elffile import ELFFile
from elftools.elf.sections import SymbolTableSection

from symbolizer.errors import InitError
from symbolizer.modules import Module, ModuleMap, SymbolTable
from symbolizer.resolver import ModuleResolver

LOG = logging.getLogger(__name__)


def _read_symbols(elf: ELFFile, link_start: int) -> SymbolTable:
    symbols = SymbolTable()
    for section in elf.iter_sections():
        if not isinstance(section, SymbolTableSection):
            continue
        for symbol in section.iter_symbols():
            if symbol["st_info"]["type"] != "STT_FUNC":
                continue
            if symbol["st_shndx"] == "SHN_UNDEF" or symbol["st_value"] == 0:
                continue
            if not symbol.name:
                continue
            symbols.add(symbol["st_value"] - link_start, symbol.name)
    return symbols


def load_elf(path: str, base: Optional[int] = None) -> Module:
    try:
        with open(path, "rb") as fp:
            elf = ELFFile(fp)
            segments = [
                segment
                for segment in elf.iter_segments()
                if segment["p_type"] == "PT_LOAD"
            ]
            if len(segments) == 0:
                raise InitError(f"{path} has no loadable segments")
            link_start = min(segment["p_vaddr"] for segment in segments)
            link_end = max(
                segment["p_vaddr"] + segment["p_memsz"] for segment in segments
            )
            symbols = _read_symbols(elf, link_start)
    except (OSError, ELFError) as exc:
        raise InitError(f"Could not load {path}: {exc}") from exc
    start = link_start if base is None else base
    name = os.path.basename(path)
    LOG.debug(
        "Loaded %s at 0x%x-0x%x with %d symbols",
        name,
        start,
        start + link_end - link_start,
        len(symbols),
    )
    return Module(
        name=name,
        start=start,
        end=start + link_end - link_start,
        symbols=symbols if len(symbols) > 0 else None,
    )


def open_elf(path: str, base: Optional[int] = None) -> ModuleResolver:
    modules = ModuleMap()
    modules.add(load_elf(path, base))
    return ModuleResolver(modules)
