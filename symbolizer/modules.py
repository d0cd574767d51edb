from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from sortedcontainers import SortedDict, SortedKeyList


class SymbolTable:
    def __init__(self):
        self.store = SortedDict()

    def add(self, rva: int, name: str) -> None:
        # .symtab and .dynsym often name the same address; keep the first.
        self.store.setdefault(rva, name)

    def lookup(self, rva: int) -> Optional[Tuple[str, int]]:
        idx = self.store.bisect_right(rva) - 1
        if idx < 0:
            return None
        start, name = self.store.peekitem(idx)
        return name, rva - start

    def __len__(self) -> int:
        return len(self.store)


@dataclass
class Module:
    name: str
    start: int
    end: int  # exclusive
    symbols: Optional[SymbolTable] = None


class ModuleMap:
    def __init__(self):
        self.store = SortedKeyList(key=lambda module: module.end)

    def add(self, module: Module) -> None:
        if module.end <= module.start:
            raise ValueError(f"Empty module: {module.name}")
        other = self._first_ending_after(module.start)
        if other is not None and other.start < module.end:
            raise ValueError(f"{module.name} overlaps {other.name}")
        self.store.add(module)

    def _first_ending_after(self, address: int) -> Optional[Module]:
        # Modules never overlap, so the first one ending after the address
        # is the only candidate.
        for module in self.store.irange_key(address + 1):
            return module
        return None

    def find(self, address: int) -> Optional[Module]:
        module = self._first_ending_after(address)
        if module is None or module.start > address:
            return None
        return module

    def __iter__(self) -> Iterator[Module]:
        return iter(self.store)

    def __len__(self) -> int:
        return len(self.store)
