import logging
from typing import Callable, List, Optional

from symbolizer.errors import BackendError, ModuleNotFound, SymbolNotFound
from symbolizer.modules import Module, ModuleMap
from symbolizer.style import TraceStyle

LOG = logging.getLogger(__name__)


class Resolver:
    """Answers "what is at this address" for one loaded image or dump.

    A resolver is a session: it owns whatever the backend keeps open and
    releases it exactly once, either through close() or by leaving a with
    block. Queries on a closed session fail with BackendError.
    """

    def __init__(self):
        self.closed = False
        self._cleanups: List[Callable[[], None]] = []

    def on_close(self, cleanup: Callable[[], None]) -> None:
        self._cleanups.append(cleanup)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        while self._cleanups:
            self._cleanups.pop()()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def resolve(self, address: int, style: TraceStyle) -> str:
        if self.closed:
            raise BackendError(address, "session is closed")
        if style is TraceStyle.MODOFF:
            return self.resolve_module_offset(address)
        return self.resolve_full_symbol(address)

    def resolve_module_offset(self, address: int) -> str:
        raise NotImplementedError()

    def resolve_full_symbol(self, address: int) -> str:
        raise NotImplementedError()


class ModuleResolver(Resolver):
    def __init__(self, modules: ModuleMap):
        super().__init__()
        self.modules = modules

    def _module(self, address: int) -> Module:
        module: Optional[Module] = self.modules.find(address)
        if module is None:
            raise ModuleNotFound(address, "no module covers this address")
        return module

    def resolve_module_offset(self, address: int) -> str:
        module = self._module(address)
        return f"{module.name}+0x{address - module.start:x}"

    def resolve_full_symbol(self, address: int) -> str:
        module = self._module(address)
        if module.symbols is None:
            raise SymbolNotFound(address, f"no symbols loaded for {module.name}")
        found = module.symbols.lookup(address - module.start)
        if found is None:
            raise SymbolNotFound(address, f"no symbol precedes it in {module.name}")
        name, displacement = found
        return f"{module.name}!{name}+0x{displacement:x}"
