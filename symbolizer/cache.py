from typing import Dict

from symbolizer.resolver import Resolver
from symbolizer.style import TraceStyle


class SymbolCache:
    """Memoizes successful resolutions for one resolver and one style.

    Traces revisit a small set of addresses many times, so a run with N lines
    and U unique addresses only asks the resolver U times. Failures are not
    stored: the next lookup of a failing address asks the resolver again.
    """

    def __init__(self, resolver: Resolver, style: TraceStyle):
        self.resolver = resolver
        self.style = style
        self._symbols: Dict[int, str] = {}

    def resolve(self, address: int) -> str:
        symbol = self._symbols.get(address)
        if symbol is None:
            symbol = self.resolver.resolve(address, self.style)
            self._symbols[address] = symbol
        return symbol

    def __contains__(self, address: int) -> bool:
        return address in self._symbols

    def __len__(self) -> int:
        return len(self._symbols)
