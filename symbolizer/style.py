from enum import Enum


class TraceStyle(Enum):
    MODOFF = "modoff"
    FULLSYM = "fullsym"

    @staticmethod
    def parse(name: str) -> "TraceStyle":
        try:
            return TraceStyle(name.lower())
        except ValueError:
            raise ValueError(f"Unknown trace style: {name}") from None
