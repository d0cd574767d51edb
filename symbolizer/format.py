from typing import Optional


def format_line(symbol: str, line_number: Optional[int] = None) -> str:
    if line_number is None:
        return f"{symbol}\n"
    return f"l{line_number}: {symbol}\n"


def format_failure(filename: str, line_number: int, address: int, text: str) -> str:
    return (
        f"{filename}:{line_number}: Symbolization of {address} failed "
        f"('{text}'), skipping\n"
    )
