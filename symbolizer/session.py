from typing import Optional

from symbolizer.dump import open_minidump
from symbolizer.elf import open_elf
from symbolizer.errors import InitError
from symbolizer.resolver import Resolver

MINIDUMP_MAGIC = b"MDMP"
ELF_MAGIC = b"\x7fELF"


def open_session(path: str, base: Optional[int] = None) -> Resolver:
    """Open a resolver session over a crash dump or a binary image.

    The backend is picked from the file's magic. `base` overrides the load
    address of an ELF image and is ignored for dumps, which record their own
    module addresses.
    """
    try:
        with open(path, "rb") as fp:
            magic = fp.read(4)
    except OSError as exc:
        raise InitError(f"Could not open {path}: {exc}") from exc
    if magic == MINIDUMP_MAGIC:
        return open_minidump(path)
    if magic == ELF_MAGIC:
        return open_elf(path, base)
    raise InitError(f"{path} is neither a minidump nor an ELF image")
