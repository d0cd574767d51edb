class SymbolizerError(Exception):
    pass


class InitError(SymbolizerError):
    """The resolver backend could not be started."""


class ConfigurationError(SymbolizerError):
    """The input/output combination does not make sense."""


class ProcessingError(SymbolizerError):
    def __init__(self, path: str, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path


class ResolutionError(SymbolizerError):
    def __init__(self, address: int, message: str):
        super().__init__(f"0x{address:x}: {message}")
        self.address = address


class ModuleNotFound(ResolutionError):
    pass


class SymbolNotFound(ResolutionError):
    pass


class BackendError(ResolutionError):
    pass
