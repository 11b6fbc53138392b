class MemmetError(Exception):
    """Base class for every error that ends a memmet run."""


class ProbeFailure(MemmetError):
    pass


class UnsupportedPolicy(MemmetError):
    pass


class InsufficientInputs(MemmetError):
    pass


class InvalidExtension(MemmetError):
    pass


class ConfigIOFailure(MemmetError):
    pass


class ConfigParseFailure(MemmetError):
    pass


class InputTraversalError(MemmetError):
    pass


class FFmpegError(MemmetError):
    pass


class FFmpegNotInstalled(FFmpegError):
    pass
