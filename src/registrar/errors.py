"""Exceptions raised by the registrar."""

from typing import Iterable, Optional

__all__ = [
    "RegistrarError",
    "DescriptorError",
    "ConfigurationError",
    "UnavailableLoaderError",
    "ScanError",
    "RegistrarStateError",
    "SettingsError",
]


class RegistrarError(Exception):
    """Base class for every error raised by the registrar.

    Attributes:
        message: Human-readable description of what went wrong.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class DescriptorError(RegistrarError):
    """Raised when a descriptor or marker is attached incorrectly."""

    pass


class ConfigurationError(RegistrarError):
    """Raised when components use the DefaultLoader without a zero-argument constructor.

    Attributes:
        offenders: The offending types, ordered by name.
    """

    def __init__(self, offenders: Iterable):
        self.offenders = tuple(sorted(offenders))
        plural = "es" if len(self.offenders) != 1 else ""
        super().__init__(
            f"Found {len(self.offenders)} class{plural} missing a zero-arg constructor "
            f"while using DefaultLoader: {', '.join(t.name for t in self.offenders)}"
        )


class UnavailableLoaderError(RegistrarError, LookupError):
    """Raised when a loader is requested that was never registered."""

    def __init__(self, loader_name: str):
        self.loader_name = loader_name
        super().__init__(f"Loader for <{loader_name}> was not defined")


class ScanError(RegistrarError):
    """Raised when the modules of a scope cannot be imported."""

    pass


class RegistrarStateError(RegistrarError):
    """Raised when an operation is attempted in the wrong lifecycle state."""

    pass


class SettingsError(RegistrarError):
    """Raised when settings fail validation.

    Attributes:
        field: Dotted name of the offending setting, if known.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)
