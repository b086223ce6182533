"""Settings for building a registrar, read from ``REGISTRAR_*`` environment variables."""

from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from registrar.errors import SettingsError
from registrar.scope import DEFAULT_SOURCE_ROOTS

__all__ = ["OnStartPolicy", "RegistrarSettings", "load_settings"]


class OnStartPolicy(str, Enum):
    """Which components ``on_start_register`` picks up.

    DIRECT: components marked with RegisterOnStart themselves.
    META: components marked with a marker class that is marked RegisterOnStart.
    BOTH: the union of the two.
    """

    DIRECT = "direct"
    META = "meta"
    BOTH = "both"


class RegistrarSettings(BaseSettings):
    """Settings consumed by :func:`registrar.builders.make_registrar`.

    Attributes:
        scope: Dotted module path to scan. If unset, resolved from ``search_root``.
        search_root: Directory from which the scope is resolved.
        source_roots: Path prefixes stripped while resolving the scope.
        on_start_policy: Policy applied by ``on_start_register``.
        import_modules: Import every module in scope before scanning.
    """

    model_config = SettingsConfigDict(env_prefix="REGISTRAR_", extra="ignore")

    scope: Optional[str] = None
    search_root: Path = Path(".")
    source_roots: list[str] = Field(default_factory=lambda: list(DEFAULT_SOURCE_ROOTS))
    on_start_policy: OnStartPolicy = OnStartPolicy.BOTH
    import_modules: bool = True


def load_settings(**overrides: Any) -> RegistrarSettings:
    """Load settings from the environment, with keyword overrides taking precedence.

    Raises:
        SettingsError: If a setting fails validation.
    """
    try:
        return RegistrarSettings(**overrides)
    except ValidationError as e:
        first_error = e.errors()[0]
        field = ".".join(str(loc) for loc in first_error["loc"])
        raise SettingsError(
            f"Invalid setting <{field}>: {first_error['msg']}", field=field
        ) from e
