"""Registry of instantiated loaders, keyed by the loader class's qualified name.

The registry is built once, while a registrar initializes, and is read-only
afterwards. The built-in :class:`~registrar.loaders.DefaultLoader` is always
present; every scanned type whose :class:`~registrar.descriptors.LoaderInfo`
sets ``is_loader`` is constructed and added next to it.
"""

from types import MappingProxyType
from typing import Iterator, Mapping, Optional

from registrar.descriptors import DescriptorTable, LoaderInfo
from registrar.domain import qualified_name
from registrar.errors import UnavailableLoaderError
from registrar.loaders import DefaultLoader, Loader
from registrar.logging import get_logger
from registrar.scanner import Scanner

__all__ = ["LoaderRegistry", "build_loader_registry"]

logger = get_logger(__name__)


class LoaderRegistry:
    """Read-only mapping of loader names to loader instances.

    Example:
        >>> loaders = LoaderRegistry({qualified_name(DefaultLoader): DefaultLoader()})
        >>> loaders.loader_for(DefaultLoader)
        <registrar.loaders.DefaultLoader object at ...>
        >>> loaders["app.MissingLoader"]
        Traceback (most recent call last):
        UnavailableLoaderError: Loader for <app.MissingLoader> was not defined
    """

    def __init__(self, loaders: Mapping[str, Loader]):
        self._loaders = MappingProxyType(dict(loaders))

    def loader_for(self, loader_class: type) -> Loader:
        return self[qualified_name(loader_class)]

    def __getitem__(self, name: str) -> Loader:
        try:
            return self._loaders[name]
        except KeyError:
            raise UnavailableLoaderError(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._loaders

    def __iter__(self) -> Iterator[str]:
        return iter(self._loaders)

    def __len__(self) -> int:
        return len(self._loaders)


def build_loader_registry(
    scanner: Scanner, table: DescriptorTable, scope: Optional[str]
) -> LoaderRegistry:
    """Construct every loader type in scope and collect them into a registry.

    A loader that cannot be constructed is logged and left out; components
    naming it are skipped at dispatch time.

    Args:
        scanner: Discovery capability used to find loader types.
        table: Side table holding the LoaderInfo descriptors.
        scope: The scope to search, or None to register only the DefaultLoader.

    Returns:
        The populated :class:`LoaderRegistry`.
    """
    loaders: dict[str, Loader] = {qualified_name(DefaultLoader): DefaultLoader()}

    loader_types = sorted(
        type_ref
        for type_ref, info in table.described(
            scanner.find_types_with_marker(LoaderInfo, scope), LoaderInfo
        )
        if info.is_loader
    )
    logger.info("loaders_registering", count=len(loader_types), scope=scope)

    for type_ref in loader_types:
        try:
            loader = type_ref.target()
        except Exception as e:
            logger.warning(
                "loader_construction_failed", loader=type_ref.name, error=str(e)
            )
            continue

        if not isinstance(loader, Loader):
            logger.warning(
                "loader_construction_failed",
                loader=type_ref.name,
                error="not a Loader subclass",
            )
            continue

        loaders[type_ref.name] = loader
        logger.info("loader_registered", loader=type_ref.name)

    return LoaderRegistry(loaders)
