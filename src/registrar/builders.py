"""High level entry point for constructing a ready registrar."""

from typing import Optional

from registrar.config import RegistrarSettings, load_settings
from registrar.descriptors import DescriptorTable, default_table
from registrar.logging import get_logger
from registrar.registrar import Registrar
from registrar.scanner import Scanner, TableScanner
from registrar.scope import resolve_scope

__all__ = ["make_registrar"]

logger = get_logger(__name__)


def make_registrar(
    scope: Optional[str] = None,
    *,
    scanner: Optional[Scanner] = None,
    table: Optional[DescriptorTable] = None,
    settings: Optional[RegistrarSettings] = None,
) -> Registrar:
    """Construct and initialize a :class:`Registrar`.

    The scope is taken from the ``scope`` argument, then from
    ``settings.scope``, and is otherwise resolved from ``settings.search_root``.
    An unresolvable scope is not an error: the registrar is simply unable to
    discover any component.

    Args:
        scope: Dotted module path bounding discovery.
        scanner: Discovery capability. Defaults to a TableScanner over ``table``.
        table: Descriptor side table. Defaults to the scanner's table, or to the
            module-level default table.
        settings: Settings to use. Defaults to settings loaded from the environment.

    Returns:
        A registrar in the READY state.

    Raises:
        ConfigurationError: If a DefaultLoader component has no zero-argument
            constructor.

    Example:
        >>> registrar = make_registrar("myapp")
        >>> registrar.on_start_register()
    """
    if settings is None:
        settings = load_settings()
    if table is None:
        table = scanner.table if isinstance(scanner, TableScanner) else default_table
    if scanner is None:
        scanner = TableScanner(table, import_modules=settings.import_modules)

    if scope is None:
        scope = settings.scope or resolve_scope(
            settings.search_root, settings.source_roots
        )
    if scope is None:
        logger.warning("no_scope", search_root=str(settings.search_root))

    return Registrar(scanner, table, scope, settings.on_start_policy).initialize()
