"""Discovery of types carrying a descriptor or marker within a scope."""

import importlib
import pkgutil
from typing import Optional, Protocol

from registrar.descriptors import DescriptorTable, default_table
from registrar.domain import TypeRef
from registrar.errors import ScanError
from registrar.logging import get_logger

__all__ = ["Scanner", "TableScanner"]

logger = get_logger(__name__)


class Scanner(Protocol):
    """Finds the types carrying a given descriptor kind or marker."""

    def find_types_with_marker(
        self, marker: type, scope: Optional[str]
    ) -> set[TypeRef]:
        """Return every type in ``scope`` carrying ``marker``.

        Repeated calls with the same arguments must return the same set while
        the code base is unchanged. A None scope matches nothing.
        """
        ...


class TableScanner:
    """Answers discovery queries from a :class:`DescriptorTable`.

    When ``import_modules`` is set, the scope package and all its submodules
    are imported before the first query against that scope, so that every
    decorator in the scope has recorded its descriptors.

    Example:
        >>> scanner = TableScanner()
        >>> scanner.find_types_with_marker(RegisterOnStart, "myapp")
        {TypeRef(name='myapp.plugins.Greeter')}
    """

    def __init__(
        self, table: Optional[DescriptorTable] = None, import_modules: bool = True
    ):
        self.table = default_table if table is None else table
        self._import_modules = import_modules
        self._imported_scopes: set[str] = set()
        self._missing_scopes: set[str] = set()

    def find_types_with_marker(
        self, marker: type, scope: Optional[str]
    ) -> set[TypeRef]:
        if not scope:
            return set()
        if self._import_modules and not self._import_scope(scope):
            return set()
        return {t for t in self.table.types_with(marker) if t.in_scope(scope)}

    def _import_scope(self, scope: str) -> bool:
        """Import the scope package and its submodules.

        Returns:
            False if the scope package does not exist, True otherwise.

        Raises:
            ScanError: If a module inside an existing scope fails to import.
        """
        if scope in self._imported_scopes:
            return True
        if scope in self._missing_scopes:
            return False

        try:
            package = importlib.import_module(scope)
        except ModuleNotFoundError as e:
            if not _is_scope_or_parent(e.name, scope):
                raise ScanError(
                    f"Unable to import modules of scope <{scope}>: {e}"
                ) from e
            logger.warning("scope_not_importable", scope=scope, error=str(e))
            self._missing_scopes.add(scope)
            return False
        except Exception as e:
            raise ScanError(f"Unable to import modules of scope <{scope}>: {e}") from e

        imported = 1
        try:
            for module_info in pkgutil.walk_packages(
                getattr(package, "__path__", []), prefix=scope + ".", onerror=_raise
            ):
                importlib.import_module(module_info.name)
                imported += 1
        except Exception as e:
            raise ScanError(f"Unable to import modules of scope <{scope}>: {e}") from e

        self._imported_scopes.add(scope)
        logger.debug("scope_imported", scope=scope, modules=imported)
        return True


def _is_scope_or_parent(module_name: Optional[str], scope: str) -> bool:
    return bool(module_name) and (
        module_name == scope or scope.startswith(module_name + ".")
    )


def _raise(name: str):
    raise ImportError(f"Failed to import package {name}", name=name)
