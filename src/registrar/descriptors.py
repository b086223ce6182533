"""Descriptors attached to component types, and the side table that holds them.

Descriptors are never stored on the classes themselves. A
:class:`DescriptorTable` maps each :class:`~registrar.domain.TypeRef` to the
descriptors attached to it, keyed by descriptor kind. The kinds are
:class:`LoaderInfo`, :class:`RegisterTag` and any
:class:`~registrar.domain.Marker` subclass.

Application code normally uses the decorators bound to the module-level
``default_table``:

    >>> from registrar.descriptors import loader_info, register_tag
    >>>
    >>> @loader_info()
    ... @register_tag("widgets")
    ... class Widget:
    ...     pass
"""

import inspect
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, TypeVar

from registrar.domain import Marker, RegisterOnStart, TypeRef
from registrar.errors import DescriptorError
from registrar.loaders import DefaultLoader, Loader

__all__ = [
    "LoaderInfo",
    "RegisterTag",
    "DescriptorTable",
    "default_table",
    "loader_info",
    "register_tag",
    "mark",
    "register_on_start",
]

T = TypeVar("T", bound=type)


@dataclass(frozen=True)
class LoaderInfo:
    """Declares how a component type is registered.

    Attributes:
        is_loader: True if the type is itself a Loader to be made available to
            other components.
        loader: The Loader class that registers instances of this type.
    """

    is_loader: bool = False
    loader: type = DefaultLoader


@dataclass(frozen=True)
class RegisterTag:
    """Places a component type in a named group for on-demand registration.

    Attributes:
        tag: The group name. A blank tag is allowed but makes the type
            unreachable by tag.
    """

    tag: str = ""

    @property
    def is_blank(self) -> bool:
        return not self.tag.strip()


class DescriptorTable:
    """Side table of descriptors attached to component types."""

    def __init__(self):
        self._descriptors: dict[TypeRef, dict[type, Any]] = defaultdict(dict)

    def attach(self, target: type, descriptor: Any) -> TypeRef:
        """Attach a descriptor or marker to a class.

        Args:
            target: The class receiving the descriptor.
            descriptor: A LoaderInfo or RegisterTag instance, or a Marker subclass.

        Returns:
            The TypeRef under which the descriptor was recorded.

        Raises:
            DescriptorError: If the target is not a class, or already carries a
                descriptor of the same kind.
        """
        if not inspect.isclass(target):
            raise DescriptorError(f"{target!r} is not a class")

        kind = _kind_of(descriptor)
        type_ref = TypeRef.of(target)
        attached = self._descriptors[type_ref]
        if kind in attached:
            raise DescriptorError(
                f"<{type_ref.name}> already carries a {kind.__name__} descriptor "
                "(was its module imported twice?)"
            )
        attached[kind] = descriptor
        return type_ref

    def descriptor(self, type_ref: TypeRef, kind: type) -> Optional[Any]:
        """Return the descriptor of the given kind attached to a type, or None."""
        attached = self._descriptors.get(type_ref)
        if attached is None:
            return None
        return attached.get(kind)

    def described(
        self, type_refs: Iterable[TypeRef], kind: type
    ) -> list[tuple[TypeRef, Any]]:
        """Pair each type with its descriptor of the given kind.

        Types carrying no descriptor of that kind are left out.
        """
        pairs = [(t, self.descriptor(t, kind)) for t in type_refs]
        return [(t, d) for t, d in pairs if d is not None]

    def types_with(self, kind: type) -> set[TypeRef]:
        """Return every type carrying a descriptor of the given kind."""
        return {
            type_ref
            for type_ref, attached in self._descriptors.items()
            if kind in attached
        }

    def loader_info(
        self, is_loader: bool = False, loader: type = DefaultLoader
    ) -> Callable[[T], T]:
        """Decorator attaching a :class:`LoaderInfo` descriptor.

        Example:
            @table.loader_info(is_loader=True)
            class PooledLoader(Loader):
                ...

            @table.loader_info(loader=PooledLoader)
            class Connection:
                ...
        """
        if not (inspect.isclass(loader) and issubclass(loader, Loader)):
            raise DescriptorError(f"{loader!r} is not a Loader class")
        return self._attaching(LoaderInfo(is_loader, loader))

    def register_tag(self, tag: str = "") -> Callable[[T], T]:
        """Decorator attaching a :class:`RegisterTag` descriptor."""
        return self._attaching(RegisterTag(tag))

    def mark(self, marker: type) -> Callable[[T], T]:
        """Decorator attaching a marker class.

        Raises:
            DescriptorError: If the marker is not a Marker subclass.
        """
        if not (inspect.isclass(marker) and issubclass(marker, Marker)):
            raise DescriptorError(f"{marker!r} is not a Marker")
        return self._attaching(marker)

    def register_on_start(self, target: T) -> T:
        """Decorator marking a component, or a marker class, with RegisterOnStart."""
        return self.mark(RegisterOnStart)(target)

    def _attaching(self, descriptor: Any) -> Callable[[T], T]:
        def decorator(target: T) -> T:
            self.attach(target, descriptor)
            return target

        return decorator


def _kind_of(descriptor: Any) -> type:
    if inspect.isclass(descriptor):
        if issubclass(descriptor, Marker):
            return descriptor
    elif isinstance(descriptor, (LoaderInfo, RegisterTag)):
        return type(descriptor)
    raise DescriptorError(f"{descriptor!r} is not a descriptor or marker")


default_table = DescriptorTable()

loader_info = default_table.loader_info
register_tag = default_table.register_tag
mark = default_table.mark
register_on_start = default_table.register_on_start
