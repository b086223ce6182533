"""Domain models used throughout the registrar."""

from dataclasses import dataclass, field
from typing import Any, Optional

__all__ = ["TypeRef", "Marker", "RegisterOnStart", "qualified_name"]


def qualified_name(target: Any) -> str:
    """Return the fully-qualified name of a class, e.g. ``app.widgets.Widget``."""
    return f"{target.__module__}.{target.__qualname__}"


@dataclass(frozen=True, order=True)
class TypeRef:
    """Identifies a discoverable component type.

    Two references are equal when their fully-qualified names are equal; the
    referenced class itself takes no part in comparison or hashing.

    Attributes:
        name: The fully-qualified name of the type.
        target: The class being referred to.
    """

    name: str
    target: type = field(compare=False, repr=False)

    @classmethod
    def of(cls, target: type) -> "TypeRef":
        return cls(qualified_name(target), target)

    @property
    def simple_name(self) -> str:
        return self.target.__name__

    @property
    def is_marker(self) -> bool:
        return issubclass(self.target, Marker)

    def in_scope(self, scope: Optional[str]) -> bool:
        """Check whether this type lives inside the given scope.

        Example:
            >>> ref = TypeRef("app.widgets.Widget", object)
            >>> ref.in_scope("app")
            True
            >>> ref.in_scope("app.widgets")
            True
            >>> ref.in_scope("application")
            False
        """
        if not scope:
            return False
        return self.name == scope or self.name.startswith(scope + ".")


class Marker:
    """Base class for payload-free markers.

    Subclasses are never instantiated; the class itself is attached to
    component types and used as a discovery key. A marker class may itself be
    marked, which is how meta-markers are expressed:

        >>> @register_on_start
        ... class Plugin(Marker):
        ...     pass
        >>>
        >>> @mark(Plugin)
        ... @loader_info()
        ... class Greeter:
        ...     pass
    """


class RegisterOnStart(Marker):
    """Components (or marker classes) registered by ``Registrar.on_start_register``."""
